from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

# Load .env into os.environ so TRECRUN_* vars are picked up
load_dotenv()


class Settings(BaseSettings):
    model_config = {
        "env_prefix": "TRECRUN_",
        "env_file": ".env",
        "extra": "ignore",
    }

    # Access token substituted into the {token} placeholder of each template
    token: str = ""

    # Endpoints
    query_url: str = "http://computing.dcu.ie/~sprocheta/lab5/query/Query_{token}.txt"
    expanded_query_url: str = (
        "http://computing.dcu.ie/~sprocheta/lab5/expandedQuery/Query_{token}.txt"
    )
    qrel_url: str = "http://computing.dcu.ie/~sprocheta/lab5/qrels/qrel_{token}.txt"
    retrieval_url: str = "http://clueweb.adaptcentre.ie/ClueWebNew/search"

    # Evaluator
    trec_eval_path: Path = Path("trec_eval")

    # Timeouts (seconds)
    http_timeout: float = 30.0
    eval_timeout: float = 10.0
