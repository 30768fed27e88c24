from __future__ import annotations

from pathlib import Path
from typing import Iterable

import structlog

from .config import Settings
from .errors import ConfigError
from .fetch import expand_url, fetch_text
from .queries import QueryKind
from .run import build_run, format_run
from .search import SearchClient
from .trec_eval import resolve_evaluator, run_trec_eval

log = structlog.get_logger()


class EvalPipeline:
    """End-to-end run: qrels → queries → search → run listing → trec_eval."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._evaluator: Path | None = None
        self._urls: dict[str, str] = {}
        self._search: SearchClient | None = None

    @property
    def is_ready(self) -> bool:
        return self._evaluator is not None

    def validate(self) -> None:
        """Check everything that would make the run abort before doing any I/O."""
        s = self._settings
        if not s.token:
            raise ConfigError("token must be provided")

        self._evaluator = resolve_evaluator(s.trec_eval_path)

        self._urls = {
            field: expand_url(getattr(s, field), s.token)
            for field in ("query_url", "expanded_query_url", "qrel_url")
        }
        self._search = SearchClient(expand_url(s.retrieval_url), timeout=s.http_timeout)
        log.debug("pipeline_validated", evaluator=str(self._evaluator), **self._urls)

    def _require_ready(self) -> None:
        if not self.is_ready:
            raise RuntimeError("Pipeline not ready. Call validate() first.")

    def fetch_qrels(self) -> str:
        self._require_ready()
        url = self._urls["qrel_url"]
        qrels = fetch_text(url, timeout=self._settings.http_timeout)
        log.info("qrels_fetched", url=url, lines=len(qrels.splitlines()))
        return qrels

    def generate_run(self, kind: QueryKind) -> str:
        """Fetch and parse the kind's query set, then build its run listing."""
        self._require_ready()
        url = self._urls[kind.url_field]
        payload = fetch_text(url, timeout=self._settings.http_timeout)
        log.debug("queries_fetched", kind=kind.name, url=url)

        queries = kind.parse(payload)
        log.info("queries_parsed", kind=kind.name, count=len(queries))

        assert self._search is not None
        records = build_run(queries, self._search)
        log.info("run_built", kind=kind.name, records=len(records))
        return format_run(records)

    def evaluate(self, kind: QueryKind, qrels: str, run: str | None = None) -> str:
        self._require_ready()
        if run is None:
            run = self.generate_run(kind)
        assert self._evaluator is not None
        log.info("running_trec_eval", kind=kind.name)
        return run_trec_eval(self._evaluator, qrels, run, timeout=self._settings.eval_timeout)

    def run(
        self,
        kinds: Iterable[QueryKind],
        save_dir: Path | None = None,
    ) -> dict[str, str]:
        """Validate, fetch qrels once, then score each query kind in order."""
        self.validate()
        qrels = self.fetch_qrels()

        outputs: dict[str, str] = {}
        for kind in kinds:
            run = self.generate_run(kind)
            if save_dir is not None:
                save_dir.mkdir(parents=True, exist_ok=True)
                run_path = save_dir / f"{kind.name}.run"
                run_path.write_text(run, encoding="utf-8")
                log.info("run_saved", path=str(run_path))
            outputs[kind.name] = self.evaluate(kind, qrels, run=run)
        return outputs
