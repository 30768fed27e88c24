from __future__ import annotations

from pydantic import BaseModel


class Query(BaseModel):
    """One topic from the query set."""

    id: str
    title: str


class SearchResult(BaseModel):
    """A single hit from the search service. Empty fields are omitted upstream."""

    id: str = ""
    score: float = 0.0
    title: str | None = None
    snippet: str | None = None
    url: str | None = None


class RunRecord(BaseModel):
    """One line of a TREC run file."""

    query_id: str
    doc_id: str
    rank: int
    score: float
    group: str = "Q0"
    model: str = "lm"

    def to_line(self) -> str:
        return (
            f"{self.query_id}\t{self.group}\t{self.doc_id}\t"
            f"{self.rank}\t{self.score:f}\t{self.model}\n"
        )
