from __future__ import annotations

from typing import Iterable, Protocol

import structlog

from .errors import FetchError, SearchResponseError
from .models import Query, RunRecord, SearchResult

log = structlog.get_logger()


class Searcher(Protocol):
    def search(self, title: str) -> list[SearchResult]: ...


def build_run(queries: Iterable[Query], searcher: Searcher) -> list[RunRecord]:
    """Search every query in turn and rank its hits by position.

    A query whose search fails contributes no records; the rest still run.
    """
    records: list[RunRecord] = []
    for query in queries:
        log.info("running_query", query_id=query.id, title=query.title)
        try:
            results = searcher.search(query.title)
        except (FetchError, SearchResponseError) as exc:
            log.warning("search_failed", query_id=query.id, error=str(exc))
            continue

        records.extend(
            RunRecord(query_id=query.id, doc_id=r.id, rank=rank, score=r.score)
            for rank, r in enumerate(results, start=1)
        )
        log.debug("query_ranked", query_id=query.id, hits=len(results))
    return records


def format_run(records: Iterable[RunRecord]) -> str:
    """Render records as a TREC run listing."""
    return "".join(r.to_line() for r in records)
