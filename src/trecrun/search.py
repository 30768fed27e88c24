from __future__ import annotations

from pydantic import TypeAdapter, ValidationError

from .errors import SearchResponseError
from .fetch import fetch_text
from .models import SearchResult

# The service groups hits into nested lists; the grouping carries no meaning
_RESPONSE = TypeAdapter(list[list[SearchResult]])


def parse_search_response(body: str | bytes) -> list[SearchResult]:
    """Flatten a nested search response, keeping outer then inner order."""
    try:
        groups = _RESPONSE.validate_json(body)
    except ValidationError as exc:
        raise SearchResponseError(
            f"Malformed search response ({exc.error_count()} errors): {exc}"
        ) from exc
    return [result for group in groups for result in group]


class SearchClient:
    """Thin client for the search service's GET endpoint."""

    def __init__(self, base_url: str, timeout: float = 30.0) -> None:
        self._base_url = base_url
        self._timeout = timeout

    def search(self, title: str) -> list[SearchResult]:
        body = fetch_text(self._base_url, params={"query": title}, timeout=self._timeout)
        return parse_search_response(body)
