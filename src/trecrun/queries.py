from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import ClassVar

import structlog

from .errors import QueryParseError
from .models import Query

log = structlog.get_logger()


def _child_text(block: ET.Element, tag: str) -> str:
    node = block.find(tag)
    if node is None or node.text is None:
        return ""
    return node.text.strip()


def parse_queries(payload: str) -> list[Query]:
    """Parse sibling <top> blocks into queries, in document order.

    The payload has no single root element, so it is wrapped in one first.
    """
    try:
        root = ET.fromstring(f"<data>{payload}</data>")
    except ET.ParseError as exc:
        raise QueryParseError(f"Malformed query set: {exc}") from exc

    return [
        Query(id=_child_text(top, "num"), title=_child_text(top, "title"))
        for top in root.findall("top")
    ]


def expansion_lines(payload: str) -> list[str]:
    """Every line that isn't markup is an expansion of the query at that position."""
    lines = payload.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line for line in lines if not line.startswith("<")]


def parse_expanded_queries(payload: str) -> list[Query]:
    """Parse the query set, then replace each title with its expansion line."""
    queries = parse_queries(payload)
    expanded = expansion_lines(payload)

    if len(expanded) != len(queries):
        raise QueryParseError(
            f"Expected {len(queries)} expansion lines, found {len(expanded)}"
        )

    return [Query(id=q.id, title=line) for q, line in zip(queries, expanded)]


@dataclass(frozen=True)
class BaseQuery:
    """Queries as published, titles untouched."""

    name: ClassVar[str] = "base"
    url_field: ClassVar[str] = "query_url"

    def parse(self, payload: str) -> list[Query]:
        return parse_queries(payload)


@dataclass(frozen=True)
class ExpandedQuery:
    """Queries whose titles were rewritten by an external expansion step."""

    name: ClassVar[str] = "expanded"
    url_field: ClassVar[str] = "expanded_query_url"

    def parse(self, payload: str) -> list[Query]:
        return parse_expanded_queries(payload)


QueryKind = BaseQuery | ExpandedQuery

QUERY_KINDS: dict[str, QueryKind] = {
    BaseQuery.name: BaseQuery(),
    ExpandedQuery.name: ExpandedQuery(),
}
