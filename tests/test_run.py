from src.trecrun.errors import FetchError, SearchResponseError
from src.trecrun.models import Query, RunRecord, SearchResult
from src.trecrun.run import build_run, format_run


class FakeSearcher:
    """Returns canned results per title; exceptions are raised instead."""

    def __init__(self, responses):
        self._responses = responses
        self.calls: list[str] = []

    def search(self, title):
        self.calls.append(title)
        resp = self._responses[title]
        if isinstance(resp, Exception):
            raise resp
        return resp


def _results(*pairs):
    return [SearchResult(id=doc_id, score=score) for doc_id, score in pairs]


def test_run_line_format():
    record = RunRecord(query_id="1", doc_id="a", rank=1, score=1.0)
    assert record.to_line() == "1\tQ0\ta\t1\t1.000000\tlm\n"


def test_ranks_follow_result_order_not_score():
    searcher = FakeSearcher({"q": _results(("low", 0.1), ("high", 0.9), ("mid", 0.5))})
    records = build_run([Query(id="7", title="q")], searcher)

    assert [(r.doc_id, r.rank) for r in records] == [("low", 1), ("high", 2), ("mid", 3)]
    assert all(r.query_id == "7" for r in records)


def test_ranks_restart_per_query():
    searcher = FakeSearcher({
        "first": _results(("a", 2.0), ("b", 1.0)),
        "second": _results(("c", 3.0)),
    })
    queries = [Query(id="1", title="first"), Query(id="2", title="second")]
    records = build_run(queries, searcher)

    assert [(r.query_id, r.rank) for r in records] == [("1", 1), ("1", 2), ("2", 1)]
    assert searcher.calls == ["first", "second"]


def test_failed_query_is_skipped():
    searcher = FakeSearcher({
        "one": _results(("a", 1.0)),
        "two": FetchError("connection refused"),
        "three": _results(("c", 0.5), ("d", 0.25)),
    })
    queries = [
        Query(id="1", title="one"),
        Query(id="2", title="two"),
        Query(id="3", title="three"),
    ]
    records = build_run(queries, searcher)

    assert [r.query_id for r in records] == ["1", "3", "3"]
    assert searcher.calls == ["one", "two", "three"]


def test_malformed_response_is_skipped():
    searcher = FakeSearcher({
        "bad": SearchResponseError("not a list"),
        "good": _results(("x", 1.0)),
    })
    records = build_run([Query(id="1", title="bad"), Query(id="2", title="good")], searcher)
    assert [(r.query_id, r.doc_id) for r in records] == [("2", "x")]


def test_format_run_concatenates_in_order():
    records = [
        RunRecord(query_id="1", doc_id="a", rank=1, score=1.0),
        RunRecord(query_id="1", doc_id="b", rank=2, score=0.5),
        RunRecord(query_id="2", doc_id="c", rank=1, score=12.3456789),
    ]
    assert format_run(records) == (
        "1\tQ0\ta\t1\t1.000000\tlm\n"
        "1\tQ0\tb\t2\t0.500000\tlm\n"
        "2\tQ0\tc\t1\t12.345679\tlm\n"
    )


def test_format_run_empty():
    assert format_run([]) == ""
