"""Score a search service against a TREC query set with trec_eval.

    trecrun --token abc123 --trec-eval ./trec_eval
    trecrun --token abc123 --trec-eval ./trec_eval --query-type expanded -v
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import structlog

from .config import Settings
from .errors import TrecRunError
from .pipeline import EvalPipeline
from .queries import QUERY_KINDS, QueryKind

log = structlog.get_logger()

# CLI flag -> Settings field
_OVERRIDES = {
    "token": "token",
    "query_url": "query_url",
    "expanded_query_url": "expanded_query_url",
    "qrel_url": "qrel_url",
    "retrieval_url": "retrieval_url",
    "trec_eval": "trec_eval_path",
    "timeout": "eval_timeout",
}


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="trecrun",
        description="Build a TREC run from a search service and score it with trec_eval.",
    )
    ap.add_argument("--token", help="access token substituted into the URL templates")
    ap.add_argument("--query-url", help="query set URL template ({token} placeholder)")
    ap.add_argument("--expanded-query-url", help="expanded query set URL template")
    ap.add_argument("--qrel-url", help="qrels URL template")
    ap.add_argument("--retrieval-url", help="search service base URL")
    ap.add_argument("--trec-eval", type=Path, help="path to the trec_eval binary")
    ap.add_argument(
        "--query-type",
        choices=["base", "expanded", "both"],
        default="both",
        help="which query set(s) to evaluate (default: both)",
    )
    ap.add_argument("--timeout", type=float, help="trec_eval timeout in seconds")
    ap.add_argument("--save-run", type=Path, metavar="DIR", help="also write run files here")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return ap


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def settings_from_args(args: argparse.Namespace) -> Settings:
    overrides = {
        field: getattr(args, flag)
        for flag, field in _OVERRIDES.items()
        if getattr(args, flag) is not None
    }
    return Settings(**overrides)


def selected_kinds(query_type: str) -> list[QueryKind]:
    if query_type == "both":
        return [QUERY_KINDS["base"], QUERY_KINDS["expanded"]]
    return [QUERY_KINDS[query_type]]


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    log.info("starting", query_type=args.query_type)

    pipeline = EvalPipeline(settings_from_args(args))
    try:
        outputs = pipeline.run(selected_kinds(args.query_type), save_dir=args.save_run)
    except TrecRunError as exc:
        log.error("run_failed", error=str(exc))
        return 1

    for name, output in outputs.items():
        print(f"== {name} queries")
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
