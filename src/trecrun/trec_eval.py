from __future__ import annotations

import os
import subprocess
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import structlog

from .errors import EvaluatorError, EvaluatorNotFound, EvaluatorTimeout

log = structlog.get_logger()

DEFAULT_TIMEOUT = 10.0


def resolve_evaluator(path: str | Path) -> Path:
    """Return the evaluator's absolute path, failing if nothing is there."""
    resolved = Path(path).expanduser().absolute()
    if not resolved.is_file():
        raise EvaluatorNotFound(f"trec_eval not found at {resolved}")
    return resolved


@contextmanager
def temp_text_file(text: str, prefix: str) -> Iterator[Path]:
    """Write text to a fresh temporary file, removed when the block exits."""
    fd, name = tempfile.mkstemp(prefix=prefix, suffix=".txt")
    path = Path(name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        yield path
    finally:
        path.unlink(missing_ok=True)


def run_trec_eval(
    evaluator: str | Path,
    qrels: str,
    run: str,
    timeout: float = DEFAULT_TIMEOUT,
) -> str:
    """Score a run listing against qrels and return the evaluator's output."""
    with temp_text_file(qrels, "qrel") as qrel_path, temp_text_file(run, "run") as run_path:
        cmd = [str(evaluator), "-q", str(qrel_path), str(run_path)]
        log.debug("trec_eval_start", cmd=cmd, timeout=timeout)
        try:
            result = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as exc:
            output = exc.output or ""
            if isinstance(output, bytes):
                output = output.decode("utf-8", errors="replace")
            raise EvaluatorTimeout(
                f"trec_eval timed out after {timeout:g}s", output=output
            ) from exc
        except OSError as exc:
            raise EvaluatorError(f"Can't run trec_eval: {exc}") from exc

    if result.returncode != 0:
        raise EvaluatorError(
            f"trec_eval exited with status {result.returncode}",
            output=result.stdout,
            returncode=result.returncode,
        )

    log.info("trec_eval_done", lines=len(result.stdout.splitlines()))
    return result.stdout
