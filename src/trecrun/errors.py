from __future__ import annotations


class TrecRunError(Exception):
    """Base class for every error the run pipeline raises."""


class ConfigError(TrecRunError):
    """Missing token or an endpoint URL that does not parse."""


class FetchError(TrecRunError):
    """An HTTP GET failed or returned an error status."""


class QueryParseError(TrecRunError):
    """The query-set payload could not be turned into queries."""


class SearchResponseError(TrecRunError):
    """The search service returned a payload of the wrong shape."""


class EvaluatorNotFound(TrecRunError):
    """The evaluator path does not point at an existing file."""


class EvaluatorError(TrecRunError):
    """The evaluator exited non-zero. Carries its combined output."""

    def __init__(self, message: str, output: str = "", returncode: int | None = None) -> None:
        super().__init__(message)
        self.output = output
        self.returncode = returncode

    def __str__(self) -> str:
        base = super().__str__()
        if self.output:
            return f"{base}\n{self.output}"
        return base


class EvaluatorTimeout(EvaluatorError):
    """The evaluator did not finish within the allotted time."""
