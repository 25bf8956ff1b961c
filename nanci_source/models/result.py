"""
Result type returned by the typed resolution API.
"""

from dataclasses import dataclass

from nanci_source.exceptions import ErrorKind, ResolutionError


@dataclass(frozen=True)
class ResolveResult:
    """Outcome of a single resolution: either a URL or the error that prevented it."""

    url: str | None = None
    error: ResolutionError | None = None

    def __post_init__(self):
        if (self.url is None) == (self.error is None):
            raise ValueError("ResolveResult needs exactly one of 'url' or 'error'.")

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_kind(self) -> ErrorKind | None:
        return self.error.kind if self.error else None
