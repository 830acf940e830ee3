"""Exception types raised by the checker."""

from typing import List, Optional


class PwnedCheckError(Exception):
    """Base class for checker errors."""


class ValidationError(PwnedCheckError):
    """No usable candidate passwords were supplied."""


class NetworkError(PwnedCheckError):
    """A range lookup failed and will not be retried.

    The message names the prefix and the HTTP status or cause; it never
    carries the password or the full hash.
    """

    def __init__(
        self,
        prefix: str,
        status: Optional[int] = None,
        cause: Optional[BaseException] = None,
        detail: str = "",
    ) -> None:
        self.prefix = prefix
        self.status = status
        self.cause = cause
        parts = [f"range lookup failed for prefix {prefix}"]
        if status is not None:
            parts.append(f"HTTP {status}")
        if detail:
            parts.append(detail)
        elif cause is not None:
            parts.append(f"{cause.__class__.__name__}: {cause}")
        super().__init__(": ".join(parts))


class CheckCancelled(PwnedCheckError):
    """The run was cancelled before every entry was checked."""

    def __init__(self, completed: List) -> None:
        self.completed = completed
        super().__init__(f"cancelled after {len(completed)} verdict(s)")
