"""Error types raised by the combinator library."""

from __future__ import annotations


class GuardError(AssertionError):
    """Error raised when a ``guard`` condition does not hold.

    Aborts the enclosing bind/then/sequence chain unless caught.
    """

    def __init__(self, message: str = "assertion failed") -> None:
        super().__init__(message)

    def __repr__(self) -> str:
        return f"GuardError({str(self)!r})"
