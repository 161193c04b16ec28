from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar

A = TypeVar("A")


@dataclass(frozen=True)
class Result(Generic[A]):
    """
    Outcome of running an action.

    Kinds:
    - ok: The action succeeded with ``value``
    - error: The action failed with ``error`` (an opaque exception)
    """

    kind: Literal["ok", "error"]
    value: A | None = None
    error: Exception | None = None

    @staticmethod
    def Ok(value: Any) -> Result[Any]:
        return Result(kind="ok", value=value)

    @staticmethod
    def Error(error: Exception) -> Result[Any]:
        return Result(kind="error", error=error)

    @property
    def ok(self) -> bool:
        return self.kind == "ok"

    def unwrap(self) -> A:
        """Return the value, or raise the stored error."""
        if self.kind == "error":
            if self.error is None:
                raise ValueError("Result has no error.")
            raise self.error
        return self.value  # type: ignore[return-value]
