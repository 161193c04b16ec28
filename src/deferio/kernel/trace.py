"""Runtime trace infrastructure - separate from action values.

This module provides evidence capture for profiling and debugging action runs.
Trace is runtime infrastructure - it never changes what an action produces.
Tree relationships are reconstructed only during visualization via as_tree().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass(frozen=True)
class Evidence:
    """Evidence represents one event captured while running actions.

    Tree reconstruction happens only during visualization via Trace.as_tree().
    """

    action: str = ""
    id: int = field(default=0)
    parent_id: int | None = field(default=None)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    info: dict[str, Any] = field(default_factory=dict)
    duration_ms: float | None = field(default=None)

    @property
    def label(self) -> str | None:
        """Label of the action this event belongs to, if any."""
        return self.info.get("label")


class Trace:
    """Runtime trace context for capturing run events.

    Parent links are passed explicitly by the caller, so events recorded by
    concurrently running actions still form a correct tree.

    Performance guarantees:
    - Trace disabled → single None check overhead
    - Evidence append is O(1)
    - No recursive tree construction during execution
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._events: list[Evidence] = []
        self._next_id: int = 0

    def record(
        self,
        action: str,
        info: dict[str, Any] | None = None,
        parent_id: int | None = None,
        duration_ms: float | None = None,
    ) -> int | None:
        """Record an evidence event.

        Args:
            action: What happened (e.g., "run_begin", "run_error")
            info: Additional context
            parent_id: Parent event ID for tree relationships
            duration_ms: Execution duration

        Returns:
            Event ID for linking child events, or None if tracing disabled
        """
        if not self.enabled:
            return None

        event_id = self._next_id
        self._next_id += 1

        self._events.append(
            Evidence(
                action=action,
                id=event_id,
                parent_id=parent_id,
                timestamp=datetime.now(UTC),
                info=info or {},
                duration_ms=duration_ms,
            )
        )

        return event_id

    def get_events(self) -> list[Evidence]:
        """Get all recorded events (for visualization)."""
        return list(self._events)

    def find_all(self, **kwargs: Any) -> list[Evidence]:
        """Find all events matching the given criteria.

        Args:
            **kwargs: Criteria matched against event attributes or info
                (e.g., action="run_end", label="file.write")
        """
        return [
            e
            for e in self._events
            if all(getattr(e, k, None) == v or e.info.get(k) == v for k, v in kwargs.items())
        ]

    def as_tree(self) -> dict[int | None, list[int]]:
        """Reconstruct parent-child relationships for visualization.

        Returns:
            Dict mapping parent_id to list of child_ids
        """
        tree: dict[int | None, list[int]] = {}
        for ev in self._events:
            parent = ev.parent_id
            if parent not in tree:
                tree[parent] = []
            tree[parent].append(ev.id)
        return tree

    def __len__(self) -> int:
        return len(self._events)

    def clear(self) -> None:
        """Clear all events (for reuse)."""
        self._events.clear()
        self._next_id = 0
