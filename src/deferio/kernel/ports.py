"""Port protocols for deferio - pure abstractions over the OS."""

from __future__ import annotations

from typing import Protocol


class ConsolePort(Protocol):
    """Console device port."""

    async def write(self, text: str) -> None:
        """Write text without a trailing newline."""
        ...

    async def read_line(self) -> str:
        """Read one line, including any trailing newline. Empty string at end of input."""
        ...

    async def read_char(self) -> str:
        """Read a single character in raw mode. Empty string at end of input."""
        ...


class FilePort(Protocol):
    """File system port."""

    async def read_text(self, path: str, encoding: str) -> str: ...
    async def write_text(self, path: str, content: str, encoding: str) -> None: ...
    async def append_text(self, path: str, content: str, encoding: str) -> None: ...
