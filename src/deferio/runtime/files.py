"""File effects."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from pathlib import Path
from typing import overload

from deferio.kernel import Action, current_env

logger = logging.getLogger(__name__)


class LocalFiles:
    """FilePort backed by the local file system."""

    async def read_text(self, path: str, encoding: str) -> str:
        return await asyncio.to_thread(Path(path).read_text, encoding=encoding)

    async def write_text(self, path: str, content: str, encoding: str) -> None:
        await asyncio.to_thread(self._write, path, content, encoding, "w")

    async def append_text(self, path: str, content: str, encoding: str) -> None:
        await asyncio.to_thread(self._write, path, content, encoding, "a")

    @staticmethod
    def _write(path: str, content: str, encoding: str, mode: str) -> None:
        with open(path, mode, encoding=encoding) as fh:
            fh.write(content)
        logger.debug("wrote %d chars to %s (mode=%s)", len(content), path, mode)


def read_file(path: str) -> Action[str]:
    """Read a file and return its contents as a string."""
    async def _run() -> str:
        env = current_env()
        return await env.files.read_text(path, env.config.encoding)

    return Action(_run, label="file.read")


@overload
def write_file(path: str, content: str) -> Action[None]: ...


@overload
def write_file(path: str) -> Callable[[str], Action[None]]: ...


def write_file(path: str, content: str | None = None):
    """Write the string to the file, replacing any existing contents.

    Called without ``content`` it returns ``content -> Action`` for use with bind:

        >>> read_line().bind(write_file("notes.txt"))
    """
    if content is None:
        return lambda text: write_file(path, text)

    async def _run() -> None:
        env = current_env()
        await env.files.write_text(path, content, env.config.encoding)

    return Action(_run, label="file.write")


@overload
def append_file(path: str, content: str) -> Action[None]: ...


@overload
def append_file(path: str) -> Callable[[str], Action[None]]: ...


def append_file(path: str, content: str | None = None):
    """Append the string to the end of the file, creating it if missing."""
    if content is None:
        return lambda text: append_file(path, text)

    async def _run() -> None:
        env = current_env()
        await env.files.append_text(path, content, env.config.encoding)

    return Action(_run, label="file.append")
