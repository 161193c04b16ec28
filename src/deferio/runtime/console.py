"""Console effects: standard input/output and raw character input."""

from __future__ import annotations

import asyncio
import codecs
import logging
import os
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, BinaryIO, TextIO

from deferio.kernel import Action, current_env

if sys.platform != "win32":
    import termios
    import tty

logger = logging.getLogger(__name__)


class RawTerminal:
    """Raw-mode toggle for one terminal file descriptor.

    Raw mode is device-wide state, so entries are reference counted: the
    first ``raw()`` saves the terminal attributes and switches to raw mode,
    the last exit restores them. Restoration happens on every exit path.
    When the descriptor is not a TTY the toggle is skipped.
    """

    def __init__(self, fd: int) -> None:
        self.fd = fd
        self._depth = 0
        self._saved: list[Any] | None = None

    @property
    def active(self) -> bool:
        return self._depth > 0

    @asynccontextmanager
    async def raw(self) -> AsyncIterator[RawTerminal]:
        self._acquire()
        try:
            yield self
        finally:
            self._release()

    def _acquire(self) -> None:
        if self._depth == 0:
            if sys.platform != "win32" and os.isatty(self.fd):
                self._saved = termios.tcgetattr(self.fd)
                tty.setraw(self.fd)
                logger.debug("raw mode enabled on fd %d", self.fd)
            else:
                logger.debug("fd %d is not a tty, raw mode skipped", self.fd)
        self._depth += 1

    def _release(self) -> None:
        self._depth -= 1
        if self._depth == 0 and self._saved is not None:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self._saved)
            self._saved = None
            logger.debug("raw mode restored on fd %d", self.fd)


_terminals: dict[int, RawTerminal] = {}


def terminal_for(fd: int) -> RawTerminal:
    """Return the process-wide RawTerminal for ``fd``."""
    if fd not in _terminals:
        _terminals[fd] = RawTerminal(fd)
    return _terminals[fd]


class StdConsole:
    """ConsolePort backed by the process's standard streams.

    Blocking reads are offloaded with ``asyncio.to_thread`` so the event
    loop keeps serving other actions while waiting for input.
    """

    def __init__(
        self,
        stdin: BinaryIO | None = None,
        stdout: TextIO | None = None,
        encoding: str = "utf-8",
    ) -> None:
        # Resolved on use so redirected sys streams are honoured
        self._custom_stdin = stdin
        self._custom_stdout = stdout
        self.encoding = encoding

    @property
    def _stdin(self) -> BinaryIO:
        return self._custom_stdin if self._custom_stdin is not None else sys.stdin.buffer

    @property
    def _stdout(self) -> TextIO:
        return self._custom_stdout if self._custom_stdout is not None else sys.stdout

    async def write(self, text: str) -> None:
        self._stdout.write(text)
        self._stdout.flush()

    async def read_line(self) -> str:
        data = await asyncio.to_thread(self._stdin.readline)
        return data.decode(self.encoding, errors="replace")

    async def read_char(self) -> str:
        terminal = terminal_for(self._stdin.fileno())
        async with terminal.raw():
            return await asyncio.to_thread(self._read_char_blocking)

    def _read_char_blocking(self) -> str:
        decoder = codecs.getincrementaldecoder(self.encoding)(errors="replace")
        while True:
            byte = self._stdin.read(1)
            if not byte:
                return decoder.decode(b"", final=True)
            char = decoder.decode(byte)
            if char:
                return char


# STANDARD INPUT/OUTPUT


def write(text: str) -> Action[None]:
    """Write a string to the console."""
    async def _run() -> None:
        await current_env().console.write(text)

    return Action(_run, label="console.write")


def write_line(text: str) -> Action[None]:
    """The same as write, but adds a newline character."""
    return write(text + "\n")


def print_(value: object) -> Action[None]:
    """Write ``str(value)`` followed by a newline."""
    return write_line(str(value))


def read_line() -> Action[str]:
    """Read a line from the console.

    Trailing whitespace, including the newline, is stripped unless
    ``RuntimeConfig.trim_input`` is off.
    """
    async def _run() -> str:
        env = current_env()
        line = await env.console.read_line()
        return line.rstrip() if env.config.trim_input else line

    return Action(_run, label="console.read_line")


def read_char() -> Action[str]:
    """Read one character in raw (unbuffered, unechoed) mode.

    Yields an empty string at end of input.
    """
    async def _run() -> str:
        return await current_env().console.read_char()

    return Action(_run, label="console.read_char")
