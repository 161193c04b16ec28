"""Runtime module - default effect implementations for deferio."""

from deferio.runtime.console import (
    RawTerminal,
    StdConsole,
    print_,
    read_char,
    read_line,
    terminal_for,
    write,
    write_line,
)
from deferio.runtime.files import LocalFiles, append_file, read_file, write_file
from deferio.runtime.run import default_env, fallback_env, run_io

__all__ = [
    # Console
    "StdConsole",
    "RawTerminal",
    "terminal_for",
    "write",
    "write_line",
    "print_",
    "read_line",
    "read_char",
    # Files
    "LocalFiles",
    "read_file",
    "write_file",
    "append_file",
    # Entry point
    "default_env",
    "fallback_env",
    "run_io",
]
