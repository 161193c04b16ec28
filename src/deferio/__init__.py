"""Deferred IO actions for asyncio.

An Action describes a computation without performing it. Actions compose
with map / ap / bind / then / left / catch and the combinators below, and
only do their work when run:

>>> from deferio import read_line, run_io, write_line
>>> greet = write_line("Name?").then(read_line()).bind(lambda n: write_line(f"Hi {n}"))
>>> run_io(greet)  # nothing happened until here
"""

from .combinators import (
    all_,
    delay,
    filter_m,
    forever,
    guard,
    ignore,
    lift2,
    pure,
    replicate,
    replicate_,
    sequence,
    unless,
    when,
)
from .kernel import (
    Action,
    ConsolePort,
    Env,
    Evidence,
    FilePort,
    GuardError,
    Result,
    RuntimeConfig,
    Trace,
    current_env,
    use_env,
)
from .runtime import (
    LocalFiles,
    RawTerminal,
    StdConsole,
    append_file,
    default_env,
    fallback_env,
    print_,
    read_char,
    read_file,
    read_line,
    run_io,
    write,
    write_file,
    write_line,
)

__all__ = [
    # Core
    "Action",
    "Result",
    "GuardError",
    # Combinators
    "pure",
    "all_",
    "sequence",
    "forever",
    "ignore",
    "lift2",
    "delay",
    "replicate",
    "replicate_",
    "filter_m",
    "guard",
    "when",
    "unless",
    # Env & config
    "Env",
    "current_env",
    "use_env",
    "RuntimeConfig",
    "ConsolePort",
    "FilePort",
    # Tracing
    "Trace",
    "Evidence",
    # Effects
    "write",
    "write_line",
    "print_",
    "read_line",
    "read_char",
    "read_file",
    "write_file",
    "append_file",
    "StdConsole",
    "RawTerminal",
    "LocalFiles",
    # Entry point
    "run_io",
    "default_env",
    "fallback_env",
]
