"""Kernel layer - pure abstractions for deferio."""

from deferio.kernel.action import Action
from deferio.kernel.config import RuntimeConfig
from deferio.kernel.env import Env, current_env, use_env
from deferio.kernel.errors import GuardError
from deferio.kernel.ports import ConsolePort, FilePort
from deferio.kernel.result import Result
from deferio.kernel.trace import Evidence, Trace

__all__ = [
    "Action",
    "Result",
    "GuardError",
    "Evidence",
    "Trace",
    "RuntimeConfig",
    # Env
    "Env",
    "current_env",
    "use_env",
    # Ports
    "ConsolePort",
    "FilePort",
]
