"""Runtime configuration."""

from __future__ import annotations

import codecs
import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

ENV_PREFIX = "DEFERIO_"


class RuntimeConfig(BaseModel):
    """Settings consulted by the effect primitives at run time."""

    encoding: str = Field(default="utf-8", description="Text encoding for files and raw input")
    trim_input: bool = Field(default=True, description="Strip trailing whitespace from read_line")
    trace: bool = Field(default=False, description="Record a Trace when run through run_io")

    model_config = ConfigDict(frozen=True)

    @field_validator("encoding")
    @classmethod
    def _known_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as exc:
            raise ValueError(f"Unknown encoding: {value}") from exc
        return value

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> RuntimeConfig:
        """Build a config from ``DEFERIO_*`` environment variables.

        Unset variables keep their defaults. Invalid values raise
        ``pydantic.ValidationError``.
        """
        environ = os.environ if environ is None else environ
        values = {
            name: environ[ENV_PREFIX + name.upper()]
            for name in cls.model_fields
            if ENV_PREFIX + name.upper() in environ
        }
        return cls.model_validate(values)
