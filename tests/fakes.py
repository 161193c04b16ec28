from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

from deferio.kernel import ConsolePort, Env, FilePort, RuntimeConfig, Trace


@dataclass
class FakeConsole(ConsolePort):
    lines: list[str] = field(default_factory=list)
    chars: list[str] = field(default_factory=list)
    written: list[str] = field(default_factory=list)

    @property
    def output(self) -> str:
        return "".join(self.written)

    async def write(self, text: str) -> None:
        self.written.append(text)

    async def read_line(self) -> str:
        # Simulate waiting on the device
        await asyncio.sleep(0)
        if not self.lines:
            return ""
        return self.lines.pop(0)

    async def read_char(self) -> str:
        await asyncio.sleep(0)
        if not self.chars:
            return ""
        return self.chars.pop(0)


@dataclass
class FakeFiles(FilePort):
    contents: dict[str, str] = field(default_factory=dict)

    async def read_text(self, path: str, encoding: str) -> str:
        _ = encoding
        if path not in self.contents:
            raise FileNotFoundError(path)
        return self.contents[path]

    async def write_text(self, path: str, content: str, encoding: str) -> None:
        _ = encoding
        self.contents[path] = content

    async def append_text(self, path: str, content: str, encoding: str) -> None:
        _ = encoding
        self.contents[path] = self.contents.get(path, "") + content


def make_fake_env(
    lines: list[str] | None = None,
    chars: list[str] | None = None,
    files: dict[str, str] | None = None,
    trace: Trace | None = None,
    config: RuntimeConfig | None = None,
) -> Env:
    return Env(
        console=FakeConsole(lines=list(lines or []), chars=list(chars or [])),
        files=FakeFiles(contents=dict(files or {})),
        trace=trace,
        config=config or RuntimeConfig(),
    )
