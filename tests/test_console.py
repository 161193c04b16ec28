from __future__ import annotations

import asyncio
import io
import os
import sys

import pytest

from deferio import (
    Env,
    LocalFiles,
    RawTerminal,
    RuntimeConfig,
    StdConsole,
    print_,
    read_char,
    read_line,
    run_io,
    write,
    write_line,
)
from deferio.runtime import console as console_module
from fakes import make_fake_env


class TestConsoleActions:
    def test_write_and_write_line(self) -> None:
        env = make_fake_env()
        run_io(write("a").then(write_line("b")), env)
        assert env.console.output == "ab\n"

    def test_print_renders_with_str(self) -> None:
        env = make_fake_env()
        run_io(print_(42).then(print_([1, 2])), env)
        assert env.console.output == "42\n[1, 2]\n"

    def test_read_line_trims_trailing_whitespace(self) -> None:
        env = make_fake_env(lines=["hello  \n"])
        assert run_io(read_line(), env) == "hello"

    def test_read_line_untrimmed_when_configured(self) -> None:
        env = make_fake_env(lines=["hello\n"], config=RuntimeConfig(trim_input=False))
        assert run_io(read_line(), env) == "hello\n"

    def test_read_line_at_end_of_input(self) -> None:
        assert run_io(read_line(), make_fake_env()) == ""

    def test_read_char(self) -> None:
        env = make_fake_env(chars=["a", "b"])
        assert run_io(read_char().bind(lambda x: read_char().map(lambda y: x + y)), env) == "ab"

    def test_actions_are_rerunnable(self) -> None:
        env = make_fake_env(lines=["one\n", "two\n"])
        action = read_line()
        assert run_io(action, env) == "one"
        assert run_io(action, env) == "two"

    def test_password_prompt(self) -> None:
        # Masked input: echo "*" per char until carriage return
        env = make_fake_env(chars=["p", "w", "\r"])

        def password():
            return read_char().bind(
                lambda c: write("\n").map(lambda _: "")
                if c == "\r"
                else write("*").then(password().map(lambda rest: c + rest))
            )

        flow = write("Enter a password: ").then(password()).left(write("Your password is: ")).bind(write_line)
        run_io(flow, env)
        assert env.console.output == "Enter a password: **\nYour password is: pw\n"


class TestStdConsole:
    def _pipe_with(self, data: bytes) -> io.BufferedReader:
        read_fd, write_fd = os.pipe()
        os.write(write_fd, data)
        os.close(write_fd)
        return os.fdopen(read_fd, "rb")

    def test_write_flushes_to_stdout(self) -> None:
        out = io.StringIO()
        console = StdConsole(stdin=io.BytesIO(), stdout=out)
        asyncio.run(console.write("hi"))
        assert out.getvalue() == "hi"

    def test_read_line_decodes(self) -> None:
        console = StdConsole(stdin=io.BytesIO("héllo\nrest\n".encode()), stdout=io.StringIO())
        assert asyncio.run(console.read_line()) == "héllo\n"

    def test_read_char_multibyte_from_non_tty(self) -> None:
        stdin = self._pipe_with("éx".encode())
        try:
            console = StdConsole(stdin=stdin, stdout=io.StringIO())
            assert asyncio.run(console.read_char()) == "é"
            assert asyncio.run(console.read_char()) == "x"
            assert asyncio.run(console.read_char()) == ""
        finally:
            stdin.close()

    def test_run_io_with_std_console(self) -> None:
        out = io.StringIO()
        env = Env(
            console=StdConsole(stdin=io.BytesIO(b"typed\n"), stdout=out),
            files=LocalFiles(),
        )
        run_io(read_line().bind(lambda line: write_line(line.upper())), env)
        assert out.getvalue() == "TYPED\n"


@pytest.mark.skipif(sys.platform == "win32", reason="termios is POSIX only")
class TestRawTerminal:
    @pytest.fixture
    def tty_calls(self, monkeypatch: pytest.MonkeyPatch) -> list[tuple]:
        calls: list[tuple] = []
        monkeypatch.setattr(console_module.os, "isatty", lambda fd: True)
        monkeypatch.setattr(
            console_module.termios, "tcgetattr", lambda fd: calls.append(("get", fd)) or ["saved"]
        )
        monkeypatch.setattr(console_module.tty, "setraw", lambda fd: calls.append(("raw", fd)))
        monkeypatch.setattr(
            console_module.termios,
            "tcsetattr",
            lambda fd, when, attrs: calls.append(("restore", fd, attrs)),
        )
        return calls

    def test_raw_mode_restored_on_success(self, tty_calls: list[tuple]) -> None:
        terminal = RawTerminal(99)

        async def run():
            async with terminal.raw():
                assert terminal.active
                return "read"

        assert asyncio.run(run()) == "read"
        assert tty_calls == [("get", 99), ("raw", 99), ("restore", 99, ["saved"])]
        assert not terminal.active

    def test_raw_mode_restored_on_exception(self, tty_calls: list[tuple]) -> None:
        terminal = RawTerminal(99)

        async def run():
            async with terminal.raw():
                raise OSError("device gone")

        with pytest.raises(OSError):
            asyncio.run(run())
        assert tty_calls[-1] == ("restore", 99, ["saved"])
        assert not terminal.active

    def test_nested_entries_toggle_once(self, tty_calls: list[tuple]) -> None:
        terminal = RawTerminal(99)

        async def reader():
            async with terminal.raw():
                await asyncio.sleep(0.01)

        async def run():
            await asyncio.gather(reader(), reader())

        asyncio.run(run())
        assert [c[0] for c in tty_calls] == ["get", "raw", "restore"]

    def test_non_tty_is_left_alone(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(console_module.os, "isatty", lambda fd: False)
        terminal = RawTerminal(99)

        async def run():
            async with terminal.raw():
                return terminal.active

        assert asyncio.run(run()) is True
        assert not terminal.active

    def test_terminal_for_is_shared(self) -> None:
        assert console_module.terminal_for(5) is console_module.terminal_for(5)
