"""Echo every line typed until an empty line or end of input."""

from deferio import forever, guard, read_line, run_io, write_line

echo = forever(read_line().bind(lambda line: guard(line != "").then(write_line(line))))

if __name__ == "__main__":
    run_io(echo.catch(lambda _: write_line("bye")))
