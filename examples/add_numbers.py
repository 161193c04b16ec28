"""Read two numbers and print their sum, forever."""

from deferio import forever, lift2, print_, read_line, run_io, write

get_int = write("Enter a number: ").then(read_line().map(int))

add_io = forever(lift2(lambda x, y: x + y, get_int, get_int).bind(print_))

if __name__ == "__main__":
    run_io(add_io.catch(lambda exc: print_(f"stopped: {exc}")))
