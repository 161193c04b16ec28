"""Collect numbers, then keep only the ones the user confirms."""

from deferio import Action, filter_m, lift2, print_, pure, read_line, run_io, write, write_line


def get_ints() -> Action[list[int]]:
    return (
        write_line("Enter a number (enter to end):")
        .then(read_line())
        .bind(
            lambda x: pure([])
            if x == ""
            else lift2(lambda head, tail: [head, *tail], pure(int(x)), get_ints())
        )
    )


def keep(x: int) -> Action[bool]:
    return write(f"Keep {x}? (yes/no) ").then(read_line().map(lambda answer: answer == "yes"))


choose = get_ints().bind(filter_m(keep)).bind(print_)

if __name__ == "__main__":
    run_io(choose)
