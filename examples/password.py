"""Masked password prompt built from raw character reads."""

from deferio import Action, lift2, pure, read_char, run_io, write, write_line


def password() -> Action[str]:
    return read_char().bind(
        lambda c: write("\n").then(pure(""))
        if c in ("\r", "\n", "")
        else write("*").then(lift2(lambda x, rest: x + rest, pure(c), password()))
    )


ask_password = (
    write("Enter a password: ")
    .then(password())
    .left(write("Your password is: "))
    .bind(write_line)
)

if __name__ == "__main__":
    run_io(ask_password)
