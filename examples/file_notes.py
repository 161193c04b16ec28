"""Append a line to a file and show the whole file."""

import sys

from deferio import append_file, print_, read_file, read_line, run_io


def notes(path: str):
    return (
        print_("Enter file content: ")
        .then(read_line())
        .map(lambda line: line + "\n")
        .bind(append_file(path))
        .then(read_file(path))
        .bind(print_)
        .catch(print_)
    )


if __name__ == "__main__":
    run_io(notes(sys.argv[1] if len(sys.argv) > 1 else "notes.txt"))
