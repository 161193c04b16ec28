"""Compare concurrent and ordered evaluation of the same actions."""

import logging

from deferio import Trace, all_, delay, print_, run_io, sequence


def action(x: int):
    return delay(10 * x + 1000).then(print_(x)).named(f"action-{x}")


actions = [action(1), action(2), action(3)]

all_actions = print_("all").then(all_(actions))
seq_actions = print_("sequence").then(sequence(actions))

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    trace = Trace()
    run_io(all_actions.then(seq_actions), trace=trace)
    for event in trace.find_all(action="run_end"):
        print(f"{event.label}: {event.duration_ms:.0f}ms")
