"""Combinators - higher-order action composition primitives."""

from .ops import (
    all_,
    delay,
    filter_m,
    forever,
    guard,
    ignore,
    lift2,
    pure,
    replicate,
    replicate_,
    sequence,
    unless,
    when,
)

__all__ = [
    "pure",
    "all_",
    "sequence",
    "forever",
    "ignore",
    "lift2",
    "delay",
    "replicate",
    "replicate_",
    "filter_m",
    # Conditional execution
    "guard",
    "when",
    "unless",
]
