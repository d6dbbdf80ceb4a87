"""8-puzzle solver using greedy best-first search."""

__version__ = "0.1.0"
