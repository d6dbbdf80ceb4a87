"""Human-readable outcome reporting for search results."""

import logging
from typing import Callable, Optional

from puzzle_solver.core.board import BoardState
from .greedy import GreedyFrontierSearcher, SearchConfig, SearchResult

logger = logging.getLogger(__name__)

DEFAULT_SOLVED_MESSAGE = "goal state reached in {moves} moves"
DEFAULT_UNREACHABLE_MESSAGE = "goal state not reachable"

OutputSink = Callable[[str], None]


def format_outcome(result: SearchResult,
                   solved_message: str = DEFAULT_SOLVED_MESSAGE,
                   unreachable_message: str = DEFAULT_UNREACHABLE_MESSAGE) -> str:
    """Render the single result line for a finished search.

    Args:
        result: Finished search result
        solved_message: Template with a ``{moves}`` placeholder
        unreachable_message: Line used when the frontier was exhausted

    Returns:
        The outcome line without trailing newline
    """
    if result.success:
        return solved_message.format(moves=result.moves)
    return unreachable_message


def report_outcome(result: SearchResult,
                   sink: OutputSink = print,
                   solved_message: str = DEFAULT_SOLVED_MESSAGE,
                   unreachable_message: str = DEFAULT_UNREACHABLE_MESSAGE) -> str:
    """Write the outcome line to sink and return it."""
    line = format_outcome(result, solved_message, unreachable_message)
    logger.debug(f"Reporting outcome: {line}")
    sink(line)
    return line


def solve(initial: BoardState,
          config: Optional[SearchConfig] = None,
          sink: OutputSink = print) -> SearchResult:
    """Run a search from initial and report its outcome to sink."""
    searcher = GreedyFrontierSearcher(config)
    result = searcher.search(initial)
    report_outcome(result, sink)
    return result
