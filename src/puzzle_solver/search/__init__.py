"""Search algorithms for the sliding-tile puzzle.

This module implements greedy best-first frontier search guided by the
Manhattan-distance heuristic, plus reporting of the final outcome.
"""

from .greedy import (
    GreedyFrontierSearcher, Frontier, SearchNode, SearchResult, SearchStatus,
    SearchStatistics, SearchConfig, TIE_BREAK_RULES
)
from .reporting import format_outcome, report_outcome, solve

__all__ = [
    'GreedyFrontierSearcher',
    'Frontier',
    'SearchNode',
    'SearchResult',
    'SearchStatus',
    'SearchStatistics',
    'SearchConfig',
    'TIE_BREAK_RULES',
    'format_outcome',
    'report_outcome',
    'solve'
]
