"""Core board representation for the sliding-tile puzzle."""

from .board import (
    BoardState, InvalidBoardError, GOAL_GRID, GOAL_STATE, NEIGHBOR_OFFSETS,
    heuristic, is_goal, equals, state_hash, clone_and_slide, find_blank,
    successors, is_solvable, parse_board, format_board
)

__all__ = [
    'BoardState',
    'InvalidBoardError',
    'GOAL_GRID',
    'GOAL_STATE',
    'NEIGHBOR_OFFSETS',
    'heuristic',
    'is_goal',
    'equals',
    'state_hash',
    'clone_and_slide',
    'find_blank',
    'successors',
    'is_solvable',
    'parse_board',
    'format_board'
]
