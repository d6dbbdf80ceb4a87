"""Configuration validation for puzzle-solver."""

import logging
from typing import List
from omegaconf import DictConfig, OmegaConf

from puzzle_solver.core.board import InvalidBoardError, is_solvable, parse_board
from puzzle_solver.search.greedy import TIE_BREAK_RULES

logger = logging.getLogger(__name__)


class ConfigValidationError(Exception):
    """Exception raised when configuration validation fails."""
    pass


def validate_config(config: DictConfig) -> None:
    """Validate the complete configuration.

    Args:
        config: Configuration to validate

    Raises:
        ConfigValidationError: If validation fails
    """
    try:
        validate_puzzle_config(config.get('puzzle', {}))
        validate_search_config(config.get('search', {}))
        validate_output_config(config.get('output', {}))

        logger.info("Configuration validation passed")

    except ConfigValidationError:
        raise
    except Exception as e:
        raise ConfigValidationError(f"Configuration validation failed: {e}")


def validate_puzzle_config(puzzle_config: DictConfig) -> None:
    """Validate puzzle configuration section.

    Args:
        puzzle_config: Puzzle configuration section
    """
    if not puzzle_config:
        return

    initial_state = puzzle_config.get('initial_state')
    if initial_state is None:
        raise ConfigValidationError("puzzle.initial_state is required")

    if OmegaConf.is_config(initial_state):
        initial_state = OmegaConf.to_container(initial_state, resolve=True)

    try:
        parse_board(initial_state)
    except InvalidBoardError as e:
        raise ConfigValidationError(f"puzzle.initial_state is invalid: {e}")


def validate_search_config(search_config: DictConfig) -> None:
    """Validate search configuration section.

    Args:
        search_config: Search configuration section
    """
    if not search_config:
        return

    tie_break = search_config.get('tie_break', 'insertion')
    if tie_break not in TIE_BREAK_RULES:
        raise ConfigValidationError(
            f"search.tie_break must be one of {TIE_BREAK_RULES}, got {tie_break}"
        )

    log_interval = search_config.get('log_interval', 10000)
    if not isinstance(log_interval, int) or isinstance(log_interval, bool) or log_interval <= 0:
        raise ConfigValidationError(
            f"search.log_interval must be positive integer, got {log_interval}"
        )


def validate_output_config(output_config: DictConfig) -> None:
    """Validate output configuration section.

    Args:
        output_config: Output configuration section
    """
    if not output_config:
        return

    solved = output_config.get('solved_message', "goal state reached in {moves} moves")
    if not isinstance(solved, str) or '{moves}' not in solved:
        raise ConfigValidationError(
            f"output.solved_message must be a string containing '{{moves}}', got {solved!r}"
        )
    # {moves} is the only field supplied when the line is rendered
    try:
        solved.format(moves=0)
    except (KeyError, IndexError, ValueError, AttributeError) as e:
        raise ConfigValidationError(
            f"output.solved_message cannot be rendered with only {{moves}}: {solved!r} ({e!r})"
        )

    unreachable = output_config.get('unreachable_message', "goal state not reachable")
    if not isinstance(unreachable, str) or not unreachable.strip():
        raise ConfigValidationError(
            f"output.unreachable_message must be a non-empty string, got {unreachable!r}"
        )


def check_config_consistency(config: DictConfig) -> List[str]:
    """Check configuration consistency and return issues.

    Args:
        config: Configuration to check

    Returns:
        List of consistency issues
    """
    issues = []

    initial_state = OmegaConf.select(config, 'puzzle.initial_state')
    if initial_state is not None:
        if OmegaConf.is_config(initial_state):
            initial_state = OmegaConf.to_container(initial_state, resolve=True)
        try:
            board = parse_board(initial_state)
        except InvalidBoardError:
            return issues
        if not is_solvable(board):
            issues.append(
                "puzzle.initial_state has the wrong inversion parity; "
                "the search will exhaust the reachable states without finding the goal"
            )

    return issues
