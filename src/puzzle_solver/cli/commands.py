"""CLI command implementations."""

import logging
import time
from typing import Any, Dict, List, Optional

from omegaconf import DictConfig, OmegaConf

from puzzle_solver.config import (
    ConfigManager, load_config, validate_config, check_config_consistency, ConfigValidationError
)
from puzzle_solver.core.board import BoardState, format_board, parse_board
from puzzle_solver.search.greedy import GreedyFrontierSearcher, SearchResult
from puzzle_solver.search.reporting import report_outcome

from .utils import save_results, format_duration

logger = logging.getLogger(__name__)


class PuzzleSolver:
    """Ties configuration, search and reporting together."""

    def __init__(self, config_overrides: Optional[List[str]] = None):
        """Initialize puzzle solver.

        Args:
            config_overrides: List of configuration overrides
        """
        self.manager = ConfigManager()
        try:
            self.config: DictConfig = self.manager.load_config(overrides=config_overrides or [])
        except Exception as e:
            logger.error(f"Failed to load configuration: {e}")
            raise

        self.searcher = GreedyFrontierSearcher(self.manager.search_config())
        self.solved_message, self.unreachable_message = self.manager.output_templates()

        for issue in check_config_consistency(self.config):
            logger.warning(issue)

        logger.info("Puzzle solver initialized successfully")

    def default_initial_state(self) -> BoardState:
        return self.manager.initial_state()

    def solve(self, initial: Optional[BoardState] = None, sink=print) -> SearchResult:
        """Search from initial (or the configured board) and report the outcome.

        Args:
            initial: Starting board; defaults to ``puzzle.initial_state``. An
                explicit board replaces that entry in the loaded configuration.
            sink: Callable receiving the single outcome line

        Returns:
            SearchResult of the run
        """
        if initial is None:
            initial = self.default_initial_state()
        else:
            self.manager.set_initial_state(initial)

        logger.info(f"Initial board:\n{format_board(initial)}")
        result = self.searcher.search(initial)
        report_outcome(result, sink, self.solved_message, self.unreachable_message)
        return result

    def get_stats(self) -> Dict[str, Any]:
        return self.searcher.get_search_stats()


def _collect_overrides(args) -> List[str]:
    config_overrides = []
    if getattr(args, 'tie_break', None):
        config_overrides.append(f"search.tie_break={args.tie_break}")
    if getattr(args, 'config', None):
        config_overrides.extend(args.config)
    return config_overrides


def solve_command(args) -> int:
    """Handle solve command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        solver = PuzzleSolver(_collect_overrides(args))

        if args.state:
            initial = parse_board(args.state)
        else:
            initial = solver.default_initial_state()

        start_time = time.perf_counter()
        result = solver.solve(initial)
        total_time = time.perf_counter() - start_time

        logger.info(
            f"Expanded {result.nodes_expanded} nodes, generated {result.nodes_generated}, "
            f"in {format_duration(total_time)}"
        )

        if args.output:
            output = result.to_dict()
            output.update({
                'initial_state': initial.to_list(),
                'tie_break': solver.searcher.config.tie_break,
                'config': solver.manager.to_container(),
                'total_time': total_time,
                'timestamp': time.time()
            })
            save_results(output, args.output)
            logger.info(f"Results saved to {args.output}")

        return 0 if result.success else 1

    except Exception as e:
        logger.error(f"Solve command failed: {e}")
        return 1


def config_command(args) -> int:
    """Handle config command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        if args.config_action == 'show':
            config = load_config(overrides=_collect_overrides(args), validate=False)
            print("Current Configuration:")
            print("=" * 50)
            print(OmegaConf.to_yaml(config, resolve=True))
            return 0

        elif args.config_action == 'validate':
            try:
                config = load_config(overrides=_collect_overrides(args), validate=False)
                validate_config(config)
                for issue in check_config_consistency(config):
                    print(f"Warning: {issue}")
                print("Configuration is valid")
                return 0
            except ConfigValidationError as e:
                print(f"Configuration validation failed: {e}")
                return 1

        else:
            print("Unknown config action")
            return 1

    except Exception as e:
        logger.error(f"Config command failed: {e}")
        return 1
