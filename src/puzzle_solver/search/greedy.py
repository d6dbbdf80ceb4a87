"""Greedy best-first search for the 8-puzzle.

This module drives the search from an initial board to the fixed goal board,
always expanding the frontier node with the lowest estimated total cost
(moves so far plus Manhattan distance). Duplicate states are filtered by
content against both the visited record and the current frontier; no
decrease-key is performed, so the reported move count is not guaranteed to be
the shortest.
"""

import heapq
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Set, Tuple

from puzzle_solver.core.board import BoardState, heuristic, is_goal, successors

logger = logging.getLogger(__name__)

TIE_BREAK_RULES = ('insertion', 'lowest_moves', 'lowest_heuristic')


class SearchStatus(Enum):
    """Lifecycle of a single search run."""
    RUNNING = "running"
    SOLVED = "solved"
    EXHAUSTED = "exhausted"


@dataclass
class SearchNode:
    """Frontier entry: a board with its heuristic and insertion order."""
    state: BoardState
    heuristic: int
    sequence: int
    tie_break: str = 'insertion'

    @property
    def moves(self) -> int:
        return self.state.moves

    @property
    def f_score(self) -> int:
        """Total estimated cost f(n) = moves + h(n)."""
        return self.state.moves + self.heuristic

    @property
    def sort_key(self) -> Tuple[int, ...]:
        if self.tie_break == 'lowest_moves':
            return (self.f_score, self.moves, self.sequence)
        if self.tie_break == 'lowest_heuristic':
            return (self.f_score, self.heuristic, self.sequence)
        return (self.f_score, self.sequence)

    def __lt__(self, other: 'SearchNode') -> bool:
        """Comparison for priority queue (lower f_score has higher priority)."""
        return self.sort_key < other.sort_key


class Frontier:
    """Binary-heap priority queue with content-based membership.

    Membership is tracked by board key, so a board built separately from one
    already queued is still recognised as present.
    """

    def __init__(self, tie_break: str = 'insertion'):
        if tie_break not in TIE_BREAK_RULES:
            raise ValueError(f"Unknown tie-break rule '{tie_break}', expected one of {TIE_BREAK_RULES}")
        self.tie_break = tie_break
        self._heap: List[SearchNode] = []
        self._keys: Set[int] = set()
        self._entrance = 0

    def push(self, state: BoardState) -> SearchNode:
        node = SearchNode(state=state, heuristic=heuristic(state),
                          sequence=self._entrance, tie_break=self.tie_break)
        self._entrance += 1
        heapq.heappush(self._heap, node)
        self._keys.add(state.key)
        return node

    def pop(self) -> SearchNode:
        node = heapq.heappop(self._heap)
        self._keys.discard(node.state.key)
        return node

    def contains_key(self, key: int) -> bool:
        return key in self._keys

    def __contains__(self, state: BoardState) -> bool:
        return self.contains_key(state.key)

    def __len__(self) -> int:
        return len(self._heap)


@dataclass
class SearchResult:
    """Result from greedy frontier search."""
    status: SearchStatus
    moves: Optional[int] = None
    final_state: Optional[BoardState] = None
    nodes_expanded: int = 0
    nodes_generated: int = 0
    duplicates_skipped: int = 0
    max_frontier_size: int = 0
    computation_time: float = 0.0
    termination_reason: str = "unknown"

    @property
    def success(self) -> bool:
        return self.status is SearchStatus.SOLVED

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to a JSON-serialisable dictionary."""
        return {
            'success': self.success,
            'status': self.status.value,
            'moves': self.moves,
            'final_state': self.final_state.to_list() if self.final_state is not None else None,
            'nodes_expanded': self.nodes_expanded,
            'nodes_generated': self.nodes_generated,
            'duplicates_skipped': self.duplicates_skipped,
            'max_frontier_size': self.max_frontier_size,
            'computation_time': self.computation_time,
            'termination_reason': self.termination_reason
        }


@dataclass
class SearchStatistics:
    """Counters collected while a search runs."""
    nodes_expanded: int = 0
    nodes_generated: int = 0
    duplicates_skipped: int = 0
    max_frontier_size: int = 0
    max_moves_reached: int = 0
    average_branching_factor: float = 0.0

    def update_branching_factor(self, total_successors: int) -> None:
        """Update average branching factor."""
        if self.nodes_expanded > 0:
            self.average_branching_factor = (
                (self.average_branching_factor * (self.nodes_expanded - 1) + total_successors)
                / self.nodes_expanded
            )
        else:
            self.average_branching_factor = total_successors

    def to_dict(self) -> Dict[str, Any]:
        return {
            'nodes_expanded': self.nodes_expanded,
            'nodes_generated': self.nodes_generated,
            'duplicates_skipped': self.duplicates_skipped,
            'max_frontier_size': self.max_frontier_size,
            'max_moves_reached': self.max_moves_reached,
            'average_branching_factor': self.average_branching_factor
        }


@dataclass
class SearchConfig:
    """Configuration for greedy frontier search."""
    tie_break: str = 'insertion'  # insertion | lowest_moves | lowest_heuristic
    log_interval: int = 10000  # Expansions between progress log lines

    def __post_init__(self) -> None:
        if self.tie_break not in TIE_BREAK_RULES:
            raise ValueError(f"Unknown tie-break rule '{self.tie_break}', expected one of {TIE_BREAK_RULES}")
        if self.log_interval <= 0:
            raise ValueError(f"log_interval must be positive, got {self.log_interval}")


class GreedyFrontierSearcher:
    """Best-estimate-first search with visited/frontier deduplication."""

    def __init__(self, config: Optional[SearchConfig] = None):
        """Initialize searcher.

        Args:
            config: Search configuration parameters
        """
        self.config = config or SearchConfig()
        self.status = SearchStatus.RUNNING
        self.statistics = SearchStatistics()
        self.computation_time = 0.0

    def search(self, initial: BoardState) -> SearchResult:
        """Search from initial to the goal board.

        Args:
            initial: Starting board; its move count is reset to zero

        Returns:
            SearchResult with status SOLVED or EXHAUSTED
        """
        start_time = time.perf_counter()

        self.statistics = SearchStatistics()
        self.status = SearchStatus.RUNNING

        root = BoardState(initial.cells, 0)
        logger.info(f"Starting greedy search from {list(root.cells)} (tie_break={self.config.tie_break})")

        frontier = Frontier(self.config.tie_break)
        frontier.push(root)
        self.statistics.nodes_generated = 1
        self.statistics.max_frontier_size = 1

        # Keys of expanded boards
        visited: Set[int] = set()

        while frontier:
            current = frontier.pop()

            if is_goal(current.state):
                self.status = SearchStatus.SOLVED
                reason = "initial_match" if self.statistics.nodes_expanded == 0 else "goal_reached"
                return self._create_result(current.state, start_time, reason)

            visited.add(current.state.key)
            self.statistics.nodes_expanded += 1
            self.statistics.max_moves_reached = max(self.statistics.max_moves_reached, current.moves)

            generated = self._expand_node(current, frontier, visited)
            self.statistics.update_branching_factor(generated)
            self.statistics.max_frontier_size = max(self.statistics.max_frontier_size, len(frontier))

            if self.statistics.nodes_expanded % self.config.log_interval == 0:
                logger.debug(
                    f"Expanded {self.statistics.nodes_expanded} nodes, "
                    f"frontier={len(frontier)}, visited={len(visited)}, f={current.f_score}"
                )

        self.status = SearchStatus.EXHAUSTED
        return self._create_result(None, start_time, "frontier_exhausted")

    def _expand_node(self, node: SearchNode, frontier: Frontier, visited: Set[int]) -> int:
        """Admit unseen successors of node into the frontier.

        Returns:
            Number of successors generated, admitted or not
        """
        generated = 0
        for child in successors(node.state):
            generated += 1
            key = child.key
            if key in visited or frontier.contains_key(key):
                self.statistics.duplicates_skipped += 1
                continue
            frontier.push(child)
        self.statistics.nodes_generated += generated
        return generated

    def _create_result(self, final_state: Optional[BoardState], start_time: float,
                       termination_reason: str) -> SearchResult:
        self.computation_time = time.perf_counter() - start_time
        result = SearchResult(
            status=self.status,
            moves=final_state.moves if final_state is not None else None,
            final_state=final_state,
            nodes_expanded=self.statistics.nodes_expanded,
            nodes_generated=self.statistics.nodes_generated,
            duplicates_skipped=self.statistics.duplicates_skipped,
            max_frontier_size=self.statistics.max_frontier_size,
            computation_time=self.computation_time,
            termination_reason=termination_reason
        )
        logger.info(
            f"Search finished: {self.status.value} ({termination_reason}), moves={result.moves}, "
            f"expanded={result.nodes_expanded}, time={self.computation_time:.3f}s"
        )
        return result

    def get_search_stats(self) -> Dict[str, Any]:
        """Statistics of the most recent search."""
        stats = self.statistics.to_dict()
        stats.update({
            'status': self.status.value,
            'computation_time': self.computation_time,
            'config': {
                'tie_break': self.config.tie_break,
                'log_interval': self.config.log_interval
            }
        })
        return stats
