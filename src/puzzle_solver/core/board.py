"""Board state for the 3x3 sliding-tile puzzle.

A board is an immutable value: nine tile labels stored row-major, with 0
denoting the blank. Equality and hashing are defined over the cell contents
only, so two separately built boards with the same tiles are interchangeable
as set members and dictionary keys.
"""

from dataclasses import dataclass, field
import re
from typing import Dict, Iterable, Sequence, Tuple, Union
import numpy as np

GRID_SIZE = 3
NUM_CELLS = GRID_SIZE * GRID_SIZE
BLANK = 0

Position = Tuple[int, int]

# (d_row, d_col) relative to the blank: up, right, down, left
NEIGHBOR_OFFSETS: Tuple[Position, ...] = ((-1, 0), (0, 1), (1, 0), (0, -1))


class InvalidBoardError(ValueError):
    """Raised when input cannot be turned into a well-formed board."""
    pass


def _read_only(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class BoardState:
    """A 3x3 puzzle configuration plus the number of slides taken to reach it."""
    cells: Tuple[int, ...]
    moves: int = 0
    _hash: int = field(init=False, repr=False, compare=False)
    _key: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Cache hash and key; cells never change after construction."""
        object.__setattr__(self, '_hash', state_hash(self))
        value = 0
        for cell in self.cells:
            value = value * NUM_CELLS + cell
        object.__setattr__(self, '_key', value)

    @classmethod
    def from_grid(cls, grid: Union[np.ndarray, Sequence[Sequence[int]]], moves: int = 0) -> 'BoardState':
        """Build a board from a 3x3 grid without validating the tile set."""
        array = np.asarray(grid, dtype=np.int64).reshape(NUM_CELLS)
        return cls(tuple(int(v) for v in array), moves)

    @property
    def grid(self) -> np.ndarray:
        """Read-only 3x3 numpy view of the board."""
        return _read_only(np.array(self.cells, dtype=np.int8).reshape(GRID_SIZE, GRID_SIZE))

    @property
    def key(self) -> int:
        """Base-9 integer encoding of the cells, used for membership lookups."""
        return self._key

    def tile_at(self, position: Position) -> int:
        row, col = position
        return self.cells[row * GRID_SIZE + col]

    def to_list(self) -> list:
        return [list(self.cells[r * GRID_SIZE:(r + 1) * GRID_SIZE]) for r in range(GRID_SIZE)]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoardState):
            return NotImplemented
        return equals(self, other)

    def __hash__(self) -> int:
        return self._hash

    def __str__(self) -> str:
        return format_board(self)


GOAL_GRID: np.ndarray = _read_only(np.array([[1, 2, 3],
                                             [8, 0, 4],
                                             [7, 6, 5]], dtype=np.int8))


def _build_goal_positions(goal: np.ndarray) -> Dict[int, Position]:
    positions = {}
    for row in range(GRID_SIZE):
        for col in range(GRID_SIZE):
            positions[int(goal[row, col])] = (row, col)
    return positions


_GOAL_POSITIONS: Dict[int, Position] = _build_goal_positions(GOAL_GRID)


def heuristic(state: BoardState) -> int:
    """Sum of Manhattan distances of every non-blank tile from its goal cell."""
    total = 0
    for index, tile in enumerate(state.cells):
        if tile == BLANK:
            continue
        goal_row, goal_col = _GOAL_POSITIONS[tile]
        total += abs(index // GRID_SIZE - goal_row) + abs(index % GRID_SIZE - goal_col)
    return total


def is_goal(state: BoardState) -> bool:
    return equals(state, GOAL_STATE)


def equals(a: BoardState, b: BoardState) -> bool:
    """True iff all nine cells match. Move counts are ignored."""
    return a.cells == b.cells


def state_hash(state: BoardState) -> int:
    """Combining hash over the cells in row-major order, consistent with equals()."""
    value = 17
    for cell in state.cells:
        value = value * 31 + cell
    return value


GOAL_STATE = BoardState.from_grid(GOAL_GRID)


def find_blank(state: BoardState) -> Position:
    """Row-major scan for the blank; the first match wins."""
    for row in range(GRID_SIZE):
        for col in range(GRID_SIZE):
            if state.cells[row * GRID_SIZE + col] == BLANK:
                return (row, col)
    raise InvalidBoardError("Board has no blank cell")


def in_bounds(position: Position) -> bool:
    row, col = position
    return 0 <= row < GRID_SIZE and 0 <= col < GRID_SIZE


def clone_and_slide(state: BoardState, blank_pos: Position, target_pos: Position) -> BoardState:
    """Return a new board with the blank and the tile at target_pos swapped.

    The source board is left untouched and the new board's move count is one
    higher than the source's.
    """
    blank_index = blank_pos[0] * GRID_SIZE + blank_pos[1]
    target_index = target_pos[0] * GRID_SIZE + target_pos[1]
    cells = list(state.cells)
    cells[blank_index], cells[target_index] = cells[target_index], cells[blank_index]
    return BoardState(tuple(cells), state.moves + 1)


def successors(state: BoardState) -> Iterable[BoardState]:
    """Yield every board reachable by one slide, in up/right/down/left order."""
    blank_row, blank_col = find_blank(state)
    for d_row, d_col in NEIGHBOR_OFFSETS:
        target = (blank_row + d_row, blank_col + d_col)
        if in_bounds(target):
            yield clone_and_slide(state, (blank_row, blank_col), target)


def _inversions(cells: Sequence[int]) -> int:
    tiles = [c for c in cells if c != BLANK]
    count = 0
    for i in range(len(tiles)):
        for j in range(i + 1, len(tiles)):
            if tiles[i] > tiles[j]:
                count += 1
    return count


def is_solvable(state: BoardState) -> bool:
    """On an odd-width board a slide never changes inversion parity, so the
    goal is reachable exactly when both boards share the same parity."""
    return _inversions(state.cells) % 2 == _inversions(GOAL_STATE.cells) % 2


def parse_board(value) -> BoardState:
    """Build a validated board from user or config input.

    Args:
        value: A 3x3 nested sequence, a numpy array, a flat sequence of nine
            integers, or a string of nine integers separated by commas and/or
            whitespace.

    Returns:
        BoardState with zero moves

    Raises:
        InvalidBoardError: If the input is not a permutation of 0..8 on a 3x3 grid
    """
    if isinstance(value, BoardState):
        value = value.cells

    if isinstance(value, str):
        tokens = [t for t in re.split(r'[\s,]+', value.strip()) if t]
        try:
            flat = [int(t) for t in tokens]
        except ValueError:
            raise InvalidBoardError(f"Board must contain only integers, got {value!r}")
        array = np.array(flat)
    else:
        try:
            array = np.array(value)
        except ValueError as e:
            raise InvalidBoardError(f"Board is not a regular grid: {e}")

    if array.size != NUM_CELLS or array.ndim not in (1, 2):
        raise InvalidBoardError(f"Board must have {NUM_CELLS} cells in a {GRID_SIZE}x{GRID_SIZE} grid, got shape {array.shape}")
    if array.ndim == 2 and array.shape != (GRID_SIZE, GRID_SIZE):
        raise InvalidBoardError(f"Board must be {GRID_SIZE}x{GRID_SIZE}, got shape {array.shape}")
    if not np.issubdtype(array.dtype, np.integer):
        raise InvalidBoardError(f"Board must contain only integers, got dtype {array.dtype}")

    flat = array.reshape(NUM_CELLS)
    if sorted(int(v) for v in flat) != list(range(NUM_CELLS)):
        raise InvalidBoardError(f"Board must contain each tile 0..{NUM_CELLS - 1} exactly once, got {flat.tolist()}")

    return BoardState(tuple(int(v) for v in flat))


def format_board(state: BoardState) -> str:
    rows = []
    for row in state.to_list():
        rows.append(" ".join("_" if v == BLANK else str(v) for v in row))
    return "\n".join(rows)
