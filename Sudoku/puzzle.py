"""
Core data structures for 9x9 Sudoku puzzle representation
"""
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Set
from dataclasses import dataclass

import numpy as np


SIZE = 9
BOX = 3
EMPTY = 0
BLANK_MARKER = '.'
DIGITS = range(1, SIZE + 1)
FULL_MASK = (1 << SIZE) - 1  # bits 0..8 -> digits 1..9


class SudokuParseError(ValueError):
    """Raised when puzzle text is not a 9x9 grid of digits and '.' blanks"""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(message)
        self.line = line
        self.column = column


# -----------------------------------------------------------------------------
# Digit bitmasks
# -----------------------------------------------------------------------------
def digit_bit(digit: int) -> int:
    return 1 << (digit - 1)


def digits_to_mask(digits: Iterable[int]) -> int:
    mask = 0
    for d in digits:
        if d:
            mask |= digit_bit(int(d))
    return mask


def mask_to_digits(mask: int) -> List[int]:
    """Digits set in `mask`, ascending"""
    return [d for d in DIGITS if mask & digit_bit(d)]


# -----------------------------------------------------------------------------
# Coordinates
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class HouseCoord:
    """One of the nine 3x3 boxes, addressed by (box-row, box-col) in [0,2]"""
    row: int
    col: int

    @staticmethod
    def from_index(index: int) -> 'HouseCoord':
        """Box number 0..8, counted left to right, top to bottom"""
        return HouseCoord(index // BOX, index % BOX)

    def rows(self) -> range:
        return range(self.row * BOX, self.row * BOX + BOX)

    def cols(self) -> range:
        return range(self.col * BOX, self.col * BOX + BOX)

    def __repr__(self):
        return f"House({self.row},{self.col})"


@dataclass(frozen=True)
class Coord:
    """A single cell position (row, col), both in [0,8]"""
    row: int
    col: int

    def next(self) -> Optional['Coord']:
        """Row-major successor; None past the last cell (8,8)"""
        next_col = self.col + 1 if self.col < SIZE - 1 else 0
        next_row = self.row + 1 if next_col == 0 else self.row
        if next_row < SIZE:
            return Coord(next_row, next_col)
        return None

    def house(self) -> HouseCoord:
        return HouseCoord(self.row // BOX, self.col // BOX)

    @staticmethod
    def all() -> Iterator['Coord']:
        """All 81 cells in row-major order"""
        coord: Optional[Coord] = Coord(0, 0)
        while coord is not None:
            yield coord
            coord = coord.next()

    def __repr__(self):
        return f"({self.row},{self.col})"


# -----------------------------------------------------------------------------
# Grid
# -----------------------------------------------------------------------------
class SudokuGrid:
    """9x9 board. Cells hold 1..9, or 0 when empty."""

    def __init__(self, cells=None):
        if cells is None:
            cells = np.zeros((SIZE, SIZE), dtype=np.int8)
        arr = np.array(cells, dtype=np.int8)
        if arr.shape != (SIZE, SIZE):
            raise ValueError(f"Grid must be {SIZE}x{SIZE}, got shape {arr.shape}")
        if arr.min() < EMPTY or arr.max() > SIZE:
            raise ValueError("Cell values must be in 0..9 (0 = empty)")
        self.cells = arr

    # ---------- construction ----------

    @classmethod
    def empty(cls) -> 'SudokuGrid':
        return cls()

    @classmethod
    def from_text(cls, text: str) -> 'SudokuGrid':
        """
        Parse 9 lines of 9 characters, each a digit 1-9 or '.'.
        """
        # Only '\n' (optionally '\r\n') separates rows; one trailing newline is allowed
        if text.endswith('\n'):
            text = text[:-1]
        lines = [line[:-1] if line.endswith('\r') else line for line in text.split('\n')]
        if len(lines) != SIZE:
            raise SudokuParseError(f"Expected {SIZE} rows, got {len(lines)}")

        cells = np.zeros((SIZE, SIZE), dtype=np.int8)
        for r, line in enumerate(lines):
            if len(line) != SIZE:
                raise SudokuParseError(
                    f"Row {r + 1}: expected {SIZE} characters, got {len(line)}",
                    line=r + 1,
                )
            for c, ch in enumerate(line):
                if ch == BLANK_MARKER:
                    continue
                if ch not in '123456789':
                    raise SudokuParseError(
                        f"Row {r + 1}, column {c + 1}: invalid character {ch!r}",
                        line=r + 1,
                        column=c + 1,
                    )
                cells[r, c] = int(ch)
        return cls(cells)

    @classmethod
    def from_file(cls, path) -> 'SudokuGrid':
        """Load puzzle from a text file"""
        return cls.from_text(Path(path).read_text())

    def clone(self) -> 'SudokuGrid':
        return SudokuGrid(self.cells.copy())

    # ---------- cell access ----------

    def get(self, coord: Coord) -> Optional[int]:
        value = int(self.cells[coord.row, coord.col])
        return value if value != EMPTY else None

    def set(self, coord: Coord, digit: int) -> None:
        self.cells[coord.row, coord.col] = digit

    def unset(self, coord: Coord) -> None:
        self.cells[coord.row, coord.col] = EMPTY

    # ---------- group views ----------

    def row(self, index: int) -> np.ndarray:
        """Raw values of a row (0 for empty)"""
        return self.cells[index, :]

    def col(self, index: int) -> np.ndarray:
        return self.cells[:, index]

    def box(self, house: HouseCoord) -> np.ndarray:
        rows, cols = house.rows(), house.cols()
        return self.cells[rows.start:rows.stop, cols.start:cols.stop].ravel()

    def row_digits(self, index: int) -> Set[int]:
        return {int(v) for v in self.row(index) if v}

    def col_digits(self, index: int) -> Set[int]:
        return {int(v) for v in self.col(index) if v}

    def box_digits(self, house: HouseCoord) -> Set[int]:
        return {int(v) for v in self.box(house) if v}

    def candidate_mask(self, coord: Coord) -> int:
        """Bitmask of digits not yet used in the cell's row, column or box"""
        used = (digits_to_mask(self.row(coord.row))
                | digits_to_mask(self.col(coord.col))
                | digits_to_mask(self.box(coord.house())))
        return FULL_MASK & ~used

    def candidates(self, coord: Coord) -> Set[int]:
        return set(mask_to_digits(self.candidate_mask(coord)))

    # ---------- state ----------

    def givens(self) -> List[Coord]:
        """Coordinates of all filled cells"""
        return [c for c in Coord.all() if self.cells[c.row, c.col] != EMPTY]

    def filled_count(self) -> int:
        return int(np.count_nonzero(self.cells))

    def is_complete(self) -> bool:
        return self.filled_count() == SIZE * SIZE

    def get_completion_percentage(self) -> float:
        return self.filled_count() / (SIZE * SIZE)

    # ---------- text ----------

    def to_text(self) -> str:
        lines = []
        for r in range(SIZE):
            lines.append(''.join(str(int(v)) if v else BLANK_MARKER for v in self.cells[r]))
        return '\n'.join(lines) + '\n'

    def __str__(self):
        return self.to_text()

    def __eq__(self, other):
        return isinstance(other, SudokuGrid) and np.array_equal(self.cells, other.cells)

    __hash__ = None

    def __repr__(self):
        return f"SudokuGrid(filled={self.filled_count()}/{SIZE * SIZE}, complete={self.is_complete()})"
