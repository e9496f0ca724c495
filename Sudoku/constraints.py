"""
Constraint checking for the Sudoku solver

Key points:
 - Candidate digits per cell from direct row / column / box exclusion
 - Global validation by group sums (every complete group sums to 45)
 - Every failing row, column and box is reported, not just the first
 - Duplicate and given-overwrite checks for diagnostics
"""

from typing import List, Dict, Set, Union
from dataclasses import dataclass

from .puzzle import (
    SudokuGrid, Coord, HouseCoord, SIZE, FULL_MASK,
    digit_bit, digits_to_mask, mask_to_digits,
)


GROUP_SUM = sum(range(1, SIZE + 1))  # 45

ROW = "row"
COL = "col"
HOUSE = "house"


@dataclass(frozen=True)
class Violation:
    """A row, column or house that failed validation"""
    kind: str  # 'row', 'col' or 'house'
    index: Union[int, HouseCoord]

    @staticmethod
    def row(index: int) -> 'Violation':
        return Violation(ROW, index)

    @staticmethod
    def col(index: int) -> 'Violation':
        return Violation(COL, index)

    @staticmethod
    def house(house: HouseCoord) -> 'Violation':
        return Violation(HOUSE, house)

    def sort_key(self):
        kinds = (ROW, COL, HOUSE)
        if isinstance(self.index, HouseCoord):
            return (kinds.index(self.kind), self.index.row, self.index.col)
        return (kinds.index(self.kind), self.index, 0)

    def __str__(self):
        if isinstance(self.index, HouseCoord):
            return f"invalid house ({self.index.row},{self.index.col})"
        return f"invalid {self.kind} {self.index}"


# -----------------------------------------------------------------------------
# Constraint Checking
# -----------------------------------------------------------------------------
class ConstraintChecker:
    """Candidate computation and global consistency checks."""

    # ---------- candidates ----------

    @staticmethod
    def candidate_mask(grid: SudokuGrid, coord: Coord) -> int:
        return grid.candidate_mask(coord)

    @staticmethod
    def candidates(grid: SudokuGrid, coord: Coord) -> List[int]:
        """Legal digits for `coord`, ascending"""
        return mask_to_digits(grid.candidate_mask(coord))

    # ---------- validation ----------

    @staticmethod
    def validate(grid: SudokuGrid) -> Set[Violation]:
        """
        Check every row, column and house sums to 45.

        Empty cells count as 0, so an incomplete grid always fails.
        Returns the set of failing groups; empty means the grid is solved.
        """
        violations: Set[Violation] = set()

        for n in range(SIZE):
            if int(grid.row(n).sum()) != GROUP_SUM:
                violations.add(Violation.row(n))

            if int(grid.col(n).sum()) != GROUP_SUM:
                violations.add(Violation.col(n))

            house = HouseCoord.from_index(n)
            if int(grid.box(house).sum()) != GROUP_SUM:
                violations.add(Violation.house(house))

        return violations

    @staticmethod
    def is_valid(grid: SudokuGrid) -> bool:
        return not ConstraintChecker.validate(grid)

    # ---------- diagnostics helpers ----------

    @staticmethod
    def _repeated(values) -> List[int]:
        seen = 0
        dups = 0
        for v in values:
            if not v:
                continue
            bit = digit_bit(int(v))
            if seen & bit:
                dups |= bit
            seen |= bit
        return mask_to_digits(dups)

    @staticmethod
    def find_duplicates(grid: SudokuGrid) -> List[Dict]:
        """
        List every group holding the same digit twice among its filled cells.
        Returns dicts: { 'violation', 'digits' }
        """
        found: List[Dict] = []
        for n in range(SIZE):
            house = HouseCoord.from_index(n)
            for violation, values in (
                (Violation.row(n), grid.row(n)),
                (Violation.col(n), grid.col(n)),
                (Violation.house(house), grid.box(house)),
            ):
                dups = ConstraintChecker._repeated(values)
                if dups:
                    found.append({'violation': violation, 'digits': dups})

        found.sort(key=lambda item: item['violation'].sort_key())
        return found

    @staticmethod
    def check_givens(original: SudokuGrid, solved: SudokuGrid) -> List[Coord]:
        """Coordinates where a clue of `original` differs in `solved`"""
        return [c for c in original.givens() if solved.get(c) != original.get(c)]

    @staticmethod
    def describe(violations: Set[Violation]) -> List[str]:
        return [str(v) for v in sorted(violations, key=Violation.sort_key)]


__all__ = [
    'ConstraintChecker', 'Violation', 'GROUP_SUM',
    'FULL_MASK', 'digit_bit', 'digits_to_mask', 'mask_to_digits',
]
