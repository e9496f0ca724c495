"""
Backtracking solver for 9x9 Sudoku puzzles

Strategy:
1. Walk the cells in row-major order, skipping givens
2. Try each candidate digit (direct row / column / box exclusion) in ascending order
3. Undo and report failure when no candidate leads to a solution
4. Validate the finished grid independently of the search result, and
   reject any group that repeats a digit

The search result is never trusted on its own: the last cell may be left
empty when it has no candidate, so validation decides whether the puzzle
was solved.
"""

import time
from typing import Optional, Set

from .puzzle import SudokuGrid, Coord
from .constraints import ConstraintChecker, Violation


class UnsolvableError(RuntimeError):
    """No consistent, complete grid could be produced"""

    def __init__(self, message: str = "Sudoku is unsolvable",
                 violations: Optional[Set[Violation]] = None,
                 timed_out: bool = False):
        super().__init__(message)
        self.violations = violations or set()
        self.timed_out = timed_out


class BacktrackingSolver:
    def __init__(self, grid: SudokuGrid, verbose: bool = False,
                 timeout_seconds: Optional[float] = None):
        self.puzzle = grid
        self.verbose = verbose
        self.timeout = timeout_seconds
        self.result: Optional[SudokuGrid] = None
        self.violations: Set[Violation] = set()
        self.timed_out = False
        self.stats = {
            'assignments': 0,
            'backtracks': 0,
            'total_attempts': 0,
            'max_depth': 0,
            'elapsed_ms': 0.0,
        }

    # -------------------------------------------------------------------------
    # Main solving driver
    # -------------------------------------------------------------------------
    def solve(self) -> SudokuGrid:
        """
        Solve a copy of the puzzle.

        Returns the solved grid, raises UnsolvableError otherwise. The input
        grid is left untouched.
        """
        self.start_time = time.perf_counter()
        self.timed_out = False

        if self.verbose:
            print(f"Starting backtracking solver: {self.puzzle!r}")

        grid = self.puzzle.clone()
        self.result = grid
        found = self._backtrack(grid, Coord(0, 0), 0)

        self.stats['elapsed_ms'] = (time.perf_counter() - self.start_time) * 1000.0
        self.violations = ConstraintChecker.validate(grid)
        # Repeated clues can still sum to 45; the search never adds a repeat itself
        self.violations |= {item['violation'] for item in ConstraintChecker.find_duplicates(grid)}

        if self.verbose:
            print("\n✓ Search finished" if found else "\n✗ Search exhausted")
            self._print_stats()

        if self.violations:
            if self.timed_out:
                raise UnsolvableError(
                    f"Time limit of {self.timeout}s reached before a solution was found",
                    violations=self.violations,
                    timed_out=True,
                )
            raise UnsolvableError(violations=self.violations)

        return grid

    # -------------------------------------------------------------------------
    # Recursive search
    # -------------------------------------------------------------------------
    def _backtrack(self, grid: SudokuGrid, coord: Coord, depth: int) -> bool:
        if self.timeout is not None and time.perf_counter() - self.start_time > self.timeout:
            self.timed_out = True
            return False

        self.stats['total_attempts'] += 1
        if depth > self.stats['max_depth']:
            self.stats['max_depth'] = depth

        next_coord = coord.next()

        # Last cell: fill it if we can and stop here
        if next_coord is None:
            if grid.get(coord) is None:
                candidates = ConstraintChecker.candidates(grid, coord)
                if candidates:
                    grid.set(coord, candidates[0])
                    self.stats['assignments'] += 1
            return True

        # Given (or already placed): skip
        if grid.get(coord) is not None:
            return self._backtrack(grid, next_coord, depth + 1)

        for digit in ConstraintChecker.candidates(grid, coord):
            grid.set(coord, digit)
            self.stats['assignments'] += 1

            if self.verbose and depth < 3:
                print(f"{'  ' * depth}Trying {digit} at {coord}")

            if self._backtrack(grid, next_coord, depth + 1):
                return True

            if self.timed_out:
                break

        # Dead end: restore and let the caller try its next digit
        grid.unset(coord)
        self.stats['backtracks'] += 1
        return False

    # -------------------------------------------------------------------------
    # Stats
    # -------------------------------------------------------------------------
    def _print_stats(self) -> None:
        """Print solving statistics."""
        print("\nSolving Statistics:")
        print(f"  Assignments: {self.stats['assignments']}")
        print(f"  Backtracks: {self.stats['backtracks']}")
        print(f"  Cells visited: {self.stats['total_attempts']}")
        print(f"  Max depth: {self.stats['max_depth']}")
        print(f"  Elapsed: {self.stats['elapsed_ms']:.1f} ms")
        if self.violations:
            print(f"  Violations: {', '.join(ConstraintChecker.describe(self.violations))}")


def solve(grid: SudokuGrid, verbose: bool = False,
          timeout_seconds: Optional[float] = None) -> SudokuGrid:
    """Solve `grid` and return a new solved grid; raises UnsolvableError."""
    return BacktrackingSolver(grid, verbose=verbose, timeout_seconds=timeout_seconds).solve()
