"""
Diagnostics: understand WHY a puzzle fails to solve

Splits failures into contradictory givens, timeouts and exhausted searches,
and checks that a solved grid kept every clue.
"""

import sys
import time
from pathlib import Path
from typing import Dict, Optional

from .puzzle import SudokuGrid, SudokuParseError, Coord, SIZE
from .constraints import ConstraintChecker
from .solver import BacktrackingSolver, UnsolvableError


CONTRADICTORY_GIVENS = "CONTRADICTORY_GIVENS"
TIMEOUT = "TIMEOUT"
EXHAUSTED = "EXHAUSTED"


def analyze_puzzle_structure(grid: SudokuGrid) -> Dict:
    """Print givens per group and any cell that is already stuck."""
    print("\n" + "=" * 60)
    print("PUZZLE STRUCTURE ANALYSIS")
    print("=" * 60)
    print(f"\nGivens: {grid.filled_count()}/{SIZE * SIZE}")

    duplicates = ConstraintChecker.find_duplicates(grid)
    if duplicates:
        print("\n⚠ Repeated digits among the clues:")
        for item in duplicates:
            print(f"  {item['violation']}: digits {item['digits']}")

    # Empty cells with nothing left to place
    dead_cells = [c for c in Coord.all()
                  if grid.get(c) is None and not grid.candidates(c)]
    if dead_cells:
        print(f"\n⚠ {len(dead_cells)} empty cell(s) without candidates: {dead_cells}")

    # Tightest cells first; these drive the early search
    singles = [c for c in Coord.all()
               if grid.get(c) is None and len(grid.candidates(c)) == 1]
    print(f"\nCells with a single candidate: {len(singles)}")

    return {
        'givens': grid.filled_count(),
        'duplicates': duplicates,
        'dead_cells': dead_cells,
        'single_candidate_cells': singles,
    }


def analyze_failure(grid: SudokuGrid, timeout: Optional[float] = 60, name: str = "puzzle") -> Dict:
    """Solve `grid` and, on failure, explain what went wrong."""
    solver = BacktrackingSolver(grid, verbose=False, timeout_seconds=timeout)

    print(f"\n{'=' * 60}")
    print(f"ANALYZING: {name}")
    print(f"{'=' * 60}")

    structure = analyze_puzzle_structure(grid)

    start = time.time()
    try:
        solver.solve()
        solved = True
    except UnsolvableError:
        solved = False
    elapsed = time.time() - start

    print(f"\n{'=' * 60}")
    classification = None
    if solved:
        print(f"✓ SOLVED in {elapsed:.2f}s")
    else:
        print(f"✗ FAILED after {elapsed:.2f}s")
        completion = solver.result.get_completion_percentage() if solver.result is not None else 0.0
        print(f"\nCompletion when stopped: {completion:.1%}")
        print(f"Violations: {', '.join(ConstraintChecker.describe(solver.violations))}")

        print("\nStats when failed:")
        print(f"  Assignments: {solver.stats['assignments']}")
        print(f"  Backtracks: {solver.stats['backtracks']}")
        print(f"  Cells visited: {solver.stats['total_attempts']}")

        if structure['duplicates']:
            classification = CONTRADICTORY_GIVENS
            print("\n⚠️  CONTRADICTORY GIVENS - The clues repeat a digit in a group")
        elif solver.timed_out:
            classification = TIMEOUT
            print("\n⚠️  TIMEOUT - Didn't exhaust search space")
        else:
            classification = EXHAUSTED
            print("\n⚠️  SEARCH EXHAUSTED - No assignment satisfies the clues")

    print(f"{'=' * 60}\n")

    return {
        'solved': solved,
        'elapsed': elapsed,
        'classification': classification,
        'stats': solver.stats.copy(),
    }


def print_summary(solver: BacktrackingSolver, original: SudokuGrid) -> bool:
    """Short post-solve report; returns True when every clue was kept."""
    solved = solver.result
    overwritten = ConstraintChecker.check_givens(original, solved) if solved is not None else []

    print("\nDiagnostics:")
    print(f"  Givens kept: {original.filled_count() - len(overwritten)}/{original.filled_count()}")
    if overwritten:
        print(f"  ⚠ Overwritten clues at: {overwritten}")
    print(f"  Backtracks: {solver.stats['backtracks']}")
    print(f"  Max depth: {solver.stats['max_depth']}")

    return not overwritten


def main():
    """Analyze every puzzle given on the command line."""
    if len(sys.argv) < 2:
        print("Usage: python -m Sudoku.diagnostics <puzzle.txt> [...]")
        sys.exit(2)

    results = []
    for filepath in sys.argv[1:]:
        if not Path(filepath).exists():
            print(f"WARNING: File not found: {filepath}")
            continue
        try:
            grid = SudokuGrid.from_file(filepath)
        except SudokuParseError as e:
            print(f"Error encountered while parsing {filepath}: {e}")
            continue
        result = analyze_failure(grid, name=Path(filepath).name)
        result['filename'] = Path(filepath).name
        results.append(result)

    failures = [r for r in results if not r['solved']]
    print(f"\nSolved: {len(results) - len(failures)}/{len(results)}")
    for r in failures:
        print(f"  {r['filename']}: {r['classification']}")


if __name__ == "__main__":
    main()
