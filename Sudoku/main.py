#!/usr/bin/env python3
"""
Sudoku Solver - Main Entry Point

Usage:
    python -m Sudoku.main data/puzzles/easy.txt
    python -m Sudoku.main --all [data/puzzles]
    python -m Sudoku.main --compare data/puzzles/easy.txt
    python -m Sudoku.main --diagnose data/puzzles/easy.txt

Options:
    --timeout SECONDS   Give up after SECONDS (default: no limit)
    --verbose, -v       Print search progress and statistics
    --save              Write solution.json / solution.txt
    --output-dir DIR    Where --save writes (default: data/debug/<puzzle_name>/)
"""

import sys
import time
import traceback
from pathlib import Path
from typing import List, Optional

from .puzzle import SudokuGrid, SudokuParseError
from .solver import BacktrackingSolver, UnsolvableError
from .output import SolutionFormatter
from . import diagnostics

# ============================================================================
# CONFIGURATION
# ============================================================================
PROJECT_ROOT = Path(__file__).parent.parent
PUZZLE_PATH = PROJECT_ROOT / "data" / "puzzles" / "easy.txt"   # Solved when no path is given
PUZZLE_DIR = PROJECT_ROOT / "data" / "puzzles"                 # Used by --all
OUTPUT_DIR = PROJECT_ROOT / "data" / "debug"                   # Base output directory for --save

TIMEOUT_SECONDS = None
# Maximum time to spend on a single puzzle; None searches until done

VERBOSE = False
# ============================================================================

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def solve_puzzle(input_path, output_dir=None, verbose: bool = VERBOSE,
                 timeout_seconds: Optional[float] = TIMEOUT_SECONDS,
                 save: bool = False, quiet: bool = False):
    """
    Solve a single puzzle file and print the solved grid.

    Args:
        input_path: Path to a 9-line puzzle text file
        output_dir: Directory for saved output (default: data/debug/<puzzle_name>/)
        verbose: Print search progress
        timeout_seconds: Maximum solving time in seconds, None for no limit
        save: Write solution.json and solution.txt
        quiet: Do not print the grid (batch mode)

    Returns:
        (solved, original, solution, solver); original/solution/solver are
        None where the run did not get that far.
    """
    start_time = time.perf_counter()
    puzzle_name = Path(input_path).stem

    try:
        original = SudokuGrid.from_file(input_path)
    except SudokuParseError as e:
        print(f"Error encountered while parsing {input_path}: {e}")
        return False, None, None, None

    solver = BacktrackingSolver(original, verbose=verbose, timeout_seconds=timeout_seconds)
    try:
        solution = solver.solve()
    except UnsolvableError as e:
        print(f"Error encountered while solving {input_path}: {e}")
        if verbose and e.violations:
            print(f"  {SolutionFormatter.format_violations(e.violations)}")
        return False, original, None, solver

    if not quiet:
        print(SolutionFormatter.format_grid(solution))

    if save:
        if output_dir is None:
            output_dir = OUTPUT_DIR / puzzle_name
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        SolutionFormatter.save_solution(original, solution, solver.stats, str(output_dir / "solution.json"))
        SolutionFormatter.save_human_readable(original, solution, solver.stats, str(output_dir / "solution.txt"))

    if verbose:
        print(SolutionFormatter.format_solution_human_readable(original, solution, solver.stats))
        diagnostics.print_summary(solver, original)

    duration = time.perf_counter() - start_time
    if not quiet:
        print(f"Solved in {int(duration * 1000)} milliseconds")

    return True, original, solution, solver


def solve_all_puzzles(data_dir=None, timeout_seconds: Optional[float] = TIMEOUT_SECONDS) -> List[dict]:
    """
    Solve all puzzles in data/puzzles/ (or a specified directory)
    """
    data_path = Path(data_dir) if data_dir is not None else PUZZLE_DIR
    if not data_path.exists():
        print(f"Error: Directory not found: {data_path}")
        return []

    puzzle_files = sorted(p for p in data_path.glob("*.txt") if not p.stem.endswith("_solved"))
    if not puzzle_files:
        print(f"No puzzles found in {data_path}")
        return []

    print(f"\nFound {len(puzzle_files)} puzzle(s) to solve")

    results = []
    for i, puzzle_file in enumerate(puzzle_files, 1):
        print(f"\n[{i}/{len(puzzle_files)}] Solving {puzzle_file.name}...")

        solved, original, _, solver = solve_puzzle(
            puzzle_file, verbose=False, timeout_seconds=timeout_seconds, quiet=True
        )
        results.append({
            'file': puzzle_file.name,
            'solved': solved,
            'givens': original.filled_count() if original is not None else None,
            'backtracks': solver.stats['backtracks'] if solver else None,
            'elapsed_ms': solver.stats['elapsed_ms'] if solver else None,
        })

        status = "✓ SOLVED" if solved else "✗ FAILED"
        print(f"  {status}")

    # ---------------------------
    # Print summary
    # ---------------------------
    print(f"\n{'=' * 60}")
    print("SUMMARY")
    print(f"{'=' * 60}")
    solved_count = sum(1 for r in results if r['solved'])
    print(f"Solved: {solved_count}/{len(results)} puzzles")
    for r in results:
        status = "✓" if r['solved'] else "✗"
        print(f"{status} {r['file']:30s}", end="")
        if r['solved']:
            print(f" - {r['givens']} givens, {r['backtracks']} backtracks, {r['elapsed_ms']:.1f} ms")
        else:
            print(" - Failed")

    return results


def run_comparison_test(input_path, timeout_seconds: Optional[float] = TIMEOUT_SECONDS) -> bool:
    """
    Solve the same puzzle twice and check both runs agree.
    """
    original = SudokuGrid.from_file(input_path)

    runs = []
    for attempt in (1, 2):
        solver = BacktrackingSolver(original, timeout_seconds=timeout_seconds)
        try:
            solution = solver.solve()
        except UnsolvableError:
            solution = None
        runs.append((solution, solver.stats['elapsed_ms']))
        print(f"Run {attempt}: {'SOLVED' if solution is not None else 'FAILED'} "
              f"in {solver.stats['elapsed_ms']:.1f} ms")

    identical = runs[0][0] == runs[1][0]
    print(f"Results identical: {'YES' if identical else 'NO'}")
    return identical


def _resolve(path_arg: str) -> Path:
    path = Path(path_arg)
    if not path.is_absolute() and not path.exists():
        path = PROJECT_ROOT / path
    return path


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = list(sys.argv[1:] if argv is None else argv)

    verbose = VERBOSE
    save = False
    timeout_seconds = TIMEOUT_SECONDS
    output_dir = None
    command = None
    positional = []

    while args:
        arg = args.pop(0)
        if arg in ("--verbose", "-v"):
            verbose = True
        elif arg == "--save":
            save = True
        elif arg == "--timeout":
            if not args:
                print("Usage: --timeout SECONDS")
                return EXIT_USAGE
            try:
                timeout_seconds = float(args.pop(0))
            except ValueError:
                print("Error: --timeout expects a number of seconds")
                return EXIT_USAGE
        elif arg == "--output-dir":
            if not args:
                print("Usage: --output-dir DIR")
                return EXIT_USAGE
            output_dir = Path(args.pop(0))
        elif arg in ("--all", "--compare", "-c", "--diagnose", "-d"):
            command = arg
        elif arg in ("--help", "-h"):
            print(__doc__)
            return EXIT_OK
        elif arg.startswith("-"):
            print(f"Unknown option: {arg}")
            return EXIT_USAGE
        else:
            positional.append(arg)

    try:
        if command == "--all":
            data_dir = _resolve(positional[0]) if positional else None
            results = solve_all_puzzles(data_dir, timeout_seconds=timeout_seconds)
            if not results:
                return EXIT_USAGE
            return EXIT_OK if all(r['solved'] for r in results) else EXIT_FAILED

        if command in ("--compare", "-c", "--diagnose", "-d"):
            if not positional:
                print(f"Usage: python -m Sudoku.main {command} <puzzle.txt>")
                return EXIT_USAGE
            input_file = _resolve(positional[0])
            if not input_file.exists():
                print(f"Error: File not found: {input_file}")
                return EXIT_USAGE
            if command in ("--compare", "-c"):
                return EXIT_OK if run_comparison_test(input_file, timeout_seconds) else EXIT_FAILED
            result = diagnostics.analyze_failure(
                SudokuGrid.from_file(input_file),
                timeout=timeout_seconds,
                name=input_file.name,
            )
            return EXIT_OK if result['solved'] else EXIT_FAILED

        input_file = _resolve(positional[0]) if positional else PUZZLE_PATH
        if not input_file.exists():
            print(f"Error: File not found: {input_file}")
            return EXIT_USAGE

        solved, _, _, _ = solve_puzzle(
            input_file,
            output_dir=output_dir,
            verbose=verbose,
            timeout_seconds=timeout_seconds,
            save=save,
        )
        return EXIT_OK if solved else EXIT_FAILED

    except SudokuParseError as e:
        print(f"Error encountered while parsing: {e}")
        return EXIT_FAILED

    except KeyboardInterrupt:
        print(f"\n\n{'=' * 60}")
        print("⚠ Solving interrupted by user (Ctrl+C)")
        print(f"{'=' * 60}")
        return EXIT_FAILED

    except Exception as e:
        print(f"\nError: {e}")
        traceback.print_exc()
        return EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
