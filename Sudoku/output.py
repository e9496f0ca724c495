import json
from typing import Dict, Iterable, Optional
from datetime import datetime

from .puzzle import SudokuGrid
from .constraints import ConstraintChecker, Violation


class SolutionFormatter:
    """Formats puzzle solutions for output"""

    @staticmethod
    def format_grid(grid: SudokuGrid) -> str:
        """9 lines of 9 characters, '.' for empty cells"""
        return grid.to_text()

    @staticmethod
    def format_violations(violations: Iterable[Violation]) -> str:
        described = ConstraintChecker.describe(set(violations))
        if not described:
            return "no violations"
        return ", ".join(described)

    @staticmethod
    def format_solution_json(original: SudokuGrid, solved: Optional[SudokuGrid], stats: Dict) -> Dict:
        """
        Format solution as JSON
        """
        violations = ConstraintChecker.validate(solved) if solved is not None else set()
        solution = {
            'puzzle_info': {
                'givens': original.filled_count(),
                'solved': solved is not None and not violations,
                'timestamp': datetime.now().isoformat()
            },
            'solving_stats': stats,
            'puzzle': original.to_text().splitlines(),
            'solution': solved.to_text().splitlines() if solved is not None else None,
            'validation': ConstraintChecker.describe(violations),
        }
        return solution

    @staticmethod
    def format_solution_human_readable(original: SudokuGrid, solved: SudokuGrid, stats: Optional[Dict] = None) -> str:
        """
        Format solution as human-readable text
        """
        lines = []
        lines.append("=" * 40)
        lines.append("SUDOKU SOLUTION")
        lines.append("=" * 40)
        lines.append(f"\nPuzzle has {original.filled_count()} givens, "
                     f"{81 - original.filled_count()} blanks\n")

        lines.append(f"{'PUZZLE':<14}{'SOLUTION'}")
        lines.append("-" * 40)
        for before, after in zip(original.to_text().splitlines(), solved.to_text().splitlines()):
            lines.append(f"{before:<14}{after}")

        if stats:
            lines.append("\n" + "=" * 40)
            lines.append("SOLVING STATS:")
            lines.append("-" * 40)
            for key, value in stats.items():
                if isinstance(value, float):
                    lines.append(f"  {key:15s} {value:.1f}")
                else:
                    lines.append(f"  {key:15s} {value}")

        lines.append("=" * 40)

        return "\n".join(lines)

    @staticmethod
    def save_solution(original: SudokuGrid, solved: SudokuGrid, stats: Dict, output_path: str):
        """
        Save solution to JSON file
        """
        solution = SolutionFormatter.format_solution_json(original, solved, stats)

        with open(output_path, 'w') as f:
            json.dump(solution, f, indent=2)

        print(f"\n✓ Solution saved to: {output_path}")

    @staticmethod
    def save_human_readable(original: SudokuGrid, solved: SudokuGrid, stats: Dict, output_path: str):
        """
        Save human-readable solution to text file
        """
        text = SolutionFormatter.format_solution_human_readable(original, solved, stats)

        with open(output_path, 'w') as f:
            f.write(text + "\n")

        print(f"✓ Human-readable solution saved to: {output_path}")
