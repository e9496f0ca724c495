# tests/test_main.py
import json
import shutil
import sys

from Sudoku import diagnostics
from Sudoku.main import main, solve_puzzle, solve_all_puzzles, run_comparison_test
from Sudoku.puzzle import SudokuGrid
from Sudoku.solver import BacktrackingSolver


def test_cli_solves_file(puzzle_dir, easy_solved_text, capsys):
    assert main([str(puzzle_dir / "easy.txt")]) == 0
    out = capsys.readouterr().out
    assert out.startswith(easy_solved_text)
    assert "Solved in" in out
    assert "milliseconds" in out


def test_cli_parse_error(tmp_path, capsys):
    bad = tmp_path / "bad.txt"
    bad.write_text("123\n")
    assert main([str(bad)]) == 1
    out = capsys.readouterr().out
    assert "parsing" in out
    assert "Solved in" not in out


def test_cli_unsolvable(puzzle_dir, capsys):
    assert main([str(puzzle_dir / "contradictory.txt")]) == 1
    out = capsys.readouterr().out
    assert "solving" in out
    assert "Solved in" not in out


def test_cli_missing_file_and_bad_option(tmp_path):
    assert main([str(tmp_path / "nope.txt")]) == 2
    assert main(["--bogus"]) == 2
    assert main(["--timeout", "soon"]) == 2
    assert main(["--compare"]) == 2


def test_cli_save(puzzle_dir, tmp_path):
    out_dir = tmp_path / "out"
    assert main([str(puzzle_dir / "easy.txt"), "--save", "--output-dir", str(out_dir)]) == 0
    data = json.loads((out_dir / "solution.json").read_text())
    assert data['puzzle_info']['solved'] is True
    assert (out_dir / "solution.txt").exists()


def test_solve_puzzle_returns_grids(puzzle_dir, easy_solved):
    solved, original, solution, solver = solve_puzzle(puzzle_dir / "easy.txt", quiet=True)
    assert solved
    assert original.filled_count() == 30
    assert solution == easy_solved
    assert solver.violations == set()


def test_solve_all(puzzle_dir, tmp_path):
    shutil.copy(puzzle_dir / "easy.txt", tmp_path / "easy.txt")
    shutil.copy(puzzle_dir / "easy_solved.txt", tmp_path / "easy_solved.txt")
    shutil.copy(puzzle_dir / "contradictory.txt", tmp_path / "contradictory.txt")

    results = solve_all_puzzles(tmp_path)
    assert [r['file'] for r in results] == ["contradictory.txt", "easy.txt"]
    assert [r['solved'] for r in results] == [False, True]
    assert main(["--all", str(tmp_path)]) == 1


def test_solve_all_empty_dir(tmp_path):
    assert solve_all_puzzles(tmp_path) == []
    assert main(["--all", str(tmp_path)]) == 2


def test_compare_is_deterministic(puzzle_dir):
    assert run_comparison_test(puzzle_dir / "easy.txt")
    assert main(["--compare", str(puzzle_dir / "easy.txt")]) == 0


def test_diagnose(puzzle_dir):
    assert main(["--diagnose", str(puzzle_dir / "easy.txt")]) == 0
    assert main(["--diagnose", str(puzzle_dir / "contradictory.txt")]) == 1


def test_analyze_failure_classification(puzzle_dir, easy):
    result = diagnostics.analyze_failure(SudokuGrid.from_file(puzzle_dir / "contradictory.txt"))
    assert not result['solved']
    assert result['classification'] == diagnostics.CONTRADICTORY_GIVENS

    result = diagnostics.analyze_failure(easy, timeout=0)
    assert result['classification'] == diagnostics.TIMEOUT

    result = diagnostics.analyze_failure(easy)
    assert result['solved']
    assert result['classification'] is None


def test_diagnostics_cli_reports_parse_error(puzzle_dir, tmp_path, monkeypatch, capsys):
    bad = tmp_path / "bad.txt"
    bad.write_text("53..x....\n")
    monkeypatch.setattr(sys, "argv", ["diagnostics", str(bad), str(puzzle_dir / "easy.txt")])
    diagnostics.main()
    out = capsys.readouterr().out
    assert f"Error encountered while parsing {bad}" in out
    assert "Solved: 1/1" in out


def test_print_summary(easy, capsys):
    solver = BacktrackingSolver(easy)
    solver.solve()
    assert diagnostics.print_summary(solver, easy)
    assert "Givens kept: 30/30" in capsys.readouterr().out
