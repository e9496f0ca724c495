# tests/test_solver.py
import pytest

from Sudoku.puzzle import SudokuGrid, Coord, HouseCoord
from Sudoku.constraints import ConstraintChecker, Violation
from Sudoku.solver import BacktrackingSolver, UnsolvableError, solve


def test_easy_end_to_end(easy, easy_solved, easy_solved_text):
    result = solve(easy)
    assert result == easy_solved
    assert result.to_text() == easy_solved_text


def test_solution_is_sound(easy):
    result = solve(easy)
    assert result.is_complete()
    assert ConstraintChecker.validate(result) == set()
    for n in range(9):
        assert result.row_digits(n) == set(range(1, 10))
        assert result.col_digits(n) == set(range(1, 10))
        assert result.box_digits(HouseCoord.from_index(n)) == set(range(1, 10))


def test_givens_are_kept(easy):
    result = solve(easy)
    for coord in easy.givens():
        assert result.get(coord) == easy.get(coord)


def test_deterministic(easy):
    assert solve(easy) == solve(easy)


def test_input_is_not_mutated(easy, easy_text):
    solve(easy)
    assert easy.to_text() == easy_text


def test_already_solved_grid(easy_solved):
    assert solve(easy_solved) == easy_solved


def test_last_cell_filled_by_terminal_step(easy_solved):
    puzzle = easy_solved.clone()
    puzzle.unset(Coord(8, 8))
    solver = BacktrackingSolver(puzzle)
    assert solver.solve() == easy_solved
    assert solver.stats['assignments'] == 1
    assert solver.stats['backtracks'] == 0


def test_contradictory_givens(puzzle_dir):
    # two 5s in the first row
    puzzle = SudokuGrid.from_file(puzzle_dir / "contradictory.txt")
    with pytest.raises(UnsolvableError) as exc:
        solve(puzzle)
    assert exc.value.violations == {
        Violation.row(0),
        Violation.col(1),
        Violation.house(HouseCoord(0, 0)),
    }
    assert not exc.value.timed_out


def _rotate_top_left_rectangle(grid):
    # 5 3 / 6 7 becomes 6 2 / 5 8: every row, column and box still sums to 45
    grid.set(Coord(0, 0), 6)
    grid.set(Coord(1, 1), 8)
    grid.set(Coord(0, 1), 2)
    grid.set(Coord(1, 0), 5)


def test_repeated_givens_summing_to_45_are_rejected(easy_solved):
    puzzle = easy_solved.clone()
    _rotate_top_left_rectangle(puzzle)
    assert ConstraintChecker.validate(puzzle) == set()

    with pytest.raises(UnsolvableError) as exc:
        solve(puzzle)
    assert exc.value.violations == {
        Violation.row(0),
        Violation.row(1),
        Violation.col(1),
        Violation.house(HouseCoord(0, 0)),
    }


def test_repeated_givens_with_blanks_are_rejected(easy_solved):
    puzzle = easy_solved.clone()
    _rotate_top_left_rectangle(puzzle)
    for coord in (Coord(5, 5), Coord(7, 2), Coord(8, 8)):
        puzzle.unset(coord)

    solver = BacktrackingSolver(puzzle)
    with pytest.raises(UnsolvableError):
        solver.solve()
    # the search itself fills the gaps; only the repeats make it fail
    assert solver.result.is_complete()
    assert ConstraintChecker.validate(solver.result) == set()
    assert Violation.row(0) in solver.violations


def test_cell_without_candidates(easy_solved):
    puzzle = easy_solved.clone()
    puzzle.unset(Coord(4, 4))   # was 5
    puzzle.set(Coord(4, 0), 5)  # row 4 now rules out the only digit left for (4,4)
    assert puzzle.candidates(Coord(4, 4)) == set()

    solver = BacktrackingSolver(puzzle)
    with pytest.raises(UnsolvableError):
        solver.solve()
    assert solver.stats['backtracks'] == 1
    assert solver.result.get(Coord(4, 4)) is None


def test_unsolvable_is_runtime_error(puzzle_dir):
    with pytest.raises(RuntimeError):
        solve(SudokuGrid.from_file(puzzle_dir / "contradictory.txt"))


def test_solver_stats(easy):
    solver = BacktrackingSolver(easy)
    solver.solve()
    assert solver.stats['assignments'] >= 81 - 30
    assert solver.stats['total_attempts'] >= 81
    assert solver.stats['max_depth'] == 80
    assert solver.stats['elapsed_ms'] >= 0.0
    assert solver.violations == set()


def test_timeout(easy):
    solver = BacktrackingSolver(easy, timeout_seconds=0)
    with pytest.raises(UnsolvableError) as exc:
        solver.solve()
    assert exc.value.timed_out
    assert solver.timed_out
    assert easy.filled_count() == 30


def test_verbose_prints_stats(easy, capsys):
    BacktrackingSolver(easy, verbose=True).solve()
    out = capsys.readouterr().out
    assert "Solving Statistics:" in out
    assert "Backtracks:" in out
