# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so "Sudoku" can be imported in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from Sudoku.puzzle import SudokuGrid  # noqa: E402

PUZZLE_DIR = ROOT / "data" / "puzzles"


@pytest.fixture
def puzzle_dir():
    return PUZZLE_DIR


@pytest.fixture
def easy_text():
    return (PUZZLE_DIR / "easy.txt").read_text()


@pytest.fixture
def easy_solved_text():
    return (PUZZLE_DIR / "easy_solved.txt").read_text()


@pytest.fixture
def easy(easy_text):
    return SudokuGrid.from_text(easy_text)


@pytest.fixture
def easy_solved(easy_solved_text):
    return SudokuGrid.from_text(easy_solved_text)
