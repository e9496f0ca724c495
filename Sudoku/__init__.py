"""
Sudoku Solver Package

A backtracking solver for 9x9 Sudoku puzzles with independent validation.
"""

from .puzzle import SudokuGrid, Coord, HouseCoord, SudokuParseError
from .constraints import ConstraintChecker, Violation
from .solver import BacktrackingSolver, UnsolvableError, solve
from .output import SolutionFormatter

__version__ = "1.0.0"
__all__ = [
    'SudokuGrid',
    'Coord',
    'HouseCoord',
    'SudokuParseError',
    'ConstraintChecker',
    'Violation',
    'BacktrackingSolver',
    'UnsolvableError',
    'solve',
    'SolutionFormatter'
]
