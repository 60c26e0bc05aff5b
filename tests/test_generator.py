import numpy as np
import pytest

from difficulty import Difficulty
from generator import Generator, GeneratorConfig
from sudoku_solver import SudokuSolver


@pytest.mark.parametrize("difficulty", list(Difficulty))
def test_generated_grid_invariants(difficulty):
    grid = Generator(GeneratorConfig(seed=7)).generate_grid(difficulty)

    assert grid.is_valid_solution()
    assert grid.get_difficulty() is difficulty
    assert grid.get_hints_used() == 0
    assert not grid.has_conflicts()
    assert not grid.is_solved()

    values = grid.values()
    locked = grid.locked_mask()
    clues = 81 - difficulty.get_clear_count()
    assert int(locked.sum()) == clues
    assert int((values != 0).sum()) == clues
    # las pistas son exactamente las celdas con valor, y coinciden con la solución
    np.testing.assert_array_equal(locked, values != 0)
    np.testing.assert_array_equal(values[locked], grid.solution()[locked])


def test_medium_leaves_36_clues(medium_grid):
    assert int(medium_grid.locked_mask().sum()) == 36


def test_seed_reproducibility():
    a = Generator(GeneratorConfig(seed=99)).generate_grid(Difficulty.HARD)
    b = Generator(GeneratorConfig(seed=99)).generate_grid(Difficulty.HARD)
    np.testing.assert_array_equal(a.solution(), b.solution())
    np.testing.assert_array_equal(a.values(), b.values())


def test_successive_grids_differ(generator):
    a = generator.generate_grid(Difficulty.EASY)
    b = generator.generate_grid(Difficulty.EASY)
    assert not np.array_equal(a.solution(), b.solution())


def test_new_grid_is_last_generated(generator):
    grid = generator.generate_grid(Difficulty.EXPERT)
    assert generator.new_grid is grid


def test_ensure_unique_produces_single_solution():
    cfg = GeneratorConfig(seed=11, ensure_unique=True)
    grid = Generator(cfg).generate_grid(Difficulty.EASY)

    assert grid.is_valid_solution()
    assert SudokuSolver(grid.values().tolist()).count_solutions() == 1
    assert int(grid.locked_mask().sum()) >= 81 - Difficulty.EASY.get_clear_count()
    np.testing.assert_array_equal(grid.locked_mask(), grid.values() != 0)
