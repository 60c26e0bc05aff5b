import numpy as np
import pytest

from difficulty import Difficulty
from grid import Grid
from persistence import FORMAT_VERSION, GridStore, GridStoreConfig


@pytest.fixture
def store(tmp_path):
    return GridStore(GridStoreConfig(path=str(tmp_path / "sudoku.npz")))


def _place_wrong_but_allowed(grid):
    """Coloca un valor incorrecto que no rompe restricciones en alguna celda vacía."""
    for cell in grid.cells():
        if not cell.is_empty():
            continue
        for value in range(1, 10):
            if value != cell.solution and grid.meets_constraints(cell, value):
                cell.set_user_value(value)
                return cell
    raise AssertionError("no hay ninguna jugada incorrecta permitida")


def test_round_trip(store, medium_grid):
    empty = next(c for c in medium_grid.cells() if c.is_empty())
    empty.set_user_value(empty.solution)
    assert medium_grid.hint(reveal_only_if_empty=True) is not None
    _place_wrong_but_allowed(medium_grid)

    store.save(medium_grid)
    restored = store.load()

    assert restored is not None
    np.testing.assert_array_equal(restored.values(), medium_grid.values())
    np.testing.assert_array_equal(restored.solution(), medium_grid.solution())
    np.testing.assert_array_equal(restored.locked_mask(), medium_grid.locked_mask())
    assert restored.get_hints_used() == 1
    assert restored.get_difficulty() is Difficulty.MEDIUM


def test_save_keeps_exact_path(tmp_path, medium_grid):
    path = tmp_path / "partida.bin"
    store = GridStore(GridStoreConfig(path=str(path)))
    store.save(medium_grid)
    assert path.is_file()
    assert not (tmp_path / "partida.bin.npz").exists()
    assert store.load() is not None


def test_save_overwrites(store, generator):
    store.save(generator.generate_grid(Difficulty.EASY))
    second = generator.generate_grid(Difficulty.HARD)
    store.save(second)
    restored = store.load()
    assert restored.get_difficulty() is Difficulty.HARD
    np.testing.assert_array_equal(restored.values(), second.values())


def test_missing_file(store):
    assert not store.exists()
    assert store.load() is None


def test_empty_file(store):
    open(store.cfg.path, "wb").close()
    assert store.load() is None


def test_garbage_file(store):
    with open(store.cfg.path, "wb") as f:
        f.write(b"this is not a saved sudoku" * 10)
    assert store.load() is None


def test_truncated_file(store, medium_grid):
    store.save(medium_grid)
    with open(store.cfg.path, "rb") as f:
        data = f.read()
    with open(store.cfg.path, "wb") as f:
        f.write(data[: len(data) // 2])
    assert store.load() is None


def test_unknown_version(store, medium_grid):
    with open(store.cfg.path, "wb") as f:
        np.savez(
            f,
            format_version=np.array(FORMAT_VERSION + 1),
            values=medium_grid.values(),
            solution=medium_grid.solution(),
            locked=medium_grid.locked_mask(),
            hints_used=np.array(0),
            difficulty=np.array("MEDIUM"),
        )
    assert store.load() is None


def test_missing_field(store, medium_grid):
    with open(store.cfg.path, "wb") as f:
        np.savez(f, format_version=np.array(FORMAT_VERSION), values=medium_grid.values())
    assert store.load() is None


def test_unknown_difficulty(store, medium_grid):
    with open(store.cfg.path, "wb") as f:
        np.savez(
            f,
            format_version=np.array(FORMAT_VERSION),
            values=medium_grid.values(),
            solution=medium_grid.solution(),
            locked=medium_grid.locked_mask(),
            hints_used=np.array(0),
            difficulty=np.array("NIGHTMARE"),
        )
    assert store.load() is None


def test_invalid_solution_is_rejected(store):
    zeros = np.zeros((9, 9), dtype=np.int32)
    grid = Grid.from_arrays(Difficulty.EASY, zeros, zeros, zeros.astype(bool))
    store.save(grid)
    assert store.load() is None


def test_conflicting_values_are_rejected(store, medium_grid):
    cell, clash = next(
        (c, p)
        for c in medium_grid.cells() if c.is_empty()
        for p in medium_grid.peers(c) if p.value
    )
    cell.set_user_value(clash.value)
    store.save(medium_grid)
    assert store.load() is None


def test_failed_save_keeps_previous_file(store, generator, monkeypatch, tmp_path):
    first = generator.generate_grid(Difficulty.EASY)
    store.save(first)

    def broken_savez(f, **arrays):
        f.write(b"PK\x03\x04 partial")
        raise OSError("disco lleno")

    monkeypatch.setattr(np, "savez", broken_savez)
    with pytest.raises(OSError):
        store.save(generator.generate_grid(Difficulty.HARD))
    monkeypatch.undo()

    restored = store.load()
    assert restored is not None
    assert restored.get_difficulty() is Difficulty.EASY
    np.testing.assert_array_equal(restored.values(), first.values())
    assert sorted(p.name for p in tmp_path.iterdir()) == ["sudoku.npz"]
