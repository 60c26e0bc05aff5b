# -*- coding: utf-8 -*-
"""grid

Tablero 9x9 de celdas: búsqueda por coordenadas, comprobación de
restricciones (fila / columna / subcuadro), detección de resuelto y pistas
con presupuesto controlado por el propio tablero.
"""

from typing import Iterator, List, Optional, Union

import numpy as np

from cell import COLUMN_LETTERS, Cell
from difficulty import Difficulty

SIZE = 9
BOX = 3


class OutOfBoundsError(IndexError):
    """Coordenada fuera del tablero (fila 1-9, columna A-I)."""


class Grid:
    def __init__(self, difficulty: Difficulty):
        self._difficulty = difficulty
        self._hints_used = 0
        self._cells: List[List[Cell]] = [
            [Cell(row=r, col=c) for c in range(1, SIZE + 1)] for r in range(1, SIZE + 1)
        ]

    # --------------------------
    # Acceso a celdas
    # --------------------------
    def get_cell(self, row: int, col: Union[str, int]) -> Cell:
        """Devuelve la celda en (fila, columna); la columna puede ser letra A-I o entero 1-9."""
        if isinstance(col, str):
            letter = col.upper()
            if len(letter) != 1 or letter not in COLUMN_LETTERS:
                raise OutOfBoundsError(f"Columna fuera del tablero: {col!r}")
            col = COLUMN_LETTERS.index(letter) + 1
        if not 1 <= row <= SIZE or not 1 <= col <= SIZE:
            raise OutOfBoundsError(f"Coordenada fuera del tablero: ({row}, {col})")
        return self._cells[row - 1][col - 1]

    def cells(self) -> Iterator[Cell]:
        """Recorre las 81 celdas en orden fila a fila."""
        for row in self._cells:
            yield from row

    def row_cells(self, row: int) -> List[Cell]:
        return list(self._cells[row - 1])

    def col_cells(self, col: int) -> List[Cell]:
        return [self._cells[r][col - 1] for r in range(SIZE)]

    def box_cells(self, cell: Cell) -> List[Cell]:
        br, bc = BOX * ((cell.row - 1) // BOX), BOX * ((cell.col - 1) // BOX)
        return [self._cells[r][c] for r in range(br, br + BOX) for c in range(bc, bc + BOX)]

    def peers(self, cell: Cell) -> List[Cell]:
        """Celdas que comparten fila, columna o subcuadro con ``cell`` (sin ella misma)."""
        seen = set()
        out: List[Cell] = []
        for other in self.row_cells(cell.row) + self.col_cells(cell.col) + self.box_cells(cell):
            if other != cell and other not in seen:
                seen.add(other)
                out.append(other)
        return out

    # --------------------------
    # Restricciones y estado
    # --------------------------
    def meets_constraints(self, cell: Cell, value: int) -> bool:
        """``True`` si ``value`` no se repite en la fila, columna o subcuadro de ``cell``."""
        if value == 0:
            return True
        return all(other.value != value for other in self.peers(cell))

    def is_solved(self) -> bool:
        return all(cell.is_correct() for cell in self.cells())

    def has_conflicts(self) -> bool:
        """Detecta duplicados entre los valores visibles distintos de cero."""
        for cell in self.cells():
            if cell.value and not self.meets_constraints(cell, cell.value):
                return True
        return False

    def is_valid_solution(self) -> bool:
        """Comprueba que los valores solución formen un Sudoku completo y válido."""
        return is_complete_solution(self.solution())

    # --------------------------
    # Pistas
    # --------------------------
    def hint(self, reveal_only_if_empty: bool = False) -> Optional[Cell]:
        """
        Revela el valor correcto de una celda no bloqueada y la bloquea.

        Prioriza las celdas con un valor incorrecto (salvo ``reveal_only_if_empty``)
        y después las vacías, en orden fila a fila. Las celdas no bloqueadas de
        su fila, columna o subcuadro con ese mismo valor quedan vacías.
        Devuelve ``None`` sin tocar el tablero si se agotó el presupuesto de
        pistas o no hay candidatas.
        """
        if self._hints_used >= self._difficulty.get_max_hints():
            return None

        unlocked = [cell for cell in self.cells() if not cell.is_locked()]
        wrong = [] if reveal_only_if_empty else [
            cell for cell in unlocked if not cell.is_empty() and not cell.is_correct()
        ]
        empty = [cell for cell in unlocked if cell.is_empty()]
        candidates = wrong + empty
        if not candidates:
            return None

        target = candidates[0]
        # las entradas del jugador que repiten el valor revelado se borran
        for peer in self.peers(target):
            if not peer.is_locked() and peer.value == target.solution:
                peer.value = 0
        target.value = target.solution
        target.lock()
        self._hints_used += 1
        return target

    def get_hints_used(self) -> int:
        return self._hints_used

    def set_hints_used(self, hints_used: int) -> None:
        """Restaura el contador (p. ej. al cargar una partida)."""
        if not 0 <= hints_used <= self._difficulty.get_max_hints():
            raise ValueError(
                f"Pistas usadas fuera de rango (0-{self._difficulty.get_max_hints()}): {hints_used}"
            )
        self._hints_used = hints_used

    def get_hints_remaining(self) -> int:
        return self._difficulty.get_max_hints() - self._hints_used

    def get_string_hints_used(self) -> str:
        return f"{self._hints_used}/{self._difficulty.get_max_hints()}"

    def get_difficulty(self) -> Difficulty:
        return self._difficulty

    # --------------------------
    # Vistas numpy y reconstrucción
    # --------------------------
    def values(self) -> np.ndarray:
        return np.array([[c.value for c in row] for row in self._cells], dtype=np.int32)

    def solution(self) -> np.ndarray:
        return np.array([[c.solution for c in row] for row in self._cells], dtype=np.int32)

    def locked_mask(self) -> np.ndarray:
        return np.array([[c.locked for c in row] for row in self._cells], dtype=bool)

    @classmethod
    def from_arrays(cls, difficulty: Difficulty, values, solution, locked, hints_used: int = 0) -> "Grid":
        """Reconstruye un tablero a partir de sus matrices 9x9."""
        values = np.asarray(values)
        solution = np.asarray(solution)
        locked = np.asarray(locked)
        for name, arr in (("values", values), ("solution", solution), ("locked", locked)):
            if arr.shape != (SIZE, SIZE):
                raise ValueError(f"'{name}' debe ser 9x9, recibido {arr.shape}")
        if values.min() < 0 or values.max() > 9 or solution.min() < 0 or solution.max() > 9:
            raise ValueError("Valores fuera de rango (0-9)")

        grid = cls(difficulty)
        for r in range(SIZE):
            for c in range(SIZE):
                cell = grid._cells[r][c]
                cell.solution = int(solution[r, c])
                cell.value = int(values[r, c])
                cell.locked = bool(locked[r, c])
        grid.set_hints_used(int(hints_used))
        return grid

    def __str__(self) -> str:
        lines = ["     " + "   ".join(" ".join(COLUMN_LETTERS[i:i + BOX]) for i in range(0, SIZE, BOX))]
        rule = "   +" + "+".join(["-------"] * BOX) + "+"
        for r, row in enumerate(self._cells):
            if r % BOX == 0:
                lines.append(rule)
            chunks = []
            for i in range(0, SIZE, BOX):
                chunks.append(" ".join(str(c.value) if c.value else "." for c in row[i:i + BOX]))
            lines.append(f"{r + 1}  | " + " | ".join(chunks) + " |")
        lines.append(rule)
        return "\n".join(lines)


def is_complete_solution(board) -> bool:
    """Cada fila, columna y subcuadro de ``board`` es una permutación de 1..9."""
    arr = np.asarray(board)
    if arr.shape != (SIZE, SIZE):
        return False
    digits = np.arange(1, SIZE + 1)
    for i in range(SIZE):
        if not np.array_equal(np.sort(arr[i, :]), digits):
            return False
        if not np.array_equal(np.sort(arr[:, i]), digits):
            return False
    for br in range(0, SIZE, BOX):
        for bc in range(0, SIZE, BOX):
            if not np.array_equal(np.sort(arr[br:br + BOX, bc:bc + BOX].ravel()), digits):
                return False
    return True
