# -*- coding: utf-8 -*-
"""cell

Una casilla del tablero: posición, valor solución, valor visible y bloqueo.
"""

from dataclasses import dataclass

COLUMN_LETTERS = "ABCDEFGHI"


@dataclass(eq=False)
class Cell:
    """Representa una celda del tablero de Sudoku.

    ``row`` y ``col`` van de 1 a 9 (la columna se muestra como letra A–I).
    ``solution`` es el valor fijado por el generador y ``value`` el valor
    visible (0 = vacía). Una celda bloqueada no admite ediciones del jugador.
    """
    row: int
    col: int
    solution: int = 0
    value: int = 0
    locked: bool = False

    @property
    def column_letter(self) -> str:
        return COLUMN_LETTERS[self.col - 1]

    def set_user_value(self, value: int) -> bool:
        """Escribe ``value`` (0 borra). Devuelve ``False`` si la celda está bloqueada."""
        if not 0 <= value <= 9:
            raise ValueError(f"Valor fuera de rango (0-9): {value}")
        if self.locked:
            return False
        self.value = value
        return True

    def lock(self) -> None:
        self.locked = True

    def is_locked(self) -> bool:
        return self.locked

    def is_empty(self) -> bool:
        return self.value == 0

    def is_correct(self) -> bool:
        return self.value != 0 and self.value == self.solution

    def get_position(self) -> str:
        return f"{self.row}{self.column_letter}"

    def cell_description(self) -> str:
        if self.is_empty():
            contents = "vacía"
        else:
            contents = f"valor {self.value}"
        if self.locked:
            return f"Celda {self.get_position()}: {contents} (bloqueada, no editable)"
        return f"Celda {self.get_position()}: {contents}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return (self.row, self.col) == (other.row, other.col)

    def __hash__(self) -> int:
        return hash((self.row, self.col))
