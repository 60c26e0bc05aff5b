# -*- coding: utf-8 -*-
"""generator

Generación de partidas:
  1) Relleno aleatorio completo con SudokuSolver (fase de solución)
  2) Vaciado de celdas según la dificultad; las restantes quedan como pistas
     bloqueadas

Con ``ensure_unique=True`` cada celda vaciada se verifica con un segundo
pase del solver que cuenta soluciones; si dejara más de una, se repone.
"""

import random
from dataclasses import dataclass
from typing import Optional

from rich.console import Console

from difficulty import Difficulty
from grid import Grid
from sudoku_solver import SudokuSolver


@dataclass
class GeneratorConfig:
    """Configuración del generador de partidas."""
    seed: Optional[int] = None     # semilla para partidas reproducibles
    ensure_unique: bool = False    # exigir solución única al vaciar
    verbose: bool = False


class Generator:
    def __init__(self, config: Optional[GeneratorConfig] = None):
        self.cfg = config or GeneratorConfig()
        self.rng = random.Random(self.cfg.seed)
        self.console = Console()
        self.new_grid: Optional[Grid] = None

    def _log(self, msg: str):
        if self.cfg.verbose:
            self.console.print(msg, style="bold cyan")

    def generate_grid(self, difficulty: Difficulty) -> Grid:
        """Construye un tablero resuelto y vacía celdas según ``difficulty``."""
        grid = Grid(difficulty)

        self._log(f"[1/2] Generando solución ({difficulty})…")
        solver = SudokuSolver([[0] * 9 for _ in range(9)], rng=self.rng, verbose=False)
        try:
            board = solver.fill()
        except ValueError as e:
            raise RuntimeError("El relleno de un tablero vacío no debería fallar") from e

        for cell in grid.cells():
            cell.solution = board[cell.row - 1][cell.col - 1]
            cell.value = cell.solution

        self._log(f"[2/2] Vaciando {difficulty.get_clear_count()} celdas…")
        cleared = self._clear_cells(grid, difficulty.get_clear_count())
        if cleared < difficulty.get_clear_count():
            self._log(
                f"⚠️ Solo se pudieron vaciar {cleared} celdas manteniendo solución única."
            )

        for cell in grid.cells():
            if not cell.is_empty():
                cell.lock()

        self._log(f"✅ Tablero listo con {81 - cleared} pistas")
        self.new_grid = grid
        return grid

    def _clear_cells(self, grid: Grid, target: int) -> int:
        cells = list(grid.cells())
        self.rng.shuffle(cells)

        cleared = 0
        for cell in cells:
            if cleared >= target:
                break
            cell.value = 0
            if self.cfg.ensure_unique and not self._is_unique(grid):
                cell.value = cell.solution  # reponer: dejaría varias soluciones
                continue
            cleared += 1
        return cleared

    @staticmethod
    def _is_unique(grid: Grid) -> bool:
        return SudokuSolver(grid.values().tolist()).has_unique_solution()
