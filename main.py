# -*- coding: utf-8 -*-
"""main

Juego de Sudoku en consola:
  1) Menú principal: partida nueva, continuar partida guardada, reglas, salir
  2) Partida nueva: elección de dificultad -> Generator construye el tablero
  3) Menú de juego: colocar / borrar dígitos, pistas, guardar y salir
  4) Al resolver el tablero: felicitación con un dato curioso

La partida se guarda en SAVE_PATH (se sobrescribe en cada guardado).
"""

import random
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from rich.console import Console

from cell import Cell
from difficulty import Difficulty
from generator import Generator, GeneratorConfig
from grid import Grid, OutOfBoundsError
from persistence import GridStore, GridStoreConfig

SAVE_PATH = "sudoku.npz"
VERBOSE = False

CELL_PATTERN = re.compile(r"^(\d)([a-zA-Z])$")
VALUE_PATTERN = re.compile(r"^[1-9]$")

FACTS = [
    "los Sudokus tienen más de 5.470 millones de soluciones esencialmente distintas",
    "contra la creencia popular, el Sudoku se inventó en Estados Unidos",
    "resolver Sudokus podría ayudar a prevenir el Alzheimer y la demencia",
    "para que un Sudoku tenga solución única necesita al menos 17 pistas",
]

RULES = """
===== Reglas del Sudoku =====
El tablero tiene 81 casillas divididas en 9 subcuadros de 9 casillas.

Las reglas son sencillas:
> Cada uno de los 9 subcuadros debe contener los números del 1 al 9.
> Cada número solo puede aparecer una vez por fila, columna o subcuadro.
> Cada fila y cada columna de nueve casillas también debe contener
  los números del 1 al 9, sin repeticiones ni omisiones."""


def parse_cell_reference(text: str) -> Optional[Tuple[int, str]]:
    """Interpreta entradas como ``1E`` o ``9a``; ``None`` si el formato no es válido."""
    m = CELL_PATTERN.match(text.strip())
    if not m:
        return None
    return int(m.group(1)), m.group(2).upper()


def parse_value(text: str) -> Optional[int]:
    text = text.strip()
    return int(text) if VALUE_PATTERN.match(text) else None


@dataclass
class GameConfig:
    """Configuración de la partida en consola."""
    save_path: str = SAVE_PATH
    seed: Optional[int] = None
    ensure_unique: bool = False
    verbose: bool = VERBOSE


class SudokuGame:
    def __init__(self, config: Optional[GameConfig] = None,
                 console: Optional[Console] = None,
                 reader: Optional[Callable[[str], str]] = None):
        self.cfg = config or GameConfig()
        self.console = console or Console()
        self.reader = reader or self.console.input
        self.rng = random.Random(self.cfg.seed)
        self.generator = Generator(GeneratorConfig(
            seed=self.cfg.seed,
            ensure_unique=self.cfg.ensure_unique,
            verbose=self.cfg.verbose,
        ))
        self.store = GridStore(GridStoreConfig(path=self.cfg.save_path, verbose=self.cfg.verbose))

    def _say(self, msg: str, style: Optional[str] = None) -> None:
        self.console.print(msg, style=style, markup=False, highlight=False)

    def _ask(self, prompt: str) -> str:
        return self.reader(prompt).strip()

    def _ask_selection(self) -> Optional[int]:
        try:
            return int(self._ask("Seleccione: "))
        except ValueError:
            return None

    # --------------------------
    # Menús
    # --------------------------
    def run(self) -> None:
        self.welcome_banner()
        self.main_menu()

    def main_menu(self) -> None:
        while True:
            self._say("\n========= Menú principal =========")
            self._say("1: Empezar una partida nueva")
            self._say("2: Continuar la partida guardada")
            self._say("3: Ver las reglas")
            self._say("4: Salir")
            self._say("==================================")
            selection = self._ask_selection()

            if selection == 1:
                difficulty = self.ask_difficulty()
                if difficulty is None:
                    continue
                grid = self.generator.generate_grid(difficulty)
                if self.game_menu(grid) != "menu":
                    return
            elif selection == 2:
                saved = self.store.load()
                if saved is None:
                    self._say("Lo sentimos, no se pudo recuperar una partida guardada.", style="bold red")
                    continue
                if self.game_menu(saved) != "menu":
                    return
            elif selection == 3:
                self._say(RULES)
            elif selection == 4:
                self._say("\n¡Has sido un buen rival!")
                return
            elif selection is not None:
                self._say("\nOpción no válida. Inténtelo de nuevo.")

    def game_menu(self, grid: Grid) -> str:
        """Bucle de juego. Devuelve ``"menu"``, ``"saved"`` o ``"solved"``."""
        while not grid.is_solved():
            self._say(str(grid))
            self._say("\n========= Menú de juego =========")
            self._say("1: Colocar un dígito")
            self._say("2: Borrar un dígito")
            self._say("3: Salir sin guardar")
            self._say("4: Guardar y salir")
            self._say("5: Pedir una pista")
            self._say("=================================")
            selection = self._ask_selection()

            if selection in (1, 2):
                cell = self.specify_cell(grid)
                if cell is None:
                    continue
                if cell.is_locked():
                    self._say(cell.cell_description())
                    continue
                value = self.specify_value() if selection == 1 else 0
                if value is None:
                    continue
                self.edit_cell(grid, cell, value)
            elif selection == 3:
                return "menu"
            elif selection == 4:
                self.export_grid(grid)
                self._say("\n¡Has sido un buen rival!")
                return "saved"
            elif selection == 5:
                self.give_hint(grid)
            elif selection is not None:
                self._say("\nOpción no válida. Inténtelo de nuevo.")

        self._say(str(grid))
        self._say(self.congratulate(), style="bold green")
        return "solved"

    def ask_difficulty(self) -> Optional[Difficulty]:
        options: List[Difficulty] = list(Difficulty)
        while True:
            self._say("\nElija la dificultad (x para cancelar):")
            for i, diff in enumerate(options, 1):
                self._say(f"{i}: {diff}")
            text = self._ask("Seleccione: ")
            if text.lower() == "x":
                return None
            if text.isdigit() and 1 <= int(text) <= len(options):
                return options[int(text) - 1]

    def specify_cell(self, grid: Grid) -> Optional[Cell]:
        while True:
            text = self._ask("\n¿Qué celda? (p. ej. 1E, x para cancelar) ")
            if text.lower() == "x":
                return None
            ref = parse_cell_reference(text)
            if ref is None:
                continue
            try:
                return grid.get_cell(*ref)
            except OutOfBoundsError:
                continue

    def specify_value(self) -> Optional[int]:
        while True:
            text = self._ask("¿Qué valor? (1 - 9, x para cancelar) ")
            if text.lower() == "x":
                return None
            value = parse_value(text)
            if value is not None:
                return value

    # --------------------------
    # Acciones
    # --------------------------
    def edit_cell(self, grid: Grid, cell: Cell, value: int) -> bool:
        """Aplica ``value`` si la celda es editable y no rompe restricciones."""
        if cell.is_locked():
            self._say(f"\n--- Resumen ---\nLa celda elegida ({cell.get_position()}) no es editable.")
            return False
        if not grid.meets_constraints(cell, value):
            self._say(f"\n--- Resumen ---\n¡El dígito ({value}) no encaja aquí!")
            return False
        cell.set_user_value(value)
        self._say("\n--- Resumen ---\n" + cell.cell_description())
        return True

    def give_hint(self, grid: Grid) -> Optional[Cell]:
        cell = grid.hint()
        if cell is None:
            self._say("\n--- Resumen ---\n¡No lo pongamos tan fácil! No quedan pistas.")
            return None
        self._say(f"\n--- Resumen ---\nPistas usadas: {grid.get_string_hints_used()}\n{cell.cell_description()}")
        return cell

    def export_grid(self, grid: Grid) -> bool:
        self._say("\n--- Guardando Sudoku ---")
        try:
            self.store.save(grid)
        except OSError as e:
            self._say(f"ERROR: no se pudo guardar el Sudoku.\n{e}", style="bold red")
            return False
        self._say(f"GUARDADO: el Sudoku se guardó en {self.cfg.save_path}.")
        return True

    # --------------------------
    # Textos
    # --------------------------
    def welcome_banner(self) -> None:
        self._say("-----------------------------------", style="bold cyan")
        self._say("   BIENVENIDO AL DESAFÍO SUDOKU    ", style="bold cyan")
        self._say("-----------------------------------", style="bold cyan")

    def congratulate(self) -> str:
        return f"\n¡Enhorabuena! Has resuelto el Sudoku.\n¿Sabías que {self.rng.choice(FACTS)}?"


def main() -> None:
    game = SudokuGame()
    try:
        game.run()
    except (EOFError, KeyboardInterrupt):
        game.console.print("\nHasta pronto.")


if __name__ == "__main__":
    main()
