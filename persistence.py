# -*- coding: utf-8 -*-
"""persistence

Guardado y restauración de una partida en un único archivo ``.npz``.

Registro (versión 1):
  format_version  int    versión del formato
  values          9x9    valores visibles (0 = vacía)
  solution        9x9    valores solución
  locked          9x9    celdas bloqueadas (pistas y pistas reveladas)
  hints_used      int    pistas consumidas
  difficulty      str    nombre del perfil (EASY, MEDIUM, ...)

Cada guardado sobrescribe el archivo. Cualquier fallo al cargar (archivo
inexistente, corrupto, truncado o con otra versión) equivale a "no hay
partida guardada".
"""

import os
import tempfile
import zipfile
from dataclasses import dataclass
from typing import Optional

import numpy as np
from rich.console import Console

from difficulty import Difficulty
from grid import Grid, is_complete_solution

FORMAT_VERSION = 1


@dataclass
class GridStoreConfig:
    """Configuración del almacén de partidas."""
    path: str = "sudoku.npz"
    verbose: bool = False


class GridStore:
    def __init__(self, config: Optional[GridStoreConfig] = None):
        self.cfg = config or GridStoreConfig()
        self.console = Console()

    def _log(self, msg: str):
        if self.cfg.verbose:
            self.console.print(msg, style="bold cyan")

    def exists(self) -> bool:
        return os.path.isfile(self.cfg.path)

    def save(self, grid: Grid) -> None:
        """Escribe el registro; los errores de E/S (``OSError``) se propagan."""
        self._log(f"Guardando partida en {self.cfg.path}…")
        # temporal en el mismo directorio: el guardado anterior sigue intacto hasta os.replace
        target_dir = os.path.dirname(os.path.abspath(self.cfg.path))
        fd, tmp_path = tempfile.mkstemp(prefix=".sudoku-", suffix=".tmp", dir=target_dir)
        try:
            # con un manejador abierto np.savez no añade la extensión .npz
            with os.fdopen(fd, "wb") as f:
                np.savez(
                    f,
                    format_version=np.array(FORMAT_VERSION, dtype=np.int32),
                    values=grid.values(),
                    solution=grid.solution(),
                    locked=grid.locked_mask(),
                    hints_used=np.array(grid.get_hints_used(), dtype=np.int32),
                    difficulty=np.array(grid.get_difficulty().name),
                )
            os.replace(tmp_path, self.cfg.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
        self._log(f"✅ Partida guardada en {self.cfg.path}")

    def load(self) -> Optional[Grid]:
        """Devuelve el tablero guardado o ``None`` si no hay uno válido."""
        if not self.exists():
            self._log("No hay partida guardada.")
            return None
        try:
            with np.load(self.cfg.path, allow_pickle=False) as data:
                version = int(data["format_version"])
                if version != FORMAT_VERSION:
                    self._log(f"⚠️ Versión de formato no soportada: {version}")
                    return None
                grid = Grid.from_arrays(
                    Difficulty.from_name(str(data["difficulty"])),
                    values=data["values"],
                    solution=data["solution"],
                    locked=data["locked"],
                    hints_used=int(data["hints_used"]),
                )
        except (OSError, EOFError, KeyError, ValueError, TypeError, AttributeError,
                zipfile.BadZipFile) as e:
            self._log(f"⚠️ No se pudo leer {self.cfg.path}: {e}")
            return None

        if not self._is_consistent(grid):
            self._log(f"⚠️ Contenido inválido en {self.cfg.path}")
            return None
        self._log(f"✅ Partida restaurada desde {self.cfg.path}")
        return grid

    @staticmethod
    def _is_consistent(grid: Grid) -> bool:
        if not is_complete_solution(grid.solution()):
            return False
        if grid.has_conflicts():
            return False
        # una celda bloqueada siempre muestra su solución
        return all(cell.value == cell.solution for cell in grid.cells() if cell.is_locked())
