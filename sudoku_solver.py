# sudoku_solver.py
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Set, Tuple
from rich.console import Console

Board = Tuple[Tuple[int, ...], ...]


@dataclass
class SudokuSolver:
    """Resuelve, completa y cuenta soluciones de un tablero de Sudoku por backtracking.

    Parámetros
    ----------
    grid: List[List[int]]
        Tablero 9x9 con ceros en las casillas vacías.
    rng: random.Random, opcional
        Fuente explícita del orden de candidatos para ``fill``. Con una
        semilla fija el relleno es reproducible.
    verbose: bool, opcional
        Si es ``True`` se muestran mensajes del proceso.
    """
    grid: List[List[int]]
    rng: Optional[random.Random] = None
    verbose: bool = False

    def __post_init__(self) -> None:
        if len(self.grid) != 9 or any(len(row) != 9 for row in self.grid):
            raise ValueError("El tablero debe ser 9x9.")
        self.grid = [[int(v) for v in row] for row in self.grid]
        if any(not 0 <= v <= 9 for row in self.grid for v in row):
            raise ValueError("Los valores del tablero deben estar entre 0 y 9.")
        if self.rng is None:
            self.rng = random.Random()
        self.console = Console()

    # --------------------------
    # API pública
    # --------------------------
    def solve(self) -> List[List[int]]:
        """Devuelve una copia del tablero resuelto o lanza ``ValueError`` si no hay solución."""
        board = [row[:] for row in self.grid]
        if self._is_consistent(board) and self._backtrack(board):
            return board
        raise ValueError("Sudoku sin solución")

    def fill(self) -> List[List[int]]:
        """
        Completa el tablero probando los dígitos en orden aleatorio.

        Recorre las casillas vacías fila a fila; cada colocación produce una
        copia nueva del tablero, de modo que ``self.grid`` nunca se modifica.
        Lanza ``ValueError`` si el tablero no admite ninguna compleción.
        """
        start: Board = tuple(tuple(row) for row in self.grid)
        self._log("Rellenando tablero con backtracking aleatorio…")
        result = self._fill(start, 0) if self._is_consistent(start) else None
        if result is None:
            raise ValueError("Sudoku sin solución")
        self._log("✅ Tablero completo")
        return [list(row) for row in result]

    def count_solutions(self, limit: int = 2) -> int:
        """Cuenta soluciones hasta ``limit`` (basta con 2 para decidir unicidad)."""
        board = [row[:] for row in self.grid]
        if limit <= 0 or not self._is_consistent(board):
            return 0
        return self._count(board, limit)

    def has_solution(self) -> bool:
        return self.count_solutions(limit=1) == 1

    def has_unique_solution(self) -> bool:
        return self.count_solutions(limit=2) == 1

    # --------------------------
    # Métodos internos
    # --------------------------
    def _fill(self, board: Board, index: int) -> Optional[Board]:
        while index < 81 and board[index // 9][index % 9] != 0:
            index += 1
        if index == 81:
            return board
        r, c = divmod(index, 9)
        digits = list(range(1, 10))
        self.rng.shuffle(digits)
        candidates = self._candidates(board, r, c)
        for num in digits:
            if num not in candidates:
                continue
            row = board[r][:c] + (num,) + board[r][c + 1:]
            result = self._fill(board[:r] + (row,) + board[r + 1:], index + 1)
            if result is not None:
                return result
        return None

    def _backtrack(self, board: List[List[int]]) -> bool:
        cell = self._select_cell(board)
        if cell is None:
            return True  # sin celdas vacías
        r, c, candidates = cell
        if not candidates:
            return False  # poda: sin opciones
        for num in sorted(candidates):
            self._log(f"Probando {num} en ({r},{c})")
            board[r][c] = num
            if self._backtrack(board):
                return True
            board[r][c] = 0
        self._log(f"Retrocediendo en ({r},{c})")
        return False

    def _count(self, board: List[List[int]], limit: int) -> int:
        cell = self._select_cell(board)
        if cell is None:
            return 1
        r, c, candidates = cell
        total = 0
        for num in sorted(candidates):
            board[r][c] = num
            total += self._count(board, limit - total)
            board[r][c] = 0
            if total >= limit:
                break
        return total

    def _select_cell(self, board: List[List[int]]) -> Optional[Tuple[int, int, Set[int]]]:
        """Selecciona la celda vacía con menos candidatos (heurística MRV)."""
        best: Optional[Tuple[int, int]] = None
        best_cands: Set[int] = set()
        for r in range(9):
            for c in range(9):
                if board[r][c] == 0:
                    cands = self._candidates(board, r, c)
                    if not cands:
                        return (r, c, set())  # poda inmediata
                    if best is None or len(cands) < len(best_cands):
                        best, best_cands = (r, c), cands
                        if len(best_cands) == 1:
                            return r, c, best_cands
        return None if best is None else (best[0], best[1], best_cands)

    def _candidates(self, board: Sequence[Sequence[int]], row: int, col: int) -> Set[int]:
        used = set(board[row]) | {board[r][col] for r in range(9)}
        sr, sc = 3 * (row // 3), 3 * (col // 3)
        for r in range(sr, sr + 3):
            used.update(board[r][sc:sc + 3])
        return set(range(1, 10)) - used

    def _is_consistent(self, board: Sequence[Sequence[int]]) -> bool:
        """Ningún valor ya colocado se repite en su fila, columna o subcuadro."""
        for r in range(9):
            for c in range(9):
                v = board[r][c]
                if v == 0:
                    continue
                if any(board[r][k] == v for k in range(9) if k != c):
                    return False
                if any(board[k][c] == v for k in range(9) if k != r):
                    return False
                br, bc = 3 * (r // 3), 3 * (c // 3)
                for i in range(br, br + 3):
                    for j in range(bc, bc + 3):
                        if (i != r or j != c) and board[i][j] == v:
                            return False
        return True

    def _log(self, msg: str) -> None:
        if self.verbose:
            self.console.print(msg, style="bold cyan")


if __name__ == "__main__":
    ejemplo = [
        [5, 3, 0, 0, 7, 0, 0, 0, 0],
        [6, 0, 0, 1, 9, 5, 0, 0, 0],
        [0, 9, 8, 0, 0, 0, 0, 6, 0],
        [8, 0, 0, 0, 6, 0, 0, 0, 3],
        [4, 0, 0, 8, 0, 3, 0, 0, 1],
        [7, 0, 0, 0, 2, 0, 0, 0, 6],
        [0, 6, 0, 0, 0, 0, 2, 8, 0],
        [0, 0, 0, 4, 1, 9, 0, 0, 5],
        [0, 0, 0, 0, 8, 0, 0, 7, 9],
    ]
    solver = SudokuSolver(ejemplo, verbose=True)
    solucion = solver.solve()
    for fila in solucion:
        print(fila)
    print("Soluciones (hasta 2):", solver.count_solutions())
