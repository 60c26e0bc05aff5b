# -*- coding: utf-8 -*-
"""difficulty

Perfiles de dificultad: cuántas celdas vacía el generador y cuántas pistas
se permiten por partida. El orden de la enumeración es el orden de menú.
"""

from enum import Enum


class Difficulty(Enum):
    # nombre visible, celdas a vaciar, pistas máximas
    EASY = ("Easy", 35, 5)
    MEDIUM = ("Medium", 45, 4)
    HARD = ("Hard", 52, 3)
    EXPERT = ("Expert", 58, 2)

    def __init__(self, label: str, clear_count: int, max_hints: int):
        self.label = label
        self.clear_count = clear_count
        self.max_hints = max_hints

    def get_clear_count(self) -> int:
        return self.clear_count

    def get_max_hints(self) -> int:
        return self.max_hints

    def __str__(self) -> str:
        return self.label

    @classmethod
    def from_name(cls, name: str) -> "Difficulty":
        """Busca un perfil por nombre de miembro o etiqueta (sin distinguir mayúsculas)."""
        key = name.strip().upper()
        for diff in cls:
            if diff.name == key or diff.label.upper() == key:
                return diff
        raise ValueError(f"Dificultad desconocida: {name!r}")
