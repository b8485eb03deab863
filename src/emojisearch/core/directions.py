from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True)
class Direction:
    """
    Raio de colocação (d_row, d_col). Com is_backward=True o vetor é o mesmo,
    mas a palavra é escrita de trás para frente: isso cobre ← ↑ ↖ ↙
    sem precisar de vetores próprios.
    """
    d_row: int
    d_col: int
    is_backward: bool = False
    name: str = ""

    @property
    def vector(self) -> Tuple[int, int]:
        return (self.d_row, self.d_col)


# Direções "canônicas": direita, baixo, diagonal descendente, diagonal ascendente
FORWARD_DIRECTIONS: List[Direction] = [
    Direction(0, 1, False, "→"),
    Direction(1, 0, False, "↓"),
    Direction(1, 1, False, "↘"),
    Direction(-1, 1, False, "↗"),
]

# Todas as 8 direções geométricas; usadas na contagem de ocorrências
SCAN_DIRECTIONS: List[Tuple[int, int]] = [
    (0, 1),  (0, -1),  (1, 0),  (-1, 0),   # → ← ↓ ↑
    (1, 1),  (-1, -1), (1, -1), (-1, 1),   # ↘ ↖ ↙ ↗
]

_REVERSED_ARROWS = {"→": "←", "↓": "↑", "↘": "↖", "↗": "↙"}


def get_directions(allow_backwards: bool) -> List[Direction]:
    """4 direções de colocação; 8 quando a escrita invertida é permitida."""
    directions = list(FORWARD_DIRECTIONS)
    if allow_backwards:
        directions.extend(
            Direction(d.d_row, d.d_col, True, _REVERSED_ARROWS[d.name])
            for d in FORWARD_DIRECTIONS
        )
    return directions
