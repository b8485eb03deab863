from __future__ import annotations

import random
import re
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, FrozenSet, List, MutableSequence, NamedTuple, Optional, Sequence, Set

from emojisearch.core.directions import SCAN_DIRECTIONS, Direction, get_directions
from emojisearch.core.distribution import (
    calculate_character_distribution,
    select_char_from_distribution,
)
from emojisearch.core.errors import GenerationExhaustedError, NoValidWordsError, WordSearchError
from emojisearch.core.graphemes import Segmenter, split_graphemes

MAX_PUZZLE_ATTEMPTS = 10
EMPTY = ""

Grid = List[List[str]]
Rng = Callable[[], float]

_WHITESPACE_RE = re.compile(r"\s+")


class Position(NamedTuple):
    row: int
    col: int


@dataclass
class WordPosition:
    """Palavra colocada + células ocupadas, na ordem em que foram escritas."""
    word: str
    positions: List[Position] = field(default_factory=list)


@dataclass
class PuzzleResult:
    """Resultado de UMA tentativa (válida ou não)."""
    grid: Grid
    word_positions: List[WordPosition]
    is_valid: bool


@dataclass
class WordSearchResult:
    """Caça-palavras aceito, entregue ao chamador."""
    grid: Grid
    words: List[str]
    word_positions: List[WordPosition]
    attempts: int = 1

    @property
    def size(self) -> int:
        return len(self.grid)


class AttemptState(Enum):
    PREPARING = "preparing"
    PLACING = "placing"
    FILLING = "filling"
    VALIDATING = "validating"
    ACCEPTED = "accepted"
    RETRYING = "retrying"
    EXHAUSTED = "exhausted"


# ------------------------- Preparação -------------------------

def prepare_words(
    words: Sequence[str],
    size: int,
    segmenter: Segmenter = split_graphemes,
) -> List[str]:
    """
    Remove espaços, descarta palavras vazias ou maiores que a grade e
    ordena por número de grafemas (decrescente). Lança NoValidWordsError
    se nada sobrar.
    """
    cleaned = [_WHITESPACE_RE.sub("", w or "") for w in (words or [])]
    kept = [w for w in cleaned if 0 < len(segmenter(w)) <= size]
    if not kept:
        raise NoValidWordsError(size)
    return sorted(kept, key=lambda w: len(segmenter(w)), reverse=True)


def initialize_grid(size: int) -> Grid:
    return [[EMPTY for _ in range(size)] for _ in range(size)]


# ------------------------- Primitivas de grade -------------------------

def _chars_to_write(word: str, direction: Direction, segmenter: Segmenter) -> List[str]:
    chars = segmenter(word)
    if direction.is_backward:
        chars.reverse()
    return chars


def can_place_word_at(
    word: str,
    grid: Grid,
    position: Position,
    direction: Direction,
    segmenter: Segmenter = split_graphemes,
) -> bool:
    """Dentro da grade e cada célula vazia ou com o mesmo grafema."""
    n = len(grid)
    row, col = position
    for i, ch in enumerate(_chars_to_write(word, direction, segmenter)):
        rr = row + direction.d_row * i
        cc = col + direction.d_col * i
        if not (0 <= rr < n and 0 <= cc < n):
            return False
        cell = grid[rr][cc]
        if cell not in (EMPTY, ch):
            return False
    return True


def _anchor_range(delta: int, length: int, size: int) -> range:
    # a última letra nunca sai da grade
    if delta > 0:
        return range(0, size - length + 1)
    if delta < 0:
        return range(length - 1, size)
    return range(0, size)


def _pick(items: Sequence, rng: Rng):
    return items[min(int(rng() * len(items)), len(items) - 1)]


def find_valid_word_position(
    word: str,
    grid: Grid,
    direction: Direction,
    rng: Rng,
    segmenter: Segmenter = split_graphemes,
) -> Optional[Position]:
    """
    Enumera TODAS as âncoras possíveis nessa direção e sorteia uma.
    Retorna None apenas se nenhuma âncora for válida.
    """
    n = len(grid)
    length = len(segmenter(word))
    candidates: List[Position] = []
    for r in _anchor_range(direction.d_row, length, n):
        for c in _anchor_range(direction.d_col, length, n):
            pos = Position(r, c)
            if can_place_word_at(word, grid, pos, direction, segmenter):
                candidates.append(pos)

    if not candidates:
        return None
    return _pick(candidates, rng)


def place_word(
    word: str,
    grid: Grid,
    position: Position,
    direction: Direction,
    segmenter: Segmenter = split_graphemes,
) -> List[Position]:
    positions: List[Position] = []
    row, col = position
    for i, ch in enumerate(_chars_to_write(word, direction, segmenter)):
        pos = Position(row + direction.d_row * i, col + direction.d_col * i)
        grid[pos.row][pos.col] = ch
        positions.append(pos)
    return positions


def count_word_occurrences(
    word: str,
    grid: Grid,
    segmenter: Segmenter = split_graphemes,
) -> int:
    """
    Conta ocorrências nas 8 direções. Cada ocorrência é um conjunto distinto
    de células: um palíndromo (ou palavra de um grafema) lido nos dois
    sentidos sobre as mesmas células conta uma vez só.
    """
    n = len(grid)
    chars = segmenter(word)
    L = len(chars)
    if L == 0:
        return 0
    found: Set[FrozenSet[Position]] = set()
    for r in range(n):
        for c in range(n):
            if grid[r][c] != chars[0]:
                continue
            for dr, dc in SCAN_DIRECTIONS:
                end_r = r + dr * (L - 1)
                end_c = c + dc * (L - 1)
                if not (0 <= end_r < n and 0 <= end_c < n):
                    continue
                if all(grid[r + dr * i][c + dc * i] == chars[i] for i in range(1, L)):
                    found.add(frozenset(Position(r + dr * i, c + dc * i) for i in range(L)))
    return len(found)


def shuffle_with(items: MutableSequence, rng: Rng) -> None:
    """Fisher-Yates in-place usando a fonte aleatória injetada."""
    for i in range(len(items) - 1, 0, -1):
        j = min(int(rng() * (i + 1)), i)
        items[i], items[j] = items[j], items[i]


# ------------------------- Uma tentativa -------------------------

def generate_puzzle(
    words: Sequence[str],
    size: int,
    allow_backwards: bool,
    attempt: int,
    max_attempts: int,
    rng: Rng,
    segmenter: Segmenter = split_graphemes,
    on_state: Optional[Callable[[AttemptState], None]] = None,
) -> PuzzleResult:
    """
    Executa uma tentativa completa: colocar, preencher, validar.
    A grade é nova a cada chamada; nada é compartilhado entre tentativas.
    on_state, se fornecido, é chamado a cada mudança de fase.
    """
    notify = on_state or (lambda _state: None)

    notify(AttemptState.PREPARING)
    accepted = prepare_words(words, size, segmenter)
    grid = initialize_grid(size)
    word_positions: List[WordPosition] = []

    notify(AttemptState.PLACING)
    all_placed = True
    for w in accepted:
        directions = get_directions(allow_backwards)
        shuffle_with(directions, rng)
        for d in directions:
            pos = find_valid_word_position(w, grid, d, rng, segmenter)
            if pos is not None:
                word_positions.append(WordPosition(w, place_word(w, grid, pos, d, segmenter)))
                break
        else:
            # sem encaixe: a tentativa inteira é descartada
            all_placed = False
            break

    if not all_placed:
        return PuzzleResult(grid, word_positions, False)

    notify(AttemptState.FILLING)
    distribution = calculate_character_distribution(accepted, attempt, max_attempts, segmenter)
    for r in range(size):
        for c in range(size):
            if grid[r][c] == EMPTY:
                grid[r][c] = select_char_from_distribution(distribution, rng)

    notify(AttemptState.VALIDATING)
    is_valid = all(count_word_occurrences(w, grid, segmenter) == 1 for w in accepted)
    return PuzzleResult(grid, word_positions, is_valid)


# ------------------------- Orquestrador -------------------------

class WordSearch:
    """
    Caça-palavras NxN com suporte a grafemas (emoji com modificadores,
    sequências ZWJ etc. ocupam UMA célula).

    Interface pública:
      - WordSearch(words, size=15, allow_backwards=False, rng=None)
      - generate() -> WordSearchResult
      - .size, .grid, .words, .word_positions, .attempts, .state

    Cada tentativa é atômica; se alguma palavra não couber ou aparecer mais
    de uma vez, a grade é descartada e tudo recomeça (até max_attempts).
    """

    def __init__(
        self,
        words: Sequence[str],
        size: int = 15,
        *,
        allow_backwards: bool = False,
        rng: Optional[Rng] = None,
        max_attempts: int = MAX_PUZZLE_ATTEMPTS,
        time_budget: Optional[float] = None,
        segmenter: Segmenter = split_graphemes,
    ) -> None:
        self.size = int(size)
        self.requested_words: List[str] = list(words or [])
        self.allow_backwards = bool(allow_backwards)
        self.rng: Rng = rng or random.random
        self.max_attempts = max(1, int(max_attempts))
        self.time_budget = time_budget
        self.segmenter = segmenter

        self.words: List[str] = []
        self.grid: Grid = []
        self.word_positions: List[WordPosition] = []
        self.attempts = 0
        self.state = AttemptState.PREPARING

    def generate(self) -> WordSearchResult:
        # fatal e antes de qualquer tentativa
        self.words = prepare_words(self.requested_words, self.size, self.segmenter)

        started = time.monotonic()
        self.attempts = 0
        while self.attempts < self.max_attempts:
            if self._budget_exceeded(started):
                break

            self.state = AttemptState.PREPARING
            result = self._attempt(self.attempts)
            self.attempts += 1

            if result is not None and result.is_valid:
                self.state = AttemptState.ACCEPTED
                self.grid = result.grid
                self.word_positions = result.word_positions
                return WordSearchResult(
                    grid=self.grid,
                    words=list(self.words),
                    word_positions=self.word_positions,
                    attempts=self.attempts,
                )
            self.state = AttemptState.RETRYING

        self.state = AttemptState.EXHAUSTED
        raise GenerationExhaustedError(self.attempts)

    def _attempt(self, index: int) -> Optional[PuzzleResult]:
        try:
            return generate_puzzle(
                self.words,
                self.size,
                self.allow_backwards,
                index,
                self.max_attempts,
                self.rng,
                self.segmenter,
                on_state=self._set_state,
            )
        except WordSearchError:
            raise
        except Exception:
            # falha inesperada dentro da tentativa conta como tentativa perdida
            return None

    def _set_state(self, state: AttemptState) -> None:
        self.state = state

    def _budget_exceeded(self, started: float) -> bool:
        if self.time_budget is None or self.attempts == 0:
            return False
        return (time.monotonic() - started) > self.time_budget


def generate_word_search(
    words: Sequence[str],
    grid_size: int = 50,
    allow_backwards: bool = False,
    rng: Optional[Rng] = None,
    max_attempts: int = MAX_PUZZLE_ATTEMPTS,
    time_budget: Optional[float] = None,
) -> WordSearchResult:
    """Atalho funcional para WordSearch(...).generate()."""
    return WordSearch(
        words,
        grid_size,
        allow_backwards=allow_backwards,
        rng=rng,
        max_attempts=max_attempts,
        time_budget=time_budget,
    ).generate()
