from __future__ import annotations

from collections import Counter
from typing import Callable, List, NamedTuple, Sequence

from emojisearch.core.graphemes import Segmenter, split_graphemes


class CharFrequency(NamedTuple):
    char: str
    cumulative_freq: float


def calculate_character_distribution(
    words: Sequence[str],
    attempt: int,
    max_attempts: int,
    segmenter: Segmenter = split_graphemes,
) -> List[CharFrequency]:
    """
    Tabela cumulativa dos grafemas das palavras, usada para o preenchimento.

    Na primeira tentativa os grafemas mais comuns dominam o preenchimento;
    a cada nova tentativa o peso migra para os mais raros (na última o
    k-ésimo mais frequente recebe a frequência do k-ésimo menos frequente).
    """
    counts: Counter = Counter()
    for w in words:
        counts.update(segmenter(w))
    if not counts:
        return []

    # sorted é estável: empates mantêm a ordem de aparição
    ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    total = sum(counts.values())
    n = len(ranked)
    t = attempt / (max_attempts - 1) if max_attempts > 1 else 0.0

    out: List[CharFrequency] = []
    cumulative = 0.0
    for k, (ch, freq) in enumerate(ranked):
        mirror = ranked[n - 1 - k][1]
        blended = freq * (1 - t) + mirror * t
        cumulative += blended / total
        out.append(CharFrequency(ch, cumulative))
    return out


def select_char_from_distribution(
    distribution: Sequence[CharFrequency],
    rng: Callable[[], float],
) -> str:
    if not distribution:
        raise ValueError("Distribuição de caracteres vazia.")
    draw = rng()
    for entry in distribution:
        if entry.cumulative_freq >= draw:
            return entry.char
    # erro de ponto flutuante: o último acumulado pode ficar abaixo de 1.0
    return distribution[-1].char
