from __future__ import annotations

from typing import Callable, List

import regex

# \X = extended grapheme cluster (UAX #29): emoji + modificador, sequências ZWJ,
# seletores de variação e marcas combinantes contam como um único símbolo.
_GRAPHEME_RE = regex.compile(r"\X")

Segmenter = Callable[[str], List[str]]


def split_graphemes(text: str) -> List[str]:
    """Divide o texto em grafemas (caracteres percebidos pelo usuário)."""
    if not text:
        return []
    return _GRAPHEME_RE.findall(text)


def count_graphemes(text: str) -> int:
    return len(split_graphemes(text))


def split_codepoints(text: str) -> List[str]:
    """Um símbolo por code point. Alternativa explícita ao split_graphemes."""
    return list(text or "")
