from __future__ import annotations


class WordSearchError(Exception):
    """Base dos erros do gerador de caça-palavras."""


class NoValidWordsError(WordSearchError):
    """Nenhuma palavra sobrou após o filtro (vazias ou maiores que a grade)."""

    def __init__(self, grid_size: int) -> None:
        self.grid_size = grid_size
        super().__init__(
            f"Nenhuma palavra válida: todas estão vazias ou têm mais de {grid_size} caracteres."
        )


class GenerationExhaustedError(WordSearchError):
    """Nenhuma grade válida dentro do limite de tentativas."""

    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(
            f"Não foi possível gerar um caça-palavras válido após {attempts} tentativas."
        )
