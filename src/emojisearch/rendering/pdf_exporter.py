from __future__ import annotations
from typing import List, Sequence
from PIL import Image, ImageDraw

from emojisearch.core.graphemes import split_graphemes
from emojisearch.core.wordsearch import WordSearchResult
from emojisearch.rendering.wordsearch_renderer import WordSearchRenderer, is_pictographic


class PdfExporter:
    """
    Monta o PDF para impressão (A4 retrato):
      - Página 1: título + grade, centralizada dentro das margens
      - Páginas seguintes: lista de palavras em colunas, com paginação
    As páginas são desenhadas como imagens e salvas num único PDF pelo Pillow.
    """

    PAGE_MM = (210, 297)
    MARGIN_MM = 20
    COLUMN_MM = 60
    LINE_MM = 7
    TITLE_GAP_MM = 15

    def __init__(
        self,
        result: WordSearchResult,
        renderer: WordSearchRenderer,
        *,
        title: str = "Caça-Palavras",
        dpi: int = 150,
    ) -> None:
        self.result = result
        self.renderer = renderer
        self.title = title
        self.dpi = int(dpi)

        self.page_w = self._mm(self.PAGE_MM[0])
        self.page_h = self._mm(self.PAGE_MM[1])
        self.margin = self._mm(self.MARGIN_MM)
        self.title_font = renderer.load_font(renderer.font_path, self._mm(7))
        self.word_font = renderer.load_font(renderer.font_path, self._mm(4.5))

    def _mm(self, value: float) -> int:
        return int(round(value / 25.4 * self.dpi))

    # ---------- API ----------

    def export(self, filename: str, answers: bool = False) -> int:
        """Salva o PDF e devolve o número de páginas."""
        pages = [self._grid_page(answers)] + self._word_pages(self.result.words)
        pages[0].save(
            filename,
            format="PDF",
            save_all=True,
            append_images=pages[1:],
            resolution=float(self.dpi),
        )
        return len(pages)

    # ---------- páginas ----------

    def _blank_page(self) -> Image.Image:
        return Image.new("RGB", (self.page_w, self.page_h), "white")

    def _grid_page(self, answers: bool) -> Image.Image:
        page = self._blank_page()
        draw = ImageDraw.Draw(page)
        bx0, _, bx1, _ = self.title_font.getbbox(self.title)
        draw.text(((self.page_w - (bx1 - bx0)) / 2 - bx0, self.margin), self.title, font=self.title_font, fill="black")

        grid_img = self.renderer.render(answers=answers)
        top = self.margin + self._mm(self.TITLE_GAP_MM)
        avail_w = self.page_w - 2 * self.margin
        avail_h = self.page_h - top - self.margin
        side = max(1, min(avail_w, avail_h))
        grid_img = grid_img.resize((side, side), Image.LANCZOS)
        page.paste(grid_img, ((self.page_w - side) // 2, top))
        return page

    def _word_pages(self, words: Sequence[str]) -> List[Image.Image]:
        line_h = self._mm(self.LINE_MM)
        col_w = self._mm(self.COLUMN_MM)
        top = self.margin + self._mm(10)
        per_column = max(1, (self.page_h - top - self.margin) // line_h)
        columns_per_page = max(1, (self.page_w - 2 * self.margin) // col_w)
        per_page = per_column * columns_per_page

        pages: List[Image.Image] = []
        for start in range(0, max(1, len(words)), per_page):
            page = self._blank_page()
            draw = ImageDraw.Draw(page)
            header = "Palavras para encontrar:" if not pages else "Palavras para encontrar (continuação):"
            draw.text((self.margin, self.margin), header, font=self.title_font, fill="black")

            for i, word in enumerate(words[start:start + per_page]):
                x = self.margin + (i // per_column) * col_w
                y = top + (i % per_column) * line_h
                draw.text((x, y), "•", font=self.word_font, fill="black")
                self._draw_word(page, draw, word, x + self._mm(5), y)
            pages.append(page)
        return pages

    def _draw_word(self, page: Image.Image, draw: ImageDraw.ImageDraw, word: str, x: int, y: int) -> None:
        # emoji vira imagem (a fonte de texto não os desenha)
        if self.renderer.emoji_font is None or not is_pictographic(word):
            draw.text((x, y), word, font=self.word_font, fill="black")
            return
        for ch in split_graphemes(word):
            tile = self.renderer.emoji_tile(ch) if is_pictographic(ch) else None
            if tile is not None:
                page.paste(tile, (int(x), int(y)), tile)
                x += tile.width
            else:
                draw.text((x, y), ch, font=self.word_font, fill="black")
                x += self.word_font.getbbox(ch)[2]
