from __future__ import annotations
import unicodedata
from typing import Dict, List, Optional, Tuple
from PIL import Image, ImageDraw, ImageFont

from emojisearch.core.wordsearch import Position, WordSearchResult


class WordSearchRenderer:
    """
    Renderizador de caça-palavras:
      - Exercício: grade + grafemas
      - Respostas: destaques (fill, uma cor por palavra) OU linhas (stroke)
      - Emoji são rasterizados com a fonte de emoji colorida, se houver
    """

    BACKGROUND = (255, 255, 255)
    GRID = (30, 30, 30)
    TEXT = (0, 0, 0)
    HIGHLIGHT_STROKE = (200, 0, 0)     # vermelho padrão
    # tons claros para não esconder as letras
    PALETTE: List[Tuple[int, int, int]] = [
        (220, 240, 255), (255, 228, 225), (225, 250, 220), (255, 245, 200),
        (238, 225, 255), (210, 245, 245), (255, 225, 245), (235, 235, 235),
    ]

    # NotoColorEmoji só existe em bitmap de 109 px
    EMOJI_NATIVE_SIZE = 109

    def __init__(
        self,
        result: WordSearchResult,
        *,
        cell_size: int = 40,
        padding: int = 25,
        highlight_style: str = "fill",   # "fill" ou "stroke"
        stroke_width: int = 5,
        font_path: str | None = None,
        emoji_font_path: str | None = None,
    ) -> None:
        self.result = result
        self.n = int(result.size)
        self.cell = int(cell_size)
        self.pad = int(padding)
        self.style = str(highlight_style or "fill").lower()
        self.stroke_width = int(stroke_width)
        self.font_path = font_path

        self.font = self.load_font(font_path, int(self.cell * 0.7))
        self.emoji_font: Optional[ImageFont.FreeTypeFont] = None
        if emoji_font_path:
            try:
                self.emoji_font = ImageFont.truetype(emoji_font_path, size=self.EMOJI_NATIVE_SIZE)
            except OSError:
                print(f"⚠️  Fonte de emoji '{emoji_font_path}' não encontrada. Emoji serão desenhados como texto.")
                self.emoji_font = None
        self._emoji_cache: Dict[str, Optional[Image.Image]] = {}

    @staticmethod
    def load_font(font_path: str | None, size: int):
        # fonte informada > DejaVuSans > default do PIL
        for candidate in (font_path, "DejaVuSans.ttf"):
            if not candidate:
                continue
            try:
                return ImageFont.truetype(candidate, size=size)
            except OSError:
                continue
        return ImageFont.load_default()

    # ---------- API ----------

    @property
    def image_size(self) -> int:
        return self.pad * 2 + self.n * self.cell

    def render(self, answers: bool = False) -> Image.Image:
        W = H = self.image_size
        img = Image.new("RGB", (W, H), self.BACKGROUND)
        draw = ImageDraw.Draw(img)

        # Se for gabarito com FILL, desenhe os destaques ANTES das letras (para não cobri-las)
        if answers and self.style == "fill":
            self._draw_answers_fill(draw)

        self._draw_grid(draw)
        self._draw_letters(img, draw)

        # Se for gabarito com STROKE, desenhe as linhas por cima
        if answers and self.style != "fill":
            self._draw_answers_stroke(draw)
        return img

    def generate_image(self, filename: str, answers: bool = False) -> None:
        self.render(answers=answers).save(filename, format="PNG")

    # ---------- desenho básico ----------

    def _draw_grid(self, draw: ImageDraw.ImageDraw) -> None:
        # borda externa
        x1 = self.pad + self.n * self.cell
        y1 = self.pad + self.n * self.cell
        draw.rectangle([self.pad, self.pad, x1, y1], outline=self.GRID, width=1)

        for i in range(1, self.n):
            y = self.pad + i * self.cell
            draw.line([self.pad, y, x1, y], fill=self.GRID, width=1)
            x = self.pad + i * self.cell
            draw.line([x, self.pad, x, y1], fill=self.GRID, width=1)

    def _draw_letters(self, img: Image.Image, draw: ImageDraw.ImageDraw) -> None:
        """
        Pillow 11 removeu `draw.textsize`: centraliza com `font.getbbox`,
        compensando o offset (x0,y0) do glifo.
        """
        for r, row in enumerate(self.result.grid):
            for c, ch in enumerate(row):
                if not ch:
                    continue
                tile = self.emoji_tile(ch) if is_pictographic(ch) else None
                if tile is not None:
                    x = self.pad + c * self.cell + (self.cell - tile.width) // 2
                    y = self.pad + r * self.cell + (self.cell - tile.height) // 2
                    img.paste(tile, (x, y), tile)
                    continue

                cx = self.pad + c * self.cell + self.cell / 2
                cy = self.pad + r * self.cell + self.cell / 2
                bx0, by0, bx1, by1 = self.font.getbbox(ch)
                x = cx - (bx1 - bx0) / 2 - bx0
                y = cy - (by1 - by0) / 2 - by0
                draw.text((x, y), ch, fill=self.TEXT, font=self.font)

    def emoji_tile(self, ch: str) -> Optional[Image.Image]:
        """Rasteriza o emoji no tamanho nativo da fonte e reduz para caber na célula."""
        if self.emoji_font is None:
            return None
        if ch not in self._emoji_cache:
            bx0, by0, bx1, by1 = self.emoji_font.getbbox(ch)
            if bx1 <= bx0 or by1 <= by0:
                self._emoji_cache[ch] = None
            else:
                tile = Image.new("RGBA", (bx1 - bx0, by1 - by0), (0, 0, 0, 0))
                ImageDraw.Draw(tile).text((-bx0, -by0), ch, font=self.emoji_font, embedded_color=True)
                side = max(1, int(self.cell * 0.8))
                tile.thumbnail((side, side), Image.LANCZOS)
                self._emoji_cache[ch] = tile
        return self._emoji_cache[ch]

    # ---------- gabarito ----------

    def _cell_box(self, pos: Position) -> List[int]:
        x0 = self.pad + pos.col * self.cell
        y0 = self.pad + pos.row * self.cell
        return [x0, y0, x0 + self.cell, y0 + self.cell]

    def _draw_answers_fill(self, draw: ImageDraw.ImageDraw) -> None:
        for i, wp in enumerate(self.result.word_positions):
            color = self.PALETTE[i % len(self.PALETTE)]
            for pos in wp.positions:
                draw.rectangle(self._cell_box(pos), fill=color)

    def _draw_answers_stroke(self, draw: ImageDraw.ImageDraw) -> None:
        for wp in self.result.word_positions:
            if not wp.positions:
                continue
            first, last = wp.positions[0], wp.positions[-1]
            x0 = self.pad + (first.col + 0.5) * self.cell
            y0 = self.pad + (first.row + 0.5) * self.cell
            x1 = self.pad + (last.col + 0.5) * self.cell
            y1 = self.pad + (last.row + 0.5) * self.cell
            draw.line([x0, y0, x1, y1], fill=self.HIGHLIGHT_STROKE, width=self.stroke_width)


def is_pictographic(ch: str) -> bool:
    """Grafema que a fonte de texto normalmente não desenha (emoji, símbolos)."""
    return any(unicodedata.category(cp) == "So" for cp in ch)
