# src/emojisearch/app.py
from __future__ import annotations

import json
import random
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

from emojisearch.core.errors import GenerationExhaustedError, NoValidWordsError
from emojisearch.core.graphemes import count_graphemes
from emojisearch.core.wordsearch import MAX_PUZZLE_ATTEMPTS, WordSearch, WordSearchResult
from emojisearch.rendering.pdf_exporter import PdfExporter
from emojisearch.rendering.wordsearch_renderer import WordSearchRenderer

DEFAULT_WORDSEARCH_CONFIG: Dict[str, Any] = {
    "size": 15,
    "allow_backwards": False,
    "max_attempts": MAX_PUZZLE_ATTEMPTS,
    "highlight_style": "fill",
    "stroke_width": 5,
    "cell_size": 40,
    "font_path": None,
    "emoji_font_path": None,
    "title": "Caça-Palavras",
}

_SPLIT_RE = re.compile(r"[\n,]+")


def parse_word_input(text: str) -> List[str]:
    """Uma palavra por linha ou separadas por vírgula; vazias são ignoradas."""
    return [w.strip() for w in _SPLIT_RE.split(text or "") if w.strip()]


def format_grid(grid: List[List[str]]) -> str:
    return "\n".join(" ".join(row) for row in grid)


class WordSearchApp:
    """
    Orquestrador da aplicação:
      - Lê config (data/config.json, seção "wordsearch")
      - Resolve caminhos (data/, output/)
      - Carrega listas de palavras (.json ou texto)
      - Dispara a geração e renderiza PNG/PDF + lista de palavras
    """

    # -------------------- Infra --------------------
    def __init__(self, project_root: Optional[Path] = None) -> None:
        self.project_root = Path(project_root) if project_root else self._detect_project_root()
        self.data_dir = self.project_root / "data"
        self.output_dir = self.project_root / "output"
        self.config_path = self.data_dir / "config.json"

        self.config: Dict = self._load_config() or {}

    def _detect_project_root(self) -> Path:
        here = Path(__file__).resolve()
        for p in [Path.cwd(), here, *here.parents]:
            if (p / "data").exists():
                return p
        return Path.cwd()

    def _as_path(self, rel: str | Path) -> Path:
        p = Path(rel)
        return p if p.is_absolute() else (self.project_root / p)

    # -------------------- Config --------------------
    def _load_config(self) -> Optional[Dict]:
        if not self.config_path.exists():
            return None
        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return data if isinstance(data, dict) else None
        except (OSError, json.JSONDecodeError):
            print(f"⚠️  Config ilegível: {self.config_path}. Usando valores padrão.")
            return None

    def wordsearch_config(self, **overrides: Any) -> Dict[str, Any]:
        """Padrões < data/config.json < parâmetros explícitos (None = não informado)."""
        cfg = dict(DEFAULT_WORDSEARCH_CONFIG)
        ws_cfg = self.config.get("wordsearch") or {}
        if isinstance(ws_cfg, dict):
            cfg.update({k: v for k, v in ws_cfg.items() if k in cfg and v is not None})
        cfg.update({k: v for k, v in overrides.items() if v is not None})
        return cfg

    # -------------------- IO util --------------------
    def load_words_file(self, rel: str | Path) -> Optional[List[str]]:
        """
        .json: lista de strings ou de objetos {"word": ...}.
        Qualquer outro arquivo: texto, uma palavra por linha ou por vírgula.
        """
        path = self._as_path(rel)
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = f.read()
        except OSError:
            print(f"❌ ERRO ao ler arquivo de palavras: {path}")
            return None

        if path.suffix.lower() != ".json":
            return parse_word_input(raw)

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            print(f"❌ ERRO ao ler JSON: {path}")
            return None
        if not isinstance(data, list):
            print(f"❌ ERRO: o JSON deve ser uma lista: {path}")
            return None

        out: List[str] = []
        for it in data:
            w = it.get("word") if isinstance(it, dict) else it
            if isinstance(w, str) and w.strip():
                out.append(w.strip())
        return out

    # -------------------- Geração --------------------
    def gerar(
        self,
        words: List[str],
        *,
        size: Optional[int] = None,
        allow_backwards: Optional[bool] = None,
        seed: Optional[int] = None,
    ) -> Optional[WordSearchResult]:
        """Gera a grade; em caso de falha imprime a sugestão e devolve None."""
        cfg = self.wordsearch_config(size=size, allow_backwards=allow_backwards)
        rng = random.Random(int(seed)).random if seed is not None else None

        ws = WordSearch(
            words,
            int(cfg["size"]),
            allow_backwards=bool(cfg["allow_backwards"]),
            rng=rng,
            max_attempts=int(cfg["max_attempts"]),
        )
        try:
            return ws.generate()
        except NoValidWordsError as e:
            print(f"❌ ERRO: {e}")
            print("   Sugestão: encurte as palavras ou aumente a grade.")
        except GenerationExhaustedError as e:
            print(f"❌ FALHA: {e}")
            print("   Sugestão: use menos palavras, palavras menores, uma grade maior ou permita palavras invertidas.")
        return None

    # ======================================================================
    #                            WORDSEARCH
    # ======================================================================
    def executar_gerador_wordsearch(
        self,
        *,
        words: List[str],
        output_basename: str,
        size: Optional[int] = None,
        allow_backwards: Optional[bool] = None,
        seed: Optional[int] = None,
        highlight_style: Optional[str] = None,   # "fill" | "stroke"
        stroke_width: Optional[int] = None,
        pdf: bool = True,
        title: Optional[str] = None,
    ) -> bool:
        cfg = self.wordsearch_config(
            size=size,
            allow_backwards=allow_backwards,
            highlight_style=highlight_style,
            stroke_width=stroke_width,
            title=title,
        )
        if not words:
            print("❌ ERRO: Nenhuma palavra informada.")
            return False

        print("⚙️  Iniciando a geração do caça-palavras...")
        if seed is not None:
            print(f"🎯 Seed configurada: {seed}")

        result = self.gerar(
            words,
            size=int(cfg["size"]),
            allow_backwards=bool(cfg["allow_backwards"]),
            seed=seed,
        )
        if result is None:
            return False

        descartadas = len(words) - len(result.words)
        print(f"✅ SUCESSO! Grade {result.size}x{result.size} com {len(result.words)} palavras "
              f"({result.attempts} tentativa(s)).")
        if descartadas > 0:
            print(f"⚠️  {descartadas} palavra(s) descartada(s): vazias ou maiores que a grade.")
        print(format_grid(result.grid))

        self.output_dir.mkdir(parents=True, exist_ok=True)

        # Lista de palavras (ordem alfabética p/ correção fácil)
        words_path = self.output_dir / f"{output_basename}_palavras.txt"
        with open(words_path, "w", encoding="utf-8") as f:
            for i, w in enumerate(sorted(result.words), 1):
                f.write(f"{i}. {w} ({count_graphemes(w)})\n")
        print(f"📄 Arquivo de palavras '{words_path.name}' gerado.")

        # Render
        renderer = WordSearchRenderer(
            result,
            cell_size=int(cfg["cell_size"]),
            padding=25,
            highlight_style=str(cfg["highlight_style"] or "fill"),
            stroke_width=int(cfg["stroke_width"] or 5),
            font_path=cfg["font_path"],
            emoji_font_path=cfg["emoji_font_path"],
        )
        outputs: List[Path] = [words_path]
        ex = self.output_dir / f"{output_basename}_exercicio.png"
        an = self.output_dir / f"{output_basename}_respostas.png"
        renderer.generate_image(filename=str(ex), answers=False)
        renderer.generate_image(filename=str(an), answers=True)
        outputs += [ex, an]
        print(f"🖼️  Imagens '{ex.name}' e '{an.name}' geradas com sucesso!")

        if pdf:
            exporter = PdfExporter(result, renderer, title=str(cfg["title"]))
            pdf_ex = self.output_dir / f"{output_basename}.pdf"
            pdf_an = self.output_dir / f"{output_basename}_respostas.pdf"
            pages = exporter.export(str(pdf_ex), answers=False)
            exporter.export(str(pdf_an), answers=True)
            outputs += [pdf_ex, pdf_an]
            print(f"📑 PDF '{pdf_ex.name}' gerado ({pages} página(s)).")

        print(f"📦 Saída: {self.output_dir}")
        for p in outputs:
            print(f"   - {p.name}")
        print("🎉 Tudo pronto!")
        return True
