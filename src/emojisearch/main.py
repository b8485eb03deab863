import typer
from typing_extensions import Annotated
from typing import Optional, List
from pathlib import Path

from emojisearch.app import WordSearchApp, format_grid, parse_word_input

app = typer.Typer(add_completion=False, help="Gerador de caça-palavras com suporte a emoji.")


def _collect_words(wsapp: WordSearchApp, palavras: Optional[List[str]], arquivo: Optional[str]) -> List[str]:
    """Junta as palavras da linha de comando (aceita vírgulas) com as do arquivo."""
    words: List[str] = []
    for p in palavras or []:
        words.extend(parse_word_input(p))
    if arquivo:
        from_file = wsapp.load_words_file(arquivo)
        if from_file is None:
            raise typer.Exit(code=1)
        words.extend(from_file)
    if not words:
        print("❌ ERRO: Informe palavras com --palavra ou --arquivo.")
        raise typer.Exit(code=1)
    return words


@app.command()
def generate(
    palavras: Annotated[Optional[List[str]], typer.Option(
        "--palavra", "-p",
        help="Palavra a esconder (repita a opção ou separe por vírgulas)."
    )] = None,
    arquivo: Annotated[Optional[str], typer.Option(
        "--arquivo", "-a",
        help="Arquivo .json (lista de palavras) ou .txt (uma por linha)."
    )] = None,
    tamanho: Annotated[Optional[int], typer.Option(
        "--tamanho", "-n", min=1,
        help="Tamanho da grade (NxN). Padrão: data/config.json ou 15."
    )] = None,
    reverso: Annotated[Optional[bool], typer.Option(
        "--reverso/--sem-reverso",
        help="Permite palavras escritas de trás para frente."
    )] = None,
    seed: Annotated[Optional[int], typer.Option(
        "--seed",
        help="Semente para geração determinística."
    )] = None,
    output_basename: Annotated[str, typer.Option(
        "--basename", "-b",
        help="Nome base para os arquivos de saída."
    )] = "cacapalavras",
    estilo: Annotated[Optional[str], typer.Option(
        "--estilo",
        help="Destaque do gabarito: 'fill' ou 'stroke'."
    )] = None,
    pdf: Annotated[bool, typer.Option(
        "--pdf/--sem-pdf",
        help="Também gera os PDFs para impressão."
    )] = True,
    raiz: Annotated[Optional[Path], typer.Option(
        "--raiz",
        help="Raiz do projeto (contém data/ e output/)."
    )] = None,
):
    """Gera o caça-palavras: imagens do exercício e do gabarito, lista e PDF."""
    if estilo is not None and estilo.lower() not in ("fill", "stroke"):
        print(f"❌ ERRO: estilo inválido '{estilo}'. Use 'fill' ou 'stroke'.")
        raise typer.Exit(code=1)

    wsapp = WordSearchApp(project_root=raiz)
    words = _collect_words(wsapp, palavras, arquivo)
    ok = wsapp.executar_gerador_wordsearch(
        words=words,
        output_basename=output_basename,
        size=tamanho,
        allow_backwards=reverso,
        seed=seed,
        highlight_style=estilo,
        pdf=pdf,
    )
    if not ok:
        raise typer.Exit(code=1)


@app.command()
def show(
    palavras: Annotated[Optional[List[str]], typer.Option(
        "--palavra", "-p",
        help="Palavra a esconder (repita a opção ou separe por vírgulas)."
    )] = None,
    arquivo: Annotated[Optional[str], typer.Option(
        "--arquivo", "-a",
        help="Arquivo .json (lista de palavras) ou .txt (uma por linha)."
    )] = None,
    tamanho: Annotated[Optional[int], typer.Option("--tamanho", "-n", min=1)] = None,
    reverso: Annotated[Optional[bool], typer.Option("--reverso/--sem-reverso")] = None,
    seed: Annotated[Optional[int], typer.Option("--seed")] = None,
    respostas: Annotated[bool, typer.Option(
        "--respostas",
        help="Lista as coordenadas de cada palavra."
    )] = False,
    raiz: Annotated[Optional[Path], typer.Option("--raiz")] = None,
):
    """Mostra a grade no terminal, sem gravar arquivos."""
    wsapp = WordSearchApp(project_root=raiz)
    words = _collect_words(wsapp, palavras, arquivo)
    result = wsapp.gerar(words, size=tamanho, allow_backwards=reverso, seed=seed)
    if result is None:
        raise typer.Exit(code=1)

    print(format_grid(result.grid))
    if respostas:
        print()
        for wp in result.word_positions:
            coords = " ".join(f"({p.row},{p.col})" for p in wp.positions)
            print(f"{wp.word}: {coords}")


def run():
    app()

if __name__ == "__main__":
    run()
