import json

import pytest
from typer.testing import CliRunner

from emojisearch.app import WordSearchApp, format_grid, parse_word_input
from emojisearch.main import app

WORDS = ["PYTHONIC", "GRAPHEME", "WORDS"]


@pytest.fixture
def project(tmp_path):
    (tmp_path / "data").mkdir()
    return tmp_path


def _write_config(root, **wordsearch):
    (root / "data" / "config.json").write_text(json.dumps({"wordsearch": wordsearch}), encoding="utf-8")


def test_parse_word_input():
    assert parse_word_input("gato, cão\n\n🫶🏻,, rato \n") == ["gato", "cão", "🫶🏻", "rato"]
    assert parse_word_input("") == []


def test_format_grid():
    assert format_grid([["A", "B"], ["C", "D"]]) == "A B\nC D"


def test_config_defaults_without_file(project):
    cfg = WordSearchApp(project).wordsearch_config()
    assert cfg["size"] == 15
    assert cfg["allow_backwards"] is False
    assert cfg["max_attempts"] == 10


def test_config_file_and_overrides(project):
    _write_config(project, size=20, allow_backwards=True, unknown="ignored")
    wsapp = WordSearchApp(project)
    cfg = wsapp.wordsearch_config(size=8, highlight_style=None)
    assert cfg["size"] == 8
    assert cfg["allow_backwards"] is True
    assert cfg["highlight_style"] == "fill"
    assert "unknown" not in cfg


def test_broken_config_uses_defaults(project, capsys):
    (project / "data" / "config.json").write_text("{ not json", encoding="utf-8")
    wsapp = WordSearchApp(project)
    assert wsapp.config == {}
    assert "Config ilegível" in capsys.readouterr().out


def test_load_words_file_json(project):
    path = project / "data" / "lista.json"
    path.write_text(json.dumps([{"word": " gato "}, "rato", {"clue": "x"}, 3]), encoding="utf-8")
    assert WordSearchApp(project).load_words_file("data/lista.json") == ["gato", "rato"]


def test_load_words_file_text(project):
    path = project / "lista.txt"
    path.write_text("gato\nrato, pato\n", encoding="utf-8")
    assert WordSearchApp(project).load_words_file(path) == ["gato", "rato", "pato"]


def test_load_words_file_errors(project):
    (project / "ruim.json").write_text("[", encoding="utf-8")
    (project / "objeto.json").write_text("{}", encoding="utf-8")
    wsapp = WordSearchApp(project)
    assert wsapp.load_words_file("ruim.json") is None
    assert wsapp.load_words_file("objeto.json") is None
    assert wsapp.load_words_file("nao_existe.txt") is None


def test_gerar_reports_failures(project, capsys):
    wsapp = WordSearchApp(project)
    assert wsapp.gerar(["ABCDEFGHIJ"], size=5) is None
    assert "Nenhuma palavra válida" in capsys.readouterr().out
    assert wsapp.gerar(["A", "B"], size=1, seed=1) is None
    assert "Sugestão" in capsys.readouterr().out


def test_executar_gerador_writes_outputs(project):
    wsapp = WordSearchApp(project)
    ok = wsapp.executar_gerador_wordsearch(
        words=WORDS, output_basename="teste", size=12, seed=1, pdf=True,
    )
    assert ok
    out = project / "output"
    for name in ("teste_exercicio.png", "teste_respostas.png", "teste_palavras.txt",
                 "teste.pdf", "teste_respostas.pdf"):
        assert (out / name).exists(), name
    lines = (out / "teste_palavras.txt").read_text(encoding="utf-8").splitlines()
    assert lines[0] == "1. GRAPHEME (8)"
    assert len(lines) == 3


def test_executar_gerador_without_words(project):
    assert not WordSearchApp(project).executar_gerador_wordsearch(words=[], output_basename="x")


# ---------- CLI ----------

runner = CliRunner()


def test_cli_show(project):
    res = runner.invoke(app, [
        "show", "-p", "PYTHONIC,GRAPHEME", "-p", "WORDS",
        "-n", "12", "--seed", "2", "--respostas", "--raiz", str(project),
    ])
    assert res.exit_code == 0, res.output
    assert "WORDS:" in res.output
    grid_lines = [line for line in res.output.splitlines() if len(line.split(" ")) == 12]
    assert len(grid_lines) == 12


def test_cli_generate(project):
    words_file = project / "data" / "palavras.json"
    words_file.write_text(json.dumps(WORDS), encoding="utf-8")
    res = runner.invoke(app, [
        "generate", "-a", str(words_file), "-n", "12", "--seed", "4",
        "-b", "cli", "--sem-pdf", "--estilo", "stroke", "--raiz", str(project),
    ])
    assert res.exit_code == 0, res.output
    assert (project / "output" / "cli_respostas.png").exists()
    assert not (project / "output" / "cli.pdf").exists()


def test_cli_requires_words(project):
    res = runner.invoke(app, ["show", "--raiz", str(project)])
    assert res.exit_code == 1


def test_cli_rejects_bad_style(project):
    res = runner.invoke(app, ["generate", "-p", "GATO", "--estilo", "bold", "--raiz", str(project)])
    assert res.exit_code == 1


def test_cli_impossible_puzzle_exits_with_error(project):
    res = runner.invoke(app, ["show", "-p", "A,B", "-n", "1", "--raiz", str(project)])
    assert res.exit_code == 1
    assert "FALHA" in res.output
