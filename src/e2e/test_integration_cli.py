import json
from pathlib import Path

import pytest

from lexmatch.__main__ import main


def _seed(tmp: Path, text: str, **lexicons: str) -> tuple[str, list[str]]:
    doc = tmp / "text.txt"
    doc.write_text(text, encoding="utf-8")
    paths = []
    for name, body in lexicons.items():
        p = tmp / f"{name}.tsv"
        p.write_text(body, encoding="utf-8")
        paths.append(str(p))
    return str(doc), paths


def _lex_args(paths: list[str]) -> list[str]:
    args = []
    for p in paths:
        args += ["-l", p]
    return args


@pytest.mark.e2e
def test_cli_tokens_mode_prints_header_and_rows(tmp_path: Path, capsys):
    doc, lex = _seed(tmp_path, "I run daily.\n", verbs="run\tVERB\n")
    assert main(_lex_args(lex) + ["-T", doc]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["Text\tBeginUtf8Offset\tEndUtf8Offset", "run\t2\t5"]


@pytest.mark.e2e
def test_cli_substring_counts_and_offsets(tmp_path: Path, capsys):
    doc, lex = _seed(tmp_path, "the cat sat on the category mat.\n", animals="cat\n")
    assert main(_lex_args(lex) + [doc]) == 0
    assert capsys.readouterr().out.splitlines() == ["cat\t1\t4"]

    assert main(_lex_args(lex) + ["-a", doc]) == 0
    assert capsys.readouterr().out.splitlines() == ["cat\t2\t4\t19"]

    assert main(_lex_args(lex) + ["-M", doc]) == 0
    assert capsys.readouterr().out.splitlines() == ["cat\t1"]


@pytest.mark.e2e
def test_cli_token_coverage_line(tmp_path: Path, capsys):
    doc, lex = _seed(tmp_path, "a a b\n", lex="a\n")
    assert main(_lex_args(lex) + ["-T", "--coverage", doc]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[1:3] == ["a\t0\t1", "a\t2\t3"]
    assert out[-1] == "#coverage (tokens) = 2/3 = 0.6666666666666666"


@pytest.mark.e2e
def test_cli_multiple_lexicons_add_lexicon_column(tmp_path: Path, capsys):
    doc, lex = _seed(tmp_path, "cat and dog\n", pets="cat\ndog\n", felines="cat\n")
    assert main(_lex_args(lex) + ["-T", doc]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "Text\tLexicon\tBeginUtf8Offset\tEndUtf8Offset"
    assert out[1] == f"cat\t{lex[0]};{lex[1]}\t0\t3"
    assert out[2] == f"dog\t{lex[0]}\t8\t11"


@pytest.mark.e2e
def test_cli_coverage_matrix(tmp_path: Path, capsys):
    doc, lex = _seed(tmp_path, "a b\n\nb b\n", lex="a\n")
    assert main(_lex_args(lex) + ["-T", "--coverage-matrix", doc]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[-3:] == [f"#Line\t{lex[0]}\t#all", "1\t0.5\t0.5", "3\t0.0\t0.0"]


@pytest.mark.e2e
def test_cli_queries_without_lexicon_file(tmp_path: Path, capsys):
    doc, _ = _seed(tmp_path, "sea lions and a sea\n")
    assert main(["-q", "sea", "-v", doc]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["Text\tBeginUtf8Offset\tEndUtf8Offset", "sea\t0\t3", "sea\t16\t19"]


@pytest.mark.e2e
def test_cli_json_lines(tmp_path: Path, capsys):
    doc, lex = _seed(tmp_path, "I run daily.\n", verbs="run\n")
    assert main(_lex_args(lex) + ["-T", "--coverage", "--json", doc]) == 0
    rows = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert [r["type"] for r in rows] == ["MatchResult", "CoverageRecord"]
    assert rows[0]["begin"] == 2 and rows[0]["end"] == 5
    assert rows[1]["matched"] == 1 and rows[1]["total"] == 3


@pytest.mark.e2e
def test_cli_conflicting_options_exit_2(tmp_path: Path, capsys):
    doc, lex = _seed(tmp_path, "x\n", lex="x\n")
    with pytest.raises(SystemExit) as exc:
        main(_lex_args(lex) + ["-M", "-v", doc])
    assert exc.value.code == 2
    with pytest.raises(SystemExit) as exc:
        main(_lex_args(lex) + ["-T", "-C", "2", doc])
    assert exc.value.code == 2
    assert "mutually exclusive" in capsys.readouterr().err


@pytest.mark.e2e
def test_cli_missing_text_file_returns_1(tmp_path: Path, capsys):
    _, lex = _seed(tmp_path, "x\n", lex="x\n")
    assert main(_lex_args(lex) + [str(tmp_path / "missing.txt")]) == 1
    assert capsys.readouterr().err.startswith("ERROR:")
