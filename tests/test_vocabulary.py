from pathlib import Path

import pytest

from vocab_audio.errors import ParseError
from vocab_audio.vocabulary import VocabularyRow, format_vocabulary, parse_vocabulary, read_vocabulary, split_line


def test_split_line_skips_commas_in_parentheses():
    assert split_line("hello, world (a, b), rest") == ("hello", "world (a, b), rest")


def test_split_line_comma_inside_source_parentheses():
    assert split_line("laufen (lief, gelaufen), to run") == ("laufen (lief, gelaufen)", "to run")


def test_split_line_without_delimiter():
    assert split_line("no delimiter here") is None
    assert split_line("only (a, b) inside") is None


def test_parse_skips_header_blank_and_malformed_lines(capsys):
    text = "German,English\n\nHallo,Hello\nkaputt\n  Tschüss , Goodbye  \n"
    rows = parse_vocabulary(text)
    assert rows == [VocabularyRow(0, "Hallo", "Hello"), VocabularyRow(1, "Tschüss", "Goodbye")]
    assert "kaputt" in capsys.readouterr().err


def test_parse_header_is_case_insensitive_and_only_first_line():
    rows = parse_vocabulary("german, english\nGerman,English\n")
    assert rows == [VocabularyRow(0, "German", "English")]


def test_parse_without_header_keeps_first_row():
    rows = parse_vocabulary("Hallo,Hello\nTschüss,Goodbye\n")
    assert [r.index for r in rows] == [0, 1]
    assert rows[0].source == "Hallo"


def test_parse_is_repeatable():
    text = "Hund,dog\nKatze (die), cat\nMaus,mouse\n"
    assert parse_vocabulary(text) == parse_vocabulary(text)


def test_read_vocabulary_missing_file(tmp_path: Path):
    with pytest.raises(ParseError):
        read_vocabulary(tmp_path / "missing.csv")


def test_read_vocabulary_strips_bom(tmp_path: Path):
    path = tmp_path / "words.csv"
    path.write_bytes("\ufeffGerman,English\nHund,dog\n".encode("utf-8"))
    assert read_vocabulary(path) == [VocabularyRow(0, "Hund", "dog")]


def test_format_then_parse_keeps_text():
    rows = [VocabularyRow(3, "laufen (lief, gelaufen)", "to run, to walk"), VocabularyRow(7, "Haus", "house")]
    text = format_vocabulary(rows)
    assert text.splitlines()[0] == "German,English"
    parsed = parse_vocabulary(text)
    assert [(r.source, r.target) for r in parsed] == [(r.source, r.target) for r in rows]
