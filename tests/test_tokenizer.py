# tests/test_tokenizer.py

from __future__ import annotations

import pytest

from gedcom_ancestry.loader import (
    BAD_LEVEL,
    check_tokens,
    read_lines,
    tokenize_line,
    tokenize_lines,
)


def test_tokenize_line_simple_head(diagnostics) -> None:
    token = tokenize_line("0 HEAD", 0, diagnostics)
    assert token.lineno == 0
    assert token.level == 0
    assert token.tag == "HEAD"
    assert token.value == ""
    assert token.consumed is False
    assert len(diagnostics) == 0


def test_tokenize_line_keeps_pointer_as_tag(diagnostics) -> None:
    token = tokenize_line("0 @I1@ INDI", 4, diagnostics)
    assert token.level == 0
    assert token.tag == "@I1@"
    assert token.value == "INDI"


def test_tokenize_line_with_value(diagnostics) -> None:
    line = "1 NAME John /Smith/"
    token = tokenize_line(line, 10, diagnostics)
    assert token.level == 1
    assert token.tag == "NAME"
    assert token.value == "John /Smith/"
    assert token.raw == line


def test_tokenize_line_value_keeps_leading_space(diagnostics) -> None:
    token = tokenize_line("2 CONC  and more", 3, diagnostics)
    assert token.tag == "CONC"
    assert token.value == " and more"


def test_tokenize_line_with_bom_on_first_line(diagnostics) -> None:
    token = tokenize_line("\ufeff0 HEAD", 0, diagnostics)
    assert token.level == 0
    assert token.tag == "HEAD"
    assert len(diagnostics) == 0


@pytest.mark.parametrize("line", ["X HEAD", "-1 HEAD", "1.5 NAME x"])
def test_tokenize_line_bad_level_is_reported_not_raised(diagnostics, line) -> None:
    token = tokenize_line(line, 7, diagnostics)
    assert token.level == BAD_LEVEL
    assert token.tag == line.split(" ")[1]
    assert len(diagnostics) == 1
    assert diagnostics.entries[0].lineno == 7
    assert "bad level number" in diagnostics.entries[0].message


def test_tokenize_line_empty_line_still_yields_token(diagnostics) -> None:
    token = tokenize_line("", 2, diagnostics)
    assert token.level == BAD_LEVEL
    assert token.tag == ""
    assert token.value == ""
    assert diagnostics.messages() == ["empty line"]


def test_tokenize_line_tag_only(diagnostics) -> None:
    token = tokenize_line("1 BIRT", 0, diagnostics)
    assert token.tag == "BIRT"
    assert token.value == ""


def test_tokenize_lines_one_token_per_line(diagnostics) -> None:
    lines = ["0 HEAD", "", "garbage", "1 NAME x", "0 TRLR"]
    tokens = tokenize_lines(lines, diagnostics)

    assert len(tokens) == len(lines)
    assert [t.lineno for t in tokens] == list(range(len(lines)))
    assert [t.raw for t in tokens] == lines


def test_check_tokens_accepts_well_formed_input(minimal_lines, diagnostics) -> None:
    tokens = tokenize_lines(minimal_lines, diagnostics)
    check_tokens(tokens, diagnostics, line_count=len(minimal_lines))
    assert len(diagnostics) == 0


def test_check_tokens_reports_bad_first_and_last_lines(diagnostics) -> None:
    tokens = tokenize_lines(["0 @I1@ INDI", "1 NAME x"], diagnostics)
    check_tokens(tokens, diagnostics)

    messages = diagnostics.messages()
    assert "first line of input is not '0 HEAD'" in messages
    assert "last line of input is not '0 TRLR'" in messages


def test_check_tokens_reports_each_level_jump_once(diagnostics) -> None:
    lines = ["0 HEAD", "2 DATE x", "3 TIME y", "5 FOO", "1 BAR", "0 TRLR"]
    tokens = tokenize_lines(lines, diagnostics)
    check_tokens(tokens, diagnostics)

    jumps = [d for d in diagnostics if "unexpected level jump" in d.message]
    assert [d.lineno for d in jumps] == [1, 3]


def test_check_tokens_reports_count_mismatch(diagnostics) -> None:
    tokens = tokenize_lines(["0 HEAD", "0 TRLR"], diagnostics)
    check_tokens(tokens, diagnostics, line_count=3)
    assert any("differs from input line count" in m for m in diagnostics.messages())


def test_check_tokens_empty_input(diagnostics) -> None:
    check_tokens([], diagnostics, line_count=0)
    assert diagnostics.messages() == ["no input lines"]


def test_read_lines_keeps_blank_lines_and_strips_bom(tmp_path) -> None:
    path = tmp_path / "bom.ged"
    path.write_bytes("\ufeff0 HEAD\r\n\r\n0 TRLR\r\n".encode("utf-8"))

    assert read_lines(path) == ["0 HEAD", "", "0 TRLR"]


def test_read_lines_missing_file_raises(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        read_lines(tmp_path / "nope.ged")


def test_read_lines_sample_file(sample_path) -> None:
    lines = read_lines(sample_path)
    assert lines[0] == "0 HEAD"
    assert lines[-1] == "0 TRLR"
