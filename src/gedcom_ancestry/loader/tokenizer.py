# src/gedcom_ancestry/loader/tokenizer.py

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Union

from gedcom_ancestry.diagnostics import Diagnostics
from gedcom_ancestry.logging import get_logger

log = get_logger(__name__)

# Level assigned to a line whose level field cannot be read.
BAD_LEVEL = -1

_LEVEL_RE = re.compile(r"-?[0-9]+")


@dataclass
class Token:
    """
    A single GEDCOM line token.

    Attributes:
        raw: The original line content without line terminator.
        lineno: 0-based line number in the original input.
        level: Parsed GEDCOM level (0, 1, 2, ...), or BAD_LEVEL.
        tag: GEDCOM tag, e.g. "HEAD", "@I1@", "NAME", "CONC".
        value: The rest of the line after the tag (may be empty).
        consumed: Set once some part of the entity extractor has used
            this line; read back by the coverage audit.
    """
    raw: str
    lineno: int
    level: int
    tag: str
    value: str = ""
    consumed: bool = False

    def __str__(self) -> str:
        return self.raw


def _strip_eol(line: str) -> str:
    """Strip trailing CR/LF characters but preserve all other whitespace."""
    return line.rstrip("\r\n")


def tokenize_line(line: str, lineno: int, diagnostics: Diagnostics) -> Token:
    """
    Split one GEDCOM line into a Token:

        <level> <tag> [<value>]

    Cross-reference identifiers are not split off: in "0 @I1@ INDI" the tag
    is "@I1@" and the value "INDI". Problems are reported to ``diagnostics``
    and a Token is returned regardless, so that token indices keep matching
    line numbers.

    Examples:
        "0 HEAD"
        "0 @I1@ INDI"
        "1 NAME John /Doe/"
        "2 CONC appended text"
    """
    raw = _strip_eol(line)

    # Handle optional UTF-8 BOM on the very first line.
    if lineno == 0 and raw.startswith("\ufeff"):
        raw = raw.lstrip("\ufeff")

    if not raw:
        diagnostics.report("empty line", lineno)
        return Token(raw=raw, lineno=lineno, level=BAD_LEVEL, tag="")

    # --- 1. Extract level -------------------------------------------------
    level_str, _, rest = raw.partition(" ")
    level = int(level_str) if _LEVEL_RE.fullmatch(level_str) else BAD_LEVEL
    if level < 0:
        diagnostics.report(f"bad level number: {level_str!r}", lineno)
        level = BAD_LEVEL

    # --- 2. Extract tag and optional value --------------------------------
    tag, _, value = rest.partition(" ")

    return Token(raw=raw, lineno=lineno, level=level, tag=tag, value=value)


def tokenize_lines(lines: Iterable[str], diagnostics: Diagnostics) -> List[Token]:
    """Return one Token per input line, in input order."""
    tokens = [
        tokenize_line(line, lineno, diagnostics)
        for lineno, line in enumerate(lines)
    ]
    log.info("Tokenized %d lines", len(tokens))
    return tokens


def _is_bare(token: Token, tag: str) -> bool:
    return token.level == 0 and token.tag == tag and token.value == ""


def check_tokens(
    tokens: List[Token],
    diagnostics: Diagnostics,
    line_count: Optional[int] = None,
) -> None:
    """
    Check the token list as a whole:

    - one token per input line (when ``line_count`` is given),
    - the first line is "0 HEAD" and the last is "0 TRLR",
    - the level never rises by more than one from a line to the next.
      Dropping by any amount is legal.

    Trouble goes to ``diagnostics``; nothing is raised.
    """
    if line_count is not None and len(tokens) != line_count:
        diagnostics.report(
            f"token count {len(tokens)} differs from input line count {line_count}"
        )

    if not tokens:
        diagnostics.report("no input lines")
        return

    if not _is_bare(tokens[0], "HEAD"):
        diagnostics.report("first line of input is not '0 HEAD'", tokens[0].lineno)
    if not _is_bare(tokens[-1], "TRLR"):
        diagnostics.report("last line of input is not '0 TRLR'", tokens[-1].lineno)

    for previous, current in zip(tokens, tokens[1:]):
        if current.level - previous.level > 1:
            diagnostics.report(
                f"unexpected level jump from {previous.level} to {current.level}",
                current.lineno,
            )


def read_lines(path: Union[str, Path]) -> List[str]:
    """
    Read a GEDCOM file into a list of lines without line terminators.

    Blank lines are kept so that the tokenizer can report them. A leading
    byte-order mark is dropped and undecodable bytes are replaced.

    Raises:
        FileNotFoundError: if ``path`` does not exist.
    """
    file_path = Path(path)

    if not file_path.is_file():
        raise FileNotFoundError(f"GEDCOM file not found: {file_path}")

    with file_path.open("r", encoding="utf-8-sig", errors="replace") as f:
        lines = [_strip_eol(raw_line) for raw_line in f]

    log.info("Read %d lines from %s", len(lines), file_path)
    return lines
