# src/gedcom_ancestry/loader/__init__.py

"""
Public interface for the GEDCOM loader stack.

Intended usage from other parts of the project and tests:

    from gedcom_ancestry.loader import (
        Token,
        RecordNode,
        DataForest,
        read_lines,
        tokenize_line,
        tokenize_lines,
        check_tokens,
        build_forest,
        check_forest,
    )
"""

from __future__ import annotations

from .tokenizer import (
    BAD_LEVEL,
    Token,
    check_tokens,
    read_lines,
    tokenize_line,
    tokenize_lines,
)
from .tree_builder import (
    DataForest,
    RecordNode,
    build_forest,
    check_forest,
    count_unconsumed,
    flatten_forest,
    unconsumed_tokens,
)

__all__ = [
    "BAD_LEVEL",
    "Token",
    "RecordNode",
    "DataForest",
    "read_lines",
    "tokenize_line",
    "tokenize_lines",
    "check_tokens",
    "build_forest",
    "check_forest",
    "count_unconsumed",
    "flatten_forest",
    "unconsumed_tokens",
]
