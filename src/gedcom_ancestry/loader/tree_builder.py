# src/gedcom_ancestry/loader/tree_builder.py

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from gedcom_ancestry.diagnostics import Diagnostics
from gedcom_ancestry.logging import get_logger

from .tokenizer import BAD_LEVEL, Token

log = get_logger(__name__)

_SUBMITTER_TAG_RE = re.compile(r"@SUBM[0-9]*@")


@dataclass
class RecordNode:
    """
    One line of input together with the lines nested directly beneath it.

    Attributes:
        token: The Token for this line.
        children: Nested RecordNodes in input order; exactly the run of
            following tokens whose level is this node's level + 1.
    """

    token: Token
    children: List["RecordNode"] = field(default_factory=list)

    # ---------- Token shortcuts ----------

    @property
    def level(self) -> int:
        return self.token.level

    @property
    def tag(self) -> str:
        return self.token.tag

    @property
    def value(self) -> str:
        return self.token.value

    @property
    def lineno(self) -> int:
        return self.token.lineno

    @property
    def raw(self) -> str:
        return self.token.raw

    # ---------- Helper Methods ----------

    def mark_consumed(self) -> None:
        self.token.consumed = True

    def find_children(self, tag: str) -> List["RecordNode"]:
        """Return all direct children of this node with a given tag."""
        return [c for c in self.children if c.tag == tag]

    def find_first(self, tag: str) -> Optional["RecordNode"]:
        """Return the first direct child with this tag, or None."""
        for c in self.children:
            if c.tag == tag:
                return c
        return None

    def iter_subtree(self) -> Iterator["RecordNode"]:
        """Yield this node and all descendants in depth-first (pre-order) order."""
        yield self
        for child in self.children:
            yield from child.iter_subtree()

    def __repr__(self) -> str:
        return f"<RecordNode {self.level} {self.tag}: {self.value!r}>"


@dataclass
class DataForest:
    """
    The level-0 RecordNodes of one GEDCOM file, in input order.

    There is no single root: HEAD, the submitter, every entity record and
    TRLR are each the root of their own tree.
    """

    roots: List[RecordNode]

    def __len__(self) -> int:
        return len(self.roots)

    def __iter__(self) -> Iterator[RecordNode]:
        return iter(self.roots)

    def __getitem__(self, index: int) -> RecordNode:
        return self.roots[index]

    def iter_nodes(self) -> Iterator[RecordNode]:
        """Iterate over every node in the forest, roots included, in pre-order."""
        for root in self.roots:
            yield from root.iter_subtree()

    @property
    def body_roots(self) -> List[RecordNode]:
        """
        Roots between the submitter record and the trailer.

        A last root that is not tagged TRLR (a truncated file) is kept as a
        body record; check_forest has already reported the missing trailer.
        """
        if len(self.roots) > 2 and self.roots[-1].tag == "TRLR":
            return self.roots[2:-1]
        return self.roots[2:]

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f"<DataForest roots={len(self.roots)}>"


def build_forest(tokens: List[Token]) -> DataForest:
    """
    Rebuild the record hierarchy from the token levels.

    A token becomes a child of the nearest open node whose level is exactly
    one less than its own. When no open node qualifies (a level-0 line, a
    line that jumps more than one level, or a line with a bad level) the
    token starts a new root. A bad-level node never takes children, so a
    stray line cannot swallow the records after it. Otherwise this is the
    same result as building each node recursively and taking children
    only while the next level is the node's level + 1, without the
    recursion depth.
    """
    roots: List[RecordNode] = []
    stack: List[RecordNode] = []  # path from the current root to the last node

    for tok in tokens:
        node = RecordNode(token=tok)

        while stack and (
            stack[-1].level == BAD_LEVEL or stack[-1].level + 1 != tok.level
        ):
            stack.pop()

        if stack:
            stack[-1].children.append(node)
        else:
            roots.append(node)

        stack.append(node)

    log.info("Built %d top-level records", len(roots))
    return DataForest(roots=roots)


def check_forest(forest: DataForest, diagnostics: Diagnostics) -> None:
    """
    Check the three special records: HEAD first, the submitter second and
    TRLR (with no children) last. Trouble goes to ``diagnostics``.
    """
    if not forest.roots:
        diagnostics.report("no records found")
        return

    header = forest[0].token
    if not (header.level == 0 and header.tag == "HEAD" and header.value == ""):
        diagnostics.report("bad header record first line", header.lineno)

    if len(forest) < 2:
        diagnostics.report("missing submitter record")
    else:
        submitter = forest[1].token
        if not (
            submitter.level == 0
            and _SUBMITTER_TAG_RE.fullmatch(submitter.tag)
            and submitter.value == "SUBM"
        ):
            diagnostics.report("bad submitter record first line", submitter.lineno)

    trailer_node = forest[-1]
    trailer = trailer_node.token
    if not (
        trailer.level == 0
        and trailer.tag == "TRLR"
        and trailer.value == ""
        and not trailer_node.children
    ):
        diagnostics.report("bad trailer record", trailer.lineno)


# ---------- Coverage ----------

def count_unconsumed(node: RecordNode) -> int:
    """Count the tokens in this subtree that nobody has marked consumed."""
    return sum(1 for n in node.iter_subtree() if not n.token.consumed)


def unconsumed_tokens(forest: DataForest, include_special: bool = False) -> List[Token]:
    """
    Return the unconsumed tokens in input order.

    By default the header, submitter and trailer records are left out,
    since they are not audited.
    """
    roots = forest.roots if include_special else forest.body_roots
    return [
        n.token
        for root in roots
        for n in root.iter_subtree()
        if not n.token.consumed
    ]


def flatten_forest(forest: DataForest) -> List[Token]:
    """Return every token in the forest by a pre-order walk."""
    return [n.token for n in forest.iter_nodes()]
