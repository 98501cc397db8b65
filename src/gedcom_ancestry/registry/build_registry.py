from __future__ import annotations

from gedcom_ancestry.diagnostics import Diagnostics
from gedcom_ancestry.loader.tree_builder import DataForest, RecordNode, unconsumed_tokens
from gedcom_ancestry.logging import get_logger
from gedcom_ancestry.registry.build_family import build_family
from gedcom_ancestry.registry.build_header import build_header
from gedcom_ancestry.registry.build_note import build_note
from gedcom_ancestry.registry.build_person import build_person
from gedcom_ancestry.registry.entities import Ancestry
from gedcom_ancestry.registry.identifier import (
    FAMILY_KIND,
    NOTE_KINDS,
    PERSON_KIND,
    Identifier,
    parse_identifier,
)
from gedcom_ancestry.registry.link_entities import link_entities

log = get_logger(__name__)


# ----------------------------------------------------------------------
# Per-kind registration
# ----------------------------------------------------------------------

def _register_person(ancestry: Ancestry, node: RecordNode, xref: Identifier,
                     diagnostics: Diagnostics) -> None:
    if node.value != "INDI":
        diagnostics.report("line with tag I but value not INDI", node.lineno)
    if xref.number in ancestry.people:
        diagnostics.report(f"repeated personID {xref.number}", node.lineno)
        return

    ancestry.people[xref.number] = build_person(node, diagnostics)
    node.mark_consumed()


def _register_family(ancestry: Ancestry, node: RecordNode, xref: Identifier,
                     diagnostics: Diagnostics) -> None:
    if node.value != "FAM":
        diagnostics.report("line with tag F but value not FAM", node.lineno)
    if xref.number in ancestry.families:
        diagnostics.report(f"repeated familyID {xref.number}", node.lineno)
        return

    ancestry.families[xref.number] = build_family(node, diagnostics)
    node.mark_consumed()


def _register_note(ancestry: Ancestry, node: RecordNode, xref: Identifier,
                   diagnostics: Diagnostics) -> None:
    if not node.value.startswith("NOTE"):
        diagnostics.report("line with tag N or NI but value not starting with NOTE", node.lineno)
    if xref.text in ancestry.notes:
        diagnostics.report(f"repeated noteID {xref.text}", node.lineno)
        return

    ancestry.notes[xref.text] = build_note(node, diagnostics)
    ancestry.note_order.append(xref.text)
    node.mark_consumed()


# ----------------------------------------------------------------------
# Coverage audit
# ----------------------------------------------------------------------

def audit_coverage(forest: DataForest, diagnostics: Diagnostics) -> int:
    """
    Report every line of an entity record that nothing used, and return how
    many there were. Anything but 0 means the input holds constructs the
    model does not cover.
    """
    unused = unconsumed_tokens(forest)
    for token in unused:
        diagnostics.report(f"unused line: {token.raw}", token.lineno)
    return len(unused)


# ----------------------------------------------------------------------
# Registry builder
# ----------------------------------------------------------------------

def build_registry(forest: DataForest, diagnostics: Diagnostics) -> Ancestry:
    """
    Turn the record forest into an Ancestry.

    The first record is the header, the second the submitter (not modeled)
    and the last the trailer; each record in between is dispatched on the
    kind of its identifier tag. Then the cross-linking passes run and the
    coverage audit counts what was left unused.
    """
    ancestry = Ancestry()

    if forest.roots:
        ancestry.header = build_header(forest[0], diagnostics)

    for node in forest.body_roots:
        xref = parse_identifier(node.tag)
        if xref is None:
            diagnostics.report(f"line tag has bad pattern: {node.tag}", node.lineno)
            continue

        if xref.kind == PERSON_KIND:
            _register_person(ancestry, node, xref, diagnostics)

        elif xref.kind == FAMILY_KIND:
            _register_family(ancestry, node, xref, diagnostics)

        elif xref.kind in NOTE_KINDS:
            _register_note(ancestry, node, xref, diagnostics)

        else:
            diagnostics.report(f"unknown tag {node.tag}", node.lineno)

    link_entities(ancestry, diagnostics)

    ancestry.unused_line_count = audit_coverage(forest, diagnostics)

    log.info(
        "Built %d persons, %d families, %d notes; %d lines unused",
        ancestry.person_count,
        ancestry.family_count,
        ancestry.note_count,
        ancestry.unused_line_count,
    )
    return ancestry
