from __future__ import annotations

from gedcom_ancestry.diagnostics import Diagnostics
from gedcom_ancestry.loader.tree_builder import RecordNode
from gedcom_ancestry.registry.entities import Note
from gedcom_ancestry.registry.identifier import parse_identifier

NOTE_PREFIX = "NOTE "


def build_note(node: RecordNode, diagnostics: Diagnostics) -> Note:
    """
    Build a Note from an "@N<n>@ NOTE [text]" or "@NI<n>@ NOTE [text]" record.

    Text reconstruction (GEDCOM CONT/CONC rules):
        * the record value after "NOTE " starts the first paragraph,
        * CONT starts a new paragraph,
        * CONC appends to the current paragraph with no break.

    Any other sub-record is reported and left unconsumed.
    """
    xref = parse_identifier(node.tag)
    if xref is None or not xref.is_note:
        raise ValueError(f"Expected a note record, got {node.tag!r}")

    note = Note(note_id=xref.text)

    current = ""
    if node.value.startswith(NOTE_PREFIX):
        current = node.value[len(NOTE_PREFIX):]

    for child in node.children:
        if child.children:
            diagnostics.report("bad line level in NOTE", child.lineno)
            continue

        if child.tag == "CONT":
            note.paragraphs.append(current)
            current = child.value
        elif child.tag == "CONC":
            current += child.value
        else:
            diagnostics.report(f"bad line tag in NOTE: {child.raw}", child.lineno)
            continue

        child.mark_consumed()

    if current:
        note.paragraphs.append(current)

    return note
