from __future__ import annotations

from gedcom_ancestry.diagnostics import Diagnostics
from gedcom_ancestry.loader.tree_builder import RecordNode
from gedcom_ancestry.registry.entities import Name, NameKind, Person
from gedcom_ancestry.registry.identifier import FAMILY_KIND, NOTE_KINDS, parse_identifier
from gedcom_ancestry.registry.utils import (
    EVENT_OCCURRED_VALUES,
    assign_once,
    read_change_date_once,
    read_event,
    read_reference,
    values_by_tags,
)

NAME_PART_TAGS = ("TYPE", "GIVN", "SURN", "NPFX", "NICK", "SPFX", "NSFX")

NAME_KINDS = {kind.value: kind for kind in NameKind}

# tag -> Person attribute
LIFE_EVENTS = {
    "BIRT": "birth",
    "DEAT": "death",
    "BURI": "burial",
    "EMIG": "emigration",
}


def build_name(node: RecordNode, diagnostics: Diagnostics) -> Name:
    """Build a Name from a NAME node and its part sub-records."""
    if node.value.strip() == "":
        diagnostics.report("empty name in NAME record", node.lineno)
    name = Name(base_name=node.value.strip())

    (
        name.type,
        name.given_name,
        name.surname,
        name.prefix,
        name.nickname,
        name.surname_prefix,
        name.suffix,
    ) = values_by_tags(node, NAME_PART_TAGS, diagnostics)

    # Unknown types (Gramps' "Chosen", ...) keep the default kind.
    if name.type is not None:
        name.kind = NAME_KINDS.get(name.type, NameKind.BIRTH)

    node.mark_consumed()
    return name


def _read_life_event(person: Person, node: RecordNode, diagnostics: Diagnostics) -> None:
    attr = LIFE_EVENTS[node.tag]

    if node.value not in EVENT_OCCURRED_VALUES:
        diagnostics.report(f"unexpected value in {node.tag} line: {node.raw}", node.lineno)

    if getattr(person, attr) is not None:
        # DATE/PLAC of the repeat stay unconsumed and show up in the audit.
        diagnostics.report(f"line attempts to overwrite {attr} event: {node.raw}", node.lineno)
    else:
        setattr(person, attr, read_event(node, diagnostics))

    node.mark_consumed()


def _read_family_link(person: Person, node: RecordNode, diagnostics: Diagnostics) -> None:
    xref = read_reference(node, {FAMILY_KIND}, "family ID", diagnostics)
    node.mark_consumed()
    if xref is None:
        return

    if node.tag == "FAMS":
        person.spouse_in.append(xref.number)
        return

    person.child_of.append(xref.number)

    # GEDCOM 5.5.5 puts the child's pedigree under the child's FAMC link.
    # Gramps may instead write _FREL/_MREL for the two parents separately.
    pedigree, father, mother = values_by_tags(node, ("PEDI", "_FREL", "_MREL"), diagnostics)
    if pedigree is not None:
        if father is not None or mother is not None:
            diagnostics.report("too much child-parent relationship information", node.lineno)
        person.pedigrees[xref.number] = (pedigree, pedigree)
    else:
        person.pedigrees[xref.number] = (father, mother)


def build_person(node: RecordNode, diagnostics: Diagnostics) -> Person:
    """
    Build a Person from an "@I<n>@ INDI" record.

    Each direct sub-record is handled by tag; handled lines are marked
    consumed. Sub-records with an unknown tag are reported as "line ignored"
    and left unconsumed for the coverage audit.
    """
    xref = parse_identifier(node.tag)
    if xref is None or not xref.is_person:
        raise ValueError(f"Expected an individual record, got {node.tag!r}")

    person = Person(person_id=xref.number)

    for child in node.children:
        tag = child.tag

        if tag == "CHAN":
            read_change_date_once(person, child, diagnostics)

        elif tag == "NAME":
            person.names.append(build_name(child, diagnostics))

        elif tag == "SEX":
            assign_once(person, "sex", child.value, "sex", child.lineno, diagnostics)
            child.mark_consumed()

        elif tag == "TITL":
            assign_once(person, "title", child.value, "title", child.lineno, diagnostics)
            child.mark_consumed()

        elif tag in LIFE_EVENTS:
            _read_life_event(person, child, diagnostics)

        elif tag == "NOTE":
            note = read_reference(child, NOTE_KINDS, "note ID", diagnostics)
            if note is not None:
                person.note_ids.append(note.text)
            child.mark_consumed()

        elif tag in ("FAMS", "FAMC"):
            _read_family_link(person, child, diagnostics)

        else:
            diagnostics.report(f"line ignored: {child.raw}", child.lineno)

    return person
