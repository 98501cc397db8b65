from __future__ import annotations

from gedcom_ancestry.diagnostics import Diagnostics
from gedcom_ancestry.logging import get_logger
from gedcom_ancestry.registry.entities import Ancestry

log = get_logger(__name__)


def relocate_pedigrees(ancestry: Ancestry, diagnostics: Diagnostics) -> None:
    """
    Move each child's relations to its parents into the family.

    GEDCOM records the pedigree under the child's FAMC link, but it belongs
    to the family-child relationship. For every Child of every Family, the
    child's Person.pedigrees entry for that family is copied into the Child
    and removed. Afterwards every Person.pedigrees is empty; leftovers (FAMC
    links to families that do not list the person) are reported.
    """
    for family in ancestry.families.values():
        for child in family.children:
            person = ancestry.people.get(child.person_id)
            if person is None:
                diagnostics.report(
                    f"family {family.family_id} lists unknown child personID {child.person_id}"
                )
                continue

            pedigree = person.pedigrees.pop(family.family_id, None)
            if pedigree is None:
                diagnostics.report(
                    f"person {person.person_id} is a child of family {family.family_id}"
                    " but has no FAMC link to it"
                )
                continue

            child.relation_to_father, child.relation_to_mother = pedigree

    for person in ancestry.people.values():
        for family_id in person.pedigrees:
            diagnostics.report(
                f"person {person.person_id} has a FAMC link to family {family_id}"
                " which does not list them as a child"
            )
        person.pedigrees.clear()


def assign_notes(ancestry: Ancestry, diagnostics: Diagnostics) -> None:
    """
    Decide which notes are about the file rather than about a person.

    Nothing in GEDCOM says so directly: a note belongs to the header when no
    person refers to it. Starting from all note identifiers in file order,
    every identifier a person claims is removed (a note may be shared, so an
    already-removed identifier is fine). What is left goes to the header.
    Each claimed Note records its first claimant as owner.
    """
    unclaimed = list(ancestry.note_order)

    for person in ancestry.people.values():
        for note_id in person.note_ids:
            note = ancestry.notes.get(note_id)
            if note is None:
                diagnostics.report(f"person {person.person_id} refers to unknown note {note_id}")
                continue

            if note.owner is None:
                note.owner = person.person_id
            if note_id in unclaimed:
                unclaimed.remove(note_id)

    ancestry.header.note_ids = unclaimed
    log.debug("%d notes left for the header", len(unclaimed))


def link_entities(ancestry: Ancestry, diagnostics: Diagnostics) -> None:
    """Cross-linking passes run once every record has been built."""
    relocate_pedigrees(ancestry, diagnostics)
    assign_notes(ancestry, diagnostics)
