"""
Plain-text report over a finished Ancestry.

The report reads the model only. Inconsistencies found while describing a
person's families (a family that does not list the person, a missing
family record, ...) raise ReportingError internally; the reporter turns
each into a diagnostic and carries on with the next person.
"""

from __future__ import annotations

import textwrap
from typing import List, Optional, Sequence

from gedcom_ancestry.diagnostics import Diagnostics
from gedcom_ancestry.exceptions import ReportingError
from gedcom_ancestry.logging import get_logger
from gedcom_ancestry.registry.entities import (
    Ancestry,
    Child,
    Event,
    Family,
    NoteID,
    Person,
    PersonID,
)

log = get_logger(__name__)

DEFAULT_LINE_LENGTH = 75
NL = "\n"

SEX_LABELS = {"M": "male", "F": "female"}
# Gramps omits SEX for "unknown"
MISSING_SEX_LABEL = "X"


def _relation_suffix(relation: Optional[str], role: str) -> str:
    # " (adopted-parent)"; nothing for a birth or blank relation
    if relation in (None, "", "birth"):
        return ""
    return f" ({relation}-{role})"


def _event_line(label: str, event: Optional[Event]) -> str:
    if event is None or str(event) == "":
        return ""
    return f"{label}{event}{NL}"


class Reporter:
    def __init__(
        self,
        ancestry: Ancestry,
        file_name: Optional[str] = None,
        *,
        show_person_ids: bool = True,
        sort_by_name: bool = False,
        line_length: int = DEFAULT_LINE_LENGTH,
        diagnostics: Optional[Diagnostics] = None,
    ):
        self.ancestry = ancestry
        self.file_name = file_name
        self.show_person_ids = show_person_ids
        self.sort_by_name = sort_by_name
        self.line_length = line_length
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.underline = "-" * line_length

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render(self) -> str:
        parts = [self.header_text()]

        for person in self.ordered_people():
            parts.append(self.person_text(person))
            try:
                parts.append(self.family_details(person))
            except ReportingError as exc:
                self.diagnostics.report(
                    f"{self.person_name(exc.person_id)} {exc.message}"
                )
            parts.append(NL)
            parts.append(self.note_list(person.note_ids))
            parts.append(NL)

        log.info("Reported on %d persons", self.ancestry.person_count)
        return "".join(parts)

    def ordered_people(self) -> List[Person]:
        """People by personID, or by name (then personID) when sorting by name."""
        people = list(self.ancestry.people.values())
        if self.sort_by_name:
            def key(p: Person):
                name = p.primary_name
                return (name.sort_key if name else "/no name/", p.person_id)
        else:
            def key(p: Person):
                return p.person_id
        return sorted(people, key=key)

    # ------------------------------------------------------------------
    # Header
    # ------------------------------------------------------------------

    def header_text(self) -> str:
        header = self.ancestry.header
        out = [self.underline + NL]

        if self.file_name:
            out.append(f'Reporting on file "{self.file_name}"{NL}')
            out.append(self.underline + NL)

        if header.when is not None:
            stamp = " ".join(p for p in (header.when.date, header.when.time) if p is not None)
            out.append(f"Export date: {stamp}{NL}" if stamp else f"Export date:{NL}")

        if header.software is not None:
            line = "Export file produced by " + header.software
            if header.software_version is not None:
                line += " version " + header.software_version
            out.append(line + NL)

        if header.gedcom_version is not None:
            out.append(f"GEDCOM version {header.gedcom_version}{NL}")

        if header.note_ids:
            out.append(self.underline + NL)
            out.append("Notes on file, possibly automatically generated:" + NL)
            out.append(self.underline + NL)
            out.append(self.note_list(header.note_ids))
            out.append(self.underline + NL)
            out.append("END OF INFORMATION ABOUT THE FILE" + NL)

        out.append(self.underline + NL + NL + NL)
        return "".join(out)

    # ------------------------------------------------------------------
    # Person
    # ------------------------------------------------------------------

    def person_name(self, person_id: PersonID) -> str:
        person = self.ancestry.person(person_id)
        name = "(no name)"
        if person is not None and person.primary_name is not None:
            name = person.primary_name.base_name
        if self.show_person_ids:
            return f"[{person_id}] {name}"
        return name

    def person_text(self, person: Person) -> str:
        out = [self.underline + NL]
        primary = person.primary_name

        if primary is None:
            out.append("(no name)" + NL)
        elif primary.type is not None:
            out.append(f"{primary.base_name}  ({primary.type} name){NL}")
        else:
            out.append(primary.base_name + NL)
        out.append(self.underline + NL)

        if person.sex is None:
            sex = MISSING_SEX_LABEL
        else:
            sex = SEX_LABELS.get(person.sex, person.sex)
        line = f"[{person.person_id}]: {sex}"
        if primary is not None and primary.prefix is not None:
            line += "  title: " + primary.prefix
        if person.title is not None:
            line += "  title: " + person.title
        out.append(line + NL)

        if primary is not None and primary.nickname is not None:
            out.append(f"    known as: {primary.nickname}{NL}")

        for name in person.names[1:]:
            label = f"{name.type} name: " if name.type is not None else "Other name: "
            out.append(label + name.base_name + NL)
            if name.nickname is not None:
                out.append(f"    known as: {name.nickname}{NL}")

        out.append(_event_line("birth:    ", person.birth))
        out.append(_event_line("death:    ", person.death))
        out.append(_event_line("burial:   ", person.burial))
        out.append(_event_line("emigration:   ", person.emigration))
        return "".join(out)

    # ------------------------------------------------------------------
    # Families
    # ------------------------------------------------------------------

    def _family(self, person: Person, family_id: int) -> Family:
        family = self.ancestry.family(family_id)
        if family is None:
            raise ReportingError(person.person_id, f"refers to unknown family {family_id}")
        return family

    def family_details(self, person: Person) -> str:
        out = ""
        if person.child_of:
            out += NL + self.parents_text(person)
        if person.spouse_in:
            out += NL + self.marriages_text(person)
        return out

    def parents_text(self, person: Person) -> str:
        """The parents from every family in which ``person`` is a child."""
        families = [self._family(person, f) for f in person.child_of]

        plural = len(families) > 1 or (
            families[0].husband is not None and families[0].wife is not None
        )
        out = [("Parents" if plural else "Parent") + ":" + NL]

        listed: List[PersonID] = []  # a parent may head several of these families
        for family in families:
            me = family.child(person.person_id)
            if me is None:
                raise ReportingError(
                    person.person_id, f"not listed as child of family {family.family_id}"
                )

            for parent_id, relation in (
                (family.husband, me.relation_to_father),
                (family.wife, me.relation_to_mother),
            ):
                if parent_id is None or parent_id in listed:
                    continue
                listed.append(parent_id)
                out.append(
                    "    " + self.person_name(parent_id)
                    + _relation_suffix(relation, "parent") + NL
                )

        return "".join(out)

    def marriages_text(self, person: Person) -> str:
        """Spouse, marriage details and children of each family ``person`` heads."""
        out: List[str] = []
        listed: List[PersonID] = []  # children carried over into a later family

        for index, family_id in enumerate(person.spouse_in):
            family = self._family(person, family_id)

            is_husband = family.husband == person.person_id
            is_wife = family.wife == person.person_id
            if not is_husband and not is_wife:
                raise ReportingError(
                    person.person_id, f"not listed as parent in family {family_id}"
                )
            if is_husband and is_wife:
                raise ReportingError(
                    person.person_id, f"listed as both parents in family {family_id}"
                )

            if index > 0:
                out.append(NL)

            spouse = family.wife if is_husband else family.husband
            if spouse is not None:
                out.append(f"Married to {self.person_name(spouse)}{NL}{NL}")

            out.append(self._marriage_details(family))

            children: List[Child] = []
            for child in family.children:
                if child.person_id not in listed:
                    listed.append(child.person_id)
                    children.append(child)

            if len(children) == 1:
                out.append("Child:" + NL)
            elif children:
                out.append("Children:" + NL)

            for child in children:
                relation = child.relation_to_father if is_husband else child.relation_to_mother
                out.append(
                    "    " + self.person_name(child.person_id)
                    + _relation_suffix(relation, "child") + NL
                )

        return "".join(out)

    def _marriage_details(self, family: Family) -> str:
        details = []
        if family.marriage is not None:
            details.append(f"    {family.marriage}")
        # "Single" is the uninteresting default
        if family.begin_status is not None and family.begin_status != "Single":
            details.append(f"    marriage beginning status: {family.begin_status}")
        if family.end_status is not None:
            details.append(f"    marriage ending status: {family.end_status}")
        if family.end_event is not None:
            details.append(f"    marriage end: {family.end_event}")

        if not details:
            return ""
        return "Marriage:" + NL + NL.join(details) + NL + NL

    # ------------------------------------------------------------------
    # Notes
    # ------------------------------------------------------------------

    def note_text(self, note_id: NoteID) -> str:
        note = self.ancestry.note(note_id)
        if note is None:
            return ""

        out = [NL]
        for paragraph in note.paragraphs:
            for line in textwrap.wrap(
                paragraph,
                width=self.line_length,
                break_long_words=False,
                break_on_hyphens=False,
            ):
                out.append(line + NL)
            out.append(NL)
        return "".join(out)

    def note_list(self, note_ids: Sequence[NoteID]) -> str:
        if not note_ids:
            return ""
        if len(note_ids) == 1:
            return self.note_text(note_ids[0])

        return "".join(
            f"Note {number}:{NL}{self.note_text(note_id)}{NL}"
            for number, note_id in enumerate(note_ids, start=1)
        )
