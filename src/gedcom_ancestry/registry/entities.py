from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

PersonID = int
FamilyID = int
NoteID = str  # full cross-reference, e.g. "@NI9@"

# (relation to father, relation to mother), e.g. ("birth", "adopted")
Pedigree = Tuple[Optional[str], Optional[str]]


# -----------------------------
# Base records (small atoms)
# -----------------------------

@dataclass(slots=True)
class Event:
    """
    Date and place of something that happened. Both may be missing.
    """
    date: Optional[str] = None
    place: Optional[str] = None

    def __str__(self) -> str:
        parts = []
        if self.date is not None:
            parts.append("date: " + self.date)
        if self.place is not None:
            parts.append("place: " + self.place)
        return "  ".join(parts)


@dataclass(slots=True)
class DateTime:
    date: Optional[str] = None
    time: Optional[str] = None


class NameKind(Enum):
    AKA = "aka"
    BIRTH = "birth"
    IMMIGRANT = "immigrant"
    MAIDEN = "maiden"
    MARRIED = "married"


@dataclass(slots=True)
class Name:
    """
    GEDCOM NAME structure.

    ``base_name`` is the NAME line value, e.g. "John /Smith/". The parts
    come from the GIVN, SURN, NPFX, NICK, SPFX and NSFX sub-records. ``type``
    is the raw TYPE value; ``kind`` is BIRTH unless TYPE names another
    known kind.
    """
    base_name: str
    given_name: Optional[str] = None
    surname: Optional[str] = None
    prefix: Optional[str] = None
    nickname: Optional[str] = None
    surname_prefix: Optional[str] = None
    suffix: Optional[str] = None
    type: Optional[str] = None
    kind: NameKind = NameKind.BIRTH

    @property
    def sort_key(self) -> str:
        # SURN excludes any SPFX ("de la"), so surname-first sorts correctly.
        return (self.surname or "") + self.base_name


# -----------------------------
# Entities
# -----------------------------

@dataclass(slots=True)
class Person:
    person_id: PersonID
    change_date: Optional[DateTime] = None

    # The first name is the preferred one.
    names: List[Name] = field(default_factory=list)
    sex: Optional[str] = None
    title: Optional[str] = None  # nobility title (TITL)

    birth: Optional[Event] = None
    death: Optional[Event] = None
    burial: Optional[Event] = None
    emigration: Optional[Event] = None

    note_ids: List[NoteID] = field(default_factory=list)

    # FAMC: families in which this person is a child
    child_of: List[FamilyID] = field(default_factory=list)
    # FAMS: families in which this person is a spouse/parent
    spouse_in: List[FamilyID] = field(default_factory=list)

    # Relations to the parents of each FAMC family, read from the person's
    # own record and moved into Family.children by link_entities().
    pedigrees: Dict[FamilyID, Pedigree] = field(default_factory=dict)

    @property
    def primary_name(self) -> Optional[Name]:
        return self.names[0] if self.names else None


@dataclass(slots=True)
class Child:
    person_id: PersonID
    relation_to_father: Optional[str] = None
    relation_to_mother: Optional[str] = None


@dataclass(slots=True)
class Family:
    family_id: FamilyID
    change_date: Optional[DateTime] = None

    husband: Optional[PersonID] = None
    wife: Optional[PersonID] = None
    children: List[Child] = field(default_factory=list)

    marriage: Optional[Event] = None

    # How the family unit began and ended; distinct from the marriage itself.
    begin_status: Optional[str] = None  # e.g. "Single", "Partners"
    end_status: Optional[str] = None  # e.g. "Divorce", "Death"
    end_event: Optional[Event] = None

    def child(self, person_id: PersonID) -> Optional[Child]:
        for c in self.children:
            if c.person_id == person_id:
                return c
        return None


@dataclass(slots=True)
class Note:
    note_id: NoteID
    paragraphs: List[str] = field(default_factory=list)
    # First person claiming the note; None for notes about the file.
    owner: Optional[PersonID] = None


@dataclass(slots=True)
class Header:
    when: Optional[DateTime] = None
    software: Optional[str] = None
    software_version: Optional[str] = None
    gedcom_version: Optional[str] = None
    file_name: Optional[str] = None
    # Notes that no person claims, in file order.
    note_ids: List[NoteID] = field(default_factory=list)


# -----------------------------
# Registry
# -----------------------------

@dataclass(slots=True)
class Ancestry:
    """
    The finished model: header plus people, families and notes keyed by
    identifier, as handed to reporting.
    """
    header: Header = field(default_factory=Header)
    people: Dict[PersonID, Person] = field(default_factory=dict)
    families: Dict[FamilyID, Family] = field(default_factory=dict)
    notes: Dict[NoteID, Note] = field(default_factory=dict)
    # Every top-level note identifier, in the order read.
    note_order: List[NoteID] = field(default_factory=list)
    unused_line_count: int = 0

    def person(self, person_id: PersonID) -> Optional[Person]:
        return self.people.get(person_id)

    def family(self, family_id: FamilyID) -> Optional[Family]:
        return self.families.get(family_id)

    def note(self, note_id: NoteID) -> Optional[Note]:
        return self.notes.get(note_id)

    def notes_for(self, note_ids: Iterable[NoteID]) -> List[Note]:
        """Return the existing notes among ``note_ids``, in the given order."""
        return [self.notes[n] for n in note_ids if n in self.notes]

    @property
    def person_count(self) -> int:
        return len(self.people)

    @property
    def family_count(self) -> int:
        return len(self.families)

    @property
    def note_count(self) -> int:
        return len(self.notes)
