import pytest

from gedcom_ancestry import parse_file
from gedcom_ancestry.diagnostics import Diagnostics
from gedcom_ancestry.registry.entities import Ancestry, Family, Name, Note, Person
from gedcom_ancestry.reporter import Reporter


@pytest.fixture
def sample_result(sample_path):
    return parse_file(sample_path)


def test_header_text(sample_result):
    text = Reporter(sample_result.ancestry, "family.ged").header_text()
    lines = text.splitlines()

    assert lines[0] == "-" * 75
    assert lines[1] == 'Reporting on file "family.ged"'
    assert "Export date: 17 OCT 2026 10:15:00" in lines
    assert "Export file produced by Gramps version 5.1.5" in lines
    assert "GEDCOM version 5.5.1" in lines
    assert "Notes on file, possibly automatically generated:" in lines
    assert "Exported from Gramps." in lines
    assert "END OF INFORMATION ABOUT THE FILE" in lines


def test_person_with_family(sample_result):
    text = Reporter(sample_result.ancestry).render()

    assert "[1]: male" in text
    assert "birth:    date: 1 JAN 1900  place: Toronto, Ontario\n" in text
    assert "death:    date: 3 MAR 1970\n" in text
    assert "Married to [2] Mary /Jones/\n" in text
    assert "Marriage:\n    date: 10 JUN 1925  place: Kingston\n" in text
    assert "    marriage ending status: Death\n" in text
    assert "    marriage end: date: 3 MAR 1970\n" in text
    assert "marriage beginning status" not in text
    assert "Children:\n    [3] Ann /Smith/\n    [4] Tom /Smith/ (adopted-child)\n" in text
    assert "    [4] Tom /Smith/\n" in text  # as Mary's child
    assert len(sample_result.diagnostics) == 0


def test_person_names_and_parents(sample_result):
    text = Reporter(sample_result.ancestry).render()

    assert "Mary /Jones/  (birth name)\n" in text
    assert "married name: Mary /Smith/\n" in text
    assert "    known as: Annie\n" in text
    assert "Parents:\n    [1] John /Smith/\n    [2] Mary /Jones/\n" in text
    assert "Parents:\n    [1] John /Smith/ (adopted-parent)\n    [2] Mary /Jones/\n" in text


def test_person_notes(sample_result):
    text = Reporter(sample_result.ancestry).render()

    assert "Note 1:\n\nTom's adoption papers are lost.\n" in text
    assert "Note 2:\n\nJohn was a carpenter.\n" in text
    assert "\nJohn was a carpenter.\n\nHe built houses in the east end.\n" in text


def test_without_ids(sample_result):
    text = Reporter(sample_result.ancestry, show_person_ids=False).render()

    assert "Married to Mary /Jones/\n" in text
    assert "[2] Mary" not in text


def test_ordering(sample_result):
    by_id = Reporter(sample_result.ancestry).ordered_people()
    by_name = Reporter(sample_result.ancestry, sort_by_name=True).ordered_people()

    assert [p.person_id for p in by_id] == [1, 2, 3, 4]
    # SURN first where given: Ann and Tom have none
    assert [p.person_id for p in by_name] == [3, 2, 1, 4]


def test_long_notes_are_wrapped():
    ancestry = Ancestry()
    ancestry.notes["@N1@"] = Note(note_id="@N1@", paragraphs=["word " * 30])

    text = Reporter(ancestry, line_length=20).note_text("@N1@")

    assert all(len(line) <= 20 for line in text.splitlines())
    assert text.count("word") == 30


def test_inconsistencies_become_diagnostics():
    ancestry = Ancestry()
    ancestry.people[1] = Person(person_id=1, names=[Name(base_name="Lone /One/")], spouse_in=[1])
    ancestry.people[2] = Person(person_id=2, child_of=[5])
    ancestry.families[1] = Family(family_id=1, husband=7)
    diagnostics = Diagnostics()

    text = Reporter(ancestry, diagnostics=diagnostics).render()

    assert diagnostics.messages() == [
        "[1] Lone /One/ not listed as parent in family 1",
        "[2] (no name) refers to unknown family 5",
    ]
    # the rest of each person is still reported
    assert "Lone /One/\n" in text
    assert "(no name)\n" in text
    assert "[2]: X\n" in text


def test_child_missing_from_family():
    ancestry = Ancestry()
    ancestry.people[3] = Person(person_id=3, child_of=[1])
    ancestry.families[1] = Family(family_id=1, husband=1)
    diagnostics = Diagnostics()

    Reporter(ancestry, diagnostics=diagnostics).render()

    assert diagnostics.messages() == ["[3] (no name) not listed as child of family 1"]
