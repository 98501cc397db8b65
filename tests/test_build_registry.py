from gedcom_ancestry.loader import build_forest, tokenize_lines
from gedcom_ancestry.registry.build_registry import audit_coverage, build_registry


def registry_for(lines, diagnostics):
    forest = build_forest(tokenize_lines(lines, diagnostics))
    return forest, build_registry(forest, diagnostics)


def wrap(*body):
    return ["0 HEAD", "0 @SUBM@ SUBM", *body, "0 TRLR"]


def test_minimal_file(minimal_lines, diagnostics):
    _, ancestry = registry_for(minimal_lines, diagnostics)

    assert list(ancestry.people) == [1]
    assert ancestry.people[1].names[0].base_name == "John /Smith/"
    assert list(ancestry.families) == [1]
    assert ancestry.families[1].husband == 1
    assert ancestry.families[1].wife is None
    assert ancestry.families[1].children == []
    assert ancestry.notes == {}
    assert ancestry.header.gedcom_version == "5.5.5"
    assert ancestry.unused_line_count == 0
    assert len(diagnostics) == 0


def test_sample_file(sample_lines, diagnostics):
    _, ancestry = registry_for(sample_lines, diagnostics)

    assert sorted(ancestry.people) == [1, 2, 3, 4]
    assert list(ancestry.families) == [1]
    assert ancestry.note_order == ["@NI1@", "@N2@", "@N3@"]
    assert ancestry.header.note_ids == ["@N3@"]
    assert ancestry.unused_line_count == 0
    assert len(diagnostics) == 0

    family = ancestry.families[1]
    assert [(c.person_id, c.relation_to_father, c.relation_to_mother) for c in family.children] == [
        (3, "birth", "birth"),
        (4, "adopted", "birth"),
    ]
    assert family.begin_status == "Single"
    assert family.end_status == "Death"

    mary = ancestry.people[2]
    assert [n.type for n in mary.names] == ["birth", "married"]


def test_repeated_records_keep_first(diagnostics):
    lines = wrap(
        "0 @I1@ INDI",
        "1 NAME First /One/",
        "0 @I1@ INDI",
        "1 NAME Second /One/",
        "0 @F1@ FAM",
        "0 @F1@ FAM",
        "0 @N1@ NOTE first",
        "0 @N1@ NOTE second",
    )

    _, ancestry = registry_for(lines, diagnostics)

    assert ancestry.people[1].names[0].base_name == "First /One/"
    assert ancestry.notes["@N1@"].paragraphs == ["first"]
    assert ancestry.note_order == ["@N1@"]
    assert diagnostics.at_line(4)[0].message == "repeated personID 1"
    assert diagnostics.at_line(7)[0].message == "repeated familyID 1"
    assert diagnostics.at_line(9)[0].message == "repeated noteID @N1@"
    # the skipped records are reported again by the coverage audit
    assert ancestry.unused_line_count == 4


def test_record_value_mismatches_are_reported(diagnostics):
    lines = wrap("0 @I1@ INDIVIDUAL", "0 @F1@ FAMILY", "0 @N1@ TEXT")

    _, ancestry = registry_for(lines, diagnostics)

    # still built under their identifiers
    assert 1 in ancestry.people
    assert 1 in ancestry.families
    assert "@N1@" in ancestry.notes
    assert diagnostics.messages() == [
        "line with tag I but value not INDI",
        "line with tag F but value not FAM",
        "line with tag N or NI but value not starting with NOTE",
    ]


def test_unknown_and_bad_record_tags(diagnostics):
    lines = wrap("0 @S1@ SOUR", "1 TITL Census", "0 @I2 INDI", "0 @N1@ NOTE ok")

    forest, ancestry = registry_for(lines, diagnostics)

    assert ancestry.people == {}
    assert list(ancestry.notes) == ["@N1@"]
    assert (2, "unknown tag @S1@") in [(d.lineno, d.message) for d in diagnostics]
    assert (4, "line tag has bad pattern: @I2") in [(d.lineno, d.message) for d in diagnostics]
    assert ancestry.unused_line_count == 3
    assert [d.lineno for d in diagnostics if d.message.startswith("unused line:")] == [2, 3, 4]


def test_dangling_references_are_reported(diagnostics):
    lines = wrap(
        "0 @I1@ INDI",
        "1 FAMC @F9@",
        "1 NOTE @N9@",
        "0 @F1@ FAM",
        "1 CHIL @I5@",
    )

    _, ancestry = registry_for(lines, diagnostics)

    assert ancestry.people[1].pedigrees == {}
    assert diagnostics.messages() == [
        "family 1 lists unknown child personID 5",
        "person 1 has a FAMC link to family 9 which does not list them as a child",
        "person 1 refers to unknown note @N9@",
    ]


def test_audit_coverage_skips_special_records(diagnostics):
    lines = wrap("0 @I1@ INDI")
    lines.insert(1, "1 CHAR UTF-8")
    forest, ancestry = registry_for(lines, diagnostics)

    assert ancestry.unused_line_count == 0
    assert audit_coverage(forest, diagnostics) == 0


def test_empty_forest(diagnostics):
    _, ancestry = registry_for([], diagnostics)

    assert ancestry.person_count == 0
    assert ancestry.header.software is None
    assert ancestry.unused_line_count == 0


def test_blank_line_does_not_hide_later_records(diagnostics):
    lines = wrap(
        "0 @I1@ INDI",
        "1 NAME A /B/",
        "",
        "0 @I2@ INDI",
        "1 NAME C /D/",
        "0 @F1@ FAM",
        "1 HUSB @I1@",
    )

    _, ancestry = registry_for(lines, diagnostics)

    assert sorted(ancestry.people) == [1, 2]
    assert list(ancestry.families) == [1]
    assert ancestry.families[1].husband == 1
    assert ancestry.unused_line_count == 1
    assert [(d.lineno, d.message) for d in diagnostics] == [
        (4, "empty line"),
        (4, "line tag has bad pattern: "),
        (4, "unused line: "),
    ]


def test_truncated_file_keeps_last_record(diagnostics):
    lines = ["0 HEAD", "0 @SUBM@ SUBM", "0 @I1@ INDI", "0 @I2@ INDI", "1 NAME Last /One/"]

    _, ancestry = registry_for(lines, diagnostics)

    assert sorted(ancestry.people) == [1, 2]
    assert ancestry.people[2].names[0].base_name == "Last /One/"
    assert ancestry.unused_line_count == 0
