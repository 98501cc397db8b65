from __future__ import annotations

from gedcom_ancestry.diagnostics import Diagnostics
from gedcom_ancestry.loader.tree_builder import RecordNode
from gedcom_ancestry.registry.entities import Child, Event, Family
from gedcom_ancestry.registry.identifier import PERSON_KIND, parse_identifier
from gedcom_ancestry.registry.utils import (
    EVENT_OCCURRED_VALUES,
    read_change_date_once,
    read_event,
    read_reference,
)

DIVORCE_STATUS = "Divorce"
DEATH_STATUS = "Death"


def _set_end_event(family: Family, event: Event, lineno: int, diagnostics: Diagnostics) -> None:
    if family.end_event is not None:
        diagnostics.report("attempt to overwrite existing end event of family", lineno)
    else:
        family.end_event = event


def _read_spouse(family: Family, node: RecordNode, diagnostics: Diagnostics) -> None:
    xref = read_reference(node, {PERSON_KIND}, "husband/wife personID", diagnostics)
    node.mark_consumed()
    if xref is None:
        return

    role = "husband" if node.tag == "HUSB" else "wife"
    if getattr(family, role) is not None:
        diagnostics.report(f"second personID for {role}: {node.value}", node.lineno)
    else:
        setattr(family, role, xref.number)


def _read_marriage(family: Family, node: RecordNode, diagnostics: Diagnostics) -> None:
    if node.value not in EVENT_OCCURRED_VALUES:
        diagnostics.report("MARR line with unexpected value", node.lineno)

    event = read_event(node, diagnostics)
    if event is not None:
        if family.marriage is not None:
            diagnostics.report("attempt to overwrite existing marriage event", node.lineno)
        else:
            family.marriage = event

    node.mark_consumed()


def _read_divorce(family: Family, node: RecordNode, diagnostics: Diagnostics) -> None:
    # "1 DIV Y" only says a divorce happened; "1 DIV" may carry DATE/PLAC.
    if node.value not in EVENT_OCCURRED_VALUES:
        diagnostics.report("DIV line with unknown value", node.lineno)

    family.end_status = DIVORCE_STATUS

    event = read_event(node, diagnostics)
    if event is not None:
        _set_end_event(family, event, node.lineno, diagnostics)

    node.mark_consumed()


def _read_family_event(family: Family, node: RecordNode, diagnostics: Diagnostics) -> None:
    """
    Handle a generic EVEN record. Its first child must be a TYPE line:

    - "Death": the family ended with a spouse's death (optional DATE/PLAC),
    - "_MSTAT": the EVEN value is the status the family began with,
    - "_MEND": the EVEN value is the status the family ended with
      (optional DATE/PLAC).

    Anything else is reported and the whole record is left unconsumed.
    """
    if not node.children or node.children[0].tag != "TYPE":
        diagnostics.report("EVEN record does not have a TYPE record", node.lineno)
        return

    type_node = node.children[0]
    label = type_node.value

    if label == DEATH_STATUS:
        family.end_status = DEATH_STATUS
        event = read_event(node, diagnostics)
        if event is not None:
            _set_end_event(family, event, node.lineno, diagnostics)

    elif label == "_MSTAT":
        family.begin_status = node.value

    elif label == "_MEND":
        family.end_status = node.value
        event = read_event(node, diagnostics)
        if event is not None:
            _set_end_event(family, event, node.lineno, diagnostics)

    else:
        diagnostics.report(f"bad family event {label}", node.lineno)
        return

    type_node.mark_consumed()
    node.mark_consumed()


def _read_child(family: Family, node: RecordNode, diagnostics: Diagnostics) -> None:
    xref = read_reference(node, {PERSON_KIND}, "child personID", diagnostics)
    node.mark_consumed()  # even if we couldn't use it
    if xref is None:
        return

    # Relations to the parents are filled in later from the child's FAMC.
    if family.child(xref.number) is not None:
        diagnostics.report(f"duplicate child personID {xref.number}", node.lineno)
    else:
        family.children.append(Child(person_id=xref.number))


def build_family(node: RecordNode, diagnostics: Diagnostics) -> Family:
    """
    Build a Family from an "@F<n>@ FAM" record.

    Unknown sub-records are reported as "line ignored" and left
    unconsumed for the coverage audit.
    """
    xref = parse_identifier(node.tag)
    if xref is None or not xref.is_family:
        raise ValueError(f"Expected a family record, got {node.tag!r}")

    family = Family(family_id=xref.number)

    for child in node.children:
        tag = child.tag

        if tag == "CHAN":
            read_change_date_once(family, child, diagnostics)

        elif tag in ("HUSB", "WIFE"):
            _read_spouse(family, child, diagnostics)

        elif tag == "MARR":
            _read_marriage(family, child, diagnostics)

        elif tag == "DIV":
            _read_divorce(family, child, diagnostics)

        elif tag == "EVEN":
            _read_family_event(family, child, diagnostics)

        elif tag == "CHIL":
            _read_child(family, child, diagnostics)

        else:
            diagnostics.report(f"line ignored: {child.raw}", child.lineno)

    return family
