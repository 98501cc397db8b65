from __future__ import annotations

from typing import Any, Collection, List, Optional, Sequence

from gedcom_ancestry.diagnostics import Diagnostics
from gedcom_ancestry.loader.tree_builder import RecordNode
from gedcom_ancestry.registry.entities import DateTime, Event
from gedcom_ancestry.registry.identifier import Identifier, parse_identifier

# Values that simply say "this happened" on an event line.
EVENT_OCCURRED_VALUES = frozenset({"", "Y"})


def values_by_tags(
    parent: RecordNode,
    tags: Sequence[str],
    diagnostics: Diagnostics,
) -> List[Optional[str]]:
    """
    Return the values of the direct children of ``parent`` tagged with each
    of ``tags``, in the order of ``tags`` (None where a tag is absent).

    Only the first occurrence of a tag is used; repeats are reported as
    overwrite attempts. Every child with a listed tag is marked consumed,
    repeats included. Other children are left alone.
    """
    result: List[Optional[str]] = [None] * len(tags)

    for node in parent.children:
        if node.tag not in tags:
            continue
        which = tags.index(node.tag)
        if result[which] is not None:
            diagnostics.report(
                f"attempt to overwrite {node.tag} value {result[which]}", node.lineno
            )
        else:
            result[which] = node.value
        node.mark_consumed()

    return result


def assign_once(
    target: Any,
    attr: str,
    value: Any,
    label: str,
    lineno: int,
    diagnostics: Diagnostics,
) -> None:
    """Set ``target.attr`` unless it is already set; the first write wins."""
    current = getattr(target, attr)
    if current is not None:
        diagnostics.report(f"attempt to overwrite {label} {current}", lineno)
        return
    setattr(target, attr, value)


def read_date_time(node: RecordNode, diagnostics: Diagnostics) -> Optional[DateTime]:
    """
    Return a DateTime from a DATE node whose first child is a TIME node.

    The DATE node is marked consumed when it is one; the TIME node only when
    it is where expected.
    """
    if node.tag != "DATE":
        diagnostics.report("tag DATE not found when expected", node.lineno)
        return None
    node.mark_consumed()

    if not node.children or node.children[0].tag != "TIME":
        diagnostics.report("tag TIME not found (in child record) when expected", node.lineno)
        return None
    time_node = node.children[0]
    time_node.mark_consumed()

    return DateTime(date=node.value, time=time_node.value)


def read_change_date(node: RecordNode, diagnostics: Diagnostics) -> Optional[DateTime]:
    """Read a CHAN record: an empty line over DATE, itself over TIME."""
    if node.value != "":
        diagnostics.report("non-empty value in CHAN line", node.lineno)
    node.mark_consumed()

    if not node.children:
        diagnostics.report("CHAN record does not start with a DATE record", node.lineno)
        return None
    return read_date_time(node.children[0], diagnostics)


def read_change_date_once(target: Any, node: RecordNode, diagnostics: Diagnostics) -> None:
    """Set ``target.change_date`` from a CHAN record unless one is already set."""
    change_date = read_change_date(node, diagnostics)
    if change_date is None:
        return
    if target.change_date is not None:
        diagnostics.report("attempt to overwrite change date", node.lineno)
        return
    target.change_date = change_date


def read_event(node: RecordNode, diagnostics: Diagnostics) -> Optional[Event]:
    """Return the DATE/PLAC event under ``node``, or None if it has neither."""
    date, place = values_by_tags(node, ("DATE", "PLAC"), diagnostics)
    if date is None and place is None:
        return None
    return Event(date=date, place=place)


def read_reference(
    node: RecordNode,
    kinds: Collection[str],
    what: str,
    diagnostics: Diagnostics,
) -> Optional[Identifier]:
    """
    Parse the node value as a cross-reference of one of ``kinds``.

    A malformed reference or one of the wrong kind is reported as
    "bad <what>" and None is returned.
    """
    xref = parse_identifier(node.value)
    if xref is None or xref.kind not in kinds:
        diagnostics.report(f"bad {what}: {node.value}", node.lineno)
        return None
    return xref
