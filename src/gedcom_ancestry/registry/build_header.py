from __future__ import annotations

from gedcom_ancestry.diagnostics import Diagnostics
from gedcom_ancestry.loader.tree_builder import RecordNode
from gedcom_ancestry.registry.entities import Header
from gedcom_ancestry.registry.utils import assign_once, read_date_time, values_by_tags


def build_header(node: RecordNode, diagnostics: Diagnostics) -> Header:
    """
    Build the Header from the HEAD record.

    Only the export date, producing software, GEDCOM version and file name
    are modeled. Other HEAD sub-records (CHAR, LANG, DEST, SUBM, ...) are
    tolerated silently; header coverage is not audited.
    """
    header = Header()
    node.mark_consumed()

    for child in node.children:
        if child.tag == "DATE":
            when = read_date_time(child, diagnostics)
            if when is not None:
                if header.when is not None:
                    diagnostics.report("attempt to overwrite export date", child.lineno)
                else:
                    header.when = when

        elif child.tag == "SOUR":
            # 1 SOUR <system id> / 2 NAME <product> / 2 VERS <version>
            name, version = values_by_tags(child, ("NAME", "VERS"), diagnostics)
            if name is not None:
                assign_once(header, "software", name, "software", child.lineno, diagnostics)
            if version is not None:
                assign_once(
                    header, "software_version", version, "software version",
                    child.lineno, diagnostics,
                )
            child.mark_consumed()

        elif child.tag == "GEDC":
            (version,) = values_by_tags(child, ("VERS",), diagnostics)
            if version is not None:
                assign_once(
                    header, "gedcom_version", version, "GEDCOM version",
                    child.lineno, diagnostics,
                )
            child.mark_consumed()

        elif child.tag == "FILE":
            if child.value == "":
                diagnostics.report("empty file name in FILE record", child.lineno)
            assign_once(header, "file_name", child.value, "file name", child.lineno, diagnostics)
            child.mark_consumed()

    return header
