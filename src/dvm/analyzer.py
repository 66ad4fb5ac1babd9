"""
Dictionary Analyzer — inventory of value fields across a token dictionary.

This module provides lightweight analysis of Dictionary objects:
    - Property / group inventory
    - Value field usage per recognized field
    - Which properties a value-mapping pass would keep or drop
    - Warning flags for likely configuration mistakes

IMPORTANT: This is read-only. It does NOT modify the dictionary.
It only produces reports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from dvm.classify import Group, Leaf, children_of, classify, has_candidate_value
from dvm.mapper import ORIGINAL_KEY, normalize_value_fields, recognized_fields_of
from dvm.model import Dictionary, ValueField
from dvm.tree import descend


PATH_SEPARATOR = "."


@dataclass
class DictionaryReport:
    """Analysis report for a dictionary on one platform."""

    platform_name: str = ""
    recognized_fields: List[str] = field(default_factory=list)

    # Inventory
    total_properties: int = 0
    total_groups: int = 0
    empty_groups: List[str] = field(default_factory=list)
    max_depth: int = 0
    flat_view_size: int = 0

    # Value field usage
    field_usage: Dict[str, int] = field(default_factory=dict)
    unused_fields: Set[str] = field(default_factory=set)
    properties_with_original: int = 0

    # Selection preview (only when a value field is given)
    value_fields: List[str] = field(default_factory=list)
    kept_paths: List[str] = field(default_factory=list)
    dropped_paths: List[str] = field(default_factory=list)

    warnings: List[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def _walk(
    node: Any,
    recognized: List[str],
    path: List[str],
    report: DictionaryReport,
    leaves: List[tuple],
    path_ids: Set[int],
) -> None:
    report.max_depth = max(report.max_depth, len(path))
    with descend(node, len(path), path_ids):
        for key, child in children_of(node):
            child_path = path + [str(key)]
            classified = classify(child, recognized)
            if isinstance(classified, Leaf):
                leaves.append((PATH_SEPARATOR.join(child_path), child))
            elif isinstance(classified, Group):
                report.total_groups += 1
                if not child:
                    report.empty_groups.append(PATH_SEPARATOR.join(child_path))
                _walk(child, recognized, child_path, report, leaves, path_ids)


def analyze_dictionary(
    dictionary: Dictionary,
    platform: Any,
    value_field: ValueField = None,
) -> DictionaryReport:
    """
    Analyze value field usage in a dictionary.

    Args:
        dictionary: Dictionary to inspect
        platform: Supplies the recognized value fields
        value_field: Optional candidate fields; when given the report
            lists which properties a mapping pass would keep or drop.

    Returns a DictionaryReport with counts and warnings.
    """
    recognized = recognized_fields_of(platform)
    report = DictionaryReport(
        platform_name=getattr(platform, "name", "") or "",
        recognized_fields=recognized,
    )

    # =========================================================================
    # 1. INVENTORY
    # =========================================================================

    leaves: List[tuple] = []
    _walk(dictionary.properties or {}, recognized, [], report, leaves, set())
    report.total_properties = len(leaves)
    report.flat_view_size = len(dictionary.all_properties or [])

    # =========================================================================
    # 2. FIELD USAGE
    # =========================================================================

    report.field_usage = {name: 0 for name in recognized}
    for _, prop in leaves:
        for name in recognized:
            if name in prop:
                report.field_usage[name] += 1
        if ORIGINAL_KEY in prop:
            report.properties_with_original += 1

    report.unused_fields = {name for name, count in report.field_usage.items() if count == 0}

    # =========================================================================
    # 3. SELECTION PREVIEW
    # =========================================================================

    if value_field:
        report.value_fields = normalize_value_fields(value_field)
        for path, prop in leaves:
            if has_candidate_value(prop, report.value_fields):
                report.kept_paths.append(path)
            else:
                report.dropped_paths.append(path)

    # =========================================================================
    # 4. WARNING FLAGS
    # =========================================================================

    if report.unused_fields and report.total_properties > 0:
        report.add_warning(
            f"Recognized value fields never used: {', '.join(sorted(report.unused_fields))}"
        )

    unknown = [name for name in report.value_fields if name not in recognized]
    if unknown:
        report.add_warning(
            f"Value fields not recognized by the platform: {', '.join(unknown)}"
        )

    if report.value_fields and report.total_properties and not report.kept_paths:
        report.add_warning(
            f"No property defines any of {', '.join(report.value_fields)}; output would be empty"
        )

    if report.flat_view_size != report.total_properties:
        report.add_warning(
            f"allProperties has {report.flat_view_size} entries but the tree has "
            f"{report.total_properties} properties"
        )

    return report


def format_report(report: DictionaryReport, show_paths: Optional[int] = 20) -> str:
    """Render a report as plain text."""
    lines = [
        f"Dictionary report ({report.platform_name or 'unnamed platform'})",
        f"  Properties:      {report.total_properties}",
        f"  Groups:          {report.total_groups} ({len(report.empty_groups)} empty)",
        f"  Max depth:       {report.max_depth}",
        f"  allProperties:   {report.flat_view_size}",
        f"  With original:   {report.properties_with_original}",
        "  Field usage:",
    ]
    for name in report.recognized_fields:
        lines.append(f"    {name}: {report.field_usage.get(name, 0)}")

    if report.value_fields:
        lines.append(f"  Selection {report.value_fields}:")
        lines.append(f"    kept:    {len(report.kept_paths)}")
        lines.append(f"    dropped: {len(report.dropped_paths)}")
        for path in report.dropped_paths[:show_paths]:
            lines.append(f"      - {path}")

    if report.warnings:
        lines.append("  Warnings:")
        for warning in report.warnings:
            lines.append(f"    ! {warning}")

    return "\n".join(lines)


__all__ = ["DictionaryReport", "analyze_dictionary", "format_report"]
