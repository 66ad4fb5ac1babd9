"""
Value Selection

Rewrites a single property so that it exposes one `value` field,
taken from the first candidate field the property actually has.

Example:
    map_prop_value(
        {"name": "textColor", "value": "#222", "value_darkMode": "#ddd"},
        ["value_darkMode"],
        ["value", "value_darkMode", "value_hiContrast"],
    )

Becomes:
    {"value": "#ddd", "name": "textColor"}

Every recognized value field is stripped from the copy, not only the
candidates. Other keys are copied according to COPY_POLICIES.
"""

import copy
import warnings
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional


class CopyPolicy(Enum):
    """How a non-value key is carried into the mapped property."""

    DEEP = "deep"
    BY_REFERENCE = "by_reference"


# `original` keeps the source property for provenance; consumers compare
# it by identity, so it must not be copied.
COPY_POLICIES: Dict[str, CopyPolicy] = {
    "original": CopyPolicy.BY_REFERENCE,
}


def copy_policy_for(key: str) -> CopyPolicy:
    return COPY_POLICIES.get(key, CopyPolicy.DEEP)


def first_defined_field(prop: Mapping, candidate_fields: Iterable[str]) -> Optional[str]:
    """Return the first candidate that is a key of `prop`, or None."""
    for field_name in candidate_fields:
        if field_name in prop:
            return field_name
    return None


def map_prop_value(
    prop: Mapping,
    candidate_fields: List[str],
    recognized_fields: Iterable[str],
) -> Dict[str, Any]:
    """
    Create a copy of `prop` with a single value field.

    Args:
        prop: The property to rewrite. Callers are responsible for
            checking it holds at least one of `candidate_fields`.
        candidate_fields: Field names to read the value from, in priority order.
        recognized_fields: Every value field name of the platform.
            None of them survive in the copy, except the new `value`.

    Returns:
        A new dict. `value` holds the selected field's value, or None
        (with a UserWarning) if no candidate was present.
    """
    winner = first_defined_field(prop, candidate_fields)
    if winner is None:
        warnings.warn(
            f"Property has none of the value fields {list(candidate_fields)}; "
            f"mapping it to value None",
            UserWarning,
        )

    mapped: Dict[str, Any] = {
        "value": prop[winner] if winner is not None else None,
    }

    recognized = set(recognized_fields)
    for key, item in prop.items():
        if key in recognized:
            continue
        if copy_policy_for(key) is CopyPolicy.BY_REFERENCE:
            mapped[key] = item
        else:
            mapped[key] = copy.deepcopy(item)

    return mapped


__all__ = [
    "COPY_POLICIES",
    "CopyPolicy",
    "copy_policy_for",
    "first_defined_field",
    "map_prop_value",
]
