"""
Dictionary Value Mapper

Transforms a dictionary into one with a single value field per property.

For a given value field (or priority list of value fields), every
property's `value` is replaced by the first of those fields it defines,
and every other value field of the platform is removed.

Properties that define none of the requested fields are dropped. This
lets a format export only the diff between a general case and an edge
case (e.g. a high-contrast colors file redefining only the tokens that
change).

Both views of the dictionary are transformed:
    - all_properties: filtered and mapped, order preserved
    - properties:     mapped recursively, emptied groups pruned

Inputs are validated up front, so a malformed dictionary fails here
rather than deep inside the recursion.
"""

import dataclasses
import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Sequence, Tuple, Union

from dvm.classify import has_candidate_value
from dvm.model import Dictionary, Platform, ValueField
from dvm.selection import map_prop_value
from dvm.tree import map_properties


log = logging.getLogger(__name__)


class ValueMappingError(Exception):
    """Base class for value mapping failures."""
    pass


class MissingRecognizedFields(ValueMappingError):
    """Raised when the platform does not list its value transform fields."""
    pass


class MalformedDictionary(ValueMappingError):
    """Raised when a dictionary view does not have the expected shape."""
    pass


ORIGINAL_KEY = "original"


def normalize_value_fields(value_field: ValueField) -> List[str]:
    """
    Normalize a value field option into an ordered list of names.

    A single name becomes a one-element list. A list is flattened by
    one level, so nested lists are spliced in place.

    Examples:
        "value_darkMode"                  -> ["value_darkMode"]
        ["value_hiContrast", "value"]     -> ["value_hiContrast", "value"]
        [["value_hiContrast"], "value"]   -> ["value_hiContrast", "value"]
    """
    if value_field is None:
        return []
    if isinstance(value_field, str):
        return [value_field]

    fields: List[str] = []
    for item in value_field:
        if isinstance(item, (list, tuple)):
            fields.extend(item)
        else:
            fields.append(item)
    return fields


def recognized_fields_of(platform: Union[Platform, Mapping, Any]) -> List[str]:
    """
    Read the recognized value fields from a platform.

    Accepts a Platform, a mapping with `valueTransformFields` or
    `value_transform_fields`, or any object with a
    `value_transform_fields` attribute.

    Raises:
        MissingRecognizedFields: If the fields are absent or not a list of names.
    """
    if isinstance(platform, Mapping):
        fields = platform.get("valueTransformFields", platform.get("value_transform_fields"))
    else:
        fields = getattr(platform, "value_transform_fields", None)

    if fields is None:
        raise MissingRecognizedFields("Platform does not define valueTransformFields")
    if isinstance(fields, (str, bytes)) or not isinstance(fields, (list, tuple, set, frozenset)):
        raise MissingRecognizedFields(
            f"valueTransformFields must be a list of field names, got {type(fields).__name__}"
        )
    return list(fields)


def _check_views(properties: Any, all_properties: Any) -> None:
    if not isinstance(properties, Mapping):
        raise MalformedDictionary(
            f"properties must be a mapping, got {type(properties).__name__}"
        )
    if not isinstance(all_properties, (list, tuple)):
        raise MalformedDictionary(
            f"allProperties must be a list, got {type(all_properties).__name__}"
        )
    for index, prop in enumerate(all_properties):
        if not isinstance(prop, Mapping):
            raise MalformedDictionary(
                f"allProperties[{index}] must be a mapping, got {type(prop).__name__}"
            )


def _map_views(
    properties: Mapping,
    all_properties: Sequence[Mapping],
    value_fields: List[str],
    recognized_fields: List[str],
) -> Tuple[Dict[str, Any], List[Dict[str, Any]]]:
    mapped_all = [
        map_prop_value(prop, value_fields, recognized_fields)
        for prop in all_properties
        if has_candidate_value(prop, value_fields)
    ]

    def map_prop(prop: Any, key: str, parent: Mapping) -> Any:
        # Provenance data, never value-mapped.
        if key == ORIGINAL_KEY:
            return prop
        if not has_candidate_value(prop, value_fields):
            return None
        return map_prop_value(prop, value_fields, recognized_fields)

    mapped_tree = map_properties(properties, map_prop, recognized_fields)

    log.debug(
        "Mapped value fields %s: kept %d of %d properties in allProperties",
        value_fields,
        len(mapped_all),
        len(all_properties),
    )
    return mapped_tree, mapped_all


def map_dictionary_value(
    dictionary: Union[Dictionary, Mapping],
    value_field: ValueField,
    platform: Union[Platform, Mapping, Any],
) -> Union[Dictionary, Dict[str, Any]]:
    """
    Map a dictionary onto a single value field.

    Args:
        dictionary: A Dictionary, or a mapping with optional
            `properties` and `allProperties` keys.
        value_field: Name of the field to use as `value` for each
            property, or a list of names in priority order.
            If empty or None, the dictionary is returned as-is.
        platform: Supplies `value_transform_fields`, the value field
            names removed from every mapped property.

    Returns:
        A new dictionary of the same kind as the input, containing only
        the properties that define one of the value fields. Other
        top-level data is passed through unchanged.
        The input itself when `value_field` is empty.

    Raises:
        MissingRecognizedFields: If the platform has no usable value fields.
        MalformedDictionary: If a view of the dictionary has the wrong shape.
        TreeStructureError: If the property tree is too deep or self-referencing.
    """
    if not value_field:
        log.debug("No value field requested, dictionary left unchanged")
        return dictionary

    value_fields = normalize_value_fields(value_field)
    recognized_fields = recognized_fields_of(platform)

    if isinstance(dictionary, Dictionary):
        properties = dictionary.properties if dictionary.properties is not None else {}
        all_properties = dictionary.all_properties if dictionary.all_properties is not None else []
    elif isinstance(dictionary, Mapping):
        properties = dictionary.get("properties")
        properties = {} if properties is None else properties
        all_properties = dictionary.get("allProperties")
        all_properties = [] if all_properties is None else all_properties
    else:
        raise MalformedDictionary(
            f"Expected a Dictionary or a mapping, got {type(dictionary).__name__}"
        )

    _check_views(properties, all_properties)
    mapped_tree, mapped_all = _map_views(properties, all_properties, value_fields, recognized_fields)

    if isinstance(dictionary, Dictionary):
        return dataclasses.replace(dictionary, properties=mapped_tree, all_properties=mapped_all)

    mapped = dict(dictionary)
    mapped["properties"] = mapped_tree
    mapped["allProperties"] = mapped_all
    return mapped


__all__ = [
    "MalformedDictionary",
    "MissingRecognizedFields",
    "ORIGINAL_KEY",
    "ValueMappingError",
    "map_dictionary_value",
    "normalize_value_fields",
    "recognized_fields_of",
]
