"""
Serialization helpers for token dictionaries.

Converts between Dictionary objects and their JSON/YAML document form
via an intermediate dict representation:

    {
        "properties": {...},       # nested tree
        "allProperties": [...],    # flat list of leaves
        ...                        # anything else -> Dictionary.metadata
    }

Documents that only carry `properties` get their flat view rebuilt
from the tree with collect_all_properties().
"""
from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, Iterable, List

import yaml

from dvm.classify import Group, Leaf, children_of, classify
from dvm.model import DEFAULT_VALUE_TRANSFORM_FIELDS, Dictionary
from dvm.tree import DEFAULT_MAX_DEPTH, descend


log = logging.getLogger(__name__)


class DictionaryFormatError(ValueError):
    """Raised when a dictionary document cannot be read."""
    pass


VIEW_KEYS = ("properties", "allProperties")

FORMATS_BY_SUFFIX = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
}


def collect_all_properties(
    properties: Mapping,
    recognized_fields: Iterable[str] = DEFAULT_VALUE_TRANSFORM_FIELDS,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> List[Dict[str, Any]]:
    """
    Build the flat view of a tree: every property, depth-first, in key order.

    The returned list holds the same property objects as the tree.

    Raises:
        TreeStructureError: If the tree is deeper than max_depth or
            a group appears inside itself.
    """
    found: List[Dict[str, Any]] = []
    _collect(properties, frozenset(recognized_fields), found, 0, set(), max_depth)
    return found


def _collect(node, recognized, found, depth, path_ids, max_depth) -> None:
    with descend(node, depth, path_ids, max_depth):
        for _, child in children_of(node):
            classified = classify(child, recognized)
            if isinstance(classified, Leaf):
                found.append(child)
            elif isinstance(classified, Group):
                _collect(child, recognized, found, depth + 1, path_ids, max_depth)


class _NoAliasDumper(yaml.SafeDumper):
    """Safe dumper writing shared objects out in full instead of as anchors."""

    def ignore_aliases(self, data):
        return True


def dictionary_to_dict(d: Dictionary) -> Dict[str, Any]:
    doc: Dict[str, Any] = dict(d.metadata)
    doc["properties"] = d.properties
    doc["allProperties"] = d.all_properties
    return doc


def dictionary_from_dict(
    doc: Any,
    recognized_fields: Iterable[str] = DEFAULT_VALUE_TRANSFORM_FIELDS,
) -> Dictionary:
    if not isinstance(doc, Mapping):
        raise DictionaryFormatError(
            f"Dictionary document must be a mapping, got {type(doc).__name__}"
        )
    properties = doc.get("properties", {})
    all_properties = doc.get("allProperties")
    if all_properties is None and isinstance(properties, Mapping):
        all_properties = collect_all_properties(properties, recognized_fields)
    metadata = {k: v for k, v in doc.items() if k not in VIEW_KEYS}
    return Dictionary(
        properties=properties,
        all_properties=all_properties if all_properties is not None else [],
        metadata=metadata,
    )


def dictionary_to_json(d: Dictionary) -> str:
    return json.dumps(dictionary_to_dict(d), indent=2)


def dictionary_from_json(s: str, recognized_fields: Iterable[str] = DEFAULT_VALUE_TRANSFORM_FIELDS) -> Dictionary:
    try:
        doc = json.loads(s)
    except json.JSONDecodeError as e:
        raise DictionaryFormatError(f"Invalid JSON dictionary: {e}") from e
    return dictionary_from_dict(doc, recognized_fields)


def dictionary_to_yaml(d: Dictionary) -> str:
    return yaml.dump(dictionary_to_dict(d), Dumper=_NoAliasDumper, sort_keys=False)


def dictionary_from_yaml(s: str, recognized_fields: Iterable[str] = DEFAULT_VALUE_TRANSFORM_FIELDS) -> Dictionary:
    try:
        doc = yaml.safe_load(s)
    except yaml.YAMLError as e:
        raise DictionaryFormatError(f"Invalid YAML dictionary: {e}") from e
    return dictionary_from_dict(doc, recognized_fields)


def format_for_path(path: str | Path) -> str:
    suffix = Path(path).suffix.lower()
    if suffix not in FORMATS_BY_SUFFIX:
        raise DictionaryFormatError(f"Unsupported dictionary file type: {suffix or path}")
    return FORMATS_BY_SUFFIX[suffix]


def dump_dictionary(d: Dictionary, fmt: str = "json") -> str:
    if fmt == "json":
        return dictionary_to_json(d)
    if fmt == "yaml":
        return dictionary_to_yaml(d)
    raise DictionaryFormatError(f"Unsupported output format: {fmt}")


def load_dictionary(
    path: str | Path,
    recognized_fields: Iterable[str] = DEFAULT_VALUE_TRANSFORM_FIELDS,
) -> Dictionary:
    """
    Load a dictionary document from a .json, .yaml or .yml file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        DictionaryFormatError: If the file type or content is invalid
        TreeStructureError: If the property tree references itself
    """
    path = Path(path)
    fmt = format_for_path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise FileNotFoundError(f"Dictionary file not found: {path}")

    log.debug("Loading %s dictionary from %s", fmt, path)
    if fmt == "json":
        return dictionary_from_json(content, recognized_fields)
    return dictionary_from_yaml(content, recognized_fields)


__all__ = [
    "DictionaryFormatError",
    "collect_all_properties",
    "dictionary_from_dict",
    "dictionary_from_json",
    "dictionary_from_yaml",
    "dictionary_to_dict",
    "dictionary_to_json",
    "dictionary_to_yaml",
    "dump_dictionary",
    "format_for_path",
    "load_dictionary",
]
