"""
Property Classification

Decides whether a node of a token tree is a property (leaf) or a group.

A node is a property when it directly holds at least one value field.
The same check serves two roles, with two different field sets:

    - Structure: is this node a property at all?
      Checked against the platform's recognized value fields.
    - Selection: does this property have a value this pass can use?
      Checked against the candidate fields of the pass.

Each role has its own named function so call sites cannot swap the sets.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Optional, Tuple, Union


def is_valued_prop(node: Any, value_fields: Iterable[str]) -> bool:
    """
    Check whether `node` directly holds one of `value_fields` as a key.

    Non-mapping nodes (scalars, lists, None) never hold value fields.
    """
    if not isinstance(node, Mapping):
        return False
    fields = set(value_fields)
    return any(key in fields for key in node)


def is_property(node: Any, recognized_fields: Iterable[str]) -> bool:
    """Structural check: is `node` a token property on this platform?"""
    return is_valued_prop(node, recognized_fields)


def has_candidate_value(node: Any, candidate_fields: Iterable[str]) -> bool:
    """Selection check: does `node` carry any of the candidate fields?"""
    return is_valued_prop(node, candidate_fields)


@dataclass(frozen=True)
class Leaf:
    """A token property: holds value fields, subject to value selection."""

    data: Mapping


@dataclass(frozen=True)
class Group:
    """
    An intermediate node: its values are further nodes.

    Either a mapping of named children or a list of children.
    """

    children: Union[Mapping, list, tuple]

    @property
    def is_list(self) -> bool:
        return isinstance(self.children, (list, tuple))


Node = Union[Leaf, Group]


def children_of(group: Union[Mapping, list, tuple]) -> Iterator[Tuple[Any, Any]]:
    """Yield (key, child) pairs; list children are keyed by index."""
    if isinstance(group, Mapping):
        return iter(group.items())
    return enumerate(group)


def classify(node: Any, recognized_fields: Iterable[str]) -> Optional[Node]:
    """
    Classify a tree node once.

    Returns:
        Leaf if the node is a property,
        Group if it is a mapping without recognized value fields, or a list,
        None for anything else (scalars, strings, None).
    """
    if is_property(node, recognized_fields):
        return Leaf(node)
    if isinstance(node, (Mapping, list, tuple)):
        return Group(node)
    return None


__all__ = [
    "Group",
    "Leaf",
    "Node",
    "children_of",
    "classify",
    "has_candidate_value",
    "is_property",
    "is_valued_prop",
]
