"""
Recursive Property Mapping

Rebuilds a token tree, mapping every property through a caller-supplied
function and pruning what the function drops.

Rules, applied to each direct child of a group:

    1. Property (holds a recognized value field):
           mapped = mapper(prop, key, parent)
           kept unless mapped is None while prop was not None.

    2. Group (mapping without recognized value fields, or list):
           rebuilt recursively,
           kept unless it became empty while the source was not empty.
           Groups that were already empty are meaningful and survive.

    3. Anything else (scalars, strings):
           not carried into the result.

The source tree is never mutated; each level builds a fresh dict or list.
"""

from collections.abc import Mapping
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterable, Iterator, List, Set, Union

from dvm.classify import Group, Leaf, children_of, classify


PropMapper = Callable[[Any, Any, Any], Any]


DEFAULT_MAX_DEPTH = 256


class TreeStructureError(ValueError):
    """Raised when a token tree is too deep or contains itself."""
    pass


@contextmanager
def descend(group: Any, depth: int, path_ids: Set[int], max_depth: int = DEFAULT_MAX_DEPTH) -> Iterator[None]:
    """
    Guard one level of a recursive walk over a token tree.

    `path_ids` holds the ids of the groups currently being walked;
    a shared subtree reached through two branches is not a cycle.

    Raises:
        TreeStructureError: If depth exceeds max_depth or the group
            is already on the current path.
    """
    if depth > max_depth:
        raise TreeStructureError(f"Token tree is nested deeper than {max_depth} levels")
    if id(group) in path_ids:
        raise TreeStructureError("Token tree contains a group that references itself")
    path_ids.add(id(group))
    try:
        yield
    finally:
        path_ids.discard(id(group))


def map_properties(
    obj: Mapping,
    mapper: PropMapper,
    recognized_fields: Iterable[str],
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Dict[str, Any]:
    """
    Map every property of a token tree.

    Args:
        obj: The tree (a group) to map.
        mapper: Called as mapper(prop, key, parent) for every property.
            Returning None drops the property. Inside a list group,
            `key` is the index.
        recognized_fields: Value field names that make a node a property.
        max_depth: Nesting limit before TreeStructureError is raised.

    Returns:
        A new tree with mapped properties and pruned groups.
        List groups are rebuilt as lists of their kept children.

    Raises:
        TreeStructureError: If the tree is deeper than max_depth or
            a group appears inside itself.
    """
    recognized = frozenset(recognized_fields)
    return _map_group(obj, mapper, recognized, max_depth, 0, set())


def _map_group(
    obj: Union[Mapping, list, tuple],
    mapper: PropMapper,
    recognized: frozenset,
    max_depth: int,
    depth: int,
    path_ids: Set[int],
) -> Union[Dict[str, Any], List[Any]]:
    kept: List[tuple] = []

    with descend(obj, depth, path_ids, max_depth):
        for key, prop in children_of(obj):
            node = classify(prop, recognized)

            if isinstance(node, Leaf):
                mapped = mapper(prop, key, obj)
                if mapped is not None or prop is None:
                    kept.append((key, mapped))

            elif isinstance(node, Group):
                mapped_group = _map_group(prop, mapper, recognized, max_depth, depth + 1, path_ids)
                if mapped_group or not prop:
                    kept.append((key, mapped_group))

    if isinstance(obj, Mapping):
        return dict(kept)
    # Dropped items are removed, not left as holes.
    return [item for _, item in kept]


__all__ = ["DEFAULT_MAX_DEPTH", "PropMapper", "TreeStructureError", "descend", "map_properties"]
