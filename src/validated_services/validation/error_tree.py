"""
Error tree - nested, mergeable error messages

An error tree maps a field key to either a single message or a flat list of
messages. Contributions from schema validation and from business logic are
folded into the same tree:

- a new key stores the contributed value verbatim (no list wrapping)
- a repeated key turns the existing value into a list, appends the new value,
  and flattens exactly one level

Example:
    >>> tree = merge_errors({}, {"password": "is too short"})
    >>> tree = merge_errors(tree, {"password": ["is too easy"]})
    >>> tree
    {'password': ['is too short', 'is too easy']}

Merging is deterministic but not commutative: list order follows the order in
which contributions arrive.
"""

import copy
from collections.abc import Mapping
from typing import Any

from validated_services.kernel.errors import InvalidContribution

ErrorTree = dict[str, Any]


def is_sequence(value: Any) -> bool:
    """Lists and tuples are message sequences; strings and bytes are single messages"""
    return isinstance(value, (list, tuple))


def flatten_once(values: list[Any]) -> list[Any]:
    """Splice the elements of nested sequences into place, one level only"""
    flat: list[Any] = []
    for value in values:
        if is_sequence(value):
            flat.extend(value)
        else:
            flat.append(value)
    return flat


def merge_error(tree: ErrorTree, key: Any, value: Any) -> ErrorTree:
    """
    Merge a single error value under key, returning a new tree

    The input tree is not modified, and the stored value is a copy of the
    contributed one.
    """
    merged = dict(tree)
    if key not in merged:
        merged[key] = copy.deepcopy(value)
        return merged

    existing = merged[key]
    combined = list(existing) if is_sequence(existing) else [existing]
    combined.append(copy.deepcopy(value))
    merged[key] = flatten_once(combined)
    return merged


def is_pair(item: Any) -> bool:
    """A (key, value) pair: a two-item list or tuple"""
    return is_sequence(item) and len(item) == 2


def coerce_contribution(contribution: Any) -> dict[Any, Any]:
    """
    Turn a contribution into a plain dict

    Accepts a mapping or an ordered list/tuple of (key, value) pairs; duplicate
    keys in a pair sequence overwrite left to right.

    Raises:
        InvalidContribution: If contribution is None, a string, an unordered
            collection, or a sequence with anything other than pairs
    """
    if isinstance(contribution, Mapping):
        return dict(contribution)
    if not is_sequence(contribution):
        raise InvalidContribution(contribution)
    if not all(is_pair(item) for item in contribution):
        raise InvalidContribution(
            contribution,
            "Error contribution sequence must contain only (key, value) pairs",
        )
    return dict(contribution)


def merge_errors(tree: ErrorTree, contribution: Any) -> ErrorTree:
    """
    Fold every key of a contribution into tree, in contribution order

    The contribution is validated before anything is merged, so an invalid
    contribution never produces a partially updated tree.
    """
    merged = dict(tree)
    for key, value in coerce_contribution(contribution).items():
        merged = merge_error(merged, key, value)
    return merged
