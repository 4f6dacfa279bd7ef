"""Grouping of definitions by their dotted namespace prefix."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Tuple, TypeVar

from ..tl import Category, Definition, Type

Namespace = Tuple[str, ...]
T = TypeVar("T")


def group_by_namespace(items: Iterable[T], key: Callable[[T], Namespace]) -> Dict[Namespace, List[T]]:
    """Map each namespace to its members, keeping encounter order inside a group."""
    grouped: Dict[Namespace, List[T]] = {}
    for item in items:
        grouped.setdefault(key(item), []).append(item)
    return grouped


def group_definitions(definitions: Iterable[Definition], category: Category) -> Dict[Namespace, List[Definition]]:
    return group_by_namespace(
        (definition for definition in definitions if definition.category is category),
        lambda definition: definition.namespace,
    )


def group_types(types: Iterable[Type]) -> Dict[Namespace, List[Type]]:
    return group_by_namespace(types, lambda ty: ty.namespace)


__all__ = ["Namespace", "group_by_namespace", "group_definitions", "group_types"]
