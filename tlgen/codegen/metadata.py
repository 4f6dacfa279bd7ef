"""Whole-schema analysis needed before any code is emitted."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Set

from ..errors import GenerationError
from ..logging import get_logger
from ..tl import Category, Definition, Type
from . import naming

logger = get_logger("codegen.metadata")


class Metadata:
    """Read-only facts about the type definitions of one generation run.

    * `defs_with_type`: result type name -> constructors, in encounter order.
    * recursive definitions: those whose fields eventually contain their
      own result type, which therefore need a `Box` inside an enum.
    * default definitions: those composed only of builtin, optional or
      bare fields, which can derive `Default`.
    """

    def __init__(self, definitions: Sequence[Definition]) -> None:
        type_definitions = [d for d in definitions if d.category is Category.TYPES]

        self._defs_with_type: Dict[str, List[Definition]] = {}
        for definition in type_definitions:
            self._defs_with_type.setdefault(definition.ty.name, []).append(definition)

        by_name: Dict[str, Definition] = {d.name: d for d in type_definitions}

        self._recursing_defs: Set[str] = {
            d.name for d in type_definitions if self._self_references(d)
        }
        self._default_impl_defs: Set[str] = {
            d.name for d in type_definitions if _contains_only_bare_types(d, by_name)
        }
        logger.debug(
            "Analyzed %d type definitions: %d types, %d recursive, %d defaultable",
            len(type_definitions),
            len(self._defs_with_type),
            len(self._recursing_defs),
            len(self._default_impl_defs),
        )

    def is_recursive_def(self, definition: Definition) -> bool:
        return definition.name in self._recursing_defs

    def can_def_implement_default(self, definition: Definition) -> bool:
        return definition.name in self._default_impl_defs

    def has_constructors(self, ty: Type) -> bool:
        return ty.name in self._defs_with_type

    def require_constructors(
        self, ty: Type, owner: str, type_defs: Sequence[str] = ()
    ) -> None:
        """Raise when `ty` or its generic argument names an unconstructible boxed type."""
        current: Optional[Type] = ty
        while current is not None:
            if (
                naming.builtin_type(current) is None
                and not current.generic_ref
                and not current.bare
                and current.name not in type_defs
                and not self.has_constructors(current)
            ):
                raise GenerationError(
                    f"{owner} refers to {current.name!r}, which has no constructors"
                )
            current = current.generic_arg

    def defs_with_type(self, ty: Type) -> List[Definition]:
        try:
            return self._defs_with_type[ty.name]
        except KeyError:
            raise GenerationError(f"Type {ty.name!r} has no known constructors") from None

    def types(self) -> Iterable[str]:
        return self._defs_with_type.keys()

    def _self_references(self, root: Definition) -> bool:
        visited: Set[str] = {root.name}
        stack: List[Definition] = [root]
        while stack:
            check = stack.pop()
            for param in check.params:
                if param.ty.name == root.ty.name:
                    return True
                for definition in self._defs_with_type.get(param.ty.name, ()):
                    if definition.name not in visited:
                        visited.add(definition.name)
                        stack.append(definition)
        return False


def _contains_only_bare_types(root: Definition, by_name: Dict[str, Definition]) -> bool:
    visited: Set[str] = {root.name}
    stack: List[Definition] = [root]
    while stack:
        check = stack.pop()
        for param in check.params:
            if param.is_flags:
                continue
            if not naming.is_builtin_param(param) and not param.ty.bare:
                return False
            referenced = by_name.get(param.ty.name)
            if referenced is not None and referenced.name not in visited:
                visited.add(referenced.name)
                stack.append(referenced)
    return True


__all__ = ["Metadata"]
