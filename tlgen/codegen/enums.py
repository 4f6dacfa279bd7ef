"""Emission of `pub mod enums`: one tagged `enum` per boxed result type."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from ..config import GeneratorConfig
from ..logging import get_logger
from ..tl import Category, Definition, Type
from . import naming
from .grouper import group_types
from .metadata import Metadata
from .renderer import TemplateRenderer

logger = get_logger("codegen.enums")

ENUMS_USES = ("use serde::{Deserialize, Serialize};",)


def enum_types(definitions: Sequence[Definition]) -> List[Type]:
    """Distinct result types of type constructors, in encounter order."""
    seen = set()
    types: List[Type] = []
    for definition in definitions:
        if definition.category is not Category.TYPES or naming.is_special_cased(definition.ty):
            continue
        if definition.ty.name in seen:
            continue
        seen.add(definition.ty.name)
        types.append(definition.ty)
    return types


def enum_context(ty: Type, metadata: Metadata, config: GeneratorConfig) -> Optional[Dict[str, Any]]:
    """Template context for `ty`, or None when every constructor is filtered out."""
    name = naming.type_name(ty)
    constructors = [
        definition
        for definition in metadata.defs_with_type(ty)
        if config.bots_only_api or not naming.is_definition_bots_only(definition)
    ]
    if not constructors:
        return None

    arms = []
    conversions = []
    for definition in constructors:
        variant = naming.variant_name(definition)
        payload = None
        if definition.params:
            path = naming.definition_path(definition)
            boxed = metadata.is_recursive_def(definition)
            payload = f"Box<{path}>" if boxed else path
            conversions.append({"path": path, "variant": variant, "boxed": boxed})
        arms.append(
            {
                "docs": naming.doc_lines(definition.description),
                "wire_name": definition.name,
                "variant": variant,
                "payload": payload,
            }
        )

    derives = ["Clone"]
    if config.impl_debug:
        derives.append("Debug")
    derives.append("PartialEq")
    if ty.name in config.hash_types:
        derives.extend(["Eq", "Hash"])
    derives.extend(["Deserialize", "Serialize"])

    return {
        "name": name,
        "derives": derives,
        "arms": arms,
        "default_arm": _default_arm(name, constructors[0], metadata),
        "from_types": conversions if config.impl_from_type else [],
        "try_from_enums": conversions if config.impl_from_enum else [],
    }


def _default_arm(name: str, first: Definition, metadata: Metadata) -> Optional[str]:
    variant = f"{name}::{naming.variant_name(first)}"
    if not first.params:
        return variant
    if metadata.can_def_implement_default(first):
        return f"{variant}(Default::default())"
    return None


def render_enums_mod(
    definitions: Sequence[Definition],
    metadata: Metadata,
    config: GeneratorConfig,
    renderer: TemplateRenderer,
) -> str:
    blocks: Dict[tuple, List[str]] = {}
    for namespace, types in group_types(enum_types(definitions)).items():
        for ty in types:
            context = enum_context(ty, metadata, config)
            if context is None:
                logger.debug("Skipping %s: no constructor left after filtering", ty.name)
                continue
            blocks.setdefault(namespace, []).append(renderer.render("enum.rs.j2", **context))
    logger.debug("Rendered %d enums", sum(len(members) for members in blocks.values()))
    return renderer.render_module("enums", ENUMS_USES, blocks)


__all__ = ["enum_context", "enum_types", "render_enums_mod"]
