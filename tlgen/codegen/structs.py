"""Emission of `pub mod types`: one `struct` per type constructor."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from ..config import GeneratorConfig
from ..logging import get_logger
from ..tl import Category, Definition, Parameter
from . import naming
from .grouper import group_definitions
from .metadata import Metadata
from .renderer import TemplateRenderer

logger = get_logger("codegen.structs")

TYPES_USES = (
    "use serde::{Deserialize, Serialize};",
    "use serde_with::{serde_as, DisplayFromStr};",
)


def emitted_params(definition: Definition, config: GeneratorConfig) -> List[Parameter]:
    """Parameters that become fields or arguments; `flags:#` never does."""
    return [
        param
        for param in definition.params
        if not param.is_flags and (config.bots_only_api or not naming.is_param_bots_only(param))
    ]


def is_struct_emitted(definition: Definition, config: GeneratorConfig) -> bool:
    if definition.category is not Category.TYPES:
        return False
    if naming.is_special_cased(definition.ty) or not definition.params:
        return False
    return config.bots_only_api or not naming.is_definition_bots_only(definition)


def struct_context(definition: Definition, metadata: Metadata, config: GeneratorConfig) -> Dict[str, Any]:
    params = emitted_params(definition, config)
    for param in params:
        metadata.require_constructors(
            param.ty, f"Field {definition.name}.{param.name}", definition.type_defs
        )

    fields = [
        {
            "docs": naming.doc_lines(param.description),
            "rename": naming.wire_rename(param),
            "serde_as": naming.param_serde_as(param),
            "name": naming.field_name(param),
            "type": naming.param_type(param),
        }
        for param in params
    ]

    derives = ["Clone"]
    if config.impl_debug:
        derives.append("Debug")
    if metadata.can_def_implement_default(definition):
        derives.append("Default")
    derives.append("PartialEq")
    if definition.name in config.hash_definitions:
        derives.extend(["Eq", "Hash"])
    derives.extend(["Deserialize", "Serialize"])

    return {
        "docs": naming.doc_lines(definition.description),
        "serde_as": any(field["serde_as"] for field in fields),
        "derives": derives,
        "name": naming.definition_type_name(definition),
        "generics": naming.generic_params(definition, declaring=True),
        "fields": fields,
    }


def render_types_mod(
    definitions: Sequence[Definition],
    metadata: Metadata,
    config: GeneratorConfig,
    renderer: TemplateRenderer,
) -> str:
    grouped = group_definitions(
        (definition for definition in definitions if is_struct_emitted(definition, config)),
        Category.TYPES,
    )
    blocks = {
        namespace: [
            renderer.render("struct.rs.j2", **struct_context(definition, metadata, config))
            for definition in members
        ]
        for namespace, members in grouped.items()
    }
    logger.debug("Rendered %d structs", sum(len(members) for members in grouped.values()))
    return renderer.render_module("types", TYPES_USES, blocks)


__all__ = ["emitted_params", "is_struct_emitted", "render_types_mod", "struct_context"]
