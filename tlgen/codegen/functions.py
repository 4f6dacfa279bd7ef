"""Emission of `pub mod functions`: one `async fn` per remote procedure."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from ..config import GeneratorConfig
from ..logging import get_logger
from ..tl import Category, Definition, Parameter
from . import naming
from .grouper import group_definitions
from .metadata import Metadata
from .renderer import TemplateRenderer
from .structs import emitted_params

logger = get_logger("codegen.functions")

FUNCTIONS_USES = (
    "use serde_json::json;",
    "use crate::send_request;",
)


def is_function_emitted(definition: Definition, config: GeneratorConfig) -> bool:
    if definition.category is not Category.FUNCTIONS:
        return False
    return config.bots_only_api or not naming.is_definition_bots_only(definition)


def return_type(definition: Definition, metadata: Metadata) -> str:
    """Rust type a call to `definition` resolves to on success."""
    ty = definition.ty
    if ty.name in definition.type_defs:
        return ty.name
    if naming.is_ok(ty):
        return "()"
    metadata.require_constructors(ty, f"Result of {definition.name}", definition.type_defs)
    return naming.type_path(ty)


def _argument_docs(params: Sequence[Parameter]) -> List[str]:
    lines: List[str] = []
    for param in params:
        first, *rest = param.description.split("\n")
        lines.append(f"/// * `{naming.field_name(param)}` - {first.strip()}".rstrip())
        lines.extend(f"/// {line.strip()}".rstrip() for line in rest)
    return lines


def call_context(definition: Definition, metadata: Metadata, config: GeneratorConfig) -> Dict[str, Any]:
    """Template context shared by free functions and client methods."""
    params = emitted_params(definition, config)
    for param in params:
        metadata.require_constructors(
            param.ty, f"Argument {definition.name}.{param.name}", definition.type_defs
        )
    return {
        "docs": naming.doc_lines(definition.description),
        "argument_docs": _argument_docs(params),
        "fn_name": naming.function_name(definition),
        "generics": naming.generic_params(definition, declaring=True),
        "args": [
            {
                "name": naming.field_name(param),
                "type": naming.param_type(param),
                "wire_name": param.name,
                "value": naming.field_name(param),
            }
            for param in params
        ],
        "wire_name": definition.name,
        "return_type": return_type(definition, metadata),
        "is_ok": naming.is_ok(definition.ty),
    }


def render_functions_mod(
    definitions: Sequence[Definition],
    metadata: Metadata,
    config: GeneratorConfig,
    renderer: TemplateRenderer,
) -> str:
    grouped = group_definitions(
        (definition for definition in definitions if is_function_emitted(definition, config)),
        Category.FUNCTIONS,
    )
    blocks = {
        namespace: [
            renderer.render("function.rs.j2", **call_context(definition, metadata, config))
            for definition in members
        ]
        for namespace, members in grouped.items()
    }
    logger.debug("Rendered %d functions", sum(len(members) for members in grouped.values()))
    return renderer.render_module("functions", FUNCTIONS_USES, blocks)


__all__ = ["call_context", "is_function_emitted", "render_functions_mod", "return_type"]
