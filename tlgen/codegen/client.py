"""Emission of `pub mod client`: a transport-bound `Client` with one method
per remote procedure.

Methods are ordered by sorted namespace, then by schema order. A method for
a namespaced function carries the namespace as a prefix (`ns_get_me`) since
all methods share one `impl` block.
"""

from __future__ import annotations

from typing import List, Sequence

from ..config import GeneratorConfig
from ..logging import get_logger
from ..tl import Category, Definition
from .functions import call_context, is_function_emitted
from .grouper import group_definitions
from .metadata import Metadata
from .renderer import TemplateRenderer

logger = get_logger("codegen.client")

CLIENT_USES = ("use serde_json::{json, Value};",)


def method_name(definition: Definition, fn_name: str) -> str:
    return "_".join((*definition.namespace, fn_name)) if definition.namespace else fn_name


def render_client_mod(
    definitions: Sequence[Definition],
    metadata: Metadata,
    config: GeneratorConfig,
    renderer: TemplateRenderer,
) -> str:
    grouped = group_definitions(
        (definition for definition in definitions if is_function_emitted(definition, config)),
        Category.FUNCTIONS,
    )
    methods: List[str] = []
    for namespace in sorted(grouped):
        for definition in grouped[namespace]:
            context = call_context(definition, metadata, config)
            context["fn_name"] = method_name(definition, context["fn_name"])
            methods.append(renderer.render("client_method.rs.j2", **context))

    logger.debug("Rendered %d client methods", len(methods))
    block = renderer.render("client.rs.j2", methods=[method.rstrip("\n") for method in methods])
    return renderer.render_module("client", CLIENT_USES, {(): [block]})


__all__ = ["method_name", "render_client_mod"]
