"""Rust code generation from parsed TL definitions.

`render_rust_code` produces the `types`, `enums` and `functions` modules in
one string; `render_client` produces the `client` module. Both are pure;
the `generate_*` wrappers write the finished text to a sink in one call so
a failed render never leaves partial output behind.
"""

from __future__ import annotations

from typing import Optional, Sequence, TextIO

from ..config import GeneratorConfig
from ..logging import get_logger
from ..tl import Definition
from .client import render_client_mod
from .enums import render_enums_mod
from .functions import render_functions_mod
from .metadata import Metadata
from .renderer import TemplateRenderer, render_header
from .structs import render_types_mod

logger = get_logger("codegen")


def render_rust_code(
    definitions: Sequence[Definition],
    config: Optional[GeneratorConfig] = None,
    renderer: Optional[TemplateRenderer] = None,
) -> str:
    config = config or GeneratorConfig()
    renderer = renderer or TemplateRenderer()
    metadata = Metadata(definitions)
    sections = [
        render_header(renderer),
        render_types_mod(definitions, metadata, config, renderer),
        render_enums_mod(definitions, metadata, config, renderer),
        render_functions_mod(definitions, metadata, config, renderer),
    ]
    return "\n".join(sections)


def render_client(
    definitions: Sequence[Definition],
    config: Optional[GeneratorConfig] = None,
    renderer: Optional[TemplateRenderer] = None,
) -> str:
    config = config or GeneratorConfig()
    renderer = renderer or TemplateRenderer()
    metadata = Metadata(definitions)
    return "\n".join(
        [
            render_header(renderer),
            render_client_mod(definitions, metadata, config, renderer),
        ]
    )


def generate_rust_code(
    out: TextIO,
    definitions: Sequence[Definition],
    config: Optional[GeneratorConfig] = None,
    renderer: Optional[TemplateRenderer] = None,
) -> None:
    code = render_rust_code(definitions, config, renderer)
    out.write(code)
    logger.debug("Wrote %d characters of generated code", len(code))


def generate_client(
    out: TextIO,
    definitions: Sequence[Definition],
    config: Optional[GeneratorConfig] = None,
    renderer: Optional[TemplateRenderer] = None,
) -> None:
    code = render_client(definitions, config, renderer)
    out.write(code)
    logger.debug("Wrote %d characters of client code", len(code))


__all__ = [
    "Metadata",
    "TemplateRenderer",
    "generate_client",
    "generate_rust_code",
    "render_client",
    "render_rust_code",
]
