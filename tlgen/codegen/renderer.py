"""Jinja2 rendering of generated declarations and their module blocks."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from jinja2 import Environment, FileSystemLoader

from .grouper import Namespace

DEFAULT_TEMPLATES_DIR = Path(__file__).with_name("templates")


class TemplateRenderer:
    """Renders `*.rs.j2` templates, preferring a user directory when given."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir
        self._env = self._create_env(templates_dir)

    def render(self, template_name: str, **context: Any) -> str:
        template = self._env.get_template(template_name)
        return template.render(**context).rstrip("\n") + "\n"

    def render_module(
        self,
        name: str,
        uses: Sequence[str],
        blocks_by_namespace: Mapping[Namespace, Sequence[str]],
    ) -> str:
        """Wrap rendered blocks into `pub mod name { ... }`, nesting one
        `pub mod` per namespace segment. Each level repeats `uses`."""
        tree = _ModuleNode()
        for namespace in sorted(blocks_by_namespace):
            node = tree
            for segment in namespace:
                node = node.children.setdefault(segment, _ModuleNode())
            node.blocks.extend(blocks_by_namespace[namespace])
        return self._render_node(name, uses, tree)

    def _render_node(self, name: str, uses: Sequence[str], node: "_ModuleNode") -> str:
        blocks = [block.rstrip("\n") for block in node.blocks]
        for child_name in sorted(node.children):
            child = self._render_node(child_name, uses, node.children[child_name])
            blocks.append(child.rstrip("\n"))
        return self.render("module.rs.j2", name=name, uses=list(uses), blocks=blocks)

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories: List[str] = []
        if templates_dir:
            directories.append(str(templates_dir))
        default_dir = str(DEFAULT_TEMPLATES_DIR)
        if default_dir not in directories:
            directories.append(default_dir)
        loader = FileSystemLoader(directories)
        return Environment(loader=loader, autoescape=False, trim_blocks=True, lstrip_blocks=True)


class _ModuleNode:
    __slots__ = ("blocks", "children")

    def __init__(self) -> None:
        self.blocks: List[str] = []
        self.children: Dict[str, _ModuleNode] = {}


def render_header(renderer: Optional[TemplateRenderer] = None) -> str:
    return (renderer or TemplateRenderer()).render("header.rs.j2")


__all__ = ["DEFAULT_TEMPLATES_DIR", "TemplateRenderer", "render_header"]
