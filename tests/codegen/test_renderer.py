"""Tests for tlgen.codegen.renderer."""

from __future__ import annotations

from pathlib import Path

from tlgen.codegen.renderer import TemplateRenderer, render_header


def test_render_module_nests_namespaces() -> None:
    renderer = TemplateRenderer()
    rendered = renderer.render_module(
        "m",
        ["use z;"],
        {("x", "y"): ["b"], (): ["a"]},
    )

    assert rendered == (
        "pub mod m {\n"
        "    use z;\n"
        "\n"
        "    a\n"
        "\n"
        "    pub mod x {\n"
        "        use z;\n"
        "\n"
        "        pub mod y {\n"
        "            use z;\n"
        "\n"
        "            b\n"
        "        }\n"
        "    }\n"
        "}\n"
    )


def test_render_module_sorts_sibling_namespaces() -> None:
    renderer = TemplateRenderer()
    rendered = renderer.render_module("m", [], {("b",): ["second"], ("a",): ["first"]})
    assert rendered.index("pub mod a {") < rendered.index("pub mod b {")


def test_multiline_blocks_are_indented_without_trailing_whitespace() -> None:
    renderer = TemplateRenderer()
    rendered = renderer.render_module("m", [], {(): ["fn a() {\n\n}"]})
    assert "    fn a() {\n\n    }\n" in rendered
    assert all(line == line.rstrip() for line in rendered.splitlines())


def test_user_templates_take_precedence(tmp_path: Path) -> None:
    (tmp_path / "header.rs.j2").write_text("// custom header\n", encoding="utf-8")
    renderer = TemplateRenderer(tmp_path)

    assert render_header(renderer) == "// custom header\n"
    assert renderer.render_module("m", [], {}) == "pub mod m {\n}\n"


def test_default_header_mentions_generation() -> None:
    assert "generated by tlgen" in render_header()
