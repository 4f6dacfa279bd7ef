"""Tests for tlgen.orchestrator."""

from __future__ import annotations

from pathlib import Path

import pytest

from tlgen.codegen.renderer import TemplateRenderer
from tlgen.config import ConfigError, GeneratorConfig
from tlgen.orchestrator import Orchestrator


def test_parse_schema_keeps_good_statements() -> None:
    orchestrator = Orchestrator()
    definitions, diagnostics = orchestrator.parse_schema("a = A;\nb c = B;\nd = D;")

    assert [d.name for d in definitions] == ["a", "d"]
    assert len(diagnostics) == 1
    assert diagnostics[0].kind == "NOT_IMPLEMENTED"
    assert diagnostics[0].statement == "b c = B"


def test_check_text_reports_counts(sample_schema: str) -> None:
    outcome = Orchestrator().check_text(sample_schema)
    assert outcome.ok
    assert outcome.definitions == 12


def test_generate_from_text_skips_bad_statements(sample_schema: str) -> None:
    outcome = Orchestrator().generate_from_text(
        sample_schema + "\nbroken;\n", GeneratorConfig(), include_client=True
    )

    assert outcome.definitions == 12
    assert [d.kind for d in outcome.diagnostics] == ["MISSING_TYPE"]
    assert "pub mod enums {" in outcome.code
    assert outcome.client_code is not None
    assert "pub struct Client<T: crate::Transport>" in outcome.client_code


def test_generate_from_text_without_client(sample_schema: str) -> None:
    outcome = Orchestrator().generate_from_text(sample_schema)
    assert outcome.client_code is None


def test_run_generate_writes_files(schema_file: Path, tmp_path: Path) -> None:
    output = tmp_path / "generated.rs"
    outcome = Orchestrator().run_generate(schema_file, output, config_path=tmp_path)

    assert outcome.output == output.resolve()
    assert outcome.client_output is None
    assert output.read_text(encoding="utf-8") == outcome.code


def test_run_generate_defaults_output_next_to_schema(schema_file: Path, tmp_path: Path) -> None:
    outcome = Orchestrator().run_generate(schema_file, config_path=tmp_path)
    assert outcome.output == schema_file.resolve().with_suffix(".rs")
    assert outcome.output.exists()


def test_run_generate_applies_overrides_over_config(schema_file: Path, tmp_path: Path) -> None:
    (tmp_path / ".tlgen.yml").write_text(
        "generator:\n  bots_only_api: true\n  impl_debug: false\n", encoding="utf-8"
    )

    outcome = Orchestrator().run_generate(
        schema_file, tmp_path / "out.rs", config_path=tmp_path, bots_only_api=False
    )

    assert "UserTypeBot" not in outcome.code
    assert "Debug" not in outcome.code


def test_run_generate_uses_configured_templates(schema_file: Path, tmp_path: Path) -> None:
    templates = tmp_path / "templates"
    templates.mkdir()
    (templates / "header.rs.j2").write_text("// project header\n", encoding="utf-8")
    (tmp_path / ".tlgen.yml").write_text("templates_dir: templates\n", encoding="utf-8")

    outcome = Orchestrator().run_generate(schema_file, tmp_path / "out.rs", config_path=tmp_path)
    assert outcome.code.startswith("// project header\n")


def test_injected_renderer_is_used(sample_schema: str, tmp_path: Path) -> None:
    (tmp_path / "header.rs.j2").write_text("// injected\n", encoding="utf-8")
    orchestrator = Orchestrator(renderer=TemplateRenderer(tmp_path))
    assert orchestrator.generate_from_text(sample_schema).code.startswith("// injected\n")


def test_run_generate_requires_schema(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        Orchestrator().run_generate(config_path=tmp_path)


def test_run_check_missing_schema(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        Orchestrator().run_check(tmp_path / "missing.tl")
