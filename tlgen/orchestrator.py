"""Pipeline orchestration for the check and generate flows."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .codegen import render_client, render_rust_code
from .codegen.renderer import TemplateRenderer
from .config import ConfigError, GeneratorConfig, TlGenConfig, load_config
from .errors import ParseError
from .logging import get_logger, log_skipped_statement
from .tl import Definition, parse_tl_file, split_results


@dataclass
class Diagnostic:
    """A statement that could not be parsed."""

    kind: str
    message: str
    statement: str

    @classmethod
    def from_error(cls, error: ParseError) -> "Diagnostic":
        return cls(kind=error.kind.name, message=str(error), statement=error.statement.strip())


@dataclass
class CheckOutcome:
    """Result of parsing a schema without generating code."""

    definitions: int
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics


@dataclass
class GenerateOutcome:
    """Result of a generation run."""

    code: str
    client_code: Optional[str]
    definitions: int
    diagnostics: List[Diagnostic] = field(default_factory=list)
    output: Optional[Path] = None
    client_output: Optional[Path] = None


class Orchestrator:
    """Coordinates schema parsing and code generation."""

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self._renderer = renderer
        self.logger = get_logger("orchestrator")

    def parse_schema(self, text: str) -> Tuple[List[Definition], List[Diagnostic]]:
        """Parse schema text, logging every malformed statement as a warning."""
        definitions, errors = split_results(parse_tl_file(text))
        diagnostics = [Diagnostic.from_error(error) for error in errors]
        for diagnostic in diagnostics:
            log_skipped_statement(self.logger, diagnostic.message, diagnostic.statement)
        self.logger.debug("Parsed %d definitions", len(definitions))
        return definitions, diagnostics

    def check_text(self, text: str) -> CheckOutcome:
        definitions, diagnostics = self.parse_schema(text)
        return CheckOutcome(definitions=len(definitions), diagnostics=diagnostics)

    def run_check(self, schema: str | Path) -> CheckOutcome:
        schema_path = Path(schema).expanduser().resolve()
        self.logger.info("Checking %s", schema_path)
        outcome = self.check_text(_read_schema(schema_path))
        self.logger.info(
            "%d definitions, %d diagnostics", outcome.definitions, len(outcome.diagnostics)
        )
        return outcome

    def generate_from_text(
        self,
        text: str,
        generator: GeneratorConfig | None = None,
        *,
        include_client: bool = False,
    ) -> GenerateOutcome:
        """Render generated code for schema text without touching the disk."""
        generator = generator or GeneratorConfig()
        definitions, diagnostics = self.parse_schema(text)
        return self._render(definitions, diagnostics, generator, include_client, self._renderer)

    def run_generate(
        self,
        schema: str | Path | None = None,
        output: str | Path | None = None,
        *,
        client_output: str | Path | None = None,
        config_path: str | Path | None = None,
        bots_only_api: Optional[bool] = None,
        impl_debug: Optional[bool] = None,
        impl_from_enum: Optional[bool] = None,
        impl_from_type: Optional[bool] = None,
    ) -> GenerateOutcome:
        """Generate code for a schema file, writing it to the output paths.

        Arguments take precedence over `.tlgen.yml`; unset switches keep
        the configured values.
        """
        config = self._load_config(config_path)
        schema_path = _pick_path(schema, config.schema)
        if schema_path is None:
            raise ConfigError("No schema given; pass one or set `schema` in .tlgen.yml")
        output_path = _pick_path(output, config.output) or schema_path.with_suffix(".rs")
        client_path = _pick_path(client_output, config.client_output)

        generator = config.generator.with_overrides(
            bots_only_api=bots_only_api,
            impl_debug=impl_debug,
            impl_from_enum=impl_from_enum,
            impl_from_type=impl_from_type,
        )
        renderer = self._renderer
        if renderer is None and config.templates_dir is not None:
            renderer = TemplateRenderer(config.templates_dir)

        self.logger.info("Generating code for %s", schema_path)
        definitions, diagnostics = self.parse_schema(_read_schema(schema_path))
        outcome = self._render(
            definitions, diagnostics, generator, client_path is not None, renderer
        )

        _write_output(output_path, outcome.code)
        outcome.output = output_path
        self.logger.info("Wrote %s", output_path)
        if client_path is not None and outcome.client_code is not None:
            _write_output(client_path, outcome.client_code)
            outcome.client_output = client_path
            self.logger.info("Wrote %s", client_path)
        return outcome

    def _render(
        self,
        definitions: Sequence[Definition],
        diagnostics: List[Diagnostic],
        generator: GeneratorConfig,
        include_client: bool,
        renderer: TemplateRenderer | None,
    ) -> GenerateOutcome:
        renderer = renderer or TemplateRenderer()
        code = render_rust_code(definitions, generator, renderer)
        client_code = render_client(definitions, generator, renderer) if include_client else None
        return GenerateOutcome(
            code=code,
            client_code=client_code,
            definitions=len(definitions),
            diagnostics=diagnostics,
        )

    @staticmethod
    def _load_config(config_path: str | Path | None) -> TlGenConfig:
        return load_config(Path(config_path) if config_path is not None else Path.cwd())


def _pick_path(explicit: str | Path | None, configured: Optional[Path]) -> Optional[Path]:
    if explicit is not None:
        return Path(explicit).expanduser().resolve()
    return configured


def _read_schema(path: Path) -> str:
    if not path.is_file():
        raise FileNotFoundError(f"Schema file not found: {path}")
    return path.read_text(encoding="utf-8")


def _write_output(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


__all__ = ["CheckOutcome", "Diagnostic", "GenerateOutcome", "Orchestrator"]
