"""Configuration loading for tlgen (.tlgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".tlgen.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass(frozen=True)
class GeneratorConfig:
    """Build-time switches that shape the generated code."""

    bots_only_api: bool = False
    impl_debug: bool = True
    impl_from_enum: bool = False
    impl_from_type: bool = False
    hash_definitions: tuple[str, ...] = ()
    hash_types: tuple[str, ...] = ()

    def with_overrides(self, **overrides: Optional[bool]) -> "GeneratorConfig":
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes) if changes else self


@dataclass
class TlGenConfig:
    """Represents the high-level settings defined in .tlgen.yml."""

    root: Path
    schema: Optional[Path] = None
    output: Optional[Path] = None
    client_output: Optional[Path] = None
    templates_dir: Optional[Path] = None
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)


def load_config(config_path: Path) -> TlGenConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return TlGenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    generator_data = _as_dict(data.get("generator"))
    defaults = GeneratorConfig()
    generator = GeneratorConfig(
        bots_only_api=_as_bool(generator_data.get("bots_only_api"), defaults.bots_only_api),
        impl_debug=_as_bool(generator_data.get("impl_debug"), defaults.impl_debug),
        impl_from_enum=_as_bool(generator_data.get("impl_from_enum"), defaults.impl_from_enum),
        impl_from_type=_as_bool(generator_data.get("impl_from_type"), defaults.impl_from_type),
        hash_definitions=tuple(_as_str_list(generator_data.get("hash_definitions"))),
        hash_types=tuple(_as_str_list(generator_data.get("hash_types"))),
    )

    return TlGenConfig(
        root=root,
        schema=_as_path(root, data.get("schema")),
        output=_as_path(root, data.get("output")),
        client_output=_as_path(root, data.get("client_output")),
        templates_dir=_as_path(root, data.get("templates_dir")),
        generator=generator,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_path(root: Path, value: Any) -> Optional[Path]:
    text = _as_str(value)
    if not text:
        return None
    path = Path(text).expanduser()
    return path if path.is_absolute() else root / path


def _as_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return default


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = ["CONFIG_FILENAME", "ConfigError", "GeneratorConfig", "TlGenConfig", "load_config"]
