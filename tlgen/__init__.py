"""Generate Rust bindings from Type Language (TL) schemas."""

from .codegen import generate_client, generate_rust_code, render_client, render_rust_code
from .config import GeneratorConfig, TlGenConfig, load_config
from .errors import GenerationError, ParamParseError, ParseError, TlError
from .tl import Definition, parse_tl_file

__version__ = "0.1.0"

__all__ = [
    "Definition",
    "GenerationError",
    "GeneratorConfig",
    "ParamParseError",
    "ParseError",
    "TlError",
    "TlGenConfig",
    "__version__",
    "generate_client",
    "generate_rust_code",
    "load_config",
    "parse_tl_file",
    "render_client",
    "render_rust_code",
]
