"""CLI entrypoints for tlgen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .errors import TlError
from .logging import configure_logging
from .orchestrator import Orchestrator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_switch(parser: argparse.ArgumentParser, name: str, help_text: str) -> None:
    dest = name.replace("-", "_")
    parser.add_argument(f"--{name}", dest=dest, action="store_true", default=None, help=help_text)
    parser.add_argument(
        f"--no-{name}", dest=dest, action="store_false", default=None, help=argparse.SUPPRESS
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tlgen",
        description="Generate Rust bindings from Type Language (TL) schemas.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate types, enums and functions for a schema.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    generate_parser.add_argument(
        "schema",
        nargs="?",
        default=None,
        help="Path to the TL schema (defaults to `schema` in .tlgen.yml).",
    )
    generate_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="File receiving the generated code (defaults to the schema path with .rs).",
    )
    generate_parser.add_argument(
        "--client-output",
        default=None,
        help="Also generate the client module into this file.",
    )
    generate_parser.add_argument(
        "--config",
        default=None,
        help="Path to .tlgen.yml or the directory holding it (defaults to current directory).",
    )
    _add_switch(generate_parser, "bots-only-api", "Include definitions and fields marked for bots only.")
    _add_switch(generate_parser, "impl-debug", "Derive Debug on generated types.")
    _add_switch(generate_parser, "impl-from-enum", "Add TryFrom conversions from enums to types.")
    _add_switch(generate_parser, "impl-from-type", "Add From conversions from types to enums.")

    check_parser = subparsers.add_parser(
        "check",
        help="Parse a schema and report statements that fail to parse.",
    )
    _add_verbose_option(check_parser, suppress_default=True)
    check_parser.add_argument("schema", help="Path to the TL schema.")

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service exposing check and generate.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to bind.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for tlgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    orchestrator = Orchestrator()

    if args.command == "generate":
        try:
            outcome = orchestrator.run_generate(
                args.schema,
                args.output,
                client_output=args.client_output,
                config_path=args.config,
                bots_only_api=args.bots_only_api,
                impl_debug=args.impl_debug,
                impl_from_enum=args.impl_from_enum,
                impl_from_type=args.impl_from_type,
            )
        except (FileNotFoundError, ConfigError) as exc:
            parser.exit(1, f"{exc}\n")
        except (TlError, OSError) as exc:
            parser.exit(1, f"tlgen generate failed: {exc}\nRun with --verbose for more details.\n")
        print(f"Generated {outcome.definitions} definitions into {_relativize(outcome.output)}")
        if outcome.client_output is not None:
            print(f"Client written to {_relativize(outcome.client_output)}")
        if outcome.diagnostics:
            print(f"{len(outcome.diagnostics)} statements skipped; see warnings above")
    elif args.command == "check":
        try:
            outcome = orchestrator.run_check(args.schema)
        except FileNotFoundError as exc:
            parser.exit(1, f"{exc}\n")
        for diagnostic in outcome.diagnostics:
            print(f"{diagnostic.kind}: {diagnostic.statement or '<empty>'}")
        if not outcome.ok:
            parser.exit(1, f"{len(outcome.diagnostics)} statements failed to parse\n")
        print(f"{outcome.definitions} definitions parsed")
    elif args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path | None) -> str:
    if path is None:
        return "-"
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
