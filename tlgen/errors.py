"""Exception hierarchy for schema parsing and code generation."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class TlError(Exception):
    """Base class for every error raised by tlgen."""


class ParamParseErrorKind(Enum):
    """Reasons a single `name:type` token can fail to parse."""

    EMPTY = "empty"
    INVALID_GENERIC = "invalid_generic"
    NOT_IMPLEMENTED = "not_implemented"
    MISSING_DEF = "missing_def"
    TYPE_DEF = "type_def"


class ParamParseError(TlError):
    """Raised when a parameter or type expression cannot be parsed."""

    def __init__(self, kind: ParamParseErrorKind, message: str = "") -> None:
        super().__init__(message or kind.value)
        self.kind = kind

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParamParseError):
            return NotImplemented
        return self.kind is other.kind

    def __hash__(self) -> int:
        return hash(self.kind)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.kind.name})"


class TypeDefDeclaration(ParamParseError):
    """A `{X:Type}` token: declares a generic type parameter, not a field."""

    def __init__(self, name: str) -> None:
        super().__init__(ParamParseErrorKind.TYPE_DEF, f"generic type parameter {name}")
        self.name = name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TypeDefDeclaration):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash((self.kind, self.name))

    def __repr__(self) -> str:
        return f"TypeDefDeclaration({self.name!r})"


class ParseErrorKind(Enum):
    """Reasons a whole statement can fail to parse."""

    EMPTY = "empty"
    INVALID_PARAM = "invalid_param"
    MISSING_NAME = "missing_name"
    MISSING_TYPE = "missing_type"
    NOT_IMPLEMENTED = "not_implemented"
    UNKNOWN_SEPARATOR = "unknown_separator"


class ParseError(TlError):
    """Raised (or yielded by the iterator) for one malformed statement."""

    def __init__(
        self,
        kind: ParseErrorKind,
        *,
        inner: Optional[ParamParseError] = None,
        statement: str = "",
    ) -> None:
        message = kind.value
        if inner is not None:
            message = f"{message}: {inner}"
        super().__init__(message)
        self.kind = kind
        self.inner = inner
        self.statement = statement

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParseError):
            return NotImplemented
        return self.kind is other.kind and self.inner == other.inner

    def __hash__(self) -> int:
        return hash((self.kind, self.inner))

    def __repr__(self) -> str:
        if self.inner is not None:
            return f"ParseError({self.kind.name}, inner={self.inner!r})"
        return f"ParseError({self.kind.name})"


class GenerationError(TlError):
    """Raised when the definitions cannot produce consistent code."""


__all__ = [
    "GenerationError",
    "ParamParseError",
    "ParamParseErrorKind",
    "ParseError",
    "ParseErrorKind",
    "TlError",
    "TypeDefDeclaration",
]
