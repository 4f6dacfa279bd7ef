"""Single `name:type` parameters of a definition."""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Optional

from ..errors import ParamParseError, ParamParseErrorKind, TypeDefDeclaration
from .ty import Type

_FLAG_CONDITION = re.compile(r"^(\w+)\.(\d+)$")
FLAGS_TYPE_NAME = "#"


@dataclass(frozen=True)
class Flag:
    """The `flags.N` condition guarding a conditional parameter."""

    name: str
    index: int

    def __str__(self) -> str:
        return f"{self.name}.{self.index}"


@dataclass
class Parameter:
    """A single parameter, with a name, a type and its documentation."""

    name: str
    ty: Type
    description: str = ""
    flag: Optional[Flag] = None

    @property
    def is_flags(self) -> bool:
        """True for the `flags:#` pseudo-field, which is never stored."""
        return self.ty.name == FLAGS_TYPE_NAME

    @classmethod
    def parse(cls, text: str) -> "Parameter":
        """Parse `name:type` or `name:flags.N?type`.

        `{X:Type}` raises `TypeDefDeclaration` so the caller can register a
        generic type parameter; any other brace token is a malformed
        declaration.
        """
        if text.startswith("{"):
            if text.endswith(":Type}"):
                raise TypeDefDeclaration(text[1 : text.index(":")])
            raise ParamParseError(
                ParamParseErrorKind.MISSING_DEF, f"unknown generic declaration {text!r}"
            )

        parts = text.split(":")
        if len(parts) < 2:
            raise ParamParseError(
                ParamParseErrorKind.NOT_IMPLEMENTED, f"no separator in {text!r}"
            )
        name, ty = parts[0], parts[1]
        if not name:
            raise ParamParseError(ParamParseErrorKind.EMPTY, f"empty name in {text!r}")

        flag: Optional[Flag] = None
        if "?" in ty:
            condition, ty = ty.split("?", 1)
            match = _FLAG_CONDITION.match(condition)
            if match is None:
                raise ParamParseError(
                    ParamParseErrorKind.NOT_IMPLEMENTED, f"bad flag condition in {text!r}"
                )
            flag = Flag(name=match.group(1), index=int(match.group(2)))

        return cls(name=name, ty=Type.parse(ty), flag=flag)

    def __str__(self) -> str:
        if self.flag is not None:
            return f"{self.name}:{self.flag}?{self.ty}"
        return f"{self.name}:{self.ty}"


__all__ = ["FLAGS_TYPE_NAME", "Flag", "Parameter"]
