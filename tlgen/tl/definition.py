"""Parsing of complete TL statements into `Definition` objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import re
from typing import Dict, List, Tuple

from ..errors import (
    ParamParseError,
    ParamParseErrorKind,
    ParseError,
    ParseErrorKind,
    TypeDefDeclaration,
)
from .parameter import Parameter
from .ty import Type
from .utils import infer_id

_HEX_ID = re.compile(r"^[0-9a-fA-F]+$")


class Category(Enum):
    """Section of the schema a definition was read from."""

    TYPES = "types"
    FUNCTIONS = "functions"


@dataclass
class Definition:
    """A constructor (type category) or remote procedure (function category)."""

    name: str
    description: str
    params: List[Parameter]
    ty: Type
    category: Category
    id: int
    type_defs: List[str] = field(default_factory=list)

    @property
    def namespace(self) -> Tuple[str, ...]:
        return tuple(self.name.split(".")[:-1])

    @classmethod
    def parse(cls, statement: str) -> "Definition":
        """Parse one `;`-free statement, including its leading doc comments."""
        if not statement.strip():
            raise ParseError(ParseErrorKind.EMPTY, statement=statement)

        body, docs = _split_docs(statement)

        sides = body.split("=")
        if len(sides) < 2:
            raise ParseError(ParseErrorKind.MISSING_TYPE, statement=statement)
        left, right = sides[0].strip(), sides[1].strip()

        try:
            ty = Type.parse(right)
        except ParamParseError:
            raise ParseError(ParseErrorKind.MISSING_TYPE, statement=statement) from None

        head, _, middle = _split_first_word(left)
        name, explicit_id = _split_explicit_id(head, statement)
        if not name:
            raise ParseError(ParseErrorKind.MISSING_NAME, statement=statement)

        params: List[Parameter] = []
        type_defs: List[str] = []
        for token in middle.split():
            try:
                param = Parameter.parse(token)
            except TypeDefDeclaration as declaration:
                type_defs.append(declaration.name)
                continue
            except ParamParseError as exc:
                if exc.kind is ParamParseErrorKind.NOT_IMPLEMENTED:
                    raise ParseError(ParseErrorKind.NOT_IMPLEMENTED, statement=statement) from exc
                raise ParseError(
                    ParseErrorKind.INVALID_PARAM, inner=exc, statement=statement
                ) from exc
            params.append(param)

        description = docs.pop("description", "")
        for param in params:
            key = "param_description" if param.name == "description" else param.name
            param.description = docs.pop(key, "")

        return cls(
            name=name,
            description=description,
            params=params,
            ty=ty,
            category=Category.TYPES,
            id=explicit_id if explicit_id is not None else infer_id(body),
            type_defs=type_defs,
        )

    def __str__(self) -> str:
        parts = [f"{{{name}:Type}}" for name in self.type_defs]
        parts.extend(str(param) for param in self.params)
        tail = " ".join([*parts, "=", str(self.ty)])
        rendered = f"{self.name} {tail}"
        if infer_id(rendered) != self.id:
            rendered = f"{self.name}#{self.id:08x} {tail}"
        return rendered


def _split_docs(statement: str) -> Tuple[str, Dict[str, str]]:
    """Separate leading `//@key value` annotations from the statement body.

    Only the comment lines before the first line of code are documentation;
    any other `//` comment is dropped from the body.
    """
    lines = statement.split("\n")
    first_code = 0
    while first_code < len(lines):
        stripped = lines[first_code].strip()
        if stripped and not stripped.startswith("//"):
            break
        first_code += 1

    region = "\n".join(lines[:first_code])
    body = "\n".join(line.split("//", 1)[0] for line in lines[first_code:])

    docs: Dict[str, str] = {}
    offset = 0
    while True:
        start = region.find("@", offset)
        if start == -1:
            break
        end = region.find("@", start + 1)
        if end == -1:
            end = len(region)
        comment = region[start + 1 : end].replace("//-", "").replace("//", "").strip()
        key, _, content = comment.partition(" ")
        docs[key] = content
        offset = end

    return body, docs


def _split_first_word(text: str) -> Tuple[str, str, str]:
    pieces = re.split(r"(\s+)", text, maxsplit=1)
    if len(pieces) == 1:
        return pieces[0], "", ""
    return pieces[0], pieces[1], pieces[2].strip()


def _split_explicit_id(head: str, statement: str) -> Tuple[str, int | None]:
    if "#" not in head:
        return head, None
    name, _, raw_id = head.partition("#")
    if not _HEX_ID.match(raw_id):
        raise ParseError(ParseErrorKind.NOT_IMPLEMENTED, statement=statement)
    return name, int(raw_id, 16)


__all__ = ["Category", "Definition"]
