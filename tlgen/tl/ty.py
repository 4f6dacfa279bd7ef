"""Type expressions such as `int32`, `vector<User>` or `!X`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..errors import ParamParseError, ParamParseErrorKind


@dataclass(frozen=True)
class Type:
    """The type of a definition or of one of its parameters."""

    name: str
    generic_ref: bool = False
    generic_arg: Optional["Type"] = None

    @property
    def bare(self) -> bool:
        """Bare types start with a lowercase letter; boxed ones do not."""
        return "a" <= self.name.rsplit(".", 1)[-1][:1] <= "z"

    @property
    def namespace(self) -> tuple[str, ...]:
        return tuple(self.name.split(".")[:-1])

    @classmethod
    def parse(cls, text: str) -> "Type":
        """Parse `name`, `!name` or `name<arg>` into a `Type`."""
        generic_ref = text.startswith("!")
        if generic_ref:
            text = text[1:]

        generic_arg: Optional[Type] = None
        pos = text.find("<")
        if pos != -1:
            if not text.endswith(">"):
                raise ParamParseError(
                    ParamParseErrorKind.INVALID_GENERIC, f"unterminated generic in {text!r}"
                )
            generic_arg = cls.parse(text[pos + 1 : -1])
            text = text[:pos]

        if not text:
            raise ParamParseError(ParamParseErrorKind.EMPTY, "empty type name")

        return cls(name=text, generic_ref=generic_ref, generic_arg=generic_arg)

    def __str__(self) -> str:
        rendered = f"!{self.name}" if self.generic_ref else self.name
        if self.generic_arg is not None:
            rendered += f"<{self.generic_arg}>"
        return rendered


__all__ = ["Type"]
