"""Splits schema text into statements and parses each one."""

from __future__ import annotations

from typing import Iterator, List, Tuple, Union

from ..errors import ParseError, ParseErrorKind
from .definition import Category, Definition

DEFINITION_SEP = ";"
FUNCTIONS_SEP = "---functions---"
TYPES_SEP = "---types---"

ParseResult = Union[Definition, ParseError]


class TlIterator:
    """Iterates over the definitions of a TL file.

    Each item is either a `Definition` or the `ParseError` describing why
    that statement could not be parsed; a malformed statement never stops
    the iteration.
    """

    def __init__(self, contents: str) -> None:
        self._contents = contents
        self._index = 0
        self.category = Category.TYPES

    def __iter__(self) -> Iterator[ParseResult]:
        return self

    def __next__(self) -> ParseResult:
        while True:
            statement = self._next_statement()
            if statement.startswith("---"):
                if statement.startswith(FUNCTIONS_SEP):
                    self.category = Category.FUNCTIONS
                    statement = statement[len(FUNCTIONS_SEP) :].strip()
                elif statement.startswith(TYPES_SEP):
                    self.category = Category.TYPES
                    statement = statement[len(TYPES_SEP) :].strip()
                else:
                    return ParseError(ParseErrorKind.UNKNOWN_SEPARATOR, statement=statement)
                if not statement:
                    continue

            try:
                definition = Definition.parse(statement)
            except ParseError as exc:
                return exc
            definition.category = self.category
            return definition

    def _next_statement(self) -> str:
        """Return the next non-empty statement, raising StopIteration at the end."""
        contents = self._contents
        length = len(contents)
        while True:
            if self._index >= length:
                raise StopIteration

            end, is_empty = self._scan(self._index)
            statement = contents[self._index : end].strip()
            self._index = end + len(DEFINITION_SEP)
            if not is_empty:
                return statement

    def _scan(self, start: int) -> Tuple[int, bool]:
        contents = self._contents
        in_comment = False
        is_empty = True
        for i in range(start, len(contents)):
            char = contents[i]
            if not in_comment and char == "/" and contents.startswith("/", i + 1):
                in_comment = True
            elif in_comment and char == "\n":
                in_comment = False

            if not in_comment:
                if char == DEFINITION_SEP:
                    return i, is_empty
                if not char.isspace():
                    is_empty = False
        return len(contents), is_empty


def parse_tl_file(contents: str) -> List[ParseResult]:
    """Parse a whole schema, returning definitions and errors in file order."""
    return list(TlIterator(contents))


def split_results(results: List[ParseResult]) -> Tuple[List[Definition], List[ParseError]]:
    """Partition iterator results into successes and failures."""
    definitions: List[Definition] = []
    errors: List[ParseError] = []
    for result in results:
        if isinstance(result, ParseError):
            errors.append(result)
        else:
            definitions.append(result)
    return definitions, errors


__all__ = [
    "DEFINITION_SEP",
    "FUNCTIONS_SEP",
    "TYPES_SEP",
    "ParseResult",
    "TlIterator",
    "parse_tl_file",
    "split_results",
]
