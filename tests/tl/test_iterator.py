"""Tests for tlgen.tl.iterator."""

from __future__ import annotations

from tlgen.errors import ParseError, ParseErrorKind
from tlgen.tl import Category, Definition, TlIterator, parse_tl_file, split_results


def test_unknown_separator_is_reported() -> None:
    iterator = TlIterator("---foo---")
    assert next(iterator) == ParseError(ParseErrorKind.UNKNOWN_SEPARATOR)
    assert next(iterator, None) is None


def test_bad_statement_does_not_stop_iteration() -> None:
    results = parse_tl_file(
        """
        //@description This is the first definition of the test
        first#1 = t; // inline comment
        second and bad;
        third#3 = t;
        // trailing comment
        """
    )

    assert len(results) == 3
    assert isinstance(results[0], Definition)
    assert results[0].id == 1
    assert results[0].description == "This is the first definition of the test"
    assert isinstance(results[1], ParseError)
    assert isinstance(results[2], Definition)
    assert results[2].id == 3


def test_category_markers_switch_sections() -> None:
    results = parse_tl_file(
        """
        user id:int53 = User;
        ---functions---
        getMe = User;
        ---types---
        chat id:int53 = Chat;
        """
    )

    definitions, errors = split_results(results)
    assert errors == []
    assert [(d.name, d.category) for d in definitions] == [
        ("user", Category.TYPES),
        ("getMe", Category.FUNCTIONS),
        ("chat", Category.TYPES),
    ]


def test_marker_alone_yields_nothing() -> None:
    results = parse_tl_file("---functions---;\ngetMe = User;")
    assert len(results) == 1
    assert results[0].category is Category.FUNCTIONS


def test_semicolons_in_comments_are_ignored() -> None:
    results = parse_tl_file("//@description Ends here; not really\nok = Ok;")
    assert len(results) == 1
    assert isinstance(results[0], Definition)
    assert results[0].description == "Ends here; not really"


def test_comment_only_statements_are_skipped() -> None:
    assert parse_tl_file("// just a comment\n;\n  ;\n") == []


def test_split_results_partitions_in_order() -> None:
    definitions, errors = split_results(parse_tl_file("a = A; b c = B; d = D;"))
    assert [d.name for d in definitions] == ["a", "d"]
    assert [e.kind for e in errors] == [ParseErrorKind.NOT_IMPLEMENTED]


def test_empty_statements_between_definitions_are_skipped() -> None:
    results = parse_tl_file("a = A;;b = B;\n// trailing note\n;")
    assert [result.name for result in results] == ["a", "b"]
    assert all(isinstance(result, Definition) for result in results)


def test_comments_inside_statements_are_ignored() -> None:
    results = parse_tl_file("first a:int32 // the a field\n b:int32 = T;\nsecond = S // note\n;")
    definitions, errors = split_results(results)
    assert errors == []
    assert [d.name for d in definitions] == ["first", "second"]
    assert [p.name for p in definitions[0].params] == ["a", "b"]
    assert definitions[1].ty.name == "S"
