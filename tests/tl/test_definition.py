"""Tests for tlgen.tl.definition."""

from __future__ import annotations

import pytest

from tlgen.errors import ParamParseError, ParamParseErrorKind, ParseError, ParseErrorKind
from tlgen.tl import Category, Definition, Flag, Type, infer_id


def _parse_error(statement: str) -> ParseError:
    with pytest.raises(ParseError) as excinfo:
        Definition.parse(statement)
    return excinfo.value


def test_parse_empty_definition() -> None:
    assert _parse_error("").kind is ParseErrorKind.EMPTY
    assert _parse_error("  \n ").kind is ParseErrorKind.EMPTY


def test_parse_missing_type() -> None:
    assert _parse_error("foo").kind is ParseErrorKind.MISSING_TYPE
    assert _parse_error("foo = ").kind is ParseErrorKind.MISSING_TYPE


def test_parse_missing_name() -> None:
    assert _parse_error(" = Foo").kind is ParseErrorKind.MISSING_NAME


def test_parse_bad_explicit_id() -> None:
    assert _parse_error("foo#xyz = Foo").kind is ParseErrorKind.NOT_IMPLEMENTED


def test_parse_unsupported_param() -> None:
    assert _parse_error("foo bar = Foo").kind is ParseErrorKind.NOT_IMPLEMENTED


def test_parse_invalid_param_keeps_inner_error() -> None:
    error = _parse_error("foo bar:<x = Foo")
    assert error == ParseError(
        ParseErrorKind.INVALID_PARAM,
        inner=ParamParseError(ParamParseErrorKind.INVALID_GENERIC),
    )


def test_parse_explicit_id() -> None:
    definition = Definition.parse("user#d23c81a3 id:int53 = User")
    assert definition.id == 0xD23C81A3
    assert definition.name == "user"


def test_parse_inferred_id() -> None:
    definition = Definition.parse("msgs_ack msg_ids:Vector<long> = MsgsAck")
    assert definition.id == 0x62D6B459


def test_parse_full_definition() -> None:
    definition = Definition.parse("ns.userProfile id:int53 names:vector<string> = ns.UserProfile")
    assert definition.name == "ns.userProfile"
    assert definition.namespace == ("ns",)
    assert definition.category is Category.TYPES
    assert [param.name for param in definition.params] == ["id", "names"]
    assert definition.params[1].ty == Type(name="vector", generic_arg=Type(name="string"))
    assert definition.ty == Type(name="ns.UserProfile")


def test_parse_generic_declarations() -> None:
    definition = Definition.parse("invokeAfterMsg {X:Type} msg_id:long query:!X = X")
    assert definition.type_defs == ["X"]
    assert [param.name for param in definition.params] == ["msg_id", "query"]
    assert definition.params[1].ty.generic_ref is True
    assert definition.id == 0xCB9F372D


def test_parse_flags() -> None:
    definition = Definition.parse(
        "inputMessagesFilterPhoneCalls flags:# missed:flags.0?true = MessagesFilter"
    )
    assert definition.params[0].is_flags
    assert definition.params[1].flag == Flag(name="flags", index=0)
    assert definition.id == 0x80C99768


def test_parse_documentation() -> None:
    definition = Definition.parse(
        "//@description Changes the first name @first_name The new value\n"
        "//-continued on a second line\n"
        "setName first_name:string last_name:string = Ok"
    )
    assert definition.description == "Changes the first name"
    assert definition.params[0].description == "The new value\ncontinued on a second line"
    assert definition.params[1].description == ""
    assert definition.id == infer_id("setName first_name:string last_name:string = Ok")


def test_parse_param_named_description() -> None:
    definition = Definition.parse(
        "//@description Changes the bio @param_description The new bio\n"
        "setBio description:string = Ok"
    )
    assert definition.description == "Changes the bio"
    assert definition.params[0].description == "The new bio"


@pytest.mark.parametrize(
    "statement",
    [
        "getMe = User",
        "msgs_ack msg_ids:Vector<long> = MsgsAck",
        "invokeAfterMsg {X:Type} msg_id:long query:!X = X",
        "inputMessagesFilterPhoneCalls flags:# missed:flags.0?true = MessagesFilter",
        "user#12345678 id:int53 first_name:string = User",
    ],
)
def test_textual_form_round_trips(statement: str) -> None:
    definition = Definition.parse(statement)
    assert Definition.parse(str(definition)) == definition


def test_textual_form_omits_inferred_id() -> None:
    assert str(Definition.parse("getMe = User")) == "getMe = User"
    assert str(Definition.parse("user#12345678 id:int53 = User")).startswith("user#12345678 ")


def test_parse_ignores_comment_between_params() -> None:
    definition = Definition.parse("first a:int32 // the a field\n b:int32 = T")
    assert definition.name == "first"
    assert [param.name for param in definition.params] == ["a", "b"]
    assert definition.id == infer_id("first a:int32 b:int32 = T")


def test_parse_ignores_trailing_comment() -> None:
    definition = Definition.parse("a = A // note")
    assert definition.ty == Type(name="A")
    assert definition.params == []


def test_parse_annotations_only_come_from_leading_comments() -> None:
    definition = Definition.parse(
        "//@description Sets a value\nsetValue value:int32 // @value ignored\n= Ok"
    )
    assert definition.description == "Sets a value"
    assert definition.params[0].description == ""
