"""Tests for tlgen.codegen.metadata."""

from __future__ import annotations

from typing import Dict, List

import pytest

from tests._fixtures.schemas import parse_definitions
from tlgen.codegen.metadata import Metadata
from tlgen.errors import GenerationError
from tlgen.tl import Definition, Type


def _by_name(definitions: List[Definition]) -> Dict[str, Definition]:
    return {definition.name: definition for definition in definitions}


def test_only_self_containing_definitions_are_recursive(sample_definitions: List[Definition]) -> None:
    metadata = Metadata(sample_definitions)
    defs = _by_name(sample_definitions)

    assert metadata.is_recursive_def(defs["richTextBold"])
    assert not metadata.is_recursive_def(defs["richTextPlain"])
    assert not metadata.is_recursive_def(defs["user"])
    assert not metadata.is_recursive_def(defs["error"])


def test_recursion_through_other_types() -> None:
    definitions = parse_definitions(
        """
        chat id:int32 last_message:Message = Chat;
        message text:string chat:Chat = Message;
        user name:string = User;
        """
    )
    metadata = Metadata(definitions)
    defs = _by_name(definitions)

    assert metadata.is_recursive_def(defs["chat"])
    assert metadata.is_recursive_def(defs["message"])
    assert not metadata.is_recursive_def(defs["user"])


def test_cycles_without_self_reference_terminate() -> None:
    definitions = parse_definitions(
        """
        a b:B = A;
        b c:C = B;
        c b:B = C;
        """
    )
    metadata = Metadata(definitions)
    defs = _by_name(definitions)

    assert not metadata.is_recursive_def(defs["a"])
    assert metadata.is_recursive_def(defs["b"])
    assert metadata.is_recursive_def(defs["c"])


def test_default_requires_bare_composition() -> None:
    definitions = parse_definitions(
        """
        chatPhoto small:string big:string = ChatPhoto;
        chat id:int32 photo:chatPhoto = Chat;
        message sender:User = Message;
        //@description A draft @reply_to Message replied to; may be null
        draft text:string reply_to:Message = Draft;
        flagged flags:# id:int32 = Flagged;
        """
    )
    metadata = Metadata(definitions)
    defs = _by_name(definitions)

    assert metadata.can_def_implement_default(defs["chatPhoto"])
    assert metadata.can_def_implement_default(defs["chat"])
    assert not metadata.can_def_implement_default(defs["message"])
    assert metadata.can_def_implement_default(defs["draft"])
    assert metadata.can_def_implement_default(defs["flagged"])


def test_bare_self_reference_terminates() -> None:
    definitions = parse_definitions("node value:int32 next:node = Node;")
    metadata = Metadata(definitions)
    assert metadata.can_def_implement_default(definitions[0])


def test_defs_with_type_keeps_encounter_order(sample_definitions: List[Definition]) -> None:
    metadata = Metadata(sample_definitions)
    names = [d.name for d in metadata.defs_with_type(Type.parse("UserType"))]
    assert names == ["userTypeRegular", "userTypeBot"]


def test_functions_are_not_constructors(sample_definitions: List[Definition]) -> None:
    metadata = Metadata(sample_definitions)
    names = [d.name for d in metadata.defs_with_type(Type.parse("counters.Counter"))]
    assert names == ["counters.counter"]


def test_unknown_type_raises(sample_definitions: List[Definition]) -> None:
    metadata = Metadata(sample_definitions)
    assert not metadata.has_constructors(Type.parse("Missing"))
    with pytest.raises(GenerationError):
        metadata.defs_with_type(Type.parse("Missing"))


def test_require_constructors(sample_definitions: List[Definition]) -> None:
    metadata = Metadata(sample_definitions)
    for text in ("User", "vector<RichText>", "int53", "userTypeBot", "!X", "X"):
        metadata.require_constructors(Type.parse(text), "field", type_defs=["X"])

    with pytest.raises(GenerationError, match="field refers to 'Chat'"):
        metadata.require_constructors(Type.parse("vector<Chat>"), "field")
