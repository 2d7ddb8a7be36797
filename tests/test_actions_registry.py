from __future__ import annotations

from typing import Any, List

import pytest

from vipix.actions import ActionRegistry, UnknownCommand
from vipix.keymaps import KeyToken, MalformedToken


def noop_verb(engine: Any, state: Any, positions: Any) -> None:
    return None


def test_add_verb_and_lookup_by_token() -> None:
    registry = ActionRegistry()

    verb = registry.add_verb("d", True, noop_verb)

    assert registry.get_verb("normal", KeyToken("d")) is verb
    assert registry.get_verb("visual", KeyToken("d")) is verb
    assert registry.get_verb("insertion", KeyToken("d")) is None
    assert verb.requires_positions is True


def test_verb_names_use_key_notation() -> None:
    registry = ActionRegistry()

    verb = registry.add_verb("<S-+>", False, noop_verb)

    assert registry.get_verb("normal", KeyToken("+")) is verb
    with pytest.raises(MalformedToken):
        registry.add_verb("<Nope>", False, noop_verb)


def test_registration_overwrites_same_name() -> None:
    registry = ActionRegistry()
    registry.add_verb("x", False, noop_verb)

    second = registry.add_verb("x", True, noop_verb)

    assert registry.get_verb("normal", KeyToken("x")) is second
    assert registry.get_verb("visual", KeyToken("x")).requires_positions is True


def test_handlers_can_target_specific_modes() -> None:
    registry = ActionRegistry()

    registry.add_verb("<Esc>", False, noop_verb, modes=("normal", "insertion"))

    assert registry.get_verb("insertion", KeyToken("Esc")) is not None
    assert registry.get_verb("visual", KeyToken("Esc")) is None
    with pytest.raises(ValueError):
        registry.add_verb("z", False, noop_verb, modes=())


def test_object_traversal_keeps_first_visit_order() -> None:
    registry = ActionRegistry()
    registry.add_object("w", lambda engine, state: [(0, 0), (1, 0), (0, 0), (2, 0)])

    obj = registry.get_object("normal", KeyToken("w"))

    assert obj is not None
    assert obj(None, None) == ((0, 0), (1, 0), (2, 0))


def test_unknown_command_raises() -> None:
    registry = ActionRegistry()

    with pytest.raises(UnknownCommand) as excinfo:
        registry.get_command("frobnicate")

    assert excinfo.value.name == "frobnicate"


def test_command_handler_receives_argument_list() -> None:
    registry = ActionRegistry()
    seen: List[List[str]] = []
    registry.add_command("echo", lambda engine, state, args: seen.append(args))

    registry.get_command("echo")(None, None, ("a", "b"))

    assert seen == [["a", "b"]]


def test_command_names_cannot_contain_whitespace() -> None:
    registry = ActionRegistry()

    with pytest.raises(ValueError):
        registry.add_command("two words", noop_verb)
