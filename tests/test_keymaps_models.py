import pytest

from vipix.keymaps import (
    ENTER,
    ESC,
    KeySequence,
    KeyToken,
    MalformedToken,
    parse,
    parse_token,
    render,
    render_sequence,
)


def test_parse_mixes_bare_characters_and_named_keys() -> None:
    sequence = parse("<Esc>hi")

    assert sequence == KeySequence((ESC, KeyToken("h"), KeyToken("i")))
    assert len(sequence) == 3


def test_parse_modifier_prefixes() -> None:
    assert parse_token("<C-a>").modifiers == ("ctrl",)
    assert parse_token("<A-Left>") == KeyToken("Left", ("alt",))
    assert parse_token("<M-x>") == KeyToken("x", ("alt",))
    assert parse_token("<C-S-Up>").modifiers == ("ctrl", "shift")


def test_shift_folds_into_printable_characters() -> None:
    assert parse_token("<S-+>") == KeyToken("+")
    assert parse_token("<S-a>") == KeyToken("A")
    assert KeyToken("v", ("SHIFT",)) == KeyToken("V")


def test_named_keys_are_case_insensitive_with_aliases() -> None:
    assert parse_token("<esc>") == ESC
    assert parse_token("<Enter>") == ENTER
    assert parse_token("<return>") == ENTER
    assert parse_token("<bs>") == KeyToken("BS")


def test_space_and_less_than_have_single_spelling() -> None:
    assert KeyToken(" ") == parse_token("<Space>")
    assert KeyToken(" ").text == " "
    assert parse_token("<lt>") == KeyToken("<")
    assert render(KeyToken("<")) == "<lt>"
    assert render(KeyToken(" ")) == "<Space>"


@pytest.mark.parametrize("text", ["<Esc", "<Foo>", "<>", "<X-a>", "", "ab<"])
def test_parse_rejects_malformed_notation(text: str) -> None:
    with pytest.raises(MalformedToken):
        parse(text)


def test_malformed_token_is_value_error() -> None:
    with pytest.raises(ValueError) as excinfo:
        parse("<Nope>")

    assert isinstance(excinfo.value, MalformedToken)
    assert excinfo.value.text == "<Nope>"


def test_parse_token_requires_exactly_one_key() -> None:
    with pytest.raises(MalformedToken):
        parse_token("ab")


def test_render_round_trips_notation() -> None:
    for text in ("<Esc>hi", "<C-a>x", "<Left><lt>", "q<CR>"):
        assert render_sequence(parse(text)) == text


def test_printable_excludes_named_and_control_keys() -> None:
    assert KeyToken("a").printable
    assert KeyToken("Space").printable
    assert not ESC.printable
    assert not KeyToken("a", ("ctrl",)).printable
    assert ESC.text is None


def test_tokens_are_hashable_values() -> None:
    table = {KeyToken("a"): 1, parse_token("<S-+>"): 2}

    assert table[parse_token("a")] == 1
    assert table[KeyToken("+")] == 2
