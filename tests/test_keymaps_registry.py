from __future__ import annotations

import pytest

from vipix.keymaps import (
    KeymapRegistry,
    KeymapResolver,
    KeyToken,
    MalformedToken,
    load_default_keymaps,
    parse,
)


def tokens(text: str) -> tuple[KeyToken, ...]:
    return tuple(parse(text))


def test_bind_and_resolve_exact_trigger() -> None:
    registry = KeymapRegistry()

    registry.bind("normal", "a", "bb")

    assert registry.resolve("normal", "a") == parse("bb")
    assert registry.resolve("normal", "b") is None
    assert registry.resolve("insertion", "a") is None


def test_bind_last_write_wins() -> None:
    registry = KeymapRegistry()
    registry.bind("normal", "a", "b")

    registry.bind("normal", "a", "c")

    assert registry.resolve("normal", "a") == parse("c")
    assert registry.stats().binding_count == 1


def test_bind_rejects_malformed_notation() -> None:
    registry = KeymapRegistry()

    with pytest.raises(MalformedToken):
        registry.bind("insertion", "<Nope>", "x")
    with pytest.raises(MalformedToken):
        registry.bind("insertion", "x", "<Esc")

    assert registry.stats().binding_count == 0


def test_default_keymaps_remap_arrows_in_insertion() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    assert registry.resolve("insertion", "<Left>") == parse("<Esc>hi")
    assert registry.resolve("insertion", "<Up>") == parse("<Esc>ki")
    assert registry.stats().modes == ("insertion",)


def test_resolver_matches_exact_sequence() -> None:
    registry = KeymapRegistry()
    registry.bind("insertion", "jk", "<Esc>")
    resolver = KeymapResolver(registry)

    result = resolver.resolve("insertion", tokens("jk"))

    assert result.status == "match"
    assert result.binding is not None
    assert result.binding.expansion == parse("<Esc>")


def test_resolver_reports_pending_for_prefix() -> None:
    registry = KeymapRegistry()
    registry.bind("insertion", "jk", "<Esc>")
    resolver = KeymapResolver(registry)

    assert resolver.resolve("insertion", tokens("j")).status == "pending"
    assert resolver.resolve("insertion", tokens("ja")).status == "miss"
    assert resolver.resolve("normal", tokens("j")).status == "miss"


def test_resolver_prefers_complete_trigger_over_longer_one() -> None:
    registry = KeymapRegistry()
    registry.bind("normal", "g", "l")
    registry.bind("normal", "gg", "h")
    resolver = KeymapResolver(registry)

    result = resolver.resolve("normal", tokens("g"))

    assert result.status == "match"
    assert result.binding is not None and result.binding.expansion == parse("l")


def test_resolver_cache_refreshes_on_revision() -> None:
    registry = KeymapRegistry()
    resolver = KeymapResolver(registry)

    assert resolver.resolve("normal", tokens("x")).status == "miss"

    registry.bind("normal", "x", "l")

    assert resolver.resolve("normal", tokens("x")).status == "match"
