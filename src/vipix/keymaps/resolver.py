"""Trie-based remap resolution over partially typed input."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Optional, Sequence

from vipix.runtime.telemetry import span

from .models import Binding, KeyToken
from .registry import KeymapRegistry


@dataclass(slots=True)
class TrieNode:
    """Single trie node holding an optional binding and child transitions."""

    binding: Optional[Binding] = None
    children: Dict[KeyToken, "TrieNode"] = field(default_factory=dict)

    def child(self, token: KeyToken) -> "TrieNode":
        return self.children.setdefault(token, TrieNode())


@dataclass(slots=True)
class KeymapTrie:
    """Concrete trie built for a given mode."""

    mode: str
    root: TrieNode = field(default_factory=TrieNode)

    def add_binding(self, binding: Binding) -> None:
        node = self.root
        for token in binding.trigger:
            node = node.child(token)
        node.binding = binding


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Outcome returned from the resolver."""

    status: Literal["match", "pending", "miss"]
    binding: Optional[Binding] = None
    consumed: int = 0


class KeymapResolver:
    """Builds mode-specific tries and classifies buffered input."""

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._cache: Dict[str, tuple[int, KeymapTrie]] = {}

    def resolve(self, mode: str, tokens: Sequence[KeyToken]) -> ResolutionResult:
        """Classify ``tokens`` as a full trigger, a trigger prefix, or neither.

        A complete trigger that is also the prefix of a longer one resolves
        as a match; the engine has no timers to wait on.
        """

        mode = str(mode)
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode, "length": len(tokens)},
        ) as handle:
            node = self._ensure_trie(mode).root
            consumed = 0
            for token in tokens:
                child = node.children.get(token)
                if child is None:
                    handle.add_metadata("status", "miss")
                    return ResolutionResult(status="miss", consumed=consumed)
                node = child
                consumed += 1

            if node.binding is not None:
                handle.add_metadata("status", "match")
                return ResolutionResult(
                    status="match", binding=node.binding, consumed=consumed
                )
            if node.children and consumed:
                handle.add_metadata("status", "pending")
                return ResolutionResult(status="pending", consumed=consumed)

            handle.add_metadata("status", "miss")
            return ResolutionResult(status="miss", consumed=consumed)

    def _ensure_trie(self, mode: str) -> KeymapTrie:
        revision = self._registry.revision()
        cached = self._cache.get(mode)
        if cached and cached[0] == revision:
            return cached[1]

        trie = KeymapTrie(mode=mode)
        for binding in self._registry.iter_bindings(mode):
            trie.add_binding(binding)
        self._cache[mode] = (revision, trie)
        return trie


__all__ = [
    "KeymapResolver",
    "KeymapTrie",
    "ResolutionResult",
]
