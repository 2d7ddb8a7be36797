"""Per-mode key binding table (remaps)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from vipix.runtime.telemetry import span

from .models import Binding, KeySequence, parse, render_sequence


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    binding_count: int
    modes: tuple[str, ...]


class RemapCycle(RuntimeError):
    """Raised when remap expansion nests deeper than the configured bound."""

    def __init__(self, trigger: KeySequence, depth: int) -> None:
        super().__init__(
            f"Remap of '{render_sequence(trigger)}' exceeded depth {depth}"
        )
        self.trigger = trigger
        self.depth = depth


class KeymapRegistry:
    """Owns remaps indexed by mode and trigger; last write wins."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._bindings: Dict[str, Dict[KeySequence, Binding]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def bind(
        self,
        mode: str,
        trigger: KeySequence | str,
        expansion: KeySequence | str,
        *,
        source: str | None = None,
    ) -> Binding:
        """Register (or overwrite) ``trigger`` -> ``expansion`` for ``mode``.

        String arguments are decoded with :func:`parse` and raise
        ``MalformedToken`` on bad notation.
        """

        with span(
            "keymaps::bind",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": str(mode), "trigger": str(trigger)},
        ):
            binding = Binding(
                mode=str(mode),
                trigger=_coerce(trigger),
                expansion=_coerce(expansion),
                source=source,
            )
            self._bindings.setdefault(binding.mode, {})[binding.trigger] = binding
            self._touch()
            return binding

    def resolve(
        self, mode: str, trigger: KeySequence | str
    ) -> Optional[KeySequence]:
        """Exact lookup of the expansion bound to ``trigger``."""

        binding = self._bindings.get(str(mode), {}).get(_coerce(trigger))
        return binding.expansion if binding else None

    def iter_bindings(self, mode: str) -> Iterator[Binding]:
        yield from self._bindings.get(str(mode), {}).values()

    def stats(self) -> RegistryStats:
        return RegistryStats(
            binding_count=sum(len(bucket) for bucket in self._bindings.values()),
            modes=tuple(sorted(self._bindings)),
        )

    def _touch(self) -> None:
        self._revision += 1


def _coerce(value: KeySequence | str) -> KeySequence:
    if isinstance(value, KeySequence):
        return value
    return parse(value)


__all__ = [
    "KeymapRegistry",
    "RegistryStats",
    "RemapCycle",
]
