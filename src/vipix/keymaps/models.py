"""Key tokens, token sequences and the ``<Esc>hi`` notation used to write them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Mapping, Optional

SHIFT = "shift"
CTRL = "ctrl"
ALT = "alt"

_MODIFIER_ORDER = (CTRL, ALT, SHIFT)

_MODIFIER_PREFIXES: Mapping[str, str] = {
    "S": SHIFT,
    "C": CTRL,
    "A": ALT,
    "M": ALT,
}

_RENDER_PREFIXES: Mapping[str, str] = {SHIFT: "S", CTRL: "C", ALT: "A"}

# Canonical name -> character typed by the key (None for non-printing keys).
NAMED_KEYS: Mapping[str, Optional[str]] = {
    "Esc": None,
    "CR": None,
    "Tab": None,
    "BS": None,
    "Del": None,
    "Left": None,
    "Right": None,
    "Up": None,
    "Down": None,
    "Home": None,
    "End": None,
    "Space": " ",
}

_NAME_ALIASES: Mapping[str, str] = {
    **{name.lower(): name for name in NAMED_KEYS},
    "escape": "Esc",
    "enter": "CR",
    "return": "CR",
    "backspace": "BS",
    "delete": "Del",
}

# Characters that cannot be written bare inside the notation.
_ESCAPED_CHARS: Mapping[str, str] = {"<": "lt"}


class MalformedToken(ValueError):
    """Raised when key notation cannot be decoded."""

    def __init__(self, text: str, reason: str) -> None:
        super().__init__(f"Malformed key notation {text!r}: {reason}")
        self.text = text
        self.reason = reason


def _normalize_modifiers(modifiers: Iterable[str]) -> set[str]:
    values = {m.strip().lower() for m in modifiers if m.strip()}
    unknown = values.difference(_MODIFIER_ORDER)
    if unknown:
        raise ValueError(f"unknown modifiers {sorted(unknown)}")
    return values


@dataclass(frozen=True, slots=True)
class KeyToken:
    """Single normalized key press.

    ``key`` is either one character or a canonical name from ``NAMED_KEYS``.
    """

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        key = "Space" if self.key == " " else self.key
        mods = _normalize_modifiers(self.modifiers)
        if len(key) == 1 and SHIFT in mods and not mods & {CTRL, ALT}:
            # A printable character already encodes shift.
            key = key.upper()
            mods.discard(SHIFT)
        object.__setattr__(self, "key", key)
        object.__setattr__(
            self, "modifiers", tuple(m for m in _MODIFIER_ORDER if m in mods)
        )

    @property
    def ctrl(self) -> bool:
        return CTRL in self.modifiers

    @property
    def alt(self) -> bool:
        return ALT in self.modifiers

    @property
    def named(self) -> bool:
        return len(self.key) > 1

    @property
    def text(self) -> Optional[str]:
        """Character this key types, if any."""

        if self.named:
            return NAMED_KEYS.get(self.key)
        return self.key

    @property
    def printable(self) -> bool:
        return self.text is not None and not (self.ctrl or self.alt)

    @classmethod
    def named_key(cls, name: str, *modifiers: str) -> "KeyToken":
        canonical = _NAME_ALIASES.get(name.lower())
        if canonical is None:
            raise ValueError(f"unknown key name '{name}'")
        return cls(canonical, tuple(modifiers))

    def __str__(self) -> str:
        return render(self)


ESC = KeyToken("Esc")
ENTER = KeyToken("CR")
BACKSPACE = KeyToken("BS")


@dataclass(frozen=True, slots=True)
class KeySequence:
    """Immutable run of key tokens."""

    tokens: tuple[KeyToken, ...]

    def __post_init__(self) -> None:
        if not self.tokens:
            raise ValueError("KeySequence requires at least one token")

    def __iter__(self) -> Iterator[KeyToken]:
        return iter(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)

    def __getitem__(self, index: int) -> KeyToken:
        return self.tokens[index]

    def __str__(self) -> str:
        return render_sequence(self.tokens)


def _parse_bracket(body: str, raw: str) -> KeyToken:
    if not body:
        raise MalformedToken(raw, "empty key name")

    modifiers: list[str] = []
    # Modifier prefixes stop where a single character or a key name remains.
    while len(body) > 2 and body[1] == "-":
        prefix = body[0].upper()
        if prefix not in _MODIFIER_PREFIXES:
            raise MalformedToken(raw, f"unknown modifier '{body[0]}-'")
        modifiers.append(_MODIFIER_PREFIXES[prefix])
        body = body[2:]

    if len(body) == 1:
        return KeyToken(body, tuple(modifiers))
    if body.lower() == "lt":
        return KeyToken("<", tuple(modifiers))
    try:
        return KeyToken.named_key(body, *modifiers)
    except ValueError as exc:
        raise MalformedToken(raw, str(exc)) from exc


def parse(text: str) -> KeySequence:
    """Decode key notation: bare characters plus ``<Name>`` groups."""

    tokens: list[KeyToken] = []
    index = 0
    while index < len(text):
        char = text[index]
        if char != "<":
            tokens.append(KeyToken(char))
            index += 1
            continue
        end = text.find(">", index + 1)
        if end == -1:
            raise MalformedToken(text, "unterminated '<'")
        tokens.append(_parse_bracket(text[index + 1 : end], text))
        index = end + 1

    if not tokens:
        raise MalformedToken(text, "empty key sequence")
    return KeySequence(tuple(tokens))


def parse_token(text: str) -> KeyToken:
    """Decode notation that must describe exactly one key."""

    sequence = parse(text)
    if len(sequence) != 1:
        raise MalformedToken(text, "expected a single key")
    return sequence[0]


def render(token: KeyToken) -> str:
    key = token.key
    if not token.named and not token.modifiers:
        escaped = _ESCAPED_CHARS.get(key)
        return f"<{escaped}>" if escaped else key
    if not token.named:
        key = _ESCAPED_CHARS.get(key, key)
    prefix = "".join(f"{_RENDER_PREFIXES[m]}-" for m in token.modifiers)
    return f"<{prefix}{key}>"


def render_sequence(tokens: Iterable[KeyToken]) -> str:
    return "".join(render(token) for token in tokens)


@dataclass(frozen=True, slots=True)
class Binding:
    """A per-mode remap: typing ``trigger`` behaves like typing ``expansion``."""

    mode: str
    trigger: KeySequence
    expansion: KeySequence
    source: str | None = None

    def __post_init__(self) -> None:
        if not self.mode:
            raise ValueError("binding mode cannot be empty")

    @property
    def key_signature(self) -> str:
        return render_sequence(self.trigger)


__all__ = [
    "ALT",
    "BACKSPACE",
    "Binding",
    "CTRL",
    "ENTER",
    "ESC",
    "KeySequence",
    "KeyToken",
    "MalformedToken",
    "NAMED_KEYS",
    "SHIFT",
    "parse",
    "parse_token",
    "render",
    "render_sequence",
]
