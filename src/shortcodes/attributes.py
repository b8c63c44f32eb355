"""Shortcode attribute parsing.

Turns the raw text between a tag name and its closing bracket into one of
three shapes:

- KeyedAttributes: at least one ``name=value`` pair was found. Names are
  lowercased, values are kept as written (after backslash unescaping).
  Bare tokens found in the same pass are kept in ``positional``.
- PositionalAttributes: only bare tokens were found.
- RawAttributes: nothing tokenized; the left-trimmed text is kept verbatim.

Handlers branch on the shape they receive, or use the shared get() /
as_mapping() accessors when they only care about named values.

Example:
    >>> attrs = parse_attributes('foo="bar" baz=\\'bing\\' x y')
    >>> attrs.named
    {'foo': 'bar', 'baz': 'bing'}
    >>> attrs.positional
    ('x', 'y')
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, TypeVar

from shortcodes.utils.text import normalize_spaces, stripcslashes

# Five token shapes, tried in order at each position:
#   name="value" | name='value' | name=value | "value" | value
_ATTRIBUTE_PATTERN = re.compile(
    r'(\w+)\s*=\s*"([^"]*)"(?:\s|$)'
    r"|(\w+)\s*=\s*'([^']*)'(?:\s|$)"
    r"|(\w+)\s*=\s*([^\s'\"]+)(?:\s|$)"
    r'|"([^"]*)"(?:\s|$)'
    r"|(\S+)(?:\s|$)"
)

# Characters trimmed from the left of unparseable attribute text
_LEFT_TRIM = " \t\n\r\0\x0b"

K = TypeVar("K")

_MISSING: Any = object()


class Attributes:
    """Common read access shared by the three attribute shapes."""

    __slots__ = ()

    def as_mapping(self) -> dict[str | int, str]:
        """Flatten into a single mapping.

        Named values keep their names; positional values are keyed by their
        index; raw text is stored under 0.
        """
        raise NotImplementedError

    def get(self, key: str | int, default: Any = None) -> Any:
        return self.as_mapping().get(key, default)

    def __getitem__(self, key: str | int) -> str:
        value = self.as_mapping().get(key, _MISSING)
        if value is _MISSING:
            raise KeyError(key)
        return value

    def __contains__(self, key: object) -> bool:
        return key in self.as_mapping()


@dataclass(frozen=True, slots=True)
class KeyedAttributes(Attributes):
    """Named attribute values, plus any bare tokens seen alongside them."""

    named: dict[str, str]
    positional: tuple[str, ...] = ()

    def __hash__(self) -> int:
        return hash((frozenset(self.named.items()), self.positional))

    def as_mapping(self) -> dict[str | int, str]:
        mapping: dict[str | int, str] = dict(self.named)
        for index, value in enumerate(self.positional):
            mapping[index] = value
        return mapping


@dataclass(frozen=True, slots=True)
class PositionalAttributes(Attributes):
    """Bare tokens only, in order of appearance."""

    values: tuple[str, ...] = field(default_factory=tuple)

    def as_mapping(self) -> dict[str | int, str]:
        return dict(enumerate(self.values))

    def __iter__(self):
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True, slots=True)
class RawAttributes(Attributes):
    """Attribute text that yielded no tokens, left-trimmed."""

    text: str = ""

    def as_mapping(self) -> dict[str | int, str]:
        return {0: self.text}

    def __bool__(self) -> bool:
        return bool(self.text)

    def __str__(self) -> str:
        return self.text


def parse_attributes(text: str) -> KeyedAttributes | PositionalAttributes | RawAttributes:
    """Parse a shortcode attribute string.

    Tokens are matched left to right; each must be followed by whitespace
    or the end of the text. Values are unescaped with C backslash rules.
    An empty bare ``""`` is consumed without producing a positional value.

    Never raises: text that yields no token is returned as RawAttributes.

    Args:
        text: Everything between the tag name and the closing bracket

    Returns:
        KeyedAttributes, PositionalAttributes or RawAttributes
    """
    text = normalize_spaces(text)

    named: dict[str, str] = {}
    positional: list[str] = []
    matched = False

    for m in _ATTRIBUTE_PATTERN.finditer(text):
        matched = True
        if m.group(1):
            named[m.group(1).lower()] = stripcslashes(m.group(2))
        elif m.group(3):
            named[m.group(3).lower()] = stripcslashes(m.group(4))
        elif m.group(5):
            named[m.group(5).lower()] = stripcslashes(m.group(6))
        elif m.group(7):
            positional.append(stripcslashes(m.group(7)))
        elif m.group(8) is not None:
            positional.append(stripcslashes(m.group(8)))

    if not matched:
        return RawAttributes(text.lstrip(_LEFT_TRIM))
    if named:
        return KeyedAttributes(named, tuple(positional))
    return PositionalAttributes(tuple(positional))


def merge_defaults(
    recognized: Mapping[K, Any],
    supplied: Attributes | Mapping[Any, Any] | str | None,
) -> dict[K, Any]:
    """Combine supplied attributes with the defaults a handler recognizes.

    The result holds exactly the keys of ``recognized``: the supplied value
    when the key is present (whatever its value), else the default. Keys
    not in ``recognized`` are dropped.

    Args:
        recognized: Supported attribute names and their defaults
        supplied: Attributes from parse_attributes(), a plain mapping, raw
            text, or None

    Returns:
        New dict restricted to the recognized names

    Example:
        >>> merge_defaults({"a": "1", "b": "2"}, {"a": "9", "c": "5"})
        {'a': '9', 'b': '2'}
    """
    match supplied:
        case None:
            available: Mapping[Any, Any] = {}
        case Attributes():
            available = supplied.as_mapping()
        case str():
            available = {0: supplied}
        case _:
            available = supplied

    return {
        name: available[name] if name in available else default
        for name, default in recognized.items()
    }
