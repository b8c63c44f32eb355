"""Shortcode removal.

Uses the same pattern as expansion but never calls a handler: every
match collapses to its lone escape markers, dropping the tag name, the
attributes and any enclosed content. ``[[name]]`` still loses exactly one
bracket layer, so stripping is idempotent only on text without escaped
tags.

Example:
    >>> noop = lambda attrs, content, name: ""
    >>> registry = ShortcodeRegistry({"a": noop, "b": noop})
    >>> strip_shortcodes("[a]x[/a] and [b /]", registry)
    ' and '
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from shortcodes.pattern import shortcode_pattern_for

if TYPE_CHECKING:
    from shortcodes.protocol import HandlerLookup


def _strip_match(m: re.Match[str]) -> str:
    open_escape = m.group("open_escape")
    close_escape = m.group("close_escape")
    if open_escape == "[" and close_escape == "]":
        return m.group(0)[1:-1]
    return open_escape + close_escape


class ShortcodeStripper:
    """Removes registered shortcodes from text.

    Handlers are never looked up, so a stripper works the same against a
    registry whose handlers are placeholders.
    """

    __slots__ = ("_registry",)

    def __init__(self, registry: HandlerLookup) -> None:
        self._registry = registry

    @property
    def registry(self) -> HandlerLookup:
        return self._registry

    def strip(self, text: str) -> str:
        """Remove every shortcode from text.

        Returns text unchanged when the registry is empty.
        """
        pattern = shortcode_pattern_for(self._registry.names, text)
        if pattern is None:
            return text
        return pattern.sub(_strip_match, text)


def strip_shortcodes(text: str, registry: HandlerLookup) -> str:
    """Remove shortcodes in text whose names are in the registry.

    Shorthand for ShortcodeStripper(registry).strip(text).
    """
    return ShortcodeStripper(registry).strip(text)
