"""Shortcode expansion.

One left-to-right pass over the text. Each match of the registry's
pattern is replaced by its handler's output; replacement text is never
scanned again, so a handler returning ``[tag]`` leaves it literal.

Per match:

- ``[[name ...]]`` (both escape markers) loses one bracket layer and no
  handler runs.
- Otherwise attributes are parsed, the handler is looked up at that
  moment and called as ``handler(attrs, content, name)``. Enclosed content
  is passed raw; nested tags inside it are the handler's business.
- A lone escape marker (``[[name]`` or ``[name]]``) is re-emitted around
  the handler output.

The pattern is compiled from the tag names present when the pass starts.
If a handler is unregistered mid-pass (for example by another handler),
strict mode raises MissingHandlerError; lenient mode leaves the matched
text as it was.

Thread Safety:
An expander holds no per-pass state. Expanding against a registry that
another thread mutates gives undefined results; pass registry.snapshot()
instead.

Example:
    >>> registry = ShortcodeRegistry()
    >>> registry.register("b", lambda attrs, content, name: f"<b>{content}</b>")
    >>> ShortcodeExpander(registry).expand("[b]bold[/b] and [[b]]")
    '<b>bold</b> and [b]'
"""

from __future__ import annotations

import inspect
import re
from typing import TYPE_CHECKING

from shortcodes.attributes import parse_attributes
from shortcodes.config import ShortcodeConfig, get_config
from shortcodes.errors import MissingHandlerError
from shortcodes.pattern import ShortcodeMatch, build_shortcode_pattern, shortcode_pattern_for
from shortcodes.stringbuilder import StringBuilder
from shortcodes.utils.logger import get_logger

if TYPE_CHECKING:
    from shortcodes.protocol import HandlerLookup, ShortcodeHandler

logger = get_logger(__name__)


def to_text(value: object) -> str:
    """Convert a handler's return value to replacement text.

    None becomes the empty string; everything else goes through str().
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


class ShortcodeExpander:
    """Replaces registered shortcodes in text with their handlers' output.

    Args:
        registry: ShortcodeRegistry or RegistrySnapshot to read handlers from
        config: Fixed configuration; when None the context config
            (shortcodes.config.get_config()) is read at the start of each pass

    """

    __slots__ = ("_registry", "_config")

    def __init__(self, registry: HandlerLookup, *, config: ShortcodeConfig | None = None) -> None:
        self._registry = registry
        self._config = config

    @property
    def registry(self) -> HandlerLookup:
        return self._registry

    @property
    def config(self) -> ShortcodeConfig:
        """Configuration in effect for a pass started now."""
        return self._config if self._config is not None else get_config()

    def pattern(self, text: str | None = None) -> re.Pattern[str] | None:
        """Compiled pattern for the registry's current names, or None.

        With text, the pattern is narrowed to what can match in it
        (see shortcode_pattern_for()).
        """
        if text is None:
            return build_shortcode_pattern(self._registry.names)
        return shortcode_pattern_for(self._registry.names, text)

    def scan(self, text: str) -> list[ShortcodeMatch]:
        """Find all shortcodes in text without invoking any handler.

        Escaped tags are included; check ShortcodeMatch.is_escaped.
        """
        pattern = self.pattern(text)
        if pattern is None:
            return []
        return [ShortcodeMatch.from_match(m) for m in pattern.finditer(text)]

    def has_shortcode(self, text: str, name: str | None = None) -> bool:
        """Check whether text contains an unescaped shortcode.

        Args:
            text: Text to search
            name: Restrict to this tag name (any registered name if None)
        """
        return any(
            not match.is_escaped and (name is None or match.name == name)
            for match in self.scan(text)
        )

    def expand(self, text: str) -> str:
        """Expand every shortcode in text.

        Returns text unchanged when the registry is empty or nothing matches.

        Raises:
            MissingHandlerError: A matched name lost its handler mid-pass
                (strict mode only)
            TypeError: A handler returned an awaitable; use expand_async()
            Exception: Anything raised by a handler propagates unchanged
        """
        pattern = self.pattern(text)
        if pattern is None:
            return text

        strict = self.config.strict_handlers

        def replace(m: re.Match[str]) -> str:
            match = ShortcodeMatch.from_match(m)
            handler = self._resolve(match, strict)
            if handler is None:
                return match.unescaped_text if match.is_escaped else match.text

            result = self._invoke(handler, match)
            if inspect.isawaitable(result):
                if inspect.iscoroutine(result):
                    result.close()
                msg = f"Handler for shortcode '{match.name}' returned an awaitable; use expand_async()"
                raise TypeError(msg)
            return f"{match.open_escape}{to_text(result)}{match.close_escape}"

        return pattern.sub(replace, text)

    async def expand_async(self, text: str) -> str:
        """Expand every shortcode in text, awaiting awaitable handler results.

        Handlers run one at a time in document order; each result is
        awaited before the next match is processed. Plain (synchronous)
        handlers are accepted as well.

        Raises:
            MissingHandlerError: A matched name lost its handler mid-pass
                (strict mode only)
            Exception: Anything raised by a handler propagates unchanged
        """
        pattern = self.pattern(text)
        if pattern is None:
            return text

        strict = self.config.strict_handlers
        sb = StringBuilder()
        pos = 0

        for m in pattern.finditer(text):
            sb.append(text[pos : m.start()])
            pos = m.end()

            match = ShortcodeMatch.from_match(m)
            handler = self._resolve(match, strict)
            if handler is None:
                sb.append(match.unescaped_text if match.is_escaped else match.text)
                continue

            result = self._invoke(handler, match)
            if inspect.isawaitable(result):
                result = await result
            sb.append(match.open_escape)
            sb.append(to_text(result))
            sb.append(match.close_escape)

        sb.append(text[pos:])
        return sb.build()

    def _resolve(self, match: ShortcodeMatch, strict: bool) -> ShortcodeHandler | None:
        """Return the handler to call, or None when the match stays literal."""
        if match.is_escaped:
            return None

        handler = self._registry.get(match.name)
        if handler is None:
            if strict:
                raise MissingHandlerError(match.name, match.start)
            logger.warning(
                "No handler registered for shortcode %r at offset %d; leaving it in place",
                match.name,
                match.start,
            )
        return handler

    @staticmethod
    def _invoke(handler: ShortcodeHandler, match: ShortcodeMatch) -> object:
        attrs = parse_attributes(match.raw_attributes)
        return handler(attrs, match.content, match.name)


def expand_shortcodes(
    text: str,
    registry: HandlerLookup,
    *,
    config: ShortcodeConfig | None = None,
) -> str:
    """Expand shortcodes in text using the given registry.

    Shorthand for ShortcodeExpander(registry, config=config).expand(text).
    """
    return ShortcodeExpander(registry, config=config).expand(text)
