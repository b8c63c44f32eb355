"""
shortcodes: bracket tag substitution for free-form text.

Scans text for ``[tag attr="value"]`` and ``[tag]content[/tag]`` tags,
matches each tag name against a registry of handlers, parses the
attributes, and splices in whatever the handler returns.

Quick Start:
    >>> from shortcodes import Shortcodes
    >>> sc = Shortcodes()
    >>> @sc.shortcode("youtube")
    ... def youtube(attrs, content, name):
    ...     return f'<iframe src="https://www.youtube.com/embed/{attrs["id"]}"></iframe>'
    >>> sc.expand('[youtube id="abc"]')
    '<iframe src="https://www.youtube.com/embed/abc"></iframe>'

    >>> # Escaped tags are emitted literally
    >>> sc.expand("[[youtube]]")
    '[youtube]'

Lower-level pieces:
    >>> from shortcodes import ShortcodeRegistry, ShortcodeExpander, parse_attributes
    >>> registry = ShortcodeRegistry()
    >>> registry.register("year", lambda attrs, content, name: 2024)
    >>> ShortcodeExpander(registry).expand("(c) [year]")
    '(c) 2024'

Installation:
    pip install shortcodes           # zero runtime dependencies
"""

from collections.abc import Callable, Iterable
from typing import TypeVar

from shortcodes.attributes import (
    Attributes,
    KeyedAttributes,
    PositionalAttributes,
    RawAttributes,
    merge_defaults,
    parse_attributes,
)
from shortcodes.config import (
    ShortcodeConfig,
    config_context,
    get_config,
    reset_config,
    set_config,
)
from shortcodes.errors import MissingHandlerError, ShortcodeError
from shortcodes.expander import ShortcodeExpander, expand_shortcodes
from shortcodes.pattern import (
    ShortcodeMatch,
    build_shortcode_pattern,
    build_shortcode_regex,
    shortcode_pattern_for,
)
from shortcodes.protocol import HandlerLookup, ShortcodeHandler
from shortcodes.registry import RegistrySnapshot, ShortcodeRegistry
from shortcodes.stripper import ShortcodeStripper, strip_shortcodes

__version__ = "0.1.0"

THandler = TypeVar("THandler", bound=Callable[..., object])


class Shortcodes:
    """High-level shortcode processor owning a registry.

    Usage:
        >>> sc = Shortcodes()
        >>> sc.register("b", lambda attrs, content, name: f"<b>{content}</b>")
        >>> sc("[b]hi[/b]")
        '<b>hi</b>'
        >>> sc.strip("[b]hi[/b] there")
        ' there'

    Thread Safety:
        The registry is shared mutable state. Register handlers before
        expanding; for concurrent use with a changing registry, build an
        expander over registry.snapshot().

    """

    __slots__ = ("_registry", "_expander", "_stripper")

    def __init__(
        self,
        registry: ShortcodeRegistry | None = None,
        *,
        config: ShortcodeConfig | None = None,
    ) -> None:
        """Initialize processor.

        Args:
            registry: Registry to use (a new empty one if None)
            config: Fixed expansion config (context config if None)
        """
        self._registry = registry if registry is not None else ShortcodeRegistry()
        self._expander = ShortcodeExpander(self._registry, config=config)
        self._stripper = ShortcodeStripper(self._registry)

    @property
    def registry(self) -> ShortcodeRegistry:
        return self._registry

    def register(self, name: str, handler: ShortcodeHandler) -> None:
        """Register a handler; non-callables are ignored."""
        self._registry.register(name, handler)

    def shortcode(self, name: str) -> Callable[[THandler], THandler]:
        """Decorator registering the function as the handler for name."""
        return self._registry.shortcode(name)

    def unregister(self, name: str) -> None:
        """Remove the handler for name, if any."""
        self._registry.unregister(name)

    def clear_all(self) -> None:
        """Remove every handler."""
        self._registry.clear()

    def __call__(self, text: str) -> str:
        """Expand shortcodes in text."""
        return self._expander.expand(text)

    def expand(self, text: str) -> str:
        """Expand shortcodes in text."""
        return self._expander.expand(text)

    async def expand_async(self, text: str) -> str:
        """Expand shortcodes in text, awaiting async handlers in order."""
        return await self._expander.expand_async(text)

    def expand_many(self, texts: Iterable[str]) -> list[str]:
        """Expand several texts in order with the same registry."""
        return [self._expander.expand(text) for text in texts]

    def strip(self, text: str) -> str:
        """Remove shortcodes from text without calling handlers."""
        return self._stripper.strip(text)

    def scan(self, text: str) -> list[ShortcodeMatch]:
        """List shortcode matches in text without calling handlers."""
        return self._expander.scan(text)

    def has_shortcode(self, text: str, name: str | None = None) -> bool:
        """Check whether text contains an unescaped shortcode."""
        return self._expander.has_shortcode(text, name)


__all__ = [  # noqa: RUF022 - grouped by category for maintainability
    # High-level API
    "Shortcodes",
    "expand_shortcodes",
    "strip_shortcodes",
    "__version__",
    # Registry
    "HandlerLookup",
    "RegistrySnapshot",
    "ShortcodeHandler",
    "ShortcodeRegistry",
    # Engine
    "ShortcodeExpander",
    "ShortcodeMatch",
    "ShortcodeStripper",
    "build_shortcode_pattern",
    "build_shortcode_regex",
    "shortcode_pattern_for",
    # Attributes
    "Attributes",
    "KeyedAttributes",
    "PositionalAttributes",
    "RawAttributes",
    "merge_defaults",
    "parse_attributes",
    # Configuration
    "ShortcodeConfig",
    "config_context",
    "get_config",
    "reset_config",
    "set_config",
    # Errors
    "MissingHandlerError",
    "ShortcodeError",
]
