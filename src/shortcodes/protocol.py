"""ShortcodeHandler protocol for registered tag callables.

A handler is any callable taking the parsed attributes, the enclosed
content (or None for self-closing and unterminated tags) and the matched
tag name, and returning something that converts to text.

Thread Safety:
Handlers should be stateless with respect to the engine. A handler must
not call back into expand() for the pass that invoked it.

Example:
    >>> def youtube(attrs, content, name):
    ...     video_id = attrs.get("id", "")
    ...     return f'<iframe src="https://www.youtube.com/embed/{video_id}"></iframe>'
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from shortcodes.attributes import Attributes


@runtime_checkable
class ShortcodeHandler(Protocol):
    """Protocol for shortcode handlers.

    The return value is coerced with str(); None becomes the empty string.
    Handlers used with expand_async() may also return an awaitable.
    """

    def __call__(self, attrs: Attributes, content: str | None, name: str) -> object:
        """Produce replacement text for one matched tag.

        Args:
            attrs: Parsed attributes (KeyedAttributes, PositionalAttributes
                or RawAttributes)
            content: Raw enclosed text for the wrapping form, else None
            name: The tag name that matched

        Returns:
            Replacement value, converted to text by the expander
        """
        ...


@runtime_checkable
class HandlerLookup(Protocol):
    """Read-side view of a registry, as consumed by expanders and strippers.

    Both ShortcodeRegistry and RegistrySnapshot satisfy this protocol.
    """

    @property
    def names(self) -> tuple[str, ...]:
        """Registered tag names in registration order."""
        ...

    def get(self, name: str) -> ShortcodeHandler | None:
        """Handler for name, or None."""
        ...

