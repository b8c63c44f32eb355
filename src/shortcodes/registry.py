"""Shortcode registry for handler lookup and registration.

The registry maps tag names to their handlers. It is an ordinary object
owned by the caller and passed to expanders, so several independent tag
vocabularies can coexist in one process.

Thread Safety:
ShortcodeRegistry is mutable and has no locking. Register handlers during
setup, before any expansion pass runs. Callers that expand concurrently
with registry changes should pass snapshot() to the expander instead.

Example:
    >>> registry = ShortcodeRegistry()
    >>> registry.register("year", lambda attrs, content, name: "2024")
    >>> registry.has("year")
    True
    >>> registry.unregister("year")
    >>> len(registry)
    0
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, TypeVar

from shortcodes.utils.logger import get_logger

if TYPE_CHECKING:
    from shortcodes.protocol import ShortcodeHandler

logger = get_logger(__name__)

THandler = TypeVar("THandler", bound=Callable[..., object])


class RegistrySnapshot:
    """Immutable point-in-time copy of a ShortcodeRegistry.

    Safe to share across threads. Accepted anywhere a registry is.
    """

    __slots__ = ("_names", "_by_name", "_version")

    def __init__(self, by_name: Mapping[str, ShortcodeHandler], version: int = 0) -> None:
        """Initialize snapshot from a name -> handler mapping.

        Use ShortcodeRegistry.snapshot() to create instances.
        """
        self._by_name = dict(by_name)
        self._names = tuple(self._by_name)
        self._version = version

    def get(self, name: str) -> ShortcodeHandler | None:
        """Get handler for tag name, or None."""
        return self._by_name.get(name)

    def has(self, name: str) -> bool:
        """Check if tag name is registered."""
        return name in self._by_name

    @property
    def names(self) -> tuple[str, ...]:
        """Registered tag names in registration order."""
        return self._names

    @property
    def version(self) -> int:
        """Version of the registry this snapshot was taken from."""
        return self._version

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)

    def __repr__(self) -> str:
        return f"RegistrySnapshot(names={self._names!r})"


class ShortcodeRegistry:
    """Mutable registry of shortcode handlers.

    At most one handler per name; names are case-sensitive. Registering a
    name again replaces the earlier handler without complaint.

    Example:
        >>> registry = ShortcodeRegistry()
        >>> @registry.shortcode("greet")
        ... def greet(attrs, content, name):
        ...     return f"Hello {attrs.get('name', 'you')}"
        >>> registry.names
        ('greet',)
    """

    __slots__ = ("_by_name", "_version")

    def __init__(self, handlers: Mapping[str, ShortcodeHandler] | None = None) -> None:
        """Initialize registry, optionally pre-populated.

        Args:
            handlers: Initial name -> handler mapping, registered in order
        """
        self._by_name: dict[str, ShortcodeHandler] = {}
        self._version = 0
        if handlers:
            for name, handler in handlers.items():
                self.register(name, handler)

    def register(self, name: str, handler: ShortcodeHandler) -> None:
        """Register a handler for a tag name.

        Non-callable handlers are ignored. An existing handler for the same
        name is replaced.

        Args:
            name: Tag name (case-sensitive, non-empty)
            handler: Callable invoked as handler(attrs, content, name)

        Raises:
            ValueError: If name is empty
        """
        if not name:
            msg = "Shortcode name must be a non-empty string"
            raise ValueError(msg)

        if not callable(handler):
            logger.debug(
                "Ignoring registration of %r: handler %r is not callable", name, handler
            )
            return

        self._by_name[name] = handler
        self._version += 1

    def shortcode(self, name: str) -> Callable[[THandler], THandler]:
        """Decorator form of register().

        Returns the decorated function unchanged, so it stays usable on
        its own.
        """

        def decorator(func: THandler) -> THandler:
            self.register(name, func)
            return func

        return decorator

    def unregister(self, name: str) -> None:
        """Remove the handler for a tag name. Absent names are ignored."""
        if self._by_name.pop(name, None) is not None:
            self._version += 1

    def clear(self) -> None:
        """Remove all handlers."""
        self._by_name = {}
        self._version += 1

    def get(self, name: str) -> ShortcodeHandler | None:
        """Get handler for tag name.

        Args:
            name: Tag name (e.g., "gallery", "youtube")

        Returns:
            Handler if registered, None otherwise
        """
        return self._by_name.get(name)

    def has(self, name: str) -> bool:
        """Check if tag name is registered."""
        return name in self._by_name

    @property
    def names(self) -> tuple[str, ...]:
        """Registered tag names in registration order."""
        return tuple(self._by_name)

    @property
    def version(self) -> int:
        """Counter bumped on every successful mutation."""
        return self._version

    def snapshot(self) -> RegistrySnapshot:
        """Take an immutable copy of the current name -> handler mapping."""
        return RegistrySnapshot(self._by_name, self._version)

    def __contains__(self, name: object) -> bool:
        """Support 'name in registry' syntax."""
        return name in self._by_name

    def __len__(self) -> int:
        """Number of registered tag names."""
        return len(self._by_name)

    def __repr__(self) -> str:
        return f"ShortcodeRegistry(names={self.names!r})"
