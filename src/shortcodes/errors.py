"""Exception classes for shortcodes.

Provides standardized exceptions for error handling throughout shortcodes.

Parsing problems never raise: malformed attribute text degrades to
RawAttributes and text that does not form a tag is left untouched.
Only a missing handler and exceptions raised by handler code reach the
caller of expand().
"""

from __future__ import annotations


class ShortcodeError(Exception):
    """Base exception for all shortcodes errors.

    Subclass this for specific error categories.
    """

    pass


class MissingHandlerError(ShortcodeError, LookupError):
    """A matched tag name has no registered handler.

    Raised in strict mode when a handler is unregistered after the
    expansion pattern was compiled, typically by another handler earlier
    in the same pass.
    """

    def __init__(self, name: str, offset: int | None = None) -> None:
        """Initialize missing handler error.

        Args:
            name: Tag name that matched without a handler
            offset: Character offset of the match in the input text (optional)
        """
        self.name = name
        self.offset = offset

        location = f" at offset {offset}" if offset is not None else ""
        super().__init__(f"No handler registered for shortcode '{name}'{location}")
