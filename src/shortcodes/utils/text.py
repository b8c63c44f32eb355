"""Text processing utilities for shortcodes.

Provides canonical implementations of the string clean-up applied to
shortcode attribute text before and after tokenizing.

Example:
    >>> from shortcodes.utils.text import stripcslashes
    >>> stripcslashes(r"line\\none")
    'line\\none'
"""

from __future__ import annotations

import re

# Non-breaking and zero-width spaces survive copy/paste from rich editors
# and would otherwise glue attribute tokens together.
_SPACE_LIKE_PATTERN = re.compile("[\u00a0\u200b]+")

_CSLASH_PATTERN = re.compile(r"\\(x[0-9A-Fa-f]{1,2}|[0-7]{1,3}|.)", re.DOTALL)

_SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}


def normalize_spaces(text: str) -> str:
    """Replace runs of non-breaking and zero-width spaces with one space.

    Examples:
        >>> normalize_spaces("a\\u00a0\\u00a0b")
        'a b'
    """
    return _SPACE_LIKE_PATTERN.sub(" ", text)


def _unescape_sequence(match: re.Match[str]) -> str:
    seq = match.group(1)
    if seq in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[seq]
    if len(seq) > 1 and seq[0] == "x":
        return chr(int(seq[1:], 16))
    if seq[0] in "01234567":
        # Octal escapes address a single byte
        return chr(int(seq, 8) & 0xFF)
    return seq


def stripcslashes(text: str) -> str:
    """Unescape C-style backslash sequences.

    Recognizes ``\\a \\b \\f \\n \\r \\t \\v``, hexadecimal ``\\xHH`` (one or
    two digits) and octal ``\\ooo`` (one to three digits). Any other escaped
    character stands for itself, so ``\\"`` becomes ``"`` and ``\\\\``
    becomes a single backslash. A lone trailing backslash is kept.

    Args:
        text: Text possibly containing backslash escapes

    Returns:
        Text with escapes resolved

    Examples:
        >>> stripcslashes(r"tab\\there")
        'tab\\there'
        >>> stripcslashes(r"\\x41\\102")
        'AB'
        >>> stripcslashes(r"\\q")
        'q'
    """
    if "\\" not in text:
        return text
    return _CSLASH_PATTERN.sub(_unescape_sequence, text)
