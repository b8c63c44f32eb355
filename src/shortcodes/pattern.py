"""Shortcode pattern compiler.

Builds one regular expression matching any registered tag, in all of its
forms::

    [name attrs]                  opening tag, no content
    [name attrs /]                self-closing
    [name attrs]content[/name]    wrapping
    [[name ...]]                  escaped, emitted literally

Named groups:

    open_escape   optional second "[" (escape marker)
    name          registered tag name, not followed by a word char or "-"
    attrs         everything up to "]" or "/]"
    self_closing  "/" for the self-closing form
    content       enclosed text, up to the nearest "[/name]"
    close_escape  optional second "]" (escape marker)

The content group only ever stops at a closing tag carrying the same name
as the opener (back-reference), and at the nearest one, so
``[b][b]x[/b][/b]`` pairs the first ``[b]`` with the first ``[/b]``.

Performance:
    The attribute loop is unambiguous (each repetition starts with "/")
    and the content loop uses possessive quantifiers, so a single match
    attempt is linear in the text it scans. A whole pass is not: every
    opener with no closing tag after it scans to the end of the text
    before falling back to the opening-tag form, so n unterminated
    openers cost O(n²). shortcode_pattern_for() avoids this for text that
    holds no closing tag of any registered name: it compiles the pattern
    with a content group that can never match. Many openers followed by
    an unrelated stray closing tag still pay the quadratic cost.

Changing this expression changes group semantics that expand() and
strip() depend on.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from functools import lru_cache

from shortcodes.utils.logger import get_logger

logger = get_logger(__name__)

_PATTERN_CACHE_SIZE = 128


def build_shortcode_regex(names: Iterable[str], *, enclosing: bool = True) -> str:
    """Return the shortcode regular expression source for the given names.

    Alternatives are tried in the order given; each name is escaped.

    Args:
        names: Tag names to match
        enclosing: When False the content group is kept but can never
            match, so every tag takes the opening or self-closing form

    Returns:
        Regular expression source (empty names produce an expression that
        never matches a tag name)
    """
    tag_alternation = "|".join(re.escape(name) for name in names)

    if not enclosing:
        return (
            r"\["
            r"(?P<open_escape>\[?)"
            rf"(?P<name>{tag_alternation})"
            r"(?![\w-])"
            r"(?P<attrs>[^\]/]*(?:/(?!\])[^\]/]*)*?)"
            r"(?:(?P<self_closing>/)\]|\](?:(?P<content>(?!)))?)"  # content never matches
            r"(?P<close_escape>\]?)"
        )

    return (
        r"\["  # Opening bracket
        r"(?P<open_escape>\[?)"  # Optional second "[" for escaping: [[tag]]
        rf"(?P<name>{tag_alternation})"  # Tag name
        r"(?![\w-])"  # Not followed by word character or hyphen
        r"(?P<attrs>"  # Unrolled loop: inside the opening tag
        r"[^\]/]*"  # Not a closing bracket or forward slash
        r"(?:"
        r"/(?!\])"  # A forward slash not followed by a closing bracket
        r"[^\]/]*"  # Not a closing bracket or forward slash
        r")*?"
        r")"
        r"(?:"
        r"(?P<self_closing>/)"  # Self-closing tag...
        r"\]"  # ...and closing bracket
        r"|"
        r"\]"  # Closing bracket
        r"(?:"
        r"(?P<content>"  # Unrolled loop: anything up to the closing tag
        r"[^\[]*+"  # Not an opening bracket
        r"(?:"
        r"\[(?!/(?P=name)\])"  # An opening bracket not starting the closing tag
        r"[^\[]*+"  # Not an opening bracket
        r")*+"
        r")"
        r"\[/(?P=name)\]"  # Closing tag
        r")?"
        r")"
        r"(?P<close_escape>\]?)"  # Optional second "]" for escaping: [[tag]]
    )


@lru_cache(maxsize=_PATTERN_CACHE_SIZE)
def _compile(names: tuple[str, ...], enclosing: bool) -> re.Pattern[str]:
    logger.debug(
        "Compiling shortcode pattern for %d tag names (enclosing=%s)", len(names), enclosing
    )
    return re.compile(build_shortcode_regex(names, enclosing=enclosing), re.DOTALL)


def build_shortcode_pattern(
    names: Iterable[str], *, enclosing: bool = True
) -> re.Pattern[str] | None:
    """Compile the shortcode pattern for a set of tag names.

    Compiled patterns are cached per ordered tuple of names.

    Args:
        names: Registered tag names, in registration order
        enclosing: False compiles a pattern whose content group never
            matches (see build_shortcode_regex())

    Returns:
        Compiled pattern, or None when there are no names (callers pass
        text through unchanged)
    """
    names = tuple(names)
    if not names:
        return None
    return _compile(names, enclosing)


def shortcode_pattern_for(names: Iterable[str], text: str) -> re.Pattern[str] | None:
    """Compile the pattern best suited to scanning one text.

    When no ``[/name]`` for any of the names occurs in text, the wrapping
    form cannot match, so the pattern without a content scan is used.
    Matches are identical either way.

    Args:
        names: Registered tag names, in registration order
        text: Text about to be scanned

    Returns:
        Compiled pattern, or None when there are no names
    """
    names = tuple(names)
    enclosing = any(f"[/{name}]" in text for name in names)
    return build_shortcode_pattern(names, enclosing=enclosing)


@dataclass(frozen=True, slots=True)
class ShortcodeMatch:
    """One application of the shortcode pattern.

    Attributes:
        name: Matched tag name
        raw_attributes: Unparsed attribute text
        self_closing: True for the ``[name /]`` form
        content: Enclosed text for the wrapping form, else None
        open_escape: "[" when the tag was preceded by a second "[", else ""
        close_escape: "]" when the tag was followed by a second "]", else ""
        start: Offset of the match in the scanned text
        end: Offset just past the match
        text: The full matched text

    """

    name: str
    raw_attributes: str
    self_closing: bool
    content: str | None
    open_escape: str
    close_escape: str
    start: int
    end: int
    text: str

    @classmethod
    def from_match(cls, m: re.Match[str]) -> ShortcodeMatch:
        """Build from a match of a build_shortcode_pattern() pattern."""
        return cls(
            name=m.group("name"),
            raw_attributes=m.group("attrs"),
            self_closing=m.group("self_closing") is not None,
            content=m.group("content"),
            open_escape=m.group("open_escape"),
            close_escape=m.group("close_escape"),
            start=m.start(),
            end=m.end(),
            text=m.group(0),
        )

    @property
    def is_escaped(self) -> bool:
        """True for ``[[name ...]]``: emitted literally minus one bracket layer."""
        return self.open_escape == "[" and self.close_escape == "]"

    @property
    def unescaped_text(self) -> str:
        """Matched text with one layer of brackets removed."""
        return self.text[1:-1]
