"""Error-path and malformed input tests.

Parsing problems degrade to fallback shapes; only missing handlers and
handler exceptions surface to the caller.
"""

import pytest

from shortcodes import (
    MissingHandlerError,
    PositionalAttributes,
    ShortcodeError,
    ShortcodeRegistry,
    Shortcodes,
    parse_attributes,
)

# =========================================================================
# MissingHandlerError construction and formatting
# =========================================================================


class TestMissingHandlerErrorFormatting:
    """Verify MissingHandlerError produces well-formatted messages."""

    def test_name_only(self) -> None:
        err = MissingHandlerError("gallery")
        assert str(err) == "No handler registered for shortcode 'gallery'"
        assert err.name == "gallery"
        assert err.offset is None

    def test_with_offset(self) -> None:
        err = MissingHandlerError("gallery", offset=12)
        assert "at offset 12" in str(err)

    def test_hierarchy(self) -> None:
        err = MissingHandlerError("x")
        assert isinstance(err, ShortcodeError)
        assert isinstance(err, LookupError)


# =========================================================================
# Malformed input
# =========================================================================


class TestMalformedInput:
    """Broken markup is left alone rather than raising."""

    @pytest.mark.parametrize(
        "text",
        [
            "[",
            "[b",
            "[b x=1",
            "[/b]",
            "]]]",
            "[[[[b",
            "[b]unclosed",
            '[b a="unterminated]',
            "[b ////",
        ],
    )
    def test_never_raises(self, text: str) -> None:
        sc = Shortcodes()
        sc.register("b", lambda attrs, content, name: "B")
        assert isinstance(sc.expand(text), str)
        assert isinstance(sc.strip(text), str)

    def test_unterminated_quote_becomes_positional(self) -> None:
        attrs = parse_attributes('a="unterminated')
        assert isinstance(attrs, PositionalAttributes)
        assert attrs.values == ('a="unterminated',)

    def test_quote_inside_attribute_closes_tag(self) -> None:
        sc = Shortcodes()
        sc.register("b", lambda attrs, content, name: "B")
        assert sc.expand('[b a="x]y"]') == 'By"]'


class TestRegistrationErrors:
    """Registration errors are permissive except for empty names."""

    def test_non_callable_silently_ignored(self, caplog: pytest.LogCaptureFixture) -> None:
        import logging

        registry = ShortcodeRegistry()
        with caplog.at_level(logging.DEBUG, logger="shortcodes"):
            registry.register("x", "nope")  # type: ignore[arg-type]
        assert "x" not in registry
        assert "not callable" in caplog.text

    def test_empty_name(self) -> None:
        with pytest.raises(ValueError):
            ShortcodeRegistry().register("", lambda attrs, content, name: "")
