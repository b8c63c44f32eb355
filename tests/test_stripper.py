"""Tests for shortcode stripping."""

from shortcodes import ShortcodeRegistry, ShortcodeStripper, strip_shortcodes


def _noop(attrs, content, name):
    return ""


class TestStrip:
    """strip() removes tags without calling handlers."""

    def test_removes_wrapping_and_self_closing(self) -> None:
        registry = ShortcodeRegistry({"a": _noop, "b": _noop})
        assert strip_shortcodes("[a]x[/a] and [b /]", registry) == " and "

    def test_removes_attributes(self) -> None:
        registry = ShortcodeRegistry({"img": _noop})
        assert strip_shortcodes('before [img src="a/b.png" alt=x] after', registry) == "before  after"

    def test_handlers_not_called(self) -> None:
        calls = []
        registry = ShortcodeRegistry({"a": lambda *args: calls.append(args)})
        assert ShortcodeStripper(registry).strip("[a]x[/a][a /]") == ""
        assert calls == []

    def test_unregistered_tags_untouched(self) -> None:
        registry = ShortcodeRegistry({"a": _noop})
        assert strip_shortcodes("[c]x[/c] [ab]", registry) == "[c]x[/c] [ab]"

    def test_empty_registry_is_identity(self) -> None:
        assert strip_shortcodes("[a]x[/a]", ShortcodeRegistry()) == "[a]x[/a]"

    def test_nested_same_name(self) -> None:
        registry = ShortcodeRegistry({"b": _noop})
        assert strip_shortcodes("[b][b]x[/b][/b]", registry) == "[/b]"


class TestStripEscapes:
    """Escaped tags lose one bracket layer, like expand()."""

    def test_escaped_tag(self) -> None:
        registry = ShortcodeRegistry({"a": _noop})
        assert strip_shortcodes("[[a]]", registry) == "[a]"
        assert strip_shortcodes("[[a]x[/a]]", registry) == "[a]x[/a]"

    def test_lone_escape_markers_kept(self) -> None:
        registry = ShortcodeRegistry({"a": _noop})
        assert strip_shortcodes("[[a] text", registry) == "[ text"
        assert strip_shortcodes("x [a /]]", registry) == "x ]"


class TestStripIdempotence:
    """Stripping twice equals stripping once for text without escapes."""

    def test_strip_twice(self) -> None:
        registry = ShortcodeRegistry({"a": _noop, "b": _noop})
        stripper = ShortcodeStripper(registry)
        text = "one [a]two[/a] three [b x=1] four [/a] five [b /]"
        once = stripper.strip(text)
        assert once == "one  three  four [/a] five "
        assert stripper.strip(once) == once

    def test_snapshot_registry(self) -> None:
        registry = ShortcodeRegistry({"a": _noop})
        stripper = ShortcodeStripper(registry.snapshot())
        registry.register("b", _noop)
        assert stripper.strip("[a][b]") == "[b]"
