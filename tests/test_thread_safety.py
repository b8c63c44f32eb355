"""Thread safety tests for shortcode expansion.

Expanders hold no per-pass state, and snapshots are immutable, so many
threads can expand against the same snapshot while the source registry
keeps changing.
"""

import threading
from concurrent.futures import ThreadPoolExecutor, as_completed

from shortcodes import ShortcodeExpander, ShortcodeRegistry


def _wrap(attrs, content, name):
    return f"<{name} id={attrs.get('id', '')}>{content or ''}</{name}>"


class TestConcurrentExpansion:
    """Concurrent expansion against snapshots is deterministic."""

    def test_concurrent_expansion_against_snapshot(self) -> None:
        registry = ShortcodeRegistry({"a": _wrap, "b": _wrap})
        expander = ShortcodeExpander(registry.snapshot())
        text = "x [a id=1]one[/a] y [b id=2 /] z"
        expected = expander.expand(text)

        with ThreadPoolExecutor(max_workers=8) as pool:
            futures = [pool.submit(expander.expand, text) for _ in range(200)]
            results = [future.result() for future in as_completed(futures)]

        assert results == [expected] * 200

    def test_snapshot_unaffected_by_concurrent_mutation(self) -> None:
        registry = ShortcodeRegistry({"a": _wrap})
        expander = ShortcodeExpander(registry.snapshot())
        expected = "<a id=>x</a> [b]"
        stop = threading.Event()
        errors: list[str] = []

        def mutate() -> None:
            while not stop.is_set():
                registry.register("b", _wrap)
                registry.unregister("a")
                registry.register("a", _wrap)
                registry.unregister("b")

        def expand() -> None:
            for _ in range(200):
                result = expander.expand("[a]x[/a] [b]")
                if result != expected:
                    errors.append(result)

        mutator = threading.Thread(target=mutate)
        mutator.start()
        try:
            workers = [threading.Thread(target=expand) for _ in range(4)]
            for worker in workers:
                worker.start()
            for worker in workers:
                worker.join()
        finally:
            stop.set()
            mutator.join()

        assert errors == []
