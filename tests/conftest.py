"""Shared fixtures for shortcodes tests."""

from __future__ import annotations

import pytest

from shortcodes import ShortcodeRegistry, reset_config


@pytest.fixture
def registry() -> ShortcodeRegistry:
    return ShortcodeRegistry()


@pytest.fixture(autouse=True)
def _reset_context_config():
    """Keep ContextVar config from leaking between tests."""
    reset_config()
    yield
    reset_config()
