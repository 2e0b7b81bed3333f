"""Shared pytest fixtures for Text Analyzer tests."""

import os
import sys

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import config  # noqa: E402


# ============================================================================
# Environment Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Drop TEXT_ANALYZER_* variables and cached settings around every test."""
    for key in list(os.environ):
        if key.startswith(config.ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)
    config.reset_settings()
    yield
    config.reset_settings()


# ============================================================================
# Text Fixtures
# ============================================================================

@pytest.fixture
def cat_text():
    """Short text with one repeated bigram."""
    return "the cat sat. the cat ran!"


@pytest.fixture
def sample_text():
    """Multi-line text with repeated phrases and mixed punctuation."""
    return (
        "The quick brown fox jumps over the lazy dog.\n"
        "The quick brown fox is quick!\n"
        "Is the lazy dog asleep? The quick brown fox thinks so.\n"
    )


@pytest.fixture
def text_file(tmp_path, cat_text):
    """Write cat_text to a temporary file and return its path."""
    path = tmp_path / "cat.txt"
    path.write_text(cat_text, encoding="utf-8")
    return path
