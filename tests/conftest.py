"""Shared fixtures for urlmatch tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from urlmatch import UrlMatcher

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def matcher() -> UrlMatcher:
    """A UrlMatcher with empty caches, isolated from the process default."""
    return UrlMatcher()


def identity(value: str | None, _name: str) -> Any:
    """Transform that keeps captured values as they are."""
    return value
