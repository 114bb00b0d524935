"""Shared fixtures."""

from __future__ import annotations

import os

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep runner-provided inputs out of the tests."""
    for key in list(os.environ):
        if key.startswith("INPUT_"):
            monkeypatch.delenv(key)
    monkeypatch.delenv("GITHUB_ACTIONS", raising=False)
