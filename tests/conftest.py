"""
Pytest configuration for Dipstick.

Provides fixtures for:
- Wire-format generation records and listing documents
- Stand-in commands that behave like `nixos-rebuild list-generations --json`
- Settings cache isolation
"""

from __future__ import annotations

import json
import sys
from typing import Any, Callable, Dict, List

import pytest

from dipstick.config import get_settings
from tests.factories import wire_generation


@pytest.fixture
def sample_records() -> List[Dict[str, Any]]:
    """Three generations, the last one current, as the tool lists them."""
    return [
        wire_generation(1),
        wire_generation(2, configurationRevision="3f2a9c1", specialisations=["gaming"]),
        wire_generation(4, kernelVersion="6.6.10", current=True),
    ]


@pytest.fixture
def sample_document(sample_records: List[Dict[str, Any]]) -> bytes:
    return json.dumps(sample_records).encode("utf-8")


@pytest.fixture
def fake_command() -> Callable[..., List[str]]:
    """
    Factory for an argv that writes `stdout` and exits with `returncode`.

    Uses the running interpreter so tests do not depend on anything on PATH.
    """

    def _build(stdout: bytes = b"", returncode: int = 0, stderr: bytes = b"") -> List[str]:
        script = (
            "import sys\n"
            f"sys.stdout.buffer.write({stdout!r})\n"
            "sys.stdout.flush()\n"
            f"sys.stderr.buffer.write({stderr!r})\n"
            "sys.stderr.flush()\n"
            f"sys.exit({returncode})\n"
        )
        return [sys.executable, "-c", script]

    return _build


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Settings are lru-cached; make env overrides per-test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
