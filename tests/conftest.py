"""Test setup for granola2md."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture
def credentials_file(tmp_path: Path):
    """Write a Granola session file and return its path."""

    def _write(tokens: Any, *, encode: bool = True) -> Path:
        path = tmp_path / "supabase.json"
        payload = {"workos_tokens": json.dumps(tokens) if encode else tokens}
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write
