"""Test configuration helpers to ensure package imports work from the repository root."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest


ROOT = Path(__file__).resolve().parents[1]
REPO_ROOT = ROOT.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture()
def empty_overrides(tmp_path: Path) -> Path:
    path = tmp_path / "route-status-codes.yaml"
    path.write_text("{}\n", encoding="utf-8")
    return path


@pytest.fixture()
def write_overrides(tmp_path: Path):
    def _write(text: str) -> Path:
        path = tmp_path / "overrides.yaml"
        path.write_text(text, encoding="utf-8")
        return path

    return _write
