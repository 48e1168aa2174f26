"""
Shared pytest setup.

Inserts the project `src/` onto sys.path so tests run without installing the
package, and provides a fixed-seed pattern generator.
"""

from __future__ import annotations

import pathlib
import sys

import pytest

# Ensure `src/` is importable when running `pytest` from the repo root
_REPO_ROOT = pathlib.Path(__file__).resolve().parents[1]
_SRC = _REPO_ROOT / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from sortcomp.patterns import PatternGenerator, SeedState  # noqa: E402


@pytest.fixture
def seed_state() -> SeedState:
    return SeedState()


@pytest.fixture
def generator(seed_state: SeedState) -> PatternGenerator:
    return PatternGenerator(seed_state)
