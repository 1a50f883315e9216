# tests/conftest.py
from __future__ import annotations

import os
import random
from pathlib import Path

import numpy as np
import pytest

from staffplan.input_data import InputData
from staffplan.loader import parse_input

# Nine days so the weekly counters reset once (day 8); day 7 is closed.
SMALL_INPUT = """\
150 100
9
1 8 12 1200 Register,Grill
2 8 12 1200 Register,Grill
3 10 14 800 Register
4 8 12 1200 Register,Grill
5 8 12 1200 Register,Grill
6 9 13 900 Grill
7
8 8 12 1200 Register,Grill
9 8 12 1200 Register,Grill
1 16 20 2 5 Register _
2 16 18 3 4 Grill 3
3 20 10 50 0 _ _
4 20 10 40 0 _ 5,6
5 12 12 30 1 _ _
"""


# -----------------------------
# Global, deterministic seeding
# -----------------------------
@pytest.fixture(autouse=True, scope="session")
def _seed_everything() -> None:
    """
    Make tests deterministic across runs. If you need a different seed in a test,
    override locally.
    """
    seed = int(os.environ.get("PYTEST_SEED", "1234"))
    os.environ["PYTHONHASHSEED"] = str(seed)
    random.seed(seed)
    np.random.seed(seed)


# -----------------------------
# Path helpers
# -----------------------------
@pytest.fixture(scope="session")
def project_root() -> Path:
    """Repository root (where pyproject.toml lives)."""
    return Path(__file__).resolve().parents[1]


# -----------------------------
# Problem instances
# -----------------------------
@pytest.fixture
def small_text() -> str:
    return SMALL_INPUT


@pytest.fixture
def small_data() -> InputData:
    """Five employees over nine days, two skills, one closed day."""
    return parse_input(SMALL_INPUT)


@pytest.fixture
def input_file(tmp_path: Path) -> Path:
    path = tmp_path / "input.txt"
    path.write_text(SMALL_INPUT, encoding="utf-8")
    return path
