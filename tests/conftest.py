import sys
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Make the sources importable without installing the package.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture
def random_rgba():
    """Return a factory producing seeded random RGBA byte strings."""

    def _make(width: int, height: int, seed: int = 1234) -> bytes:
        rng = np.random.default_rng(seed)
        return rng.integers(0, 256, size=width * height * 4, dtype=np.uint8).tobytes()

    return _make


@pytest.fixture(autouse=True)
def _clean_edgeview_env(monkeypatch):
    for name in ("EDGEVIEW_BACKEND", "EDGEVIEW_MAX_WIDTH", "EDGEVIEW_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
