import sys
from pathlib import Path

import pytest

# Ensure the project src directory is on sys.path for test imports
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from gedcom_ancestry.diagnostics import Diagnostics  # noqa: E402

DATA_DIR = Path(__file__).resolve().parent / "data"


@pytest.fixture
def diagnostics() -> Diagnostics:
    return Diagnostics()


@pytest.fixture
def sample_path() -> Path:
    return DATA_DIR / "sample.ged"


@pytest.fixture
def sample_lines(sample_path) -> list:
    return sample_path.read_text(encoding="utf-8").splitlines()


@pytest.fixture
def minimal_lines() -> list:
    return [
        "0 HEAD",
        "1 GEDC",
        "2 VERS 5.5.5",
        "0 @SUBM@ SUBM",
        "0 @I1@ INDI",
        "1 NAME John /Smith/",
        "0 @F1@ FAM",
        "1 HUSB @I1@",
        "0 TRLR",
    ]
