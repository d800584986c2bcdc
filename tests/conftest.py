from __future__ import annotations

import sys
from pathlib import Path

import pytest

from tests.helpers import DEMO, parsed
from lpnc.unit import TranslationUnit


def pytest_configure() -> None:
    project_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(project_root))


@pytest.fixture
def demo_unit() -> TranslationUnit:
    return parsed(DEMO)
