from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

from tests._fixtures.schemas import SAMPLE_SCHEMA, parse_definitions
from tlgen.tl import Definition


@pytest.fixture
def sample_schema() -> str:
    return SAMPLE_SCHEMA


@pytest.fixture
def sample_definitions() -> List[Definition]:
    return parse_definitions(SAMPLE_SCHEMA)


@pytest.fixture
def schema_file(tmp_path: Path) -> Path:
    """Write the sample schema to disk and return its path."""
    path = tmp_path / "api.tl"
    path.write_text(SAMPLE_SCHEMA, encoding="utf-8")
    return path
