"""Shared test fixtures — fixture paths and load options."""

from pathlib import Path

import pytest

from remarkscope.remarks.schemas import LoadOptions

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"
REMARKS_DIR = FIXTURE_DIR / "remarks"
SOURCE_DIR = FIXTURE_DIR / "source"


@pytest.fixture
def external_options() -> LoadOptions:
    """Accept remarks from anywhere; no filters, no remapping."""
    return LoadOptions(include_external=True, source_dir=Path("/tmp"))


@pytest.fixture
def source_options() -> LoadOptions:
    """Only accept remarks whose file exists under the fixture sources."""
    return LoadOptions(include_external=False, source_dir=SOURCE_DIR)
