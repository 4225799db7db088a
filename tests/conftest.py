"""Shared fixtures for dataknobs_validator tests."""

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

SRC_DIR = Path(__file__).parent.parent / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from dataknobs_validator import ValidationConfig, fixed_clock  # noqa: E402

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


class RecordingHook:
    """Trace hook keeping every event it receives."""

    def __init__(self):
        self.entries = []

    def __call__(self, entry):
        self.entries.append(entry)

    @property
    def constraint_ids(self):
        return [entry.constraint_id for entry in self.entries]


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def clock():
    return fixed_clock(NOW)


@pytest.fixture
def trace():
    return RecordingHook()


@pytest.fixture
def config(clock, trace):
    """Accumulating config with a fixed clock and a recording hook."""
    return ValidationConfig(clock=clock, logger=trace)


@pytest.fixture
def fail_fast_config(clock, trace):
    return ValidationConfig(fail_fast=True, clock=clock, logger=trace)
