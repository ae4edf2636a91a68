"""Pytest fixtures for tests."""

from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import Mock

import pytest

from kontrolhid.devices.kontrol1 import KontrolInfo
from kontrolhid.models import KontrolModel


class ImmediateScheduler:
    """Scheduler running every task on the calling thread."""

    def __init__(self):
        self.scheduled = 0

    def schedule(self, task, delay_ms=0):
        self.scheduled += 1
        task()


class DeferredScheduler:
    """Scheduler collecting tasks until run_pending() is called."""

    def __init__(self):
        self.pending = []

    def schedule(self, task, delay_ms=0):
        self.pending.append((task, delay_ms))

    def run_pending(self):
        tasks, self.pending = self.pending, []
        for task, _ in tasks:
            task()


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_transport():
    """Create mock HID transport that accepts every write."""
    mock = Mock()
    mock.send_output_report = Mock(return_value=True)
    return mock


@pytest.fixture
def immediate_scheduler():
    return ImmediateScheduler()


@pytest.fixture
def deferred_scheduler():
    return DeferredScheduler()


@pytest.fixture
def s49_info():
    """Keyboard info for an S49."""
    return KontrolInfo.from_model(KontrolModel.S49)


@pytest.fixture
def make_report():
    """Build the payload of an input report (without report id)."""

    def _make(
        buttons=(0, 0, 0),
        touch=0,
        main_touch=0,
        main_encoder=0,
        encoders=(0,) * 8,
        first_note=0,
        size=63,
    ) -> bytes:
        data = bytearray(max(size, 63))
        data[0:3] = bytes(buttons)
        data[3] = touch
        data[4] = main_touch
        data[5] = main_encoder
        for index, value in enumerate(encoders):
            data[6 + 2 * index] = value & 0xFF
            data[7 + 2 * index] = value >> 8
        data[36] = first_note
        return bytes(data[:size])

    return _make
