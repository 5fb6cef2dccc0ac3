from __future__ import annotations

import pytest

from tests.block_scaffold.helpers import RecordingReporter


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()
