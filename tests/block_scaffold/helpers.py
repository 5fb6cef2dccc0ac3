from __future__ import annotations

import subprocess
from unittest.mock import MagicMock


class RecordingReporter:
    """Progress reporter that records every notification as a tuple."""

    def __init__(self) -> None:
        self.events: list[tuple[str, ...]] = []

    def start(self, message: str) -> None:
        self.events.append(("start", message))

    def succeed(self) -> None:
        self.events.append(("succeed",))

    def fail(self) -> None:
        self.events.append(("fail",))

    @property
    def kinds(self) -> list[str]:
        return [event[0] for event in self.events]


def completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=["git"], returncode=returncode, stdout=stdout, stderr=stderr)


def json_client(payload: object) -> MagicMock:
    """Create a mock httpx.Client whose GET returns ``payload`` as JSON."""
    mock_response = MagicMock()
    mock_response.status_code = 200
    mock_response.json.return_value = payload
    mock_response.raise_for_status.return_value = None

    mock_client = MagicMock()
    mock_client.get.return_value = mock_response
    return mock_client
