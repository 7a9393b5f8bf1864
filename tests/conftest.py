from __future__ import annotations

from typing import Iterator

import pytest

from selectel_storage.application.observability import reset_observability
from selectel_storage.infrastructure.metrics import MetricsRecorder, TelemetryManager


@pytest.fixture(autouse=True)
def _reset_observability() -> Iterator[None]:
    yield
    MetricsRecorder.reset()
    TelemetryManager.shutdown()
    reset_observability()
