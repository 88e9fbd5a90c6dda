from __future__ import annotations

import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
for entry in (ROOT / "src", ROOT):
    if str(entry) not in sys.path:
        sys.path.insert(0, str(entry))


import pytest

from ggjson.options import LogLevel


@pytest.fixture
def log_records() -> list[tuple[str, LogLevel]]:
    return []


@pytest.fixture
def log_sink(log_records: list[tuple[str, LogLevel]]):
    def _sink(message: str, level: LogLevel) -> None:
        log_records.append((message, level))

    return _sink


@pytest.fixture
def ggjson_caplog(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    caplog.set_level(logging.INFO, logger="ggjson")
    return caplog
