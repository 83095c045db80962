"""Shared fixtures: a small sample chart on disk and in memory."""

from pathlib import Path

import pytest

SAMPLE_CHART_LINES = [
    "*---------------------- HEADER FIELD",
    "#PLAYER 1",
    "#TITLE Test Song",
    "#BPM 150",
    "",
    "#WAV01 kick.wav",
    "#WAV02 snare.wav",
    "#WAV03 hat.ogg",
    "",
    "*---------------------- MAIN DATA FIELD",
    "#00101:0100",
    "#00111:0102",
    "#00112:0000",
]

SAMPLE_CHART = "\n".join(SAMPLE_CHART_LINES)


@pytest.fixture
def sample_lines() -> list[str]:
    return list(SAMPLE_CHART_LINES)


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_CHART


@pytest.fixture
def chart_path(tmp_path: Path) -> Path:
    """Write the sample chart into a fresh folder and return its path."""
    path = tmp_path / "song.bms"
    path.write_text(SAMPLE_CHART, encoding="utf-8")
    return path
