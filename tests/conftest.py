"""Pytest configuration helpers."""

from __future__ import annotations

import sys
from pathlib import Path

import numpy as np
import pytest


def _ensure_repo_on_path() -> None:
    """Allow tests to import from repo modules without installing the package."""
    repo_root = Path(__file__).resolve().parents[1]
    path_str = str(repo_root)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)


_ensure_repo_on_path()

from samplesplit.audio.types import AudioBuffer  # noqa: E402


def square_wave(duration_s: float, sample_rate: int, amplitude: float = 0.5, freq: float = 220.0) -> np.ndarray:
    """Square wave so every sample sits at +/-amplitude (RMS == amplitude)."""
    length = int(round(duration_s * sample_rate))
    t = np.arange(length)
    return np.where(np.sin(2 * np.pi * freq * t / sample_rate) >= 0, amplitude, -amplitude).astype(np.float32)


def near_silence(duration_s: float, sample_rate: int, level: float = 0.001) -> np.ndarray:
    return np.full(int(round(duration_s * sample_rate)), level, dtype=np.float32)


@pytest.fixture()
def tone_gap_tone() -> AudioBuffer:
    """1 s of 0.5 tone, 1 s of near-silence, 1 s of 0.5 tone at 44.1 kHz."""
    rate = 44_100
    mono = np.concatenate([square_wave(1.0, rate), near_silence(1.0, rate), square_wave(1.0, rate)])
    return AudioBuffer(rate, mono)
