"""Dataclasses shared across audio helpers."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from ..errors import DecodeUnavailable


@dataclass(slots=True, frozen=True, eq=False)
class AudioBuffer:
    """Decoded float PCM, stored channel-major as ``(channels, frames)``."""

    sample_rate: float
    channels: np.ndarray = field(repr=False)

    def __post_init__(self) -> None:
        try:
            data = np.array(self.channels, dtype=np.float32)
        except (TypeError, ValueError) as exc:
            raise DecodeUnavailable(f"Channel data is not a rectangular float array: {exc}") from exc
        if data.ndim == 1:
            data = data.reshape(1, -1)
        data.flags.writeable = False
        object.__setattr__(self, "channels", data)

    @classmethod
    def from_interleaved(cls, frames: np.ndarray, sample_rate: float) -> "AudioBuffer":
        """Build a buffer from ``(frames, channels)`` data, as soundfile returns it."""
        data = np.asarray(frames, dtype=np.float32)
        if data.ndim == 1:
            return cls(sample_rate, data)
        return cls(sample_rate, data.T)

    @property
    def channel_count(self) -> int:
        return int(self.channels.shape[0])

    @property
    def frame_count(self) -> int:
        return int(self.channels.shape[1])

    @property
    def reference(self) -> np.ndarray:
        return self.channels[0]

    @property
    def duration_ms(self) -> float:
        return self.frame_count / float(self.sample_rate) * 1000.0

    def slice(self, start: int, end: int) -> "AudioBuffer":
        return AudioBuffer(self.sample_rate, self.channels[:, start:end])


@dataclass(slots=True, frozen=True)
class SilenceRegion:
    """Half-open frame interval ``[start, end)`` that qualified as silence."""

    start: int
    end: int


@dataclass(slots=True, frozen=True, eq=False)
class Sample:
    """One non-silent region cut from the source recording."""

    filename: str
    duration_ms: float
    level_dbfs: float
    buffer: AudioBuffer = field(repr=False)
    encoded: bytes = field(repr=False)


__all__ = ["AudioBuffer", "Sample", "SilenceRegion"]
