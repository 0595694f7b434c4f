"""Canonical 16-bit PCM WAV encoding."""

from __future__ import annotations

import struct

import numpy as np

from ..errors import WaveEncodingError
from .types import AudioBuffer

WAV_HEADER = struct.Struct("<4sI4s4sIHHIIHH4sI")

PCM_FORMAT_TAG = 1
BITS_PER_SAMPLE = 16
BYTES_PER_SAMPLE = BITS_PER_SAMPLE // 8
PCM_SCALE = 0x7FFF
MAX_U16 = 0xFFFF
MAX_U32 = 0xFFFFFFFF


def _require_width(name: str, value: int, limit: int) -> int:
    if value < 0 or value > limit:
        raise WaveEncodingError(f"WAV field {name}={value} does not fit in {limit.bit_length()} bits")
    return value


def to_pcm16(samples: np.ndarray) -> np.ndarray:
    """Clamp floats to [-1, 1] and truncate toward zero into int16 (NaN becomes 0)."""
    data = np.nan_to_num(np.asarray(samples, dtype=np.float64), nan=0.0, posinf=1.0, neginf=-1.0)
    return (np.clip(data, -1.0, 1.0) * PCM_SCALE).astype("<i2")


def encode_wav(buffer: AudioBuffer) -> bytes:
    channels = _require_width("channels", buffer.channel_count, MAX_U16)
    sample_rate = _require_width("sample_rate", int(round(buffer.sample_rate)), MAX_U32)
    block_align = _require_width("block_align", channels * BYTES_PER_SAMPLE, MAX_U16)
    byte_rate = _require_width("byte_rate", sample_rate * block_align, MAX_U32)
    data_len = _require_width("data_len", buffer.frame_count * block_align, MAX_U32 - 36)

    header = WAV_HEADER.pack(
        b"RIFF",
        36 + data_len,
        b"WAVE",
        b"fmt ",
        16,
        PCM_FORMAT_TAG,
        channels,
        sample_rate,
        byte_rate,
        block_align,
        BITS_PER_SAMPLE,
        b"data",
        data_len,
    )
    # (channels, frames) -> frame-major interleaving
    interleaved = np.ascontiguousarray(to_pcm16(buffer.channels).T)
    return header + interleaved.tobytes()


__all__ = ["encode_wav", "to_pcm16"]
