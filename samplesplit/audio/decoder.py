"""Pluggable decoders that turn raw file bytes into an ``AudioBuffer``."""

from __future__ import annotations

import io
import logging
from typing import Callable

import soundfile as sf

from ..errors import DecodeUnavailable
from .types import AudioBuffer

LOGGER = logging.getLogger("samplesplit.decoder")

Decoder = Callable[[bytes], AudioBuffer]


def soundfile_decoder(data: bytes) -> AudioBuffer:
    """Decode any container libsndfile understands (wav, flac, ogg, mp3 on recent builds)."""

    if not data:
        raise DecodeUnavailable("Audio file is empty")
    try:
        frames, sample_rate = sf.read(io.BytesIO(data), dtype="float32", always_2d=True)
    except (RuntimeError, TypeError, ValueError) as exc:
        LOGGER.error("libsndfile could not decode %d bytes: %s", len(data), exc)
        raise DecodeUnavailable("Failed to process audio file. Please ensure it's a valid audio file.") from exc
    buffer = AudioBuffer.from_interleaved(frames, sample_rate)
    LOGGER.debug(
        "Decoded %d frame(s) x %d channel(s) at %s Hz",
        buffer.frame_count,
        buffer.channel_count,
        sample_rate,
    )
    return buffer


__all__ = ["Decoder", "soundfile_decoder"]
