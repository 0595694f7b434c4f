"""Silence-gap splitter that cuts a recording into individual samples."""

from __future__ import annotations

import logging
import math

import numpy as np

from ..errors import DecodeUnavailable
from .types import AudioBuffer, Sample, SilenceRegion
from .wav_codec import encode_wav

LOGGER = logging.getLogger("samplesplit.splitter")

SILENCE_FLOOR_DBFS = -60.0
MIN_SAMPLE_SECONDS = 0.1


def db_to_linear(db: float) -> float:
    try:
        return 10 ** (db / 20)
    except OverflowError:
        return math.inf


def rms_dbfs(samples: np.ndarray) -> float:
    """RMS level in dBFS, floored at -60 dB for digital silence."""
    if samples.size == 0:
        return SILENCE_FLOOR_DBFS
    data = np.nan_to_num(samples.astype(np.float64), nan=0.0, posinf=1.0, neginf=-1.0)
    rms = math.sqrt(float(np.mean(data * data)))
    if rms > 0:
        return 20 * math.log10(rms)
    return SILENCE_FLOOR_DBFS


class SilenceSplitter:
    """Find silence regions on the first channel and cut the audio between them."""

    def __init__(self, min_silence_ms: float, silence_threshold_db: float) -> None:
        self.min_silence_ms = min_silence_ms
        self.silence_threshold_db = silence_threshold_db
        self.linear_threshold = db_to_linear(silence_threshold_db)

    def process(self, buffer: AudioBuffer) -> list[Sample]:
        self._validate(buffer)
        min_run = self._ms_to_samples(self.min_silence_ms, buffer.sample_rate)
        regions = self.find_silence_regions(buffer.reference, min_run)
        spans = self._candidate_spans(regions, buffer.frame_count, buffer.sample_rate)
        samples = [self._build_sample(buffer, start, end, index) for index, (start, end) in enumerate(spans, start=1)]
        if not samples:
            LOGGER.warning(
                "No samples found (min_silence_ms=%s, threshold=%s dB, frames=%d)",
                self.min_silence_ms,
                self.silence_threshold_db,
                buffer.frame_count,
            )
        else:
            LOGGER.info(
                "Split %d frames into %d sample(s) across %d silence region(s)",
                buffer.frame_count,
                len(samples),
                len(regions),
            )
        return samples

    def find_silence_regions(self, reference: np.ndarray, min_run: float) -> list[SilenceRegion]:
        """Quiet runs of at least ``min_run`` frames, each closed at the next loud frame."""
        quiet = np.abs(reference) < self.linear_threshold
        if not quiet.any():
            return []
        edges = np.flatnonzero(np.diff(np.concatenate(([False], quiet, [False])).astype(np.int8)))
        regions: list[SilenceRegion] = []
        for start, end in zip(edges[0::2], edges[1::2]):
            if end - start >= min_run:
                regions.append(SilenceRegion(int(start), int(end)))
        return regions

    def _candidate_spans(
        self, regions: list[SilenceRegion], total_frames: int, sample_rate: float
    ) -> list[tuple[int, int]]:
        min_frames = sample_rate * MIN_SAMPLE_SECONDS
        spans: list[tuple[int, int]] = []
        last_end = 0
        for region in regions:
            if region.start > last_end:
                spans.append((last_end, region.start))
            last_end = region.end
        if last_end < total_frames:
            spans.append((last_end, total_frames))
        return [(start, end) for start, end in spans if end - start >= min_frames]

    def _build_sample(self, buffer: AudioBuffer, start: int, end: int, index: int) -> Sample:
        piece = buffer.slice(start, end)
        return Sample(
            filename=f"sample_{index}.wav",
            duration_ms=piece.duration_ms,
            level_dbfs=rms_dbfs(piece.reference),
            buffer=piece,
            encoded=encode_wav(piece),
        )

    def _validate(self, buffer: AudioBuffer) -> None:
        if buffer.channels.ndim != 2 or buffer.channel_count == 0:
            raise DecodeUnavailable("Audio buffer must hold at least one channel of frames")
        if buffer.frame_count == 0:
            raise DecodeUnavailable("Audio buffer is empty")
        try:
            rate = float(buffer.sample_rate)
        except (TypeError, ValueError) as exc:
            raise DecodeUnavailable(f"Invalid sample rate: {buffer.sample_rate!r}") from exc
        if not math.isfinite(rate) or rate <= 0:
            raise DecodeUnavailable(f"Invalid sample rate: {rate!r}")

    @staticmethod
    def _ms_to_samples(duration_ms: float, sample_rate: float) -> float:
        frames = duration_ms / 1000 * sample_rate
        # NaN and +/-inf stay as-is so comparisons against them simply never/always match.
        return float(math.floor(frames)) if math.isfinite(frames) else frames


def segment(buffer: AudioBuffer, min_silence_ms: float, silence_threshold_db: float) -> list[Sample]:
    return SilenceSplitter(min_silence_ms, silence_threshold_db).process(buffer)


__all__ = ["SilenceSplitter", "db_to_linear", "rms_dbfs", "segment"]
