"""Decode an uploaded recording and split it into samples in one call."""

from __future__ import annotations

import logging
from typing import List, Optional

from .archive.sample_pack import archive_filename, pack_samples
from .audio.decoder import Decoder, soundfile_decoder
from .audio.silence_splitter import SilenceSplitter
from .audio.types import Sample
from .params import SplitParameters, clamp_parameters

LOGGER = logging.getLogger("samplesplit.processor")


class SampleProcessor:
    """Glue between an injected decoder and the silence splitter.

    The decoder is any callable from raw file bytes to an ``AudioBuffer``; the
    default one uses libsndfile. Thresholds are clamped into the supported
    slider ranges before they reach the splitter.
    """

    def __init__(
        self,
        decoder: Optional[Decoder] = None,
        *,
        defaults: Optional[SplitParameters] = None,
    ) -> None:
        self.decoder = decoder or soundfile_decoder
        self.defaults = defaults or SplitParameters()

    def process_bytes(
        self,
        data: bytes,
        min_silence_ms: float | None = None,
        silence_threshold_db: float | None = None,
    ) -> List[Sample]:
        params = clamp_parameters(min_silence_ms, silence_threshold_db, defaults=self.defaults)
        buffer = self.decoder(data)
        LOGGER.info(
            "Splitting %d frame(s) at %s Hz (min_silence_ms=%s, threshold=%s dB)",
            buffer.frame_count,
            buffer.sample_rate,
            params.min_silence_ms,
            params.silence_threshold_db,
        )
        splitter = SilenceSplitter(params.min_silence_ms, params.silence_threshold_db)
        return splitter.process(buffer)

    def build_pack(self, samples: List[Sample], source_name: str | None) -> tuple[str, bytes]:
        """Return the download filename and the archive bytes for ``samples``."""
        return archive_filename(source_name), pack_samples(samples)


__all__ = ["SampleProcessor"]
