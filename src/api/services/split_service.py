"""Turn uploaded recordings into sample summaries and sample-pack archives."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import List, Optional

from fastapi import HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool

from samplesplit.archive.sample_pack import archive_filename, manifest_records, pack_samples
from samplesplit.audio.decoder import Decoder
from samplesplit.audio.types import Sample
from samplesplit.errors import ArchiveTooLarge, DecodeUnavailable, WaveEncodingError
from samplesplit.params import clamp_parameters
from samplesplit.processor import SampleProcessor

from ..metrics import SAMPLES_EMITTED, SPLIT_COUNTER, SPLIT_DURATION
from ..schemas import SampleSummary, SplitResponse
from ..settings import APISettings

LOGGER = logging.getLogger("samplesplit.api")

NO_SEGMENTS_MESSAGE = "No samples detected. Try a lower silence threshold or a shorter minimum silence."


@dataclass(slots=True)
class SplitResult:
    source: str
    min_silence_ms: float
    silence_threshold_db: float
    samples: List[Sample]


class SplitService:
    """Read uploads, run the splitter off the event loop and map failures to HTTP errors."""

    def __init__(self, settings: APISettings, decoder: Optional[Decoder] = None) -> None:
        self.settings = settings
        self.processor = SampleProcessor(decoder, defaults=settings.split_defaults())

    async def split_upload(
        self,
        file: UploadFile,
        min_silence_ms: float | None = None,
        silence_threshold_db: float | None = None,
    ) -> SplitResult:
        limit = self.settings.max_upload_bytes
        if file.size is not None and file.size > limit:
            self._reject_too_large()
        data = await file.read(limit + 1)
        if len(data) > limit:
            self._reject_too_large()
        params = clamp_parameters(min_silence_ms, silence_threshold_db, defaults=self.processor.defaults)
        source = file.filename or "audio"

        start_time = time.perf_counter()
        try:
            samples = await run_in_threadpool(
                self.processor.process_bytes,
                data,
                params.min_silence_ms,
                params.silence_threshold_db,
            )
        except DecodeUnavailable as exc:
            SPLIT_COUNTER.labels(status="decode_error").inc()
            LOGGER.error("Could not decode upload %s: %s", source, exc)
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except WaveEncodingError as exc:
            SPLIT_COUNTER.labels(status="encode_error").inc()
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        finally:
            SPLIT_DURATION.observe(time.perf_counter() - start_time)

        SPLIT_COUNTER.labels(status="ok" if samples else "no_segments").inc()
        SAMPLES_EMITTED.inc(len(samples))
        return SplitResult(
            source=source,
            min_silence_ms=params.min_silence_ms,
            silence_threshold_db=params.silence_threshold_db,
            samples=samples,
        )

    def _reject_too_large(self) -> None:
        SPLIT_COUNTER.labels(status="too_large").inc()
        raise HTTPException(
            status_code=413,
            detail=f"Upload exceeds {self.settings.max_upload_mb:g} MB",
        )

    def summarize(self, result: SplitResult) -> SplitResponse:
        records = manifest_records(result.samples)
        return SplitResponse(
            status="ok" if records else "no_segments",
            source=result.source,
            archive_name=archive_filename(result.source),
            min_silence_ms=result.min_silence_ms,
            silence_threshold_db=result.silence_threshold_db,
            sample_count=len(records),
            samples=[SampleSummary(**record) for record in records],
            message=None if records else NO_SEGMENTS_MESSAGE,
        )

    async def build_archive(self, result: SplitResult) -> tuple[str, bytes]:
        try:
            payload = await run_in_threadpool(pack_samples, result.samples)
        except ArchiveTooLarge as exc:
            LOGGER.error("Sample pack for %s is too large: %s", result.source, exc)
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        name = archive_filename(result.source)
        LOGGER.info("Built %s with %d sample(s), %d bytes", name, len(result.samples), len(payload))
        return name, payload
