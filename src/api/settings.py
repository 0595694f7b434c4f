"""API settings resolved from the environment."""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, Field

from samplesplit.params import DEFAULT_MIN_SILENCE_MS, DEFAULT_SILENCE_THRESHOLD_DB, SplitParameters


class APISettings(BaseModel):
    app_name: str = Field(default="Sample Splitter API")
    version: str = Field(default="1.0.0")
    default_min_silence_ms: float = Field(
        default=float(os.getenv("DEFAULT_MIN_SILENCE_MS", str(DEFAULT_MIN_SILENCE_MS)))
    )
    default_silence_threshold_db: float = Field(
        default=float(os.getenv("DEFAULT_SILENCE_THRESHOLD_DB", str(DEFAULT_SILENCE_THRESHOLD_DB)))
    )
    max_upload_mb: float = Field(default=float(os.getenv("MAX_UPLOAD_MB", "50")))
    log_level: str = Field(default=os.getenv("LOG_LEVEL", "INFO"))

    @property
    def max_upload_bytes(self) -> int:
        return int(self.max_upload_mb * 1024 * 1024)

    def split_defaults(self) -> SplitParameters:
        return SplitParameters(
            min_silence_ms=self.default_min_silence_ms,
            silence_threshold_db=self.default_silence_threshold_db,
        )


@lru_cache()
def get_settings() -> APISettings:
    return APISettings()
