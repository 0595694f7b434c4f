"""Pydantic schemas for API contracts."""

from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field


class SampleSummary(BaseModel):
    filename: str
    duration_ms: int
    dbfs: float


class SplitResponse(BaseModel):
    status: str = "ok"
    source: str
    archive_name: str
    min_silence_ms: float
    silence_threshold_db: float
    sample_count: int
    samples: List[SampleSummary] = Field(default_factory=list)
    message: str | None = None


class HealthResponse(BaseModel):
    ok: bool
    version: str
    timestamp: datetime
