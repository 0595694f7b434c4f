"""Tunable splitter parameters and the ranges callers clamp them to."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

LOGGER = logging.getLogger("samplesplit.params")

MIN_SILENCE_MS_RANGE = (100.0, 2000.0)
SILENCE_THRESHOLD_DB_RANGE = (-60.0, -10.0)

DEFAULT_MIN_SILENCE_MS = 500.0
DEFAULT_SILENCE_THRESHOLD_DB = -40.0


@dataclass(slots=True, frozen=True)
class SplitParameters:
    min_silence_ms: float = DEFAULT_MIN_SILENCE_MS
    silence_threshold_db: float = DEFAULT_SILENCE_THRESHOLD_DB


def _clamp(value: float, bounds: tuple[float, float], fallback: float) -> float:
    low, high = bounds
    if math.isnan(value):
        return fallback
    return max(low, min(float(value), high))


def clamp_parameters(
    min_silence_ms: float | None = None,
    silence_threshold_db: float | None = None,
    *,
    defaults: SplitParameters | None = None,
) -> SplitParameters:
    """Fill missing values from ``defaults`` and clamp both into their UI ranges."""

    defaults = defaults or SplitParameters()
    raw_ms = defaults.min_silence_ms if min_silence_ms is None else float(min_silence_ms)
    raw_db = defaults.silence_threshold_db if silence_threshold_db is None else float(silence_threshold_db)
    params = SplitParameters(
        min_silence_ms=_clamp(raw_ms, MIN_SILENCE_MS_RANGE, defaults.min_silence_ms),
        silence_threshold_db=_clamp(raw_db, SILENCE_THRESHOLD_DB_RANGE, defaults.silence_threshold_db),
    )
    if params.min_silence_ms != raw_ms or params.silence_threshold_db != raw_db:
        LOGGER.warning(
            "Split parameters clamped from (%s ms, %s dB) to (%s ms, %s dB)",
            raw_ms,
            raw_db,
            params.min_silence_ms,
            params.silence_threshold_db,
        )
    return params


__all__ = [
    "DEFAULT_MIN_SILENCE_MS",
    "DEFAULT_SILENCE_THRESHOLD_DB",
    "MIN_SILENCE_MS_RANGE",
    "SILENCE_THRESHOLD_DB_RANGE",
    "SplitParameters",
    "clamp_parameters",
]
