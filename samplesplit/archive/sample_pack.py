"""Assemble split samples plus a ``metadata.json`` manifest into one ZIP."""

from __future__ import annotations

import json
import math
from pathlib import PurePosixPath, PureWindowsPath
from typing import Any, Dict, List, Sequence

from ..audio.types import Sample
from .zip_writer import ArchiveEntry, pack

MANIFEST_NAME = "metadata.json"
ARCHIVE_PREFIX = "sample_pack_"


def _round_half_up(value: float, digits: int = 0) -> float:
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def manifest_records(samples: Sequence[Sample]) -> List[Dict[str, Any]]:
    return [
        {
            "filename": sample.filename,
            "duration_ms": int(_round_half_up(sample.duration_ms)),
            "dbfs": _round_half_up(sample.level_dbfs, 1),
        }
        for sample in samples
    ]


def build_manifest(samples: Sequence[Sample]) -> bytes:
    return json.dumps(manifest_records(samples), indent=2, ensure_ascii=False).encode("utf-8")


def pack_samples(samples: Sequence[Sample]) -> bytes:
    """Every sample's WAV payload in order, with the manifest always last."""
    entries = [ArchiveEntry(sample.filename, sample.encoded) for sample in samples]
    entries.append(ArchiveEntry(MANIFEST_NAME, build_manifest(samples)))
    return pack(entries)


def archive_filename(source_name: str | None) -> str:
    """``sample_pack_<base>.zip`` for an uploaded file name such as ``C:\\takes\\loop.wav``."""
    name = PureWindowsPath(PurePosixPath(source_name or "").name).name
    base = name.rsplit(".", 1)[0] if "." in name.lstrip(".") else name
    return f"{ARCHIVE_PREFIX}{base or 'audio'}.zip"


__all__ = ["MANIFEST_NAME", "archive_filename", "build_manifest", "manifest_records", "pack_samples"]
