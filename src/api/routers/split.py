"""Split endpoints."""

from __future__ import annotations

from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile

from ..schemas import SplitResponse
from ..services.split_service import SplitService
from ..settings import APISettings, get_settings

router = APIRouter(prefix="/v1", tags=["split"])


def get_service(settings: APISettings = Depends(get_settings)) -> SplitService:
    return SplitService(settings)


def content_disposition(filename: str) -> str:
    """Attachment header that survives non-Latin-1 names (RFC 6266 ``filename*``)."""
    fallback = filename.encode("ascii", "replace").decode("ascii").replace("?", "_")
    fallback = fallback.replace('"', "_").replace("\\", "_")
    value = f'attachment; filename="{fallback}"'
    encoded = quote(filename)
    if fallback != filename or encoded != filename:
        value += f"; filename*=utf-8''{encoded}"
    return value


@router.post("/split", response_model=SplitResponse)
async def split_audio(
    file: UploadFile = File(...),
    min_silence_ms: float | None = Form(None),
    silence_threshold_db: float | None = Form(None),
    service: SplitService = Depends(get_service),
):
    result = await service.split_upload(file, min_silence_ms, silence_threshold_db)
    return service.summarize(result)


@router.post("/split/archive")
async def split_audio_archive(
    file: UploadFile = File(...),
    min_silence_ms: float | None = Form(None),
    silence_threshold_db: float | None = Form(None),
    service: SplitService = Depends(get_service),
):
    result = await service.split_upload(file, min_silence_ms, silence_threshold_db)
    name, payload = await service.build_archive(result)
    return Response(
        content=payload,
        media_type="application/zip",
        headers={
            "Content-Disposition": content_disposition(name),
            "X-Sample-Count": str(len(result.samples)),
        },
    )
