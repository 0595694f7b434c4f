import asyncio
import io
import json
import zipfile

import numpy as np
import pytest
from fastapi.testclient import TestClient

from samplesplit.audio.types import AudioBuffer
from samplesplit.audio.wav_codec import encode_wav


@pytest.fixture()
def api_client():
    from src.api.app import create_app
    from src.api.settings import APISettings, get_settings

    get_settings.cache_clear()  # type: ignore
    settings = APISettings(
        default_min_silence_ms=500,
        default_silence_threshold_db=-40,
        max_upload_mb=2,
    )
    app = create_app()
    app.dependency_overrides[get_settings] = lambda: settings
    return TestClient(app), settings


def _upload(payload: bytes, name: str = "take.wav"):
    return {"file": (name, payload, "audio/wav")}


def test_health_ok(api_client):
    client, settings = api_client
    resp = client.get("/healthz")
    assert resp.status_code == 200
    body = resp.json()
    assert body["ok"] is True
    assert body["version"] == settings.version


def test_split_returns_sample_summaries(api_client, tone_gap_tone):
    client, _ = api_client
    resp = client.post("/v1/split", files=_upload(encode_wav(tone_gap_tone)))
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["sample_count"] == 2
    assert body["archive_name"] == "sample_pack_take.zip"
    assert body["samples"][0] == {"filename": "sample_1.wav", "duration_ms": 1000, "dbfs": -6.0}
    assert body["message"] is None


def test_split_clamps_form_parameters(api_client, tone_gap_tone):
    client, _ = api_client
    resp = client.post(
        "/v1/split",
        files=_upload(encode_wav(tone_gap_tone)),
        data={"min_silence_ms": "5", "silence_threshold_db": "-5"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["min_silence_ms"] == 100
    assert body["silence_threshold_db"] == -10
    assert body["sample_count"] == 2


def test_split_reports_no_segments_distinctly(api_client):
    client, _ = api_client
    silent = encode_wav(AudioBuffer(44100, np.zeros(44100, dtype=np.float32)))
    resp = client.post("/v1/split", files=_upload(silent))
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "no_segments"
    assert body["sample_count"] == 0
    assert "threshold" in body["message"]


def test_archive_download(api_client, tone_gap_tone):
    client, _ = api_client
    resp = client.post("/v1/split/archive", files=_upload(encode_wav(tone_gap_tone), "set one.wav"))
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/zip"
    assert 'filename="sample_pack_set one.zip"' in resp.headers["content-disposition"]
    assert resp.headers["x-sample-count"] == "2"

    with zipfile.ZipFile(io.BytesIO(resp.content)) as archive:
        assert archive.testzip() is None
        assert archive.namelist() == ["sample_1.wav", "sample_2.wav", "metadata.json"]
        manifest = json.loads(archive.read("metadata.json"))
    assert [entry["filename"] for entry in manifest] == ["sample_1.wav", "sample_2.wav"]


def test_undecodable_upload_is_bad_request(api_client):
    client, _ = api_client
    resp = client.post("/v1/split", files=_upload(b"this is not audio" * 20, "notes.txt"))
    assert resp.status_code == 400


def test_oversized_upload_is_rejected(api_client):
    client, settings = api_client
    settings.max_upload_mb = 0.0001
    resp = client.post("/v1/split", files=_upload(b"\x00" * 1024))
    assert resp.status_code == 413


def test_metrics_exposes_split_counters(api_client, tone_gap_tone):
    client, _ = api_client
    client.post("/v1/split", files=_upload(encode_wav(tone_gap_tone)))
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert "split_requests_total" in resp.text
    assert "split_samples_emitted_total" in resp.text


def test_archive_download_with_non_latin1_name(api_client, tone_gap_tone):
    client, _ = api_client
    resp = client.post("/v1/split/archive", files=_upload(encode_wav(tone_gap_tone), "ライブ.wav"))
    assert resp.status_code == 200
    disposition = resp.headers["content-disposition"]
    assert 'filename="sample_pack____.zip"' in disposition
    assert "filename*=utf-8''sample_pack_%E3%83%A9%E3%82%A4%E3%83%96.zip" in disposition
    with zipfile.ZipFile(io.BytesIO(resp.content)) as archive:
        assert archive.namelist()[-1] == "metadata.json"


def test_content_disposition_escapes_quotes():
    from src.api.routers.split import content_disposition

    assert content_disposition("sample_pack_take.zip") == 'attachment; filename="sample_pack_take.zip"'
    value = content_disposition('sample_pack_say "hi".zip')
    assert value.startswith('attachment; filename="sample_pack_say _hi_.zip"')
    assert "filename*=utf-8''sample_pack_say%20%22hi%22.zip" in value


class _RecordingUpload:
    def __init__(self, payload: bytes, size=None):
        self.filename = "take.wav"
        self.size = size
        self.payload = payload
        self.requested = []

    async def read(self, size: int = -1) -> bytes:
        self.requested.append(size)
        return self.payload if size < 0 else self.payload[:size]


def test_upload_read_is_bounded_by_limit():
    from fastapi import HTTPException

    from src.api.services.split_service import SplitService
    from src.api.settings import APISettings

    settings = APISettings(max_upload_mb=0.001)
    service = SplitService(settings)

    upload = _RecordingUpload(b"\x00" * 10_000)
    with pytest.raises(HTTPException) as excinfo:
        asyncio.run(service.split_upload(upload))
    assert excinfo.value.status_code == 413
    assert upload.requested == [settings.max_upload_bytes + 1]

    declared = _RecordingUpload(b"", size=10_000)
    with pytest.raises(HTTPException) as excinfo:
        asyncio.run(service.split_upload(declared))
    assert excinfo.value.status_code == 413
    assert declared.requested == []
