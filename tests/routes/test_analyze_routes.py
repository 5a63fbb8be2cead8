import json

import pytest
from aiohttp.test_utils import TestClient, TestServer

from imginfo_backend.config import Settings
from imginfo_backend.routes import APP_KEY_SERVICES, create_app


def _lines(text: str) -> list[dict]:
    return [json.loads(line) for line in text.splitlines() if line.strip()]


@pytest.mark.asyncio
async def test_upload_then_analyze_streams_ndjson(gif_bytes):
    app = create_app(Settings())
    data = gif_bytes([50, 50])
    async with TestClient(TestServer(app)) as client:
        resp = await client.post("/imageinfo/blobs", data=data, headers={"Content-Type": "image/gif"})
        body = await resp.json()
        assert body["ok"] is True
        url = body["data"]["url"]

        resp = await client.post("/imageinfo/analyze", json={"locator": url})
        assert resp.status == 200
        assert resp.headers["Content-Type"].startswith("application/x-ndjson")
        messages = _lines(await resp.text())

    assert [m["kind"] for m in messages] == ["info", "info", "done"]
    assert messages[0]["data"] == {"mimeType": "image/gif", "type": "GIF", "fileSize": len(data)}
    assert messages[1]["data"]["frames"] == 2
    assert messages[1]["data"]["framerate"] == pytest.approx(2.0)
    assert len(app[APP_KEY_SERVICES].blobs) == 0


@pytest.mark.asyncio
async def test_analyze_unknown_blob_reports_failure():
    app = create_app(Settings())
    async with TestClient(TestServer(app)) as client:
        resp = await client.post("/imageinfo/analyze", json={"locator": "blob:imginfo/deadbeef"})
        messages = _lines(await resp.text())

    assert len(messages) == 1
    assert messages[0]["kind"] == "error"
    assert messages[0]["code"] == "FETCH_FAILED"
    assert messages[0]["error"].startswith("Failed to load image:")


@pytest.mark.asyncio
async def test_analyze_data_uri_png():
    app = create_app(Settings())
    async with TestClient(TestServer(app)) as client:
        resp = await client.post("/imageinfo/analyze", json={"url": "data:image/png,abc"})
        messages = _lines(await resp.text())

    assert messages == [
        {"kind": "info", "data": {"mimeType": "image/png", "type": "PNG", "fileSize": 3}},
        {"kind": "done"},
    ]


@pytest.mark.asyncio
async def test_analyze_rejects_bad_requests():
    app = create_app(Settings())
    async with TestClient(TestServer(app)) as client:
        resp = await client.post("/imageinfo/analyze", data="not json")
        body = await resp.json()
        assert body["ok"] is False
        assert body["code"] == "INVALID_JSON"

        resp = await client.post("/imageinfo/analyze", json={"nope": 1})
        body = await resp.json()
        assert body["code"] == "INVALID_INPUT"


@pytest.mark.asyncio
async def test_revoke_blob():
    app = create_app(Settings())
    async with TestClient(TestServer(app)) as client:
        resp = await client.post("/imageinfo/blobs", data=b"abc", headers={"Content-Type": "image/png"})
        url = (await resp.json())["data"]["url"]
        blob_id = url.rsplit("/", 1)[-1]

        resp = await client.delete(f"/imageinfo/blobs/{blob_id}")
        assert (await resp.json())["data"]["revoked"] is True

        resp = await client.delete(f"/imageinfo/blobs/{blob_id}")
        assert (await resp.json())["code"] == "NOT_FOUND"

        resp = await client.post("/imageinfo/blobs", data=b"")
        assert (await resp.json())["code"] == "INVALID_INPUT"
