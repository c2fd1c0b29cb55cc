from __future__ import annotations

import asyncio
import base64

import pytest

from src.kie_studio.errors import ConfigurationError, RemoteRejectionError
from src.kie_studio.tasks.task_uploads import AssetUploader, encode_data_url
from tests.mocks.kie_gateway import FILE_UPLOAD, DummyHTTPResponse, uploaded


def test_encode_data_url() -> None:
    assert encode_data_url(b"hi", "image/png") == "data:image/png;base64,aGk="


@pytest.mark.asyncio
async def test_upload_posts_data_url_and_returns_file_url(gateway, make_asset) -> None:
    asset = make_asset("cat.png", content=b"cat-bytes")
    gateway.queue(FILE_UPLOAD, uploaded("https://files.test/cat.png"))
    uploader = AssetUploader(upload_base="https://upload.test/")

    staged = await uploader.upload("secret", asset, "seedance-input-images")

    assert staged.file_url == "https://files.test/cat.png"
    assert staged.expires_at == "2026-10-22T00:00:00Z"
    assert staged.source == asset
    (call,) = gateway.calls
    assert call.url == "https://upload.test/api/file-base64-upload"
    assert call.headers["Authorization"] == "Bearer secret"
    assert call.json["uploadPath"] == "seedance-input-images"
    assert call.json["fileName"] == "cat.png"
    prefix, encoded = call.json["base64Data"].split(",", 1)
    assert prefix == "data:image/png;base64"
    assert base64.b64decode(encoded) == b"cat-bytes"


@pytest.mark.asyncio
async def test_upload_uses_explicit_file_name(gateway, make_asset) -> None:
    gateway.queue(FILE_UPLOAD, uploaded("https://files.test/renamed.png"))

    await AssetUploader().upload("secret", make_asset(), "p", file_name="renamed.png")

    assert gateway.calls[0].json["fileName"] == "renamed.png"


@pytest.mark.asyncio
async def test_upload_requires_api_key(gateway, make_asset) -> None:
    with pytest.raises(ConfigurationError):
        await AssetUploader().upload(None, make_asset(), "p")

    assert gateway.calls == []


@pytest.mark.asyncio
async def test_upload_rejection_carries_server_message(gateway, make_asset) -> None:
    gateway.queue(
        FILE_UPLOAD,
        DummyHTTPResponse(200, {"success": False, "code": 400, "msg": "file too large", "data": None}),
    )

    with pytest.raises(RemoteRejectionError, match="file too large"):
        await AssetUploader().upload("secret", make_asset(), "p")


@pytest.mark.asyncio
async def test_upload_http_error_falls_back_to_reason_phrase(gateway, make_asset) -> None:
    gateway.queue(FILE_UPLOAD, DummyHTTPResponse(503, None, reason_phrase="Service Unavailable"))

    with pytest.raises(RemoteRejectionError, match="Service Unavailable"):
        await AssetUploader().upload("secret", make_asset(), "p")


@pytest.mark.asyncio
async def test_upload_many_is_sequential_and_ordered(gateway, make_asset) -> None:
    assets = [make_asset(f"img-{i}.png") for i in range(3)]
    gateway.queue(FILE_UPLOAD, *[uploaded(f"https://files.test/{i}.png") for i in range(3)])

    staged = await AssetUploader().upload_many("secret", assets, "wan26-input-images")

    assert [item.file_url for item in staged] == [f"https://files.test/{i}.png" for i in range(3)]
    assert [call.json["fileName"] for call in gateway.calls] == ["img-0.png", "img-1.png", "img-2.png"]


@pytest.mark.asyncio
async def test_upload_many_bounded_concurrency_preserves_order(monkeypatch, make_asset) -> None:
    in_flight = 0
    peak = 0

    class SlowClient:
        def __init__(self, *args, **kwargs) -> None:
            pass

        async def __aenter__(self):
            return self

        async def __aexit__(self, exc_type, exc_value, traceback):
            return None

        async def post(self, url, headers, json):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            # Later files finish first.
            await asyncio.sleep(0.01 * (5 - int(json["fileName"][4])))
            in_flight -= 1
            return uploaded(f"https://files.test/{json['fileName']}")

    monkeypatch.setattr("httpx.AsyncClient", SlowClient)
    assets = [make_asset(f"img-{i}.png") for i in range(5)]

    staged = await AssetUploader().upload_many("secret", assets, "p", concurrency=2)

    assert [item.file_url for item in staged] == [f"https://files.test/img-{i}.png" for i in range(5)]
    assert peak == 2


@pytest.mark.asyncio
async def test_upload_many_failure_cancels_uploads_in_flight(monkeypatch, make_asset) -> None:
    finished: list[str] = []
    cancelled: list[str] = []

    class FlakyClient:
        def __init__(self, *args, **kwargs) -> None:
            pass

        async def __aenter__(self):
            return self

        async def __aexit__(self, exc_type, exc_value, traceback):
            return None

        async def post(self, url, headers, json):
            name = json["fileName"]
            if name == "a.png":
                await asyncio.sleep(0.05)
                return DummyHTTPResponse(
                    200, {"success": False, "code": 400, "msg": "file too large", "data": None}
                )
            try:
                await asyncio.sleep(0.2)
            except asyncio.CancelledError:
                cancelled.append(name)
                raise
            finished.append(name)
            return uploaded(f"https://files.test/{name}")

    monkeypatch.setattr("httpx.AsyncClient", FlakyClient)
    assets = [make_asset("a.png"), make_asset("b.png")]

    with pytest.raises(RemoteRejectionError, match="file too large"):
        await AssetUploader().upload_many("secret", assets, "p", concurrency=2)

    assert cancelled == ["b.png"]
    await asyncio.sleep(0.3)
    assert finished == []
