"""Tests for gzembed.dispatch.dispatcher over ASGI."""

import gzip
import logging

import pytest

from gzembed.bundle.compress import compress
from gzembed.bundle.types import Asset, Bundle
from gzembed.config import ServeConfig
from gzembed.dispatch.dispatcher import Dispatcher
from gzembed.http.request import Request
from gzembed.testing import TestClient

INDEX = b"<h1>Hi</h1>"
APP_CSS = b"body { color: red; }"


def _asset(path: str, identifier: str, raw: bytes, mime_type: str) -> Asset:
    return Asset(
        relative_path=path,
        identifier=identifier,
        url_path="/" + path,
        mime_type=mime_type,
        payload=compress(raw),
        size=len(raw),
    )


@pytest.fixture
def bundle() -> Bundle:
    """A synthetic bundle built without touching the filesystem."""
    return Bundle.from_assets(
        [
            _asset("index.html", "indexHtml", INDEX, "text/html; charset=utf-8"),
            _asset("css/app.css", "cssAppCss", APP_CSS, "text/css; charset=utf-8"),
        ],
        root="indexHtml",
    )


class TestDispatch:
    async def test_gzip_response(self, bundle) -> None:
        async with TestClient(Dispatcher(bundle)) as client:
            response = await client.get("/css/app.css", headers={"Accept-Encoding": "gzip"})
        assert response.status == 200
        assert response.header("content-encoding") == "gzip"
        assert response.body == bundle.get("/css/app.css").payload
        assert gzip.decompress(response.body) == APP_CSS

    async def test_identity_response(self, bundle) -> None:
        async with TestClient(Dispatcher(bundle)) as client:
            response = await client.get("/css/app.css")
        assert response.status == 200
        assert response.header("content-encoding") is None
        assert response.body == APP_CSS
        assert response.header("content-length") == str(len(APP_CSS))

    async def test_headers(self, bundle) -> None:
        async with TestClient(Dispatcher(bundle)) as client:
            response = await client.get("/index.html")
        assert response.header("content-type") == "text/html; charset=utf-8"
        assert response.header("cache-control") == "private, max-age=0"
        assert response.header("expires") == "-1"

    @pytest.mark.parametrize("accept", [None, "gzip", "identity"])
    async def test_root_alias_matches_file(self, bundle, accept) -> None:
        headers = {"Accept-Encoding": accept} if accept else None
        async with TestClient(Dispatcher(bundle)) as client:
            root = await client.get("/", headers=headers)
            index = await client.get("/index.html", headers=headers)
        assert root.status == index.status == 200
        assert root.body == index.body
        assert root.headers == index.headers

    @pytest.mark.parametrize("path", ["/missing.js", "/css", "/css/", "/index.html/", "//"])
    @pytest.mark.parametrize("accept", [None, "gzip"])
    async def test_miss_is_empty_404(self, bundle, path, accept) -> None:
        headers = {"Accept-Encoding": accept} if accept else None
        async with TestClient(Dispatcher(bundle)) as client:
            response = await client.get(path, headers=headers)
        assert response.status == 404
        assert response.body == b""

    async def test_method_agnostic(self, bundle) -> None:
        async with TestClient(Dispatcher(bundle)) as client:
            response = await client.request("POST", "/index.html")
        assert response.status == 200
        assert response.body == INDEX

    async def test_head_has_headers_but_no_body(self, bundle) -> None:
        async with TestClient(Dispatcher(bundle)) as client:
            response = await client.head("/index.html")
        assert response.status == 200
        assert response.body == b""
        assert response.header("content-length") == str(len(INDEX))

    async def test_empty_bundle_always_404(self) -> None:
        async with TestClient(Dispatcher(Bundle.from_assets([]))) as client:
            for path in ("/", "/index.html"):
                response = await client.get(path)
                assert response.status == 404

    async def test_large_assets_decompress_off_loop(self, bundle) -> None:
        async with TestClient(Dispatcher(bundle, offload_threshold=0)) as client:
            response = await client.get("/css/app.css")
        assert response.body == APP_CSS

    async def test_corrupt_asset_isolated(self, bundle, caplog) -> None:
        broken = Asset(
            relative_path="broken.js",
            identifier="brokenJs",
            url_path="/broken.js",
            mime_type="text/javascript; charset=utf-8",
            payload=b"not gzip",
            size=10,
        )
        mixed = Bundle.from_assets([*bundle.assets, broken], root="indexHtml")
        async with TestClient(Dispatcher(mixed)) as client:
            with caplog.at_level(logging.CRITICAL, logger="gzembed.server"):
                bad = await client.get("/broken.js")
            good = await client.get("/index.html")
        assert bad.status == 500
        assert bad.body == b""
        assert good.status == 200
        assert good.body == INDEX

    async def test_unexpected_error_is_empty_500(self, bundle, caplog) -> None:
        class FlakyDispatcher(Dispatcher):
            def serve(self, asset, accept_encoding):
                if asset.identifier == "cssAppCss":
                    raise RuntimeError("boom")
                return super().serve(asset, accept_encoding)

        async with TestClient(FlakyDispatcher(bundle)) as client:
            with caplog.at_level(logging.ERROR, logger="gzembed.server"):
                bad = await client.get("/css/app.css")
            good = await client.get("/index.html")
        assert bad.status == 500
        assert bad.body == b""
        assert any(
            record.name == "gzembed.server" and record.exc_info is not None
            for record in caplog.records
        )
        assert good.status == 200
        assert good.body == INDEX

    async def test_from_config(self, bundle) -> None:
        config = ServeConfig(cache_control="no-cache", expires="0")
        async with TestClient(Dispatcher.from_config(bundle, config)) as client:
            response = await client.get("/")
        assert response.header("cache-control") == "no-cache"
        assert response.header("expires") == "0"


class TestSyncDispatch:
    def test_dispatch_without_server(self, bundle) -> None:
        dispatcher = Dispatcher(bundle)
        response = dispatcher.dispatch(Request.build("/", headers={"Accept-Encoding": "gzip"}))
        assert response.body == bundle.get("/").payload

    def test_lookup(self, bundle) -> None:
        dispatcher = Dispatcher(bundle)
        assert dispatcher.lookup("/css/app.css").identifier == "cssAppCss"
        assert dispatcher.lookup("/nope") is None
        assert dispatcher.bundle is bundle


class TestASGIScopes:
    async def test_lifespan(self, bundle) -> None:
        incoming = [{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}]
        sent: list[dict] = []

        async def receive() -> dict:
            return incoming.pop(0)

        async def send(message: dict) -> None:
            sent.append(message)

        await Dispatcher(bundle)({"type": "lifespan"}, receive, send)
        assert [m["type"] for m in sent] == [
            "lifespan.startup.complete",
            "lifespan.shutdown.complete",
        ]

    async def test_websocket_ignored(self, bundle) -> None:
        sent: list[dict] = []

        async def receive() -> dict:
            return {}

        async def send(message: dict) -> None:
            sent.append(message)

        await Dispatcher(bundle)({"type": "websocket", "path": "/"}, receive, send)
        assert sent == []
