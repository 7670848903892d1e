"""Tests for gzembed.dispatch.negotiation — gzip vs. identity responses."""

import logging

import pytest

from gzembed.bundle.compress import compress
from gzembed.bundle.types import Asset
from gzembed.dispatch.negotiation import accepts_gzip, negotiate

RAW = b"<!doctype html><p>hello, world</p>"


def _asset(payload: bytes | None = None, mime_type: str = "text/html; charset=utf-8") -> Asset:
    return Asset(
        relative_path="index.html",
        identifier="indexHtml",
        url_path="/index.html",
        mime_type=mime_type,
        payload=compress(RAW) if payload is None else payload,
        size=len(RAW),
    )


class TestAcceptsGzip:
    @pytest.mark.parametrize(
        "value",
        [
            "gzip",
            "GZIP",
            "gzip, deflate, br",
            "br;q=1.0, gzip;q=0.8",
            "x-gzip",
            "*",
            "deflate, *;q=0.1",
            "gzip;q=0, gzip;q=0.5",
        ],
    )
    def test_accepted(self, value: str) -> None:
        assert accepts_gzip(value)

    @pytest.mark.parametrize(
        "value",
        [
            None,
            "",
            "identity",
            "deflate, br",
            "gzip;q=0",
            "gzip; q=0.0",
            "*;q=0",
            "gzip;q=0, *",
            "gzip;q=bogus",
        ],
    )
    def test_refused(self, value) -> None:
        assert not accepts_gzip(value)


class TestNegotiate:
    def test_gzip_client_gets_payload_unchanged(self) -> None:
        asset = _asset()
        response = negotiate(asset, "gzip, deflate")
        assert response.status == 200
        assert response.body is asset.payload
        assert response.header("content-encoding") == "gzip"

    def test_identity_client_gets_raw_bytes(self) -> None:
        response = negotiate(_asset(), None)
        assert response.status == 200
        assert response.body == RAW
        assert response.header("content-encoding") is None

    @pytest.mark.parametrize("accept", [None, "gzip"])
    def test_caching_headers(self, accept) -> None:
        response = negotiate(_asset(), accept)
        assert response.header("content-type") == "text/html; charset=utf-8"
        assert response.header("Cache-Control") == "private, max-age=0"
        assert response.header("Expires") == "-1"

    def test_custom_caching_headers(self) -> None:
        response = negotiate(_asset(), None, cache_control="no-store", expires="0")
        assert response.header("Cache-Control") == "no-store"
        assert response.header("Expires") == "0"

    def test_empty_mime_type_omits_content_type(self) -> None:
        response = negotiate(_asset(mime_type=""), None)
        assert response.header("content-type") is None
        assert response.body == RAW

    def test_modes_carry_same_headers_apart_from_encoding(self) -> None:
        zipped = negotiate(_asset(), "gzip")
        plain = negotiate(_asset(), "")
        without_encoding = tuple(h for h in zipped.headers if h[0] != "Content-Encoding")
        assert without_encoding == plain.headers

    def test_corrupt_payload_yields_500(self, caplog) -> None:
        with caplog.at_level(logging.CRITICAL, logger="gzembed.server"):
            response = negotiate(_asset(payload=b"corrupted"), "identity")
        assert response.status == 500
        assert response.body == b""
        assert response.headers == ()
        assert "Integrity violation" in caplog.text
        assert "/index.html" in caplog.text

    def test_corrupt_payload_still_served_to_gzip_clients(self) -> None:
        response = negotiate(_asset(payload=b"corrupted"), "gzip")
        assert response.status == 200
        assert response.body == b"corrupted"
