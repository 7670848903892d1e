"""Content negotiation — compressed or decompressed asset responses.

``negotiate`` is a pure function of the asset and the client's
``Accept-Encoding`` header, independent of any server, so both response
modes can be checked directly::

    response = negotiate(asset, "gzip, deflate")
    assert response.body == asset.payload
"""

import logging

from gzembed.bundle.compress import decompress
from gzembed.bundle.types import Asset
from gzembed.errors import PayloadError
from gzembed.http.response import Response

logger = logging.getLogger("gzembed.server")

CACHE_CONTROL = "private, max-age=0"
EXPIRES = "-1"

_GZIP_CODINGS = frozenset({"gzip", "x-gzip"})


def _quality(params: list[str]) -> float:
    """Extract the ``q`` weight from coding parameters (default 1)."""
    for param in params:
        name, _, value = param.partition("=")
        if name.strip().lower() == "q":
            try:
                return float(value.strip())
            except ValueError:
                return 0.0
    return 1.0


def accepts_gzip(accept_encoding: str | None) -> bool:
    """Whether an ``Accept-Encoding`` value permits a gzip response.

    ``gzip`` (or the legacy ``x-gzip``) with a non-zero weight accepts;
    ``gzip;q=0`` refuses.  A ``*`` wildcard with a non-zero weight
    accepts unless gzip is listed explicitly.
    """
    if not accept_encoding:
        return False

    explicit: float | None = None
    wildcard: float | None = None
    for item in accept_encoding.split(","):
        coding, *params = item.split(";")
        coding = coding.strip().lower()
        if coding in _GZIP_CODINGS:
            explicit = max(explicit or 0.0, _quality(params))
        elif coding == "*":
            wildcard = _quality(params)

    if explicit is not None:
        return explicit > 0
    return wildcard is not None and wildcard > 0


def asset_headers(
    asset: Asset,
    *,
    cache_control: str = CACHE_CONTROL,
    expires: str = EXPIRES,
) -> dict[str, str]:
    """Headers shared by both response modes."""
    headers: dict[str, str] = {}
    if asset.mime_type:
        headers["Content-Type"] = asset.mime_type
    headers["Cache-Control"] = cache_control
    headers["Expires"] = expires
    return headers


def negotiate(
    asset: Asset,
    accept_encoding: str | None,
    *,
    cache_control: str = CACHE_CONTROL,
    expires: str = EXPIRES,
) -> Response:
    """Build the response for *asset* given the client's encodings.

    Clients accepting gzip get the stored payload untouched with
    ``Content-Encoding: gzip``.  Others get the decompressed bytes; a
    payload that fails to decompress yields an empty 500.
    """
    headers = asset_headers(asset, cache_control=cache_control, expires=expires)

    if accepts_gzip(accept_encoding):
        return Response(body=asset.payload).with_headers(headers).with_header(
            "Content-Encoding", "gzip"
        )

    try:
        body = decompress(asset.payload)
    except PayloadError:
        logger.critical(
            "Integrity violation: payload for %s (%s) does not decompress",
            asset.url_path,
            asset.identifier,
            exc_info=True,
        )
        return Response(status=500)

    return Response(body=body).with_headers(headers)
