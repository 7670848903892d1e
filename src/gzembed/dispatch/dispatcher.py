"""Request dispatcher — serves a frozen Bundle over ASGI.

Each request runs through three states: ``Lookup`` (exact match of the
path against the bundle's route table), then ``Serve`` on a hit or
``NotFound`` on a miss.  The bundle is the only shared state and is
never mutated, so requests run concurrently without locking.

Usage::

    from gzembed import Dispatcher, load_bundle

    app = Dispatcher(load_bundle("web_data"))   # any ASGI server
"""

import logging

from anyio import to_thread

from gzembed._internal.asgi import Receive, Scope, Send
from gzembed.bundle.types import Asset, Bundle
from gzembed.config import ServeConfig
from gzembed.dispatch.negotiation import CACHE_CONTROL, EXPIRES, accepts_gzip, negotiate
from gzembed.dispatch.sender import send_response
from gzembed.http.request import Request
from gzembed.http.response import Response

logger = logging.getLogger("gzembed.server")

# Decompress assets at least this large in a worker thread
OFFLOAD_THRESHOLD = 64 * 1024


class Dispatcher:
    """ASGI application serving the assets of one ``Bundle``."""

    __slots__ = ("_bundle", "_cache_control", "_expires", "_offload_threshold")

    def __init__(
        self,
        bundle: Bundle,
        *,
        cache_control: str = CACHE_CONTROL,
        expires: str = EXPIRES,
        offload_threshold: int = OFFLOAD_THRESHOLD,
    ) -> None:
        self._bundle = bundle
        self._cache_control = cache_control
        self._expires = expires
        self._offload_threshold = offload_threshold

    @classmethod
    def from_config(cls, bundle: Bundle, config: ServeConfig) -> "Dispatcher":
        """Create a dispatcher using the header values from *config*."""
        return cls(bundle, cache_control=config.cache_control, expires=config.expires)

    @property
    def bundle(self) -> Bundle:
        return self._bundle

    # -- States --

    def lookup(self, path: str) -> Asset | None:
        """Exact-match lookup; no prefix, wildcard or normalization."""
        return self._bundle.get(path)

    def serve(self, asset: Asset, accept_encoding: str | None) -> Response:
        """Negotiate the response for a matched asset."""
        return negotiate(
            asset,
            accept_encoding,
            cache_control=self._cache_control,
            expires=self._expires,
        )

    def not_found(self, request: Request) -> Response:
        logger.debug("No asset for %s %s", request.method, request.path)
        return Response(status=404)

    def dispatch(self, request: Request) -> Response:
        """Produce the response for *request* synchronously."""
        asset = self.lookup(request.path)
        if asset is None:
            return self.not_found(request)
        return self.serve(asset, request.accept_encoding)

    async def handle(self, request: Request) -> Response:
        """Like ``dispatch``, but decompresses large assets off the event loop."""
        asset = self.lookup(request.path)
        if asset is None:
            return self.not_found(request)

        accept_encoding = request.accept_encoding
        if asset.size >= self._offload_threshold and not accepts_gzip(accept_encoding):
            return await to_thread.run_sync(self.serve, asset, accept_encoding)
        return self.serve(asset, accept_encoding)

    # -- ASGI --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await self._lifespan(receive, send)
            return
        if scope["type"] != "http":
            return

        request = Request.from_asgi(scope)
        try:
            response = await self.handle(request)
        except Exception:
            logger.exception("Unhandled error serving %s", request.path)
            response = Response(status=500)
        await send_response(response, send, head=request.is_head)

    async def _lifespan(self, receive: Receive, send: Send) -> None:
        """Acknowledge startup and shutdown; the bundle needs no setup."""
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                logger.info("Serving %d asset(s)", len(self._bundle))
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
