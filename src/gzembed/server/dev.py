"""Serve a dispatcher with the pounce ASGI server.

Single worker, no reload: a bundle is frozen, so there is nothing to
watch.  Production deployments can point any ASGI server at the
generated module's ``app`` instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gzembed.dispatch.dispatcher import Dispatcher


def run_server(app: Dispatcher, host: str, port: int) -> None:
    """Start pounce with *app* and block until it exits.

    Args:
        app: The ASGI dispatcher to serve.
        host: Bind host address.
        port: Bind port number.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(host=host, port=port, workers=1, reload=False)
    server = Server(config, app)
    server.run()
