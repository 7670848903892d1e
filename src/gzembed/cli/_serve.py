"""``gzembed serve`` — serve a generated bundle with pounce."""

import argparse
import sys

from gzembed.artifact.loader import load_bundle
from gzembed.config import ServeConfig
from gzembed.dispatch.dispatcher import Dispatcher
from gzembed.errors import ArtifactError


def run_serve(args: argparse.Namespace) -> None:
    """Load ``args.target`` and serve it until interrupted."""
    try:
        bundle = load_bundle(args.target)
    except ArtifactError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    defaults = ServeConfig()
    config = ServeConfig(
        host=defaults.host if args.host is None else args.host,
        port=defaults.port if args.port is None else args.port,
    )

    from gzembed.server.dev import run_server

    run_server(Dispatcher.from_config(bundle, config), config.host, config.port)
