"""gzembed CLI — build, check and serve embedded asset bundles.

Entry point registered as ``gzembed`` in ``pyproject.toml``::

    [project.scripts]
    gzembed = "gzembed.cli:main"
"""

import argparse
import logging
import sys


def _configure_logging(args: argparse.Namespace) -> None:
    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``gzembed`` command."""
    parser = argparse.ArgumentParser(
        prog="gzembed",
        description="Embed static files as gzip payloads and serve them.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every asset")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors")
    subparsers = parser.add_subparsers(dest="command")

    # -- gzembed build ----------------------------------------------------
    build_parser = subparsers.add_parser("build", help="Bundle a directory into a Python module")
    build_parser.add_argument("--src", default=".", help="Folder with sources to embed")
    build_parser.add_argument(
        "--dst",
        default="web_data/__init__.py",
        help="Path of the generated module",
    )
    build_parser.add_argument(
        "--pkg-name",
        default="web_data",
        help="Name of the generated module",
    )
    _add_root_arguments(build_parser)
    build_parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Compress on this many threads",
    )

    # -- gzembed check ----------------------------------------------------
    check_parser = subparsers.add_parser("check", help="Validate a directory without writing")
    check_parser.add_argument("--src", default=".", help="Folder with sources to embed")
    _add_root_arguments(check_parser)

    # -- gzembed serve ----------------------------------------------------
    serve_parser = subparsers.add_parser("serve", help="Serve a generated bundle")
    serve_parser.add_argument(
        "target",
        help="Generated module path or import string (e.g. web_data)",
    )
    serve_parser.add_argument("--host", default=None, help="Bind host address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port number")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    _configure_logging(args)

    if args.command == "build":
        from gzembed.cli._build import run_build

        run_build(args)
    elif args.command == "check":
        from gzembed.cli._build import run_check

        run_check(args)
    elif args.command == "serve":
        from gzembed.cli._serve import run_serve

        run_serve(args)


def _add_root_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--root-route",
        default="index.html",
        help="File served for / requests ('' disables)",
    )
    parser.add_argument(
        "--no-strict-root",
        dest="strict_root",
        action="store_false",
        help="Warn instead of failing when the root route matches no file",
    )
