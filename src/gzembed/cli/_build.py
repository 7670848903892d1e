"""``gzembed build`` and ``gzembed check`` — bundle a source directory.

Both commands run the same assembly pass; ``build`` also writes the
generated module.  Any build error prints a message and exits with 1
before anything is written.
"""

import argparse
import sys

from gzembed.artifact.writer import write_module
from gzembed.bundle.assemble import BuildResult, assemble
from gzembed.config import BundleConfig
from gzembed.errors import GzembedError


def _config_from_args(args: argparse.Namespace) -> BundleConfig:
    overrides: dict[str, object] = {}
    # Only `build` has output options
    if hasattr(args, "dst"):
        overrides["output"] = args.dst
        overrides["module_name"] = args.pkg_name
        overrides["workers"] = args.workers
    return BundleConfig(
        source_dir=args.src,
        root_route=args.root_route,
        strict_root=args.strict_root,
        **overrides,  # type: ignore[arg-type]
    )


def _assemble_or_exit(config: BundleConfig) -> BuildResult:
    try:
        result = assemble(config)
    except GzembedError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if not result:
        print(f"Error: {len(result.collisions)} collision(s) found:", file=sys.stderr)
        for collision in result.collisions:
            print(f"  {collision}", file=sys.stderr)
        raise SystemExit(1)
    return result


def format_summary(result: BuildResult) -> str:
    """Human-readable table of bundled assets."""
    bundle = result.bundle
    assert bundle is not None
    lines = []
    root_asset = bundle.root_asset
    for asset in bundle:
        alias = "  (/)" if asset is root_asset else ""
        lines.append(
            f"  {asset.url_path}  {asset.identifier}  "
            f"{asset.size} -> {len(asset.payload)} bytes ({asset.ratio:.0%})  "
            f"{asset.mime_type or '-'}{alias}"
        )
    raw_total = sum(a.size for a in bundle)
    packed_total = sum(len(a.payload) for a in bundle)
    lines.append(f"{len(bundle)} asset(s), {raw_total} -> {packed_total} bytes.")
    return "\n".join(lines)


def run_build(args: argparse.Namespace) -> None:
    """Assemble ``args.src`` and write the generated module to ``args.dst``."""
    config = _config_from_args(args)
    result = _assemble_or_exit(config)
    assert result.bundle is not None
    try:
        path = write_module(result.bundle, config.output, module_name=config.module_name)
    except OSError as exc:
        print(f"Error: cannot write {config.output}: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    print(f"Wrote {len(result.bundle)} asset(s) to {path}")


def run_check(args: argparse.Namespace) -> None:
    """Assemble ``args.src`` in memory and print the asset table."""
    result = _assemble_or_exit(_config_from_args(args))
    print(format_summary(result))
