"""Bundle assembly — one pass over the source tree.

Walks the source directory, then for every file derives its identifier,
URL route and MIME type, and gzip-compresses its bytes.  Collisions are
collected into a report instead of overwriting each other, so a lossy
identifier mapping can never silently drop a file.

Usage::

    result = assemble(BundleConfig(source_dir="public"))
    if not result:
        for collision in result.collisions:
            print(collision)

    bundle = build_bundle(config)  # raises CollisionError instead
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

from gzembed.bundle.compress import compress
from gzembed.bundle.identifiers import derive_identifier
from gzembed.bundle.mime import guess_mime_type
from gzembed.bundle.routes import build_route, normalize_root_route
from gzembed.bundle.types import Asset, Bundle, find_collisions
from gzembed.bundle.walk import read_source, walk
from gzembed.config import BundleConfig
from gzembed.errors import Collision, CollisionError, RootRouteError

logger = logging.getLogger("gzembed.bundle")


@dataclass(frozen=True, slots=True)
class BuildResult:
    """The outcome of assembling a source tree.

    Exactly one of ``bundle`` and ``collisions`` is meaningful: a
    successful build carries the bundle and no collisions, a failed one
    carries no bundle.  The result is falsy on failure::

        result = assemble(config)
        if not result:
            raise CollisionError(result.collisions)
    """

    bundle: Bundle | None
    collisions: tuple[Collision, ...] = ()

    @property
    def ok(self) -> bool:
        """True if the build produced a bundle."""
        return self.bundle is not None and not self.collisions

    def __bool__(self) -> bool:
        return self.ok


def _make_asset(source_root: Path, relative_path: str, level: int) -> Asset:
    """Read and compress one file."""
    identifier = derive_identifier(relative_path)
    raw = read_source(source_root, relative_path)
    url_path, _ = build_route(relative_path, None)
    asset = Asset(
        relative_path=relative_path,
        identifier=identifier,
        url_path=url_path,
        mime_type=guess_mime_type(relative_path),
        payload=compress(raw, level),
        size=len(raw),
    )
    logger.debug(
        "Bundled %s as %s (%d -> %d bytes)",
        relative_path,
        identifier,
        asset.size,
        len(asset.payload),
    )
    return asset


def assemble(config: BundleConfig) -> BuildResult:
    """Bundle every file under ``config.source_dir``.

    Returns a failed ``BuildResult`` on identifier or URL collisions.
    Other fatal conditions raise:

    Raises:
        ConfigurationError: If *config* is invalid.
        SourceReadError: On any I/O failure while walking or reading.
        IdentifierError: If a path yields an empty identifier.
        RootRouteError: If ``strict_root`` is set and the root route
            matches none of the (non-empty) source files.
    """
    config.validate()
    source_root = Path(config.source_dir)
    paths = walk(source_root)

    if config.workers > 1 and len(paths) > 1:
        with ThreadPoolExecutor(max_workers=config.workers) as pool:
            assets = list(
                pool.map(lambda p: _make_asset(source_root, p, config.compresslevel), paths)
            )
    else:
        assets = [_make_asset(source_root, p, config.compresslevel) for p in paths]

    collisions = find_collisions(assets)
    if collisions:
        for collision in collisions:
            logger.error("Collision: %s", collision)
        return BuildResult(bundle=None, collisions=collisions)

    root = _resolve_root(assets, config)
    bundle = Bundle.from_assets(assets, root=root)

    raw_total = sum(a.size for a in bundle)
    packed_total = sum(len(a.payload) for a in bundle)
    logger.info(
        "Bundled %d file(s) from %s: %d -> %d bytes",
        len(bundle),
        source_root,
        raw_total,
        packed_total,
    )
    return BuildResult(bundle=bundle)


def _resolve_root(assets: list[Asset], config: BundleConfig) -> str | None:
    """Find the identifier of the asset aliased at ``/``."""
    if normalize_root_route(config.root_route) is None:
        return None

    for asset in assets:
        _, is_root = build_route(asset.relative_path, config.root_route)
        if is_root:
            return asset.identifier

    if assets and config.strict_root:
        raise RootRouteError(config.root_route)
    logger.warning(
        "Root route %r matches no file in %s; '/' will return 404",
        config.root_route,
        config.source_dir,
    )
    return None


def build_bundle(config: BundleConfig) -> Bundle:
    """Assemble a bundle, raising on any failure.

    Raises:
        CollisionError: If identifiers or URL paths collide.
        BuildError: For every other fatal condition (see ``assemble``).
    """
    result = assemble(config)
    if not result:
        raise CollisionError(result.collisions)
    assert result.bundle is not None
    return result.bundle
