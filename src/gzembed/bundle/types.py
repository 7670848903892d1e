"""Bundle data model.

An ``Asset`` is one embedded file; a ``Bundle`` is the frozen set of
assets plus the optional ``/`` alias.  Both are immutable once built and
safe to share across concurrent requests without locking.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from gzembed.bundle.routes import ROOT_PATH
from gzembed.errors import ArtifactError, Collision, CollisionError


@dataclass(frozen=True, slots=True)
class Asset:
    """One embedded file.

    ``payload`` is the gzip encoding of the file; ``size`` is the length
    of the original bytes.  ``mime_type`` is ``""`` when unknown.
    """

    relative_path: str
    identifier: str
    url_path: str
    mime_type: str
    payload: bytes = field(repr=False)
    size: int = 0

    @property
    def ratio(self) -> float:
        """Compressed size over raw size (0.0 for empty files)."""
        if not self.size:
            return 0.0
        return len(self.payload) / self.size


def find_collisions(assets: Iterable[Asset]) -> tuple[Collision, ...]:
    """Report every identifier or URL path shared by more than one asset."""
    by_identifier: dict[str, list[str]] = {}
    by_url: dict[str, list[str]] = {}
    for asset in assets:
        by_identifier.setdefault(asset.identifier, []).append(asset.relative_path)
        by_url.setdefault(asset.url_path, []).append(asset.relative_path)

    collisions = [
        Collision("identifier", key, tuple(sorted(paths)))
        for key, paths in sorted(by_identifier.items())
        if len(paths) > 1
    ]
    collisions.extend(
        Collision("url", key, tuple(sorted(paths)))
        for key, paths in sorted(by_url.items())
        if len(paths) > 1
    )
    return tuple(collisions)


@dataclass(frozen=True, slots=True)
class Bundle:
    """The immutable set of embedded assets.

    ``root`` names (by identifier) the asset that is also served at
    ``/``.  The route table is computed once at construction::

        bundle = Bundle.from_assets(assets, root="index")
        bundle.get("/")          # same Asset as bundle.get("/index.html")
        bundle.get("/missing")   # None
    """

    assets: tuple[Asset, ...] = ()
    root: str | None = None
    _routes: Mapping[str, Asset] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        collisions = find_collisions(self.assets)
        if collisions:
            raise CollisionError(collisions)

        routes: dict[str, Asset] = {asset.url_path: asset for asset in self.assets}
        if ROOT_PATH in routes:
            raise CollisionError(
                (Collision("url", ROOT_PATH, (routes[ROOT_PATH].relative_path,)),)
            )
        if self.root is not None:
            alias = next((a for a in self.assets if a.identifier == self.root), None)
            if alias is None:
                msg = f"Root asset {self.root!r} is not part of the bundle"
                raise ArtifactError(msg)
            routes[ROOT_PATH] = alias

        object.__setattr__(self, "_routes", MappingProxyType(routes))

    @classmethod
    def from_assets(cls, assets: Iterable[Asset], *, root: str | None = None) -> Bundle:
        """Build a bundle with assets sorted by relative path."""
        ordered = tuple(sorted(assets, key=lambda a: a.relative_path))
        return cls(assets=ordered, root=root)

    @property
    def routes(self) -> Mapping[str, Asset]:
        """Read-only URL path -> Asset table, including the ``/`` alias."""
        return self._routes

    @property
    def root_asset(self) -> Asset | None:
        """The asset served at ``/``, if any."""
        return self._routes.get(ROOT_PATH) if self.root is not None else None

    def get(self, path: str) -> Asset | None:
        """Exact-match lookup of a request path."""
        return self._routes.get(path)

    def __contains__(self, path: object) -> bool:
        return path in self._routes

    def __iter__(self) -> Iterator[Asset]:
        return iter(self.assets)

    def __len__(self) -> int:
        return len(self.assets)
