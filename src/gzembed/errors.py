"""gzembed exception hierarchy.

Build-time failures derive from ``BuildError`` and abort bundling
entirely; no partial artifact is ever written.  ``PayloadError`` is the
only error that can surface while serving, and the dispatcher turns it
into a 500 instead of letting it escape.
"""

from dataclasses import dataclass


class GzembedError(Exception):
    """Base for all gzembed-specific errors."""


class ConfigurationError(GzembedError):
    """Raised when bundle or server configuration is invalid."""


class BuildError(GzembedError):
    """Base for fatal bundling errors."""


class SourceReadError(BuildError):
    """An I/O failure while walking or reading the source tree."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read {path!r}: {reason}")


class IdentifierError(BuildError):
    """A relative path normalizes to an empty identifier."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(
            f"Cannot derive an identifier from {path!r}: "
            "the path contains no ASCII letters or digits"
        )


@dataclass(frozen=True, slots=True)
class Collision:
    """Two or more source files that map to the same key.

    ``kind`` is ``"identifier"`` or ``"url"``; ``key`` is the shared
    identifier or URL path; ``paths`` lists every colliding relative path.
    """

    kind: str
    key: str
    paths: tuple[str, ...]

    def __str__(self) -> str:
        joined = ", ".join(repr(p) for p in self.paths)
        return f"{self.kind} {self.key!r} is shared by {joined}"


class CollisionError(BuildError):
    """Identifier or URL-path collisions were found while bundling."""

    def __init__(self, collisions: tuple[Collision, ...]) -> None:
        self.collisions = collisions
        lines = [f"{len(collisions)} collision(s) found:"]
        lines.extend(f"  {c}" for c in collisions)
        super().__init__("\n".join(lines))


class RootRouteError(BuildError):
    """The configured root route matches no file in the source tree."""

    def __init__(self, root_route: str) -> None:
        self.root_route = root_route
        super().__init__(
            f"Root route {root_route!r} does not match any file; "
            "'/' would be unreachable"
        )


class ArtifactError(GzembedError):
    """A generated artifact could not be loaded or is malformed."""


class PayloadError(GzembedError):
    """A stored payload is not a valid gzip stream.

    Only reachable when an artifact has been corrupted after build.
    """
