"""URL routes for bundled files."""

ROOT_PATH = "/"


def normalize_root_route(root_route: str | None) -> str | None:
    """Turn a configured root route into the URL path it designates.

    ``"index.html"`` and ``"/index.html"`` are equivalent.  An empty or
    missing value disables the ``/`` alias and yields ``None``.
    """
    if not root_route:
        return None
    stripped = root_route.strip().lstrip("/")
    if not stripped:
        return None
    return "/" + stripped


def build_route(relative_path: str, root_route: str | None) -> tuple[str, bool]:
    """Return ``(url_path, is_root_alias)`` for a bundled file."""
    url_path = "/" + relative_path
    return url_path, url_path == normalize_root_route(root_route)
