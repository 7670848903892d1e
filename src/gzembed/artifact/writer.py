"""Artifact writer — renders a bundle as an importable Python module.

The generated module embeds each gzip payload as a ``bytes`` constant
(16 bytes per source line), rebuilds the ``Bundle`` from those constants
at import time and exposes an ASGI ``app``, so it can be served with no
access to the original source tree::

    uvicorn web_data:app

Rendering goes through a kida template; the file is written to a
temporary sibling and renamed into place so a failed build never leaves
a half-written module behind.
"""

import keyword
import logging
import os
import stat
import tempfile
from dataclasses import dataclass
from pathlib import Path

from kida import Environment

from gzembed.bundle.types import Bundle

logger = logging.getLogger("gzembed.bundle")

BYTES_PER_LINE = 16

# Names the generated module defines itself
_RESERVED_NAMES = frozenset({"app"})

MODULE_TEMPLATE = '''\
"""Embedded static assets for {{ module_name }}.

Generated by gzembed from {{ asset_count }} file(s). Do not edit.
"""

from gzembed.bundle.types import Asset, Bundle
from gzembed.dispatch.dispatcher import Dispatcher

__all__ = ["BUNDLE", "app"]

{% for entry in entries %}
{{ entry.constant }} = (
{{ entry.payload }}
)

{% end %}
BUNDLE = Bundle.from_assets(
    (
{% for entry in entries %}
        Asset(
            relative_path={{ entry.relative_path }},
            identifier={{ entry.identifier }},
            url_path={{ entry.url_path }},
            mime_type={{ entry.mime_type }},
            payload={{ entry.constant }},
            size={{ entry.size }},
        ),
{% end %}
    ),
    root={{ root }},
)

app = Dispatcher(BUNDLE)
'''


def constant_name(identifier: str) -> str:
    """Python name for an asset's payload constant.

    Identifiers that are not valid names, are keywords, or clash with
    ``app`` get a leading underscore.  Identifiers never contain ``_``,
    so the prefixed name cannot clash with another asset.
    """
    if (
        identifier.isidentifier()
        and not keyword.iskeyword(identifier)
        and identifier not in _RESERVED_NAMES
    ):
        return identifier
    return "_" + identifier


def bytes_literal(data: bytes, *, indent: str = "    ") -> str:
    """Format *data* as implicitly concatenated ``b"..."`` lines."""
    lines = []
    for start in range(0, len(data), BYTES_PER_LINE):
        chunk = data[start : start + BYTES_PER_LINE]
        escaped = "".join(f"\\x{byte:02x}" for byte in chunk)
        lines.append(f'{indent}b"{escaped}"')
    return "\n".join(lines) or f'{indent}b""'


@dataclass(frozen=True, slots=True)
class _Entry:
    """One asset, pre-formatted as Python literals for the template."""

    constant: str
    payload: str
    relative_path: str
    identifier: str
    url_path: str
    mime_type: str
    size: int


def _environment() -> Environment:
    # Output is Python source, not HTML
    return Environment(autoescape=False, trim_blocks=True, lstrip_blocks=True)


def render_module(bundle: Bundle, *, module_name: str) -> str:
    """Render *bundle* as Python source text."""
    entries = [
        _Entry(
            constant=constant_name(asset.identifier),
            payload=bytes_literal(asset.payload),
            relative_path=repr(asset.relative_path),
            identifier=repr(asset.identifier),
            url_path=repr(asset.url_path),
            mime_type=repr(asset.mime_type),
            size=asset.size,
        )
        for asset in bundle
    ]
    template = _environment().from_string(MODULE_TEMPLATE)
    return template.render({
        "module_name": module_name,
        "asset_count": len(entries),
        "entries": entries,
        "root": repr(bundle.root),
    })


def _file_mode(target: Path) -> int:
    """Mode for the written artifact: the existing file's, else 0o666 minus umask."""
    try:
        return stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        pass
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_module(bundle: Bundle, destination: str | Path, *, module_name: str) -> Path:
    """Render *bundle* and atomically write it to *destination*.

    Parent directories are created as needed.  Returns the final path.
    """
    target = Path(destination)
    target.parent.mkdir(parents=True, exist_ok=True)
    source = render_module(bundle, module_name=module_name)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(source)
        # mkstemp creates 0o600; match what a plain open() would give
        os.chmod(tmp_name, _file_mode(target))
        os.replace(tmp_name, target)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.info("Wrote %s (%d asset(s), %d bytes)", target, len(bundle), len(source))
    return target
