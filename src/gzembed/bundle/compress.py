"""gzip encoding of asset payloads."""

import gzip
import zlib

from gzembed.errors import PayloadError

BEST_COMPRESSION = 9


def compress(raw: bytes, level: int = BEST_COMPRESSION) -> bytes:
    """gzip-encode *raw* at *level*.

    ``mtime=0`` keeps the gzip header stable, so an unchanged file always
    produces identical payload bytes.
    """
    return gzip.compress(raw, compresslevel=level, mtime=0)


def decompress(payload: bytes) -> bytes:
    """Decode a gzip payload.

    Raises:
        PayloadError: If *payload* is truncated or not gzip data.
    """
    try:
        return gzip.decompress(payload)
    except (OSError, EOFError, zlib.error) as exc:
        raise PayloadError(f"Corrupt gzip payload: {exc}") from exc
