"""Identifier derivation from relative file paths.

``css/app.css`` becomes ``cssAppCss``: every run of characters outside
``[A-Za-z0-9]`` is a word boundary, each word gets its first character
upper-cased, the words are joined and the first character lower-cased.

The mapping is lossy (``a-b.txt`` and ``a_b.txt`` both give ``aBTxt``),
so callers must check the results for collisions.
"""

import re

from gzembed.errors import IdentifierError

_SEPARATOR_RE = re.compile(r"[^A-Za-z0-9]+")


def derive_identifier(relative_path: str) -> str:
    """Return the camelCase identifier for *relative_path*.

    Raises:
        IdentifierError: If the path contains no ASCII letters or digits.
    """
    words = [w for w in _SEPARATOR_RE.split(relative_path) if w]
    if not words:
        raise IdentifierError(relative_path)
    # Only the first character of each word changes; the rest keep their case
    joined = "".join(w[0].upper() + w[1:] for w in words)
    return joined[0].lower() + joined[1:]
