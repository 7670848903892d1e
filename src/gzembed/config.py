"""Bundler and server configuration.

Both configs are frozen dataclasses: immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

import keyword
from dataclasses import dataclass
from pathlib import Path

from gzembed.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class BundleConfig:
    """Bundling configuration. Immutable after creation.

    Defaults match the ``gzembed build`` flags::

        config = BundleConfig(source_dir="public", root_route="index.html")
    """

    source_dir: str | Path = "."
    output: str | Path = "web_data/__init__.py"
    module_name: str = "web_data"

    # File served for "/" ("" disables the alias)
    root_route: str = "index.html"
    # Fail the build when root_route matches nothing (warn otherwise)
    strict_root: bool = True

    compresslevel: int = 9
    workers: int = 1  # >1 compresses on a thread pool

    def validate(self) -> None:
        """Raise ``ConfigurationError`` if any field is out of range."""
        parts = self.module_name.split(".")
        if not all(p.isidentifier() and not keyword.iskeyword(p) for p in parts):
            msg = f"Invalid module name {self.module_name!r}"
            raise ConfigurationError(msg)
        if not 1 <= self.compresslevel <= 9:
            msg = f"compresslevel must be between 1 and 9, got {self.compresslevel}"
            raise ConfigurationError(msg)
        if self.workers < 1:
            msg = f"workers must be at least 1, got {self.workers}"
            raise ConfigurationError(msg)


@dataclass(frozen=True, slots=True)
class ServeConfig:
    """Dispatcher and dev-server configuration."""

    host: str = "127.0.0.1"
    port: int = 8000

    # Static but changing content: always revalidate
    cache_control: str = "private, max-age=0"
    expires: str = "-1"
