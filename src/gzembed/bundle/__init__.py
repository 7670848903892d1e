"""Build-time bundling: walk, derive, compress, assemble."""

from gzembed.bundle.assemble import BuildResult, assemble, build_bundle
from gzembed.bundle.types import Asset, Bundle

__all__ = ["Asset", "BuildResult", "Bundle", "assemble", "build_bundle"]
