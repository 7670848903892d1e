"""Bundle serialization: write generated modules and load them back."""

from gzembed.artifact.loader import load_bundle
from gzembed.artifact.writer import render_module, write_module

__all__ = ["load_bundle", "render_module", "write_module"]
