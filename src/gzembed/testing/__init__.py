"""Testing helpers for gzembed dispatchers."""

from gzembed.testing.client import TestClient

__all__ = ["TestClient"]
