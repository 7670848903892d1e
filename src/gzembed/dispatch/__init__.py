"""Request-time serving of a frozen bundle."""

from gzembed.dispatch.dispatcher import Dispatcher
from gzembed.dispatch.negotiation import accepts_gzip, negotiate

__all__ = ["Dispatcher", "accepts_gzip", "negotiate"]
