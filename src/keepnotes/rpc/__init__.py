"""JSON RPC façade mirroring the ``keepapi`` services."""

from .messages import StatusCode
from .router import METHODS, router

__all__ = ["router", "METHODS", "StatusCode"]
