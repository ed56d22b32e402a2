"""Gateway package."""

from .endpoints import Gateway, GatewayResponse
from .normalizer import Classification, classify, is_error_payload

__all__ = ["Classification", "Gateway", "GatewayResponse", "classify", "is_error_payload"]
