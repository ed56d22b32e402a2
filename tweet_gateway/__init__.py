"""Tweet lookup and sentiment gateway."""

from .gateway import Gateway, GatewayResponse

__all__ = ["Gateway", "GatewayResponse"]
