"""Payment gateway API package."""

from payments.api.routes import gateway_router

__all__ = ["gateway_router"]
