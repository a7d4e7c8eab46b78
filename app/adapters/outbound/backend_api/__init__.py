"""Backend REST API outbound adapter."""

from app.adapters.outbound.backend_api.backend_api_client import BackendApiClient

__all__ = [
    "BackendApiClient",
]
