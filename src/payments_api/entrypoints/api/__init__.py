"""HTTP API (FastAPI)."""

from payments_api.entrypoints.api.app import create_app

__all__ = ["create_app"]
