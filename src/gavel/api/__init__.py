"""HTTP/JSON boundary: FastAPI app translating ServiceResults to responses."""

from gavel.api.app import create_app

__all__ = ["create_app"]
