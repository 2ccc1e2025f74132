"""Local HTTP API for EchoSave."""

from .server import HTTPServer, create_app

__all__ = ["HTTPServer", "create_app"]
