"""
iPurpose API package.

Provides the FastAPI application that gates the iPurpose member routes.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
