"""
API-level response models shared by the routers.
"""

from .errors import ErrorResponse, GUARDED_ROUTE_RESPONSES

__all__ = ["ErrorResponse", "GUARDED_ROUTE_RESPONSES"]
