"""
API routers for the addon host.
"""

from .addons import router as addons_router

__all__ = ["addons_router"]
