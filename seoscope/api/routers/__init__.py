"""API router factory functions."""
from .seo import create_seo_router
from .systems import create_systems_router

__all__ = [
    "create_seo_router",
    "create_systems_router",
]
