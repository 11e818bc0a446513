"""Web interface for gym-registry."""

from .app import create_app

__all__ = ["create_app"]
