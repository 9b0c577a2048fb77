"""HTTP surface."""

from .app import create_app
from .routes import resolver_bp

__all__ = ["create_app", "resolver_bp"]
