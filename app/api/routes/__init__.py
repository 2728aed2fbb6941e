"""
API routes package initialization.

This package contains all API route modules organized by functionality.
"""

from . import auth, health

__all__ = [
    "auth",
    "health",
]
