"""
API v1 package.

Contains versioned API routes for the user list and registration form.
"""

from src.api.v1.routes import router

__all__ = ["router"]
