"""
Routes module - contains all API route handlers
"""

from .jobs import router as jobs_router

__all__ = ["jobs_router"]
