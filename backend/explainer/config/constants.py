"""
Constants configuration

API settings and CORS configuration.
"""

# API settings
API_TITLE = "Explainer API"
API_DESCRIPTION = "Generate narrated Manim explainer videos from a topic"
API_VERSION = "0.1.0"

# CORS origins
CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
]

__all__ = [
    "API_TITLE",
    "API_DESCRIPTION",
    "API_VERSION",
    "CORS_ORIGINS",
]
