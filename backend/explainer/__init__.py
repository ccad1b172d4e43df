"""
Explainer - turn a topic into a narrated Manim explainer video.
"""

__version__ = "0.1.0"
