"""
Paths configuration

Centralized directory paths for the application.
"""

import os
from pathlib import Path

# Base directories
APP_DIR = Path(__file__).parent.parent
BACKEND_DIR = APP_DIR.parent
OUTPUT_DIR = Path(os.getenv("EXPLAINER_OUTPUT_DIR", "./output"))

__all__ = ["APP_DIR", "BACKEND_DIR", "OUTPUT_DIR"]
