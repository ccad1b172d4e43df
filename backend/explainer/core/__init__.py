"""
Core Module - Cross-cutting concerns and shared infrastructure

Organization:
    - logging.py: Structured logging configuration and utilities
    - exceptions.py: Classified error taxonomy
    - media.py: Media duration probing
    - runtime.py: External tool availability checks

Usage:
    from explainer.core import get_logger, PlanningFailed
"""

# Logging
from .logging import (
    setup_logging,
    setup_logging_from_env,
    get_logger,
    set_request_id,
    set_job_id,
    set_stage,
    clear_context,
    LogTimer,
)

# Errors
from .exceptions import (
    ExplainerError,
    InvalidInput,
    PipelineError,
    PlanningFailed,
    NarrationFailed,
    GenerationExhausted,
    MergeFailed,
    InfrastructureError,
    AdapterFault,
    AdapterTimeout,
)

# Media utilities
from .media import get_media_duration

# Runtime guards
from .runtime import (
    REQUIRED_RENDER_TOOLS,
    parse_bool_env,
    missing_runtime_tools,
    runtime_tool_report,
)

__all__ = [
    # Logging
    "setup_logging",
    "setup_logging_from_env",
    "get_logger",
    "set_request_id",
    "set_job_id",
    "set_stage",
    "clear_context",
    "LogTimer",
    # Errors
    "ExplainerError",
    "InvalidInput",
    "PipelineError",
    "PlanningFailed",
    "NarrationFailed",
    "GenerationExhausted",
    "MergeFailed",
    "InfrastructureError",
    "AdapterFault",
    "AdapterTimeout",
    # Media
    "get_media_duration",
    # Runtime guards
    "REQUIRED_RENDER_TOOLS",
    "parse_bool_env",
    "missing_runtime_tools",
    "runtime_tool_report",
]
