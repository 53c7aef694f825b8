"""
Shared building blocks for the three services.

Each service owns its own store and settings; only plumbing lives here.
"""

from .database import Database
from .errors import register_exception_handlers
from .logging_config import configure_logging

__all__ = ["Database", "register_exception_handlers", "configure_logging"]
