"""
Utility helpers shared across messagebox packages.
"""

from .logging import configure_logging, get_logger, time_call
from .naming import make_name_generic

__all__ = ["configure_logging", "get_logger", "make_name_generic", "time_call"]
