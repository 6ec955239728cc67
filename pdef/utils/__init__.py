"""
Utility modules for pdef.

This package contains the settings object and the trace channels used by the
front end.
"""

from .settings import Settings, DEFAULT_SETTINGS
from .trace import Diagnostics, TraceChannel, NULL_CHANNEL, configure_logging

__all__ = [
    "Settings",
    "DEFAULT_SETTINGS",
    "Diagnostics",
    "TraceChannel",
    "NULL_CHANNEL",
    "configure_logging",
]
