"""Utility functions."""

from pharmagen.utils.logging_config import NarrativeLogger, get_logger, reset_logger

__all__ = [
    'NarrativeLogger',
    'get_logger',
    'reset_logger',
]
