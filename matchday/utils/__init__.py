"""
Utility modules for Matchday.

Includes:
- api_tracker: per-process API usage counters
- logging_config: console/JSON logging setup
- validators: payload decoding helpers
"""

from .api_tracker import APITracker
from .logging_config import (
    setup_logging,
    get_logger,
    APIRequestLogger,
    LogContext,
    SecretFilter
)
from .validators import (
    ValidationError,
    TypeValidationError,
    TypeValidator,
    RequiredValidator,
    ensure_mapping,
    read_field,
    read_object,
    read_list
)

__all__ = [
    # API Tracker
    'APITracker',

    # Logging
    'setup_logging',
    'get_logger',
    'APIRequestLogger',
    'LogContext',
    'SecretFilter',

    # Validators
    'ValidationError',
    'TypeValidationError',
    'TypeValidator',
    'RequiredValidator',
    'ensure_mapping',
    'read_field',
    'read_object',
    'read_list',
]
