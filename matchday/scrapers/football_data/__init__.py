"""
football-data.org client module.
"""

from .client import FootballDataClient
from .constants import COMPETITION_NAMES, FREE_TIER_CODES
from .errors import (
    DecodingError,
    FootballDataError,
    InvalidResponse,
    NotFound,
    RateLimited,
    ServerError,
    Unauthorized,
)

__all__ = [
    'FootballDataClient',
    'COMPETITION_NAMES',
    'FREE_TIER_CODES',
    'FootballDataError',
    'InvalidResponse',
    'RateLimited',
    'Unauthorized',
    'NotFound',
    'ServerError',
    'DecodingError',
]
