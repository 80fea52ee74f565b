"""
Application configuration.

Priority: Environment variables > settings.yaml > defaults
"""

import os
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from matchday.scrapers.football_data.constants import (
    BASE_URL,
    CONNECT_TIMEOUT,
    FREE_TIER_CODES,
    MIN_REQUEST_INTERVAL,
    TOTAL_TIMEOUT,
)

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path.home() / '.matchday' / 'settings.yaml'


def _as_float(value: Any, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning(f"Invalid numeric setting {value!r}, using {default}")
        return default


class Config:
    API_KEY = os.getenv('FOOTBALL_DATA_API_KEY', '')
    BASE_URL = os.getenv('FOOTBALL_DATA_BASE_URL', BASE_URL)
    MIN_REQUEST_INTERVAL = _as_float(os.getenv('MIN_REQUEST_INTERVAL', MIN_REQUEST_INTERVAL), MIN_REQUEST_INTERVAL)
    CONNECT_TIMEOUT = _as_float(os.getenv('CONNECT_TIMEOUT', CONNECT_TIMEOUT), CONNECT_TIMEOUT)
    TOTAL_TIMEOUT = _as_float(os.getenv('TOTAL_TIMEOUT', TOTAL_TIMEOUT), TOTAL_TIMEOUT)

    STATE_FILE = os.getenv('MATCHDAY_STATE_FILE', str(Path.home() / '.matchday' / 'state.json'))
    LANGUAGE = os.getenv('MATCHDAY_LANGUAGE', 'zh')

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    JSON_LOGS = os.getenv('JSON_LOGS', 'false').lower() == 'true'
    LOG_DIR = os.getenv('LOG_DIR', str(Path.home() / '.matchday' / 'logs'))

    # (days before today, days after today)
    TEAM_WINDOW = (30, 60)
    COMPETITION_WINDOW = (14, 30)

    FREE_TIER_CODES = FREE_TIER_CODES

    @classmethod
    def load_settings(cls, path: Optional[Path] = None) -> Dict[str, Any]:
        """
        Merge defaults, settings.yaml and environment into one dict.

        Args:
            path: Optional yaml file (default: ~/.matchday/settings.yaml,
                  or MATCHDAY_SETTINGS if set)

        Returns:
            Dict of resolved settings
        """
        settings = {
            'api_key': cls.API_KEY,
            'base_url': cls.BASE_URL,
            'min_request_interval': cls.MIN_REQUEST_INTERVAL,
            'connect_timeout': cls.CONNECT_TIMEOUT,
            'total_timeout': cls.TOTAL_TIMEOUT,
            'state_file': cls.STATE_FILE,
            'language': cls.LANGUAGE,
            'team_window': cls.TEAM_WINDOW,
            'competition_window': cls.COMPETITION_WINDOW,
            'free_tier_codes': cls.FREE_TIER_CODES,
        }

        config_path = path or Path(os.getenv('MATCHDAY_SETTINGS', DEFAULT_SETTINGS_PATH))
        if config_path.exists():
            with open(config_path, 'r', encoding='utf-8') as f:
                file_settings = yaml.safe_load(f) or {}
            if not isinstance(file_settings, dict):
                logger.warning(f"Ignoring {config_path}: expected a mapping, got {type(file_settings).__name__}")
                file_settings = {}
            for key, value in file_settings.items():
                if key not in settings:
                    logger.warning(f"Ignoring unknown setting '{key}' in {config_path}")
                    continue
                # Environment wins over the yaml file
                env_name = _ENV_NAMES.get(key)
                if env_name and os.getenv(env_name) is not None:
                    continue
                settings[key] = value

        settings['team_window'] = tuple(settings['team_window'])
        settings['competition_window'] = tuple(settings['competition_window'])
        settings['free_tier_codes'] = tuple(settings['free_tier_codes'])
        return settings


_ENV_NAMES = {
    'api_key': 'FOOTBALL_DATA_API_KEY',
    'base_url': 'FOOTBALL_DATA_BASE_URL',
    'min_request_interval': 'MIN_REQUEST_INTERVAL',
    'connect_timeout': 'CONNECT_TIMEOUT',
    'total_timeout': 'TOTAL_TIMEOUT',
    'state_file': 'MATCHDAY_STATE_FILE',
    'language': 'MATCHDAY_LANGUAGE',
}
