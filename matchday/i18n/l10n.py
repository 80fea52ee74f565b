"""
Language lookup for presentation code.

Core modules (client, store, schedule merging) never consult this;
only rendering code takes an L10n instance.
"""

import logging
from datetime import datetime, tzinfo
from enum import Enum
from typing import Optional

from matchday.i18n.strings import (
    DATE_LABEL_FORMATS,
    MONTHS_SHORT,
    STRINGS,
    WEEKDAYS_LONG,
    WEEKDAYS_SHORT,
)
from matchday.models import PlayerPosition, StandingGroup
from matchday.scrapers.football_data.errors import DecodingError, FootballDataError

logger = logging.getLogger(__name__)

FALLBACK_LANGUAGE = 'en'


class AppLanguage(str, Enum):
    CHINESE = "zh"
    ENGLISH = "en"

    @property
    def display_name(self) -> str:
        return "中文" if self is AppLanguage.CHINESE else "English"

    @classmethod
    def parse(cls, value: Optional[str]) -> 'AppLanguage':
        for language in cls:
            if language.value == (value or '').lower():
                return language
        return cls.CHINESE


_STATUS_KEYS = {
    "FINISHED": 'match_finished',
    "IN_PLAY": 'match_in_play',
    "PAUSED": 'match_paused',
    "EXTRA_TIME": 'match_extra_time',
    "PENALTY_SHOOTOUT": 'match_penalty_shootout',
    "SCHEDULED": 'match_scheduled',
    "TIMED": 'match_scheduled',
    "POSTPONED": 'match_postponed',
    "CANCELLED": 'match_cancelled',
    "SUSPENDED": 'match_suspended',
}

_POSITION_KEYS = {
    PlayerPosition.GOALKEEPER: 'pos_goalkeeper',
    PlayerPosition.DEFENCE: 'pos_defence',
    PlayerPosition.MIDFIELD: 'pos_midfield',
    PlayerPosition.OFFENCE: 'pos_forward',
}

_STANDING_TYPE_KEYS = {
    "TOTAL": 'standing_total',
    "HOME": 'standing_home',
    "AWAY": 'standing_away',
}


class L10n:
    """String lookup bound to one language."""

    def __init__(self, language: AppLanguage = AppLanguage.CHINESE):
        self.language = AppLanguage.parse(language.value if isinstance(language, AppLanguage) else language)
        self._table = STRINGS[self.language.value]

    def text(self, key: str, **kwargs) -> str:
        template = self._table.get(key)
        if template is None:
            template = STRINGS[FALLBACK_LANGUAGE].get(key)
        if template is None:
            logger.debug(f"Missing string '{key}'")
            return key
        return template.format(**kwargs) if kwargs else template

    def status_label(self, status: str) -> str:
        """Localized status; unrecognized statuses are returned verbatim."""
        key = _STATUS_KEYS.get(status)
        return self.text(key) if key else status

    def position_label(self, position: Optional[str]) -> str:
        key = _POSITION_KEYS.get(PlayerPosition.parse(position))
        if key:
            return self.text(key)
        return position or self.text('pos_unknown')

    def standing_group_name(self, group: StandingGroup) -> str:
        if group.group:
            return group.group.replace("GROUP_", self.text('standing_group_prefix'))
        key = _STANDING_TYPE_KEYS.get(group.type or "")
        return self.text(key) if key else (group.type or "")

    def date_label(self, moment: Optional[datetime], tz: Optional[tzinfo] = None) -> str:
        """Calendar-day label such as 'Sat, Aug 17' in tz (default: local)."""
        if moment is None:
            return ""
        local = moment.astimezone(tz)
        lang = self.language.value
        return DATE_LABEL_FORMATS[lang].format(
            weekday_short=WEEKDAYS_SHORT[lang][local.weekday()],
            weekday_long=WEEKDAYS_LONG[lang][local.weekday()],
            month_short=MONTHS_SHORT[lang][local.month - 1],
            month=local.month,
            day=local.day,
        )

    def team_fallback(self, team_id: int) -> str:
        return self.text('team_fallback', id=team_id)

    def competition_fallback(self, competition_id: int) -> str:
        return self.text('competition_fallback', id=competition_id)

    def describe_error(self, error: BaseException) -> str:
        """Short user-facing message for an error."""
        if isinstance(error, DecodingError):
            return self.text('error_decoding', detail=error.detail)
        if isinstance(error, FootballDataError):
            if error.message_key == 'error_server':
                return self.text('error_server', code=error.status_code)
            if error.message_key == 'error_unknown':
                return self.text('error_unknown', detail=str(error))
            return self.text(error.message_key)
        return self.text('error_unknown', detail=str(error))
