"""
Match records and status classification.

Statuses are kept as the raw API string so that values this module does
not know about still reach the display layer verbatim. Classification
treats any such value as neither finished, live nor scheduled.
"""

from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from matchday.models.common import Area, CompetitionRef, TeamRef
from matchday.utils.validators import ensure_mapping, read_field, read_list, read_object


class MatchStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    TIMED = "TIMED"
    IN_PLAY = "IN_PLAY"
    PAUSED = "PAUSED"
    EXTRA_TIME = "EXTRA_TIME"
    PENALTY_SHOOTOUT = "PENALTY_SHOOTOUT"
    FINISHED = "FINISHED"
    POSTPONED = "POSTPONED"
    CANCELLED = "CANCELLED"
    SUSPENDED = "SUSPENDED"


LIVE_STATUSES = frozenset({
    MatchStatus.IN_PLAY.value,
    MatchStatus.PAUSED.value,
    MatchStatus.EXTRA_TIME.value,
    MatchStatus.PENALTY_SHOOTOUT.value,
})
SCHEDULED_STATUSES = frozenset({MatchStatus.SCHEDULED.value, MatchStatus.TIMED.value})

SCORE_PLACEHOLDER = "vs"

# Sort value for kickoffs that are missing or unparseable
EARLIEST_KICKOFF = datetime.min.replace(tzinfo=timezone.utc)


def is_finished(status: str) -> bool:
    return status == MatchStatus.FINISHED.value


def is_live(status: str) -> bool:
    return status in LIVE_STATUSES


def is_scheduled(status: str) -> bool:
    return status in SCHEDULED_STATUSES


def parse_utc_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 UTC timestamp such as 2024-08-17T14:00:00Z."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class ScoreDetail:
    home: Optional[int] = None
    away: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScoreDetail':
        return cls(
            home=read_field(data, 'home', int),
            away=read_field(data, 'away', int),
        )


@dataclass(frozen=True)
class Score:
    winner: Optional[str] = None
    duration: Optional[str] = None
    full_time: Optional[ScoreDetail] = None
    half_time: Optional[ScoreDetail] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Score':
        return cls(
            winner=read_field(data, 'winner', str),
            duration=read_field(data, 'duration', str),
            full_time=read_object(data, 'fullTime', ScoreDetail.from_dict),
            half_time=read_object(data, 'halfTime', ScoreDetail.from_dict),
        )


@dataclass(frozen=True)
class Match:
    id: int
    utc_date: str
    status: str
    home_team: TeamRef
    away_team: TeamRef
    matchday: Optional[int] = None
    stage: Optional[str] = None
    group: Optional[str] = None
    venue: Optional[str] = None
    score: Optional[Score] = None
    competition: Optional[CompetitionRef] = None
    area: Optional[Area] = None

    @property
    def kickoff(self) -> Optional[datetime]:
        return parse_utc_timestamp(self.utc_date)

    @property
    def is_finished(self) -> bool:
        return is_finished(self.status)

    @property
    def is_live(self) -> bool:
        return is_live(self.status)

    @property
    def is_scheduled(self) -> bool:
        return is_scheduled(self.status)

    @property
    def score_text(self) -> str:
        if self.score is None or not (self.is_finished or self.is_live):
            return SCORE_PLACEHOLDER
        full_time = self.score.full_time or ScoreDetail()
        return f"{full_time.home or 0} - {full_time.away or 0}"

    def local_time_text(self, tz: Optional[tzinfo] = None) -> str:
        """Kickoff as HH:MM in tz (default: the local timezone)."""
        kickoff = self.kickoff
        if kickoff is None:
            return ""
        return kickoff.astimezone(tz).strftime("%H:%M")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Match':
        data = ensure_mapping(data, 'match')
        return cls(
            id=read_field(data, 'id', int, required=True),
            utc_date=read_field(data, 'utcDate', str, default=""),
            status=read_field(data, 'status', str, default=""),
            home_team=read_object(data, 'homeTeam', TeamRef.from_dict) or TeamRef(),
            away_team=read_object(data, 'awayTeam', TeamRef.from_dict) or TeamRef(),
            matchday=read_field(data, 'matchday', int),
            stage=read_field(data, 'stage', str),
            group=read_field(data, 'group', str),
            venue=read_field(data, 'venue', str),
            score=read_object(data, 'score', Score.from_dict),
            competition=read_object(data, 'competition', CompetitionRef.from_dict),
            area=read_object(data, 'area', Area.from_dict),
        )


@dataclass(frozen=True)
class ResultSet:
    count: Optional[int] = None
    competitions: Optional[str] = None
    first: Optional[str] = None
    last: Optional[str] = None
    played: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ResultSet':
        return cls(
            count=read_field(data, 'count', int),
            competitions=read_field(data, 'competitions', str),
            first=read_field(data, 'first', str),
            last=read_field(data, 'last', str),
            played=read_field(data, 'played', int),
        )


@dataclass(frozen=True)
class MatchResponse:
    matches: Tuple[Match, ...]
    result_set: Optional[ResultSet] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MatchResponse':
        data = ensure_mapping(data, 'response')
        return cls(
            matches=read_list(data, 'matches', Match.from_dict, required=True),
            result_set=read_object(data, 'resultSet', ResultSet.from_dict),
        )
