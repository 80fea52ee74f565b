"""
League table records.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from matchday.models.common import CompetitionRef, Season, TeamRef
from matchday.utils.validators import ensure_mapping, read_field, read_list, read_object


@dataclass(frozen=True)
class StandingRow:
    """One table row. Identity is the position within its table."""
    position: int
    team: TeamRef
    played_games: int = 0
    won: int = 0
    draw: int = 0
    lost: int = 0
    points: int = 0
    goals_for: int = 0
    goals_against: int = 0
    goal_difference: int = 0
    form: Optional[str] = None

    @property
    def id(self) -> int:
        return self.position

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StandingRow':
        return cls(
            position=read_field(data, 'position', int, required=True),
            team=read_object(data, 'team', TeamRef.from_dict) or TeamRef(),
            played_games=read_field(data, 'playedGames', int, default=0),
            won=read_field(data, 'won', int, default=0),
            draw=read_field(data, 'draw', int, default=0),
            lost=read_field(data, 'lost', int, default=0),
            points=read_field(data, 'points', int, default=0),
            goals_for=read_field(data, 'goalsFor', int, default=0),
            goals_against=read_field(data, 'goalsAgainst', int, default=0),
            goal_difference=read_field(data, 'goalDifference', int, default=0),
            form=read_field(data, 'form', str),
        )


@dataclass(frozen=True)
class StandingGroup:
    """A named table, e.g. TOTAL/HOME/AWAY or GROUP_A in cup formats."""
    table: Tuple[StandingRow, ...]
    stage: Optional[str] = None
    type: Optional[str] = None
    group: Optional[str] = None

    @property
    def key(self) -> str:
        return f"{self.stage or ''}-{self.type or ''}-{self.group or ''}"

    @property
    def is_group_table(self) -> bool:
        return self.group is not None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StandingGroup':
        return cls(
            table=read_list(data, 'table', StandingRow.from_dict) or (),
            stage=read_field(data, 'stage', str),
            type=read_field(data, 'type', str),
            group=read_field(data, 'group', str),
        )


@dataclass(frozen=True)
class StandingsResponse:
    standings: Tuple[StandingGroup, ...]
    competition: Optional[CompetitionRef] = None
    season: Optional[Season] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StandingsResponse':
        data = ensure_mapping(data, 'response')
        return cls(
            standings=read_list(data, 'standings', StandingGroup.from_dict, required=True),
            competition=read_object(data, 'competition', CompetitionRef.from_dict),
            season=read_object(data, 'season', Season.from_dict),
        )
