"""
Top scorer records.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from matchday.models.common import CompetitionRef, Season, TeamRef
from matchday.utils.validators import ensure_mapping, read_field, read_list, read_object


@dataclass(frozen=True)
class ScorerPlayer:
    id: int
    name: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    date_of_birth: Optional[str] = None
    nationality: Optional[str] = None
    position: Optional[str] = None
    shirt_number: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScorerPlayer':
        player_id = read_field(data, 'id', int, required=True)
        return cls(
            id=player_id,
            name=read_field(data, 'name', str, default=f"Player #{player_id}"),
            first_name=read_field(data, 'firstName', str),
            last_name=read_field(data, 'lastName', str),
            date_of_birth=read_field(data, 'dateOfBirth', str),
            nationality=read_field(data, 'nationality', str),
            position=read_field(data, 'position', str),
            shirt_number=read_field(data, 'shirtNumber', int),
        )


@dataclass(frozen=True)
class Scorer:
    player: ScorerPlayer
    team: Optional[TeamRef] = None
    played_matches: Optional[int] = None
    goals: Optional[int] = None
    assists: Optional[int] = None
    penalties: Optional[int] = None

    @property
    def id(self) -> int:
        return self.player.id

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Scorer':
        return cls(
            player=read_object(data, 'player', ScorerPlayer.from_dict, required=True),
            team=read_object(data, 'team', TeamRef.from_dict),
            played_matches=read_field(data, 'playedMatches', int),
            goals=read_field(data, 'goals', int),
            assists=read_field(data, 'assists', int),
            penalties=read_field(data, 'penalties', int),
        )


@dataclass(frozen=True)
class ScorersResponse:
    scorers: Tuple[Scorer, ...]
    competition: Optional[CompetitionRef] = None
    season: Optional[Season] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScorersResponse':
        data = ensure_mapping(data, 'response')
        return cls(
            scorers=read_list(data, 'scorers', Scorer.from_dict, required=True),
            competition=read_object(data, 'competition', CompetitionRef.from_dict),
            season=read_object(data, 'season', Season.from_dict),
        )
