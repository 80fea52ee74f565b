"""
Team, squad and person records.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from matchday.models.common import Area, CompetitionRef, Contract
from matchday.utils.validators import ensure_mapping, read_field, read_list, read_object


class PlayerPosition(Enum):
    """Position groups used by football-data.org squads."""
    GOALKEEPER = "Goalkeeper"
    DEFENCE = "Defence"
    MIDFIELD = "Midfield"
    OFFENCE = "Offence"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> 'PlayerPosition':
        for position in cls:
            if position is not cls.UNKNOWN and position.value == value:
                return position
        return cls.UNKNOWN


def parse_birth_date(value: Optional[str]) -> Optional[date]:
    """Parse a yyyy-MM-dd date of birth; None when missing or malformed."""
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def age_from_birth_date(value: Optional[str], today: Optional[date] = None) -> Optional[int]:
    """
    Age as the difference between calendar years.

    A player born on 2000-12-31 is 25 on 2025-01-01.
    """
    birth = parse_birth_date(value)
    if birth is None:
        return None
    today = today or date.today()
    return today.year - birth.year


@dataclass(frozen=True)
class Coach:
    id: Optional[int] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    name: Optional[str] = None
    date_of_birth: Optional[str] = None
    nationality: Optional[str] = None
    contract: Optional[Contract] = None

    @property
    def display_name(self) -> str:
        return self.name or f"{self.first_name or ''} {self.last_name or ''}".strip()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Coach':
        return cls(
            id=read_field(data, 'id', int),
            first_name=read_field(data, 'firstName', str),
            last_name=read_field(data, 'lastName', str),
            name=read_field(data, 'name', str),
            date_of_birth=read_field(data, 'dateOfBirth', str),
            nationality=read_field(data, 'nationality', str),
            contract=read_object(data, 'contract', Contract.from_dict),
        )


@dataclass(frozen=True, eq=False)
class Player:
    """A squad member or person. Equality is by id."""
    id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    name: Optional[str] = None
    position: Optional[str] = None
    date_of_birth: Optional[str] = None
    nationality: Optional[str] = None
    shirt_number: Optional[int] = None
    market_value: Optional[int] = None
    contract: Optional[Contract] = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Player):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(('player', self.id))

    @property
    def display_name(self) -> str:
        return self.name or f"{self.first_name or ''} {self.last_name or ''}".strip()

    @property
    def position_kind(self) -> PlayerPosition:
        return PlayerPosition.parse(self.position)

    def age(self, today: Optional[date] = None) -> Optional[int]:
        return age_from_birth_date(self.date_of_birth, today)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Player':
        data = ensure_mapping(data, 'player')
        return cls(
            id=read_field(data, 'id', int, required=True),
            first_name=read_field(data, 'firstName', str),
            last_name=read_field(data, 'lastName', str),
            name=read_field(data, 'name', str),
            position=read_field(data, 'position', str),
            date_of_birth=read_field(data, 'dateOfBirth', str),
            nationality=read_field(data, 'nationality', str),
            shirt_number=read_field(data, 'shirtNumber', int),
            market_value=read_field(data, 'marketValue', int),
            contract=read_object(data, 'contract', Contract.from_dict),
        )


@dataclass(frozen=True, eq=False)
class Staff:
    id: int
    name: Optional[str] = None
    date_of_birth: Optional[str] = None
    nationality: Optional[str] = None
    contract: Optional[Contract] = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Staff):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(('staff', self.id))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Staff':
        return cls(
            id=read_field(data, 'id', int, required=True),
            name=read_field(data, 'name', str),
            date_of_birth=read_field(data, 'dateOfBirth', str),
            nationality=read_field(data, 'nationality', str),
            contract=read_object(data, 'contract', Contract.from_dict),
        )


@dataclass(frozen=True, eq=False)
class Team:
    """A club or national team. Equality is by id."""
    id: int
    name: str
    short_name: Optional[str] = None
    tla: Optional[str] = None
    crest: Optional[str] = None
    address: Optional[str] = None
    website: Optional[str] = None
    founded: Optional[int] = None
    club_colors: Optional[str] = None
    venue: Optional[str] = None
    coach: Optional[Coach] = None
    squad: Optional[Tuple[Player, ...]] = None
    staff: Optional[Tuple[Staff, ...]] = None
    running_competitions: Optional[Tuple[CompetitionRef, ...]] = None
    area: Optional[Area] = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Team):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(('team', self.id))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Team':
        data = ensure_mapping(data, 'team')
        team_id = read_field(data, 'id', int, required=True)
        return cls(
            id=team_id,
            name=read_field(data, 'name', str, default=f"Team #{team_id}"),
            short_name=read_field(data, 'shortName', str),
            tla=read_field(data, 'tla', str),
            crest=read_field(data, 'crest', str),
            address=read_field(data, 'address', str),
            website=read_field(data, 'website', str),
            founded=read_field(data, 'founded', int),
            club_colors=read_field(data, 'clubColors', str),
            venue=read_field(data, 'venue', str),
            coach=read_object(data, 'coach', Coach.from_dict),
            squad=read_list(data, 'squad', Player.from_dict),
            staff=read_list(data, 'staff', Staff.from_dict),
            running_competitions=read_list(data, 'runningCompetitions', CompetitionRef.from_dict),
            area=read_object(data, 'area', Area.from_dict),
        )


@dataclass(frozen=True)
class TeamResponse:
    teams: Optional[Tuple[Team, ...]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TeamResponse':
        data = ensure_mapping(data, 'response')
        return cls(teams=read_list(data, 'teams', Team.from_dict))
