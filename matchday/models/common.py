"""
Shared reference records embedded in most football-data.org payloads.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from matchday.utils.validators import read_field, read_object


@dataclass(frozen=True)
class Area:
    id: Optional[int] = None
    name: Optional[str] = None
    code: Optional[str] = None
    flag: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Area':
        return cls(
            id=read_field(data, 'id', int),
            name=read_field(data, 'name', str),
            code=read_field(data, 'code', str),
            flag=read_field(data, 'flag', str),
        )


@dataclass(frozen=True)
class TeamRef:
    """Lightweight team reference used inside matches, tables and scorers."""
    id: Optional[int] = None
    name: Optional[str] = None
    short_name: Optional[str] = None
    tla: Optional[str] = None
    crest: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.short_name or self.name or self.tla or ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TeamRef':
        return cls(
            id=read_field(data, 'id', int),
            name=read_field(data, 'name', str),
            short_name=read_field(data, 'shortName', str),
            tla=read_field(data, 'tla', str),
            crest=read_field(data, 'crest', str),
        )


@dataclass(frozen=True)
class CompetitionRef:
    id: int
    name: str
    code: Optional[str] = None
    type: Optional[str] = None
    emblem: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CompetitionRef':
        competition_id = read_field(data, 'id', int, required=True)
        return cls(
            id=competition_id,
            name=read_field(data, 'name', str, default=f"Competition #{competition_id}"),
            code=read_field(data, 'code', str),
            type=read_field(data, 'type', str),
            emblem=read_field(data, 'emblem', str),
        )


@dataclass(frozen=True)
class Season:
    id: Optional[int] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    current_matchday: Optional[int] = None
    winner: Optional[TeamRef] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Season':
        return cls(
            id=read_field(data, 'id', int),
            start_date=read_field(data, 'startDate', str),
            end_date=read_field(data, 'endDate', str),
            current_matchday=read_field(data, 'currentMatchday', int),
            winner=read_object(data, 'winner', TeamRef.from_dict),
        )


@dataclass(frozen=True)
class Contract:
    start: Optional[str] = None
    until: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Contract':
        return cls(
            start=read_field(data, 'start', str),
            until=read_field(data, 'until', str),
        )
