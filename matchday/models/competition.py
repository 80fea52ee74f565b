"""
Competition records.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from matchday.models.common import Area, Season
from matchday.utils.validators import ensure_mapping, read_field, read_list, read_object


@dataclass(frozen=True, eq=False)
class Competition:
    """A league or cup. Equality is by id."""
    id: int
    name: str
    code: Optional[str] = None
    type: Optional[str] = None
    emblem: Optional[str] = None
    area: Optional[Area] = None
    current_season: Optional[Season] = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Competition):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(('competition', self.id))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Competition':
        data = ensure_mapping(data, 'competition')
        competition_id = read_field(data, 'id', int, required=True)
        return cls(
            id=competition_id,
            name=read_field(data, 'name', str, default=f"Competition #{competition_id}"),
            code=read_field(data, 'code', str),
            type=read_field(data, 'type', str),
            emblem=read_field(data, 'emblem', str),
            area=read_object(data, 'area', Area.from_dict),
            current_season=read_object(data, 'currentSeason', Season.from_dict),
        )


@dataclass(frozen=True)
class CompetitionResponse:
    competitions: Tuple[Competition, ...]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CompetitionResponse':
        data = ensure_mapping(data, 'response')
        return cls(competitions=read_list(data, 'competitions', Competition.from_dict, required=True))
