"""
Domain records decoded from football-data.org v4 responses.
"""

from .common import Area, CompetitionRef, Contract, Season, TeamRef
from .competition import Competition, CompetitionResponse
from .match import (
    Match,
    MatchResponse,
    MatchStatus,
    ResultSet,
    Score,
    ScoreDetail,
    is_finished,
    is_live,
    is_scheduled,
)
from .scorer import Scorer, ScorerPlayer, ScorersResponse
from .standing import StandingGroup, StandingRow, StandingsResponse
from .team import Coach, Player, PlayerPosition, Staff, Team, TeamResponse

__all__ = [
    'Area', 'CompetitionRef', 'Contract', 'Season', 'TeamRef',
    'Competition', 'CompetitionResponse',
    'Match', 'MatchResponse', 'MatchStatus', 'ResultSet', 'Score', 'ScoreDetail',
    'is_finished', 'is_live', 'is_scheduled',
    'Scorer', 'ScorerPlayer', 'ScorersResponse',
    'StandingGroup', 'StandingRow', 'StandingsResponse',
    'Coach', 'Player', 'PlayerPosition', 'Staff', 'Team', 'TeamResponse',
]
