"""
Catalog Service - services/catalog_service.py

Ordering and filtering helpers for competitions, teams, tables and
scorer lists. All functions are pure.
"""

import logging
from collections import Counter
from typing import Iterable, List, Sequence, Tuple

from matchday.models import Competition, Match, Player, Scorer, StandingGroup, Team

logger = logging.getLogger(__name__)


def filter_free_tier(competitions: Iterable[Competition], codes: Iterable[str]) -> List[Competition]:
    """Keep competitions whose code is in the free-plan allow-list."""
    allowed = set(codes)
    return [c for c in competitions if (c.code or "") in allowed]


def sort_scorers(scorers: Iterable[Scorer], by_assists: bool = False) -> List[Scorer]:
    """
    Order a scorer list for display.

    Goals mode sorts by goals descending. Assists mode drops players
    without an assist and sorts by assists descending. Missing counts
    count as zero.
    """
    if by_assists:
        with_assists = [s for s in scorers if (s.assists or 0) > 0]
        return sorted(with_assists, key=lambda s: s.assists or 0, reverse=True)
    return sorted(scorers, key=lambda s: s.goals or 0, reverse=True)


def sort_teams(teams: Iterable[Team]) -> List[Team]:
    return sorted(teams, key=lambda t: t.name)


def split_standings(groups: Sequence[StandingGroup]) -> Tuple[List[StandingGroup], List[StandingGroup]]:
    """
    Separate league-wide tables (TOTAL/HOME/AWAY) from cup group tables.

    Returns:
        (overall_tables, group_tables)
    """
    overall = [g for g in groups if not g.is_group_table]
    grouped = [g for g in groups if g.is_group_table]
    return overall, grouped


def nationality_breakdown(squad: Iterable[Player], other_label: str = "Other") -> List[Tuple[str, int]]:
    """
    Count squad members per nationality, most common first.

    Ties keep first-seen order.
    """
    counts = Counter(p.nationality or other_label for p in squad)
    return counts.most_common()


def matches_for_competition(matches: Iterable[Match], competition_id: int) -> List[Match]:
    return [m for m in matches if m.competition is not None and m.competition.id == competition_id]
