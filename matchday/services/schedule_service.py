"""
Schedule Service - services/schedule_service.py

RESPONSIBILITIES:
-----------------
Combine match lists fetched independently per followed team and per
followed competition into one chronological feed, and group that feed
by calendar day for display.

ARCHITECTURE:
------------
    load_followed_matches(client, store)
        |  one fetch per followed team / competition (concurrent, paced by client)
    merge_matches(*lists)          dedup by id (first seen wins), sort by kickoff
        |
    filter_matches(feed, filter)   upcoming / results / all
        |
    group_matches_by_date(...)     buckets ordered by earliest kickoff
"""

import asyncio
import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from matchday.models import Match
from matchday.models.match import EARLIEST_KICKOFF
from matchday.scrapers.football_data.errors import FootballDataError

logger = logging.getLogger(__name__)

DEFAULT_TEAM_WINDOW = (30, 60)
DEFAULT_COMPETITION_WINDOW = (14, 30)


class ScheduleFilter(str, Enum):
    UPCOMING = "upcoming"
    RESULTS = "results"
    ALL = "all"


@dataclass
class FollowedFeed:
    """Merged matches plus the sources that could not be fetched."""
    matches: List[Match] = field(default_factory=list)
    failures: Dict[str, FootballDataError] = field(default_factory=dict)

    @property
    def complete(self) -> bool:
        return not self.failures


# ============================================================================
# ORDERING & MERGING
# ============================================================================

def sort_key(match: Match) -> datetime:
    """Kickoff time; missing or unparseable timestamps sort first."""
    return match.kickoff or EARLIEST_KICKOFF


def merge_matches(*match_lists: Iterable[Match]) -> List[Match]:
    """
    Merge overlapping match lists into one deduplicated chronological list.

    The first occurrence of each match id is kept. Sorting is stable, so
    matches with equal kickoff keep their first-seen order.

    Example:
        >>> merged = merge_matches([m1, m2], [m2, m3])
        >>> [m.id for m in merged]
        [1, 2, 3]
    """
    unique: Dict[int, Match] = {}
    for matches in match_lists:
        for match in matches:
            if match.id not in unique:
                unique[match.id] = match
    return sorted(unique.values(), key=sort_key)


def filter_matches(matches: Sequence[Match], schedule_filter: ScheduleFilter = ScheduleFilter.ALL) -> List[Match]:
    """
    Apply a schedule tab filter to a chronological feed.

    UPCOMING keeps scheduled and live matches, RESULTS keeps finished
    matches newest first, ALL returns the feed unchanged.
    """
    if schedule_filter == ScheduleFilter.UPCOMING:
        return [m for m in matches if m.is_scheduled or m.is_live]
    if schedule_filter == ScheduleFilter.RESULTS:
        return [m for m in reversed(matches) if m.is_finished]
    return list(matches)


def group_matches_by_date(
    matches: Iterable[Match],
    label: Callable[[Optional[datetime]], str],
    descending: bool = False
) -> List[Tuple[str, List[Match]]]:
    """
    Group matches by calendar-day label.

    Buckets are ordered by the earliest real kickoff among their members,
    not by the label text. Members keep their input order.

    Args:
        matches: Matches to group
        label: Maps a kickoff (or None) to its day label, e.g. L10n.date_label
        descending: Newest bucket first (results view)

    Returns:
        List of (label, matches) pairs
    """
    buckets: "OrderedDict[str, List[Match]]" = OrderedDict()
    earliest: Dict[str, datetime] = {}

    for match in matches:
        key = label(match.kickoff)
        buckets.setdefault(key, []).append(match)
        kickoff = sort_key(match)
        if key not in earliest or kickoff < earliest[key]:
            earliest[key] = kickoff

    ordered = sorted(buckets.items(), key=lambda item: earliest[item[0]], reverse=descending)
    return [(key, members) for key, members in ordered]


# ============================================================================
# DATE WINDOWS
# ============================================================================

def date_window(today: date, before_days: int, after_days: int) -> Tuple[str, str]:
    """
    ISO yyyy-MM-dd bounds around today.

    Example:
        >>> date_window(date(2024, 8, 17), 14, 30)
        ('2024-08-03', '2024-09-16')
    """
    start = today - timedelta(days=before_days)
    end = today + timedelta(days=after_days)
    return start.isoformat(), end.isoformat()


# ============================================================================
# FEED LOADING
# ============================================================================

async def load_followed_matches(
    client,
    store,
    today: Optional[date] = None,
    team_window: Tuple[int, int] = DEFAULT_TEAM_WINDOW,
    competition_window: Tuple[int, int] = DEFAULT_COMPETITION_WINDOW
) -> FollowedFeed:
    """
    Fetch matches for every followed team and competition and merge them.

    All fetches are started together; the client's pacing gate spaces
    out their issuance. A failed source is recorded in the result instead
    of discarding the sources that succeeded.

    Args:
        client: FootballDataClient (or anything with the same fetch methods)
        store: SelectionStore providing team_ids / competition_ids
        today: Reference day for the windows (default: today)
        team_window: (days before, days after) for team schedules
        competition_window: (days before, days after) for competition schedules
    """
    today = today or date.today()
    team_from, team_to = date_window(today, *team_window)
    comp_from, comp_to = date_window(today, *competition_window)

    sources: List[str] = []
    calls = []
    for team_id in store.team_ids:
        sources.append(f"team:{team_id}")
        calls.append(client.fetch_team_matches(team_id, date_from=team_from, date_to=team_to))
    for competition_id in store.competition_ids:
        sources.append(f"competition:{competition_id}")
        calls.append(client.fetch_competition_matches(competition_id, date_from=comp_from, date_to=comp_to))

    if not calls:
        return FollowedFeed()

    logger.info(f"Loading schedule from {len(calls)} followed sources")
    results = await asyncio.gather(*calls, return_exceptions=True)

    feed = FollowedFeed()
    fetched: List[Sequence[Match]] = []
    for source, result in zip(sources, results):
        if isinstance(result, FootballDataError):
            logger.warning(f"Could not load matches for {source}: {result}")
            feed.failures[source] = result
        elif isinstance(result, BaseException):
            raise result
        else:
            fetched.append(result.matches)

    feed.matches = merge_matches(*fetched)
    logger.info(f"Schedule loaded: {len(feed.matches)} matches, {len(feed.failures)} failed sources")
    return feed
