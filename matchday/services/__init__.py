# Service modules
from .selection_store import (
    MAX_SELECTIONS,
    InMemoryBackend,
    JSONFileBackend,
    SelectionBackend,
    SelectionRecord,
    SelectionStore,
)
from .schedule_service import (
    FollowedFeed,
    ScheduleFilter,
    date_window,
    filter_matches,
    group_matches_by_date,
    load_followed_matches,
    merge_matches,
)
from .catalog_service import (
    filter_free_tier,
    matches_for_competition,
    nationality_breakdown,
    sort_scorers,
    sort_teams,
    split_standings,
)
