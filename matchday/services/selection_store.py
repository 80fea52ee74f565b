"""
Selection Store - services/selection_store.py

RESPONSIBILITIES:
-----------------
Durable, bounded set of followed teams and competitions, plus the
onboarding flag and the configured API key.

RULES:
------
- At most MAX_SELECTIONS teams + competitions combined, checked at insertion
- No duplicate ids within either list
- Every followed id has a display name (a fallback when none was given)
- Every mutation is persisted before the call returns
- Persistence failures are logged, never raised: the in-memory state keeps
  the change for the rest of the process and a later reload may differ

ARCHITECTURE:
------------
    SelectionStore (lock-guarded read-modify-write)
        |
    SelectionBackend.load() / save(record)
        |
    JSONFileBackend | InMemoryBackend
"""

import copy
import json
import logging
import os
import tempfile
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

logger = logging.getLogger(__name__)

MAX_SELECTIONS = 10

SCHEMA_VERSION = 1


# ============================================================================
# RECORD
# ============================================================================

@dataclass
class SelectionRecord:
    """Everything the store persists."""
    team_ids: List[int] = field(default_factory=list)
    competition_ids: List[int] = field(default_factory=list)
    team_names: Dict[int, str] = field(default_factory=dict)
    competition_names: Dict[int, str] = field(default_factory=dict)
    team_crests: Dict[int, str] = field(default_factory=dict)
    competition_emblems: Dict[int, str] = field(default_factory=dict)
    has_completed_onboarding: bool = False
    api_key: str = ""

    def to_dict(self) -> Dict[str, Any]:
        # JSON object keys must be strings
        return {
            'version': SCHEMA_VERSION,
            'team_ids': list(self.team_ids),
            'competition_ids': list(self.competition_ids),
            'team_names': {str(k): v for k, v in self.team_names.items()},
            'competition_names': {str(k): v for k, v in self.competition_names.items()},
            'team_crests': {str(k): v for k, v in self.team_crests.items()},
            'competition_emblems': {str(k): v for k, v in self.competition_emblems.items()},
            'has_completed_onboarding': self.has_completed_onboarding,
            'api_key': self.api_key,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SelectionRecord':
        """
        Rebuild a record from persisted data.

        Unknown keys are ignored; malformed entries are dropped.
        """
        def id_list(key: str) -> List[int]:
            ids: List[int] = []
            raw = data.get(key)
            if raw is None:
                return ids
            if not isinstance(raw, list):
                logger.warning(f"Ignoring '{key}': expected a list, got {type(raw).__name__}")
                return ids
            for value in raw:
                if isinstance(value, int) and not isinstance(value, bool) and value not in ids:
                    ids.append(value)
            return ids

        def id_map(key: str) -> Dict[int, str]:
            result: Dict[int, str] = {}
            raw = data.get(key)
            if raw is None:
                return result
            if not isinstance(raw, dict):
                logger.warning(f"Ignoring '{key}': expected a mapping, got {type(raw).__name__}")
                return result
            for raw_key, value in raw.items():
                try:
                    result[int(raw_key)] = str(value)
                except (TypeError, ValueError):
                    logger.warning(f"Dropping malformed entry {raw_key!r} from '{key}'")
            return result

        return cls(
            team_ids=id_list('team_ids'),
            competition_ids=id_list('competition_ids'),
            team_names=id_map('team_names'),
            competition_names=id_map('competition_names'),
            team_crests=id_map('team_crests'),
            competition_emblems=id_map('competition_emblems'),
            has_completed_onboarding=bool(data.get('has_completed_onboarding', False)),
            api_key=str(data.get('api_key') or ''),
        )


# ============================================================================
# PERSISTENCE BACKENDS
# ============================================================================

class SelectionBackend:
    """Narrow persistence interface used by SelectionStore."""

    def load(self) -> Optional[SelectionRecord]:
        """Return the persisted record, or None on first run."""
        raise NotImplementedError

    def save(self, record: SelectionRecord) -> None:
        """Persist the full record. May raise OSError."""
        raise NotImplementedError


class InMemoryBackend(SelectionBackend):
    """Keeps a copy of the last saved record; survives store re-creation."""

    def __init__(self):
        self._record: Optional[SelectionRecord] = None

    def load(self) -> Optional[SelectionRecord]:
        return copy.deepcopy(self._record)

    def save(self, record: SelectionRecord) -> None:
        self._record = copy.deepcopy(record)


class JSONFileBackend(SelectionBackend):
    """
    Single JSON document on disk.

    Writes go to a temporary file in the same directory which is then
    atomically renamed over the target, so a crash mid-write leaves the
    previous state intact.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def load(self) -> Optional[SelectionRecord]:
        if not self.path.exists():
            return None
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read selection state from {self.path}: {e}")
            return None
        if not isinstance(data, dict):
            logger.warning(f"Ignoring selection state in {self.path}: not a JSON object")
            return None
        return SelectionRecord.from_dict(data)

    def save(self, record: SelectionRecord) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix='.state-', suffix='.json')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(record.to_dict(), f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except BaseException:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise


# ============================================================================
# STORE
# ============================================================================

class SelectionStore:
    """
    Followed teams and competitions.

    All methods are safe to call from several threads; mutations are
    serialized by an internal lock so the capacity check and the insert
    happen atomically.
    """

    def __init__(self, backend: Optional[SelectionBackend] = None, max_selections: int = MAX_SELECTIONS):
        self.backend = backend or InMemoryBackend()
        self.max_selections = max_selections
        self._lock = threading.RLock()
        self._record = self._load()

    def _load(self) -> SelectionRecord:
        try:
            record = self.backend.load()
        except OSError as e:
            logger.warning(f"Could not load selections, starting empty: {e}")
            record = None
        if record is None:
            logger.info("No saved selections found, starting empty")
            return SelectionRecord()
        self._backfill_names(record)
        return record

    @staticmethod
    def _backfill_names(record: SelectionRecord):
        for team_id in record.team_ids:
            if not record.team_names.get(team_id):
                record.team_names[team_id] = f"Team #{team_id}"
        for competition_id in record.competition_ids:
            if not record.competition_names.get(competition_id):
                record.competition_names[competition_id] = f"Competition #{competition_id}"

    def _persist(self):
        try:
            self.backend.save(self._record)
        except Exception as e:
            logger.error(f"Failed to persist selections; keeping in-memory state: {e}", exc_info=True)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def team_ids(self) -> List[int]:
        with self._lock:
            return list(self._record.team_ids)

    @property
    def competition_ids(self) -> List[int]:
        with self._lock:
            return list(self._record.competition_ids)

    @property
    def team_names(self) -> Dict[int, str]:
        with self._lock:
            return dict(self._record.team_names)

    @property
    def competition_names(self) -> Dict[int, str]:
        with self._lock:
            return dict(self._record.competition_names)

    @property
    def team_crests(self) -> Dict[int, str]:
        with self._lock:
            return dict(self._record.team_crests)

    @property
    def competition_emblems(self) -> Dict[int, str]:
        with self._lock:
            return dict(self._record.competition_emblems)

    @property
    def has_completed_onboarding(self) -> bool:
        return self._record.has_completed_onboarding

    def is_team_selected(self, team_id: int) -> bool:
        with self._lock:
            return team_id in self._record.team_ids

    def is_competition_selected(self, competition_id: int) -> bool:
        with self._lock:
            return competition_id in self._record.competition_ids

    def total_selections(self) -> int:
        with self._lock:
            return len(self._record.team_ids) + len(self._record.competition_ids)

    def can_add_more(self) -> bool:
        return self.total_selections() < self.max_selections

    def remaining_slots(self) -> int:
        return max(0, self.max_selections - self.total_selections())

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_team(self, team_id: int, name: str, crest: Optional[str] = None) -> bool:
        """
        Follow a team.

        Returns:
            True if the team was added, False if already followed or at capacity
        """
        with self._lock:
            if not self.can_add_more() or team_id in self._record.team_ids:
                return False
            self._record.team_ids.append(team_id)
            self._record.team_names[team_id] = name or f"Team #{team_id}"
            if crest:
                self._record.team_crests[team_id] = crest
            self._persist()
        logger.info(f"Following team {team_id} ({name})")
        return True

    def remove_team(self, team_id: int) -> bool:
        with self._lock:
            if team_id not in self._record.team_ids:
                return False
            self._record.team_ids.remove(team_id)
            self._record.team_names.pop(team_id, None)
            self._record.team_crests.pop(team_id, None)
            self._persist()
        logger.info(f"Unfollowed team {team_id}")
        return True

    def add_competition(self, competition_id: int, name: str, emblem: Optional[str] = None) -> bool:
        """
        Follow a competition.

        Returns:
            True if the competition was added, False if already followed or at capacity
        """
        with self._lock:
            if not self.can_add_more() or competition_id in self._record.competition_ids:
                return False
            self._record.competition_ids.append(competition_id)
            self._record.competition_names[competition_id] = name or f"Competition #{competition_id}"
            if emblem:
                self._record.competition_emblems[competition_id] = emblem
            self._persist()
        logger.info(f"Following competition {competition_id} ({name})")
        return True

    def remove_competition(self, competition_id: int) -> bool:
        with self._lock:
            if competition_id not in self._record.competition_ids:
                return False
            self._record.competition_ids.remove(competition_id)
            self._record.competition_names.pop(competition_id, None)
            self._record.competition_emblems.pop(competition_id, None)
            self._persist()
        logger.info(f"Unfollowed competition {competition_id}")
        return True

    def complete_onboarding(self):
        with self._lock:
            self._record.has_completed_onboarding = True
            self._persist()

    def reset_all(self):
        """Return to first-run state. The API key is kept."""
        with self._lock:
            api_key = self._record.api_key
            self._record = SelectionRecord(api_key=api_key)
            self._persist()
        logger.info("All selections reset")

    @property
    def api_key(self) -> str:
        return self._record.api_key

    @api_key.setter
    def api_key(self, value: str):
        with self._lock:
            self._record.api_key = (value or "").strip()
            self._persist()
