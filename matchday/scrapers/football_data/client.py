"""
football-data.org v4 client.

Free tier: ~10 requests/minute

Features:
- Pacing gate: requests are issued at least min_interval seconds apart,
  process-wide for this client instance, even under concurrent callers
- X-Auth-Token injection from a caller-supplied credential source
- Typed decoding of every response
- HTTP failures classified into FootballDataError subclasses
- Structured request logging and usage tracking

No retry is performed here. Share one client instance between all
callers so that they queue behind the same pacing gate.
"""

import asyncio
import logging
import time
from typing import Any, Callable, Dict, Optional, Tuple, TypeVar, Union

import httpx

from matchday.models import (
    Competition,
    CompetitionResponse,
    MatchResponse,
    Player,
    ScorersResponse,
    StandingsResponse,
    Team,
    TeamResponse,
)
from matchday.scrapers.football_data.constants import (
    BASE_URL,
    CONNECT_TIMEOUT,
    DEFAULT_SCORERS_LIMIT,
    DEFAULT_TEAM_MATCHES_LIMIT,
    MIN_REQUEST_INTERVAL,
    PLACEHOLDER_API_KEY,
    TOTAL_TIMEOUT,
)
from matchday.scrapers.football_data.errors import (
    DecodingError,
    FootballDataError,
    InvalidResponse,
    error_for_status,
)
from matchday.utils.api_tracker import APITracker
from matchday.utils.logging_config import APIRequestLogger
from matchday.utils.validators import ValidationError

logger = logging.getLogger(__name__)

T = TypeVar('T')

CompetitionKey = Union[int, str]


class FootballDataClient:
    """
    Client for football-data.org (api.football-data.org/v4)

    Usage:
        async with FootballDataClient(api_key="...") as client:
            table = await client.fetch_standings("PL")
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        credential_source: Optional[Callable[[], Optional[str]]] = None,
        base_url: str = BASE_URL,
        min_interval: float = MIN_REQUEST_INTERVAL,
        connect_timeout: float = CONNECT_TIMEOUT,
        total_timeout: float = TOTAL_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Any] = asyncio.sleep,
        tracker: Optional[APITracker] = None
    ):
        """
        Initialize football-data.org client.

        Args:
            api_key: Static API key
            credential_source: Callable returning the current API key; takes
                precedence over api_key so a key changed at runtime is picked up
            base_url: API root
            min_interval: Minimum seconds between two issued requests
            connect_timeout: Connection timeout (seconds)
            total_timeout: Upper bound for a whole request (seconds)
            transport: Optional httpx transport (tests use httpx.MockTransport)
            clock: Monotonic clock used by the pacing gate
            sleep: Coroutine function used to wait at the pacing gate
            tracker: Usage tracker (one is created if omitted)
        """
        self._api_key = api_key
        self._credential_source = credential_source
        self.base_url = base_url.rstrip('/')
        self.min_interval = min_interval
        self.total_timeout = total_timeout

        self._clock = clock
        self._sleep = sleep
        self._pacing_lock = asyncio.Lock()
        self._last_request_time: Optional[float] = None

        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Accept": "application/json"},
            timeout=httpx.Timeout(total_timeout, connect=connect_timeout),
            transport=transport,
        )

        self.tracker = tracker or APITracker("football_data")
        self.api_logger = APIRequestLogger("football_data")

    async def __aenter__(self) -> 'FootballDataClient':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self):
        await self._http.aclose()

    @property
    def api_key(self) -> str:
        """Current credential, or the placeholder when none is configured."""
        key = self._credential_source() if self._credential_source else self._api_key
        return key or PLACEHOLDER_API_KEY

    @property
    def last_request_time(self) -> Optional[float]:
        return self._last_request_time

    # ============================================
    # PACING GATE
    # ============================================

    async def _wait_for_slot(self):
        """
        Block until min_interval has passed since the last issued request,
        then claim the slot.

        The lock is held across the wait so concurrent callers cannot read
        the same timestamp and proceed together. The timestamp is only
        written after the wait completes, so a cancelled wait leaves it
        untouched.
        """
        async with self._pacing_lock:
            if self._last_request_time is not None:
                elapsed = self._clock() - self._last_request_time
                if elapsed < self.min_interval:
                    delay = self.min_interval - elapsed
                    logger.debug(f"Pacing: waiting {delay:.2f}s before next request")
                    await self._sleep(delay)
            self._last_request_time = self._clock()

    # ============================================
    # CORE REQUEST
    # ============================================

    async def _request(
        self,
        endpoint: str,
        parser: Callable[[Any], T],
        params: Optional[Dict[str, Any]] = None
    ) -> T:
        """
        Issue a GET request through the pacing gate and decode the body.

        Args:
            endpoint: Path below the API root (e.g. '/competitions')
            parser: Callable turning the JSON payload into a record
            params: Query parameters; None values are dropped

        Returns:
            Decoded record

        Raises:
            FootballDataError subclass on any failure
        """
        query = {key: value for key, value in (params or {}).items() if value is not None}

        await self._wait_for_slot()

        start_time = time.perf_counter()
        try:
            response = await asyncio.wait_for(
                self._http.get(endpoint, params=query, headers={"X-Auth-Token": self.api_key}),
                timeout=self.total_timeout,
            )
        except (httpx.RequestError, asyncio.TimeoutError) as e:
            error = InvalidResponse(f"{type(e).__name__}: {e}")
            self._record(endpoint, query, None, start_time, error)
            raise error from e

        try:
            result = self._handle_response(response, parser)
        except FootballDataError as error:
            self._record(endpoint, query, response.status_code, start_time, error)
            raise

        self._record(endpoint, query, response.status_code, start_time)
        return result

    def _handle_response(self, response: httpx.Response, parser: Callable[[Any], T]) -> T:
        if response.status_code != 200:
            raise error_for_status(response.status_code, response.text)

        try:
            payload = response.json()
        except ValueError as e:
            raise DecodingError(f"invalid JSON: {e}") from e

        try:
            return parser(payload)
        except ValidationError as e:
            raise DecodingError(str(e)) from e

    def _record(
        self,
        endpoint: str,
        params: Dict[str, Any],
        status: Optional[int],
        start_time: float,
        error: Optional[FootballDataError] = None
    ):
        response_time_ms = round((time.perf_counter() - start_time) * 1000, 1)
        error_type = type(error).__name__ if error else None
        self.tracker.record_request(
            endpoint=endpoint,
            params=params,
            response_status=status,
            response_time_ms=response_time_ms,
            error_type=error_type
        )
        self.api_logger.log_request(
            endpoint=endpoint,
            params=params,
            response_status=status,
            response_time_ms=response_time_ms,
            error=f"{error_type}: {error}" if error else None
        )

    # ============================================
    # COMPETITIONS
    # ============================================

    async def fetch_competitions(self) -> Tuple[Competition, ...]:
        """Get all competitions visible to the configured plan."""
        response = await self._request('/competitions', CompetitionResponse.from_dict)
        return response.competitions

    async def fetch_competition(self, competition_id: int) -> Competition:
        return await self._request(f'/competitions/{competition_id}', Competition.from_dict)

    async def fetch_standings(self, competition: CompetitionKey) -> StandingsResponse:
        """
        Get league tables.

        Args:
            competition: Competition id (e.g. 2021) or code (e.g. 'PL')
        """
        return await self._request(f'/competitions/{competition}/standings', StandingsResponse.from_dict)

    async def fetch_scorers(
        self,
        competition: CompetitionKey,
        limit: int = DEFAULT_SCORERS_LIMIT
    ) -> ScorersResponse:
        """Get top scorers for a competition id or code."""
        return await self._request(
            f'/competitions/{competition}/scorers',
            ScorersResponse.from_dict,
            params={'limit': limit}
        )

    # ============================================
    # MATCHES
    # ============================================

    async def fetch_competition_matches(
        self,
        competition_id: int,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        status: Optional[str] = None,
        matchday: Optional[int] = None
    ) -> MatchResponse:
        """
        Get matches of a competition.

        Args:
            competition_id: Competition id
            date_from: yyyy-MM-dd lower bound
            date_to: yyyy-MM-dd upper bound
            status: Status filter (e.g. 'FINISHED')
            matchday: Matchday number
        """
        params = {
            'dateFrom': date_from,
            'dateTo': date_to,
            'status': status,
            'matchday': matchday,
        }
        return await self._request(
            f'/competitions/{competition_id}/matches',
            MatchResponse.from_dict,
            params=params
        )

    async def fetch_team_matches(
        self,
        team_id: int,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        status: Optional[str] = None,
        limit: int = DEFAULT_TEAM_MATCHES_LIMIT
    ) -> MatchResponse:
        """Get matches of a team across all its competitions."""
        params = {
            'limit': limit,
            'dateFrom': date_from,
            'dateTo': date_to,
            'status': status,
        }
        return await self._request(f'/teams/{team_id}/matches', MatchResponse.from_dict, params=params)

    async def fetch_today_matches(self) -> MatchResponse:
        return await self._request('/matches', MatchResponse.from_dict)

    # ============================================
    # TEAMS & PERSONS
    # ============================================

    async def fetch_team(self, team_id: int) -> Team:
        return await self._request(f'/teams/{team_id}', Team.from_dict)

    async def fetch_competition_teams(self, competition_id: int) -> TeamResponse:
        return await self._request(f'/competitions/{competition_id}/teams', TeamResponse.from_dict)

    async def fetch_person(self, person_id: int) -> Player:
        return await self._request(f'/persons/{person_id}', Player.from_dict)
