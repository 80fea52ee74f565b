"""
Pytest Configuration and Fixtures

Provides shared fixtures for all tests including:
- Sample football-data.org payloads
- A fake monotonic clock for the pacing gate
- A client factory wired to httpx.MockTransport
- In-memory selection stores
"""

import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from matchday.models import Match
from matchday.scrapers.football_data import FootballDataClient
from matchday.services import InMemoryBackend, SelectionStore


# ============================================================
# Test Doubles
# ============================================================

class FakeClock:
    """Monotonic clock whose sleep advances time instead of waiting."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float):
        self.sleeps.append(seconds)
        self.now += seconds


class RecordingHandler:
    """
    MockTransport handler returning canned responses.

    Responses are looked up by URL path; unknown paths return 404.
    Every request is kept in self.requests.
    """

    def __init__(self, routes: Optional[Dict[str, Any]] = None, status_code: int = 200):
        self.routes = routes or {}
        self.status_code = status_code
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.replace('/v4', '', 1)
        if path not in self.routes:
            return httpx.Response(404, json={"message": "not found"})
        body = self.routes[path]
        if isinstance(body, httpx.Response):
            return body
        if isinstance(body, Exception):
            raise body
        return httpx.Response(self.status_code, content=json.dumps(body).encode(),
                              headers={"Content-Type": "application/json"})


# ============================================================
# Sample Payload Fixtures
# ============================================================

def match_payload(
    match_id: int,
    utc_date: str = "2024-08-17T14:00:00Z",
    status: str = "TIMED",
    home: str = "Arsenal FC",
    away: str = "Chelsea FC",
    score: Optional[tuple] = None,
    competition_id: int = 2021
) -> Dict[str, Any]:
    full_time = {"home": score[0], "away": score[1]} if score else {"home": None, "away": None}
    return {
        "id": match_id,
        "utcDate": utc_date,
        "status": status,
        "matchday": 1,
        "stage": "REGULAR_SEASON",
        "group": None,
        "homeTeam": {"id": 57, "name": home, "shortName": home.replace(" FC", ""), "tla": home[:3].upper()},
        "awayTeam": {"id": 61, "name": away, "shortName": away.replace(" FC", ""), "tla": away[:3].upper()},
        "score": {"winner": None, "duration": "REGULAR", "fullTime": full_time, "halfTime": {"home": None, "away": None}},
        "competition": {"id": competition_id, "name": "Premier League", "code": "PL", "type": "LEAGUE"},
        "lastUpdated": "2024-08-10T08:00:00Z",
    }


@pytest.fixture
def competitions_payload() -> Dict[str, Any]:
    return {
        "count": 3,
        "filters": {"client": "free"},
        "competitions": [
            {
                "id": 2021, "name": "Premier League", "code": "PL", "type": "LEAGUE",
                "emblem": "https://crests.football-data.org/PL.png",
                "area": {"id": 2072, "name": "England", "code": "ENG", "flag": None},
                "currentSeason": {"id": 2287, "startDate": "2024-08-16", "endDate": "2025-05-25",
                                  "currentMatchday": 1, "winner": None},
                "plan": "TIER_ONE",
            },
            {
                "id": 2001, "name": "UEFA Champions League", "code": "CL", "type": "CUP",
                "area": {"id": 2077, "name": "Europe", "code": "EUR"},
            },
            {
                "id": 2152, "name": "Copa Libertadores", "code": "CLI", "type": "CUP",
                "area": {"id": 2220, "name": "South America"},
            },
        ],
    }


@pytest.fixture
def matches_payload() -> Dict[str, Any]:
    return {
        "filters": {"dateFrom": "2024-08-01", "dateTo": "2024-09-30"},
        "resultSet": {"count": 3, "competitions": "PL", "first": "2024-08-10", "last": "2024-08-24", "played": 1},
        "matches": [
            match_payload(1, "2024-08-10T14:00:00Z", "FINISHED", score=(2, 1)),
            match_payload(2, "2024-08-17T16:30:00Z", "TIMED"),
            match_payload(3, "2024-08-24T11:30:00Z", "SCHEDULED"),
        ],
    }


@pytest.fixture
def standings_payload() -> Dict[str, Any]:
    def row(position, team_id, name, points):
        return {
            "position": position,
            "team": {"id": team_id, "name": name, "shortName": name, "tla": name[:3].upper()},
            "playedGames": 3, "form": "W,W,D", "won": 2, "draw": 1, "lost": 0,
            "points": points, "goalsFor": 7, "goalsAgainst": 2, "goalDifference": 5,
        }

    table = [row(1, 57, "Arsenal", 7), row(2, 61, "Chelsea", 6)]
    return {
        "competition": {"id": 2021, "name": "Premier League", "code": "PL"},
        "season": {"id": 2287, "startDate": "2024-08-16", "endDate": "2025-05-25", "currentMatchday": 3},
        "standings": [
            {"stage": "REGULAR_SEASON", "type": "TOTAL", "group": None, "table": table},
            {"stage": "REGULAR_SEASON", "type": "HOME", "group": None, "table": table},
            {"stage": "REGULAR_SEASON", "type": "AWAY", "group": None, "table": table},
        ],
    }


@pytest.fixture
def scorers_payload() -> Dict[str, Any]:
    def scorer(player_id, name, goals, assists):
        return {
            "player": {"id": player_id, "name": name, "nationality": "England", "position": "Offence"},
            "team": {"id": 57, "name": "Arsenal FC", "shortName": "Arsenal"},
            "playedMatches": 10,
            "goals": goals,
            "assists": assists,
            "penalties": None,
        }

    return {
        "count": 3,
        "competition": {"id": 2021, "name": "Premier League", "code": "PL"},
        "scorers": [
            scorer(1, "Striker One", 8, 1),
            scorer(2, "Winger Two", 11, None),
            scorer(3, "Playmaker Three", 4, 9),
        ],
    }


@pytest.fixture
def team_payload() -> Dict[str, Any]:
    return {
        "id": 57,
        "name": "Arsenal FC",
        "shortName": "Arsenal",
        "tla": "ARS",
        "crest": "https://crests.football-data.org/57.png",
        "address": "75 Drayton Park London N5 1BU",
        "website": "http://www.arsenal.com",
        "founded": 1886,
        "clubColors": "Red / White",
        "venue": "Emirates Stadium",
        "area": {"id": 2072, "name": "England"},
        "runningCompetitions": [
            {"id": 2021, "name": "Premier League", "code": "PL", "type": "LEAGUE"},
        ],
        "coach": {"id": 11619, "firstName": "Mikel", "lastName": "Arteta", "name": "Mikel Arteta",
                  "nationality": "Spain", "contract": {"start": "2019-12", "until": "2027-06"}},
        "squad": [
            {"id": 1, "name": "David Raya", "position": "Goalkeeper", "dateOfBirth": "1995-09-15",
             "nationality": "Spain", "shirtNumber": 22},
            {"id": 2, "name": "William Saliba", "position": "Defence", "dateOfBirth": "2001-03-24",
             "nationality": "France"},
            {"id": 3, "name": "Bukayo Saka", "position": "Offence", "dateOfBirth": "2001-09-05",
             "nationality": "England", "shirtNumber": 7},
            {"id": 4, "name": "Declan Rice", "position": "Midfield", "dateOfBirth": "1999-01-14",
             "nationality": "England"},
        ],
        "staff": [],
    }


@pytest.fixture
def person_payload() -> Dict[str, Any]:
    return {
        "id": 3,
        "name": "Bukayo Saka",
        "firstName": "Bukayo",
        "lastName": "Saka",
        "dateOfBirth": "2001-09-05",
        "nationality": "England",
        "position": "Offence",
        "shirtNumber": 7,
        "currentTeam": {"id": 57, "name": "Arsenal FC", "contract": {"start": "2018-07", "until": "2027-06"}},
    }


@pytest.fixture
def make_match() -> Callable[..., Match]:
    """Build a decoded Match from keyword overrides."""
    def _make(match_id: int, **kwargs) -> Match:
        return Match.from_dict(match_payload(match_id, **kwargs))
    return _make


# ============================================================
# Client & Store Fixtures
# ============================================================

@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_client(fake_clock):
    """
    Factory for clients backed by httpx.MockTransport.

    Call it inside a running event loop.
    """
    def _make(handler: Callable[[httpx.Request], Any], **kwargs) -> FootballDataClient:
        kwargs.setdefault('api_key', 'test-key')
        kwargs.setdefault('clock', fake_clock)
        kwargs.setdefault('sleep', fake_clock.sleep)
        return FootballDataClient(transport=httpx.MockTransport(handler), **kwargs)
    return _make


@pytest.fixture
def store() -> SelectionStore:
    return SelectionStore(InMemoryBackend())
