"""
Tests for the football-data.org client.

Covers:
- Authentication header and query parameters
- HTTP status classification
- Decoding failures
- Pacing between issued requests, including concurrent callers
- Cancellation while waiting at the pacing gate
"""

import asyncio

import httpx
import pytest

from matchday.scrapers.football_data import (
    DecodingError,
    FootballDataError,
    InvalidResponse,
    NotFound,
    RateLimited,
    ServerError,
    Unauthorized,
)
from matchday.scrapers.football_data.constants import PLACEHOLDER_API_KEY

from tests.conftest import RecordingHandler


def run(coro):
    return asyncio.run(coro)


class TestRequestBuilding:
    """Headers, URLs and query parameters."""

    def test_auth_header_and_path(self, make_client, competitions_payload):
        """Every request carries X-Auth-Token and hits the v4 root."""
        handler = RecordingHandler({'/competitions': competitions_payload})

        async def scenario():
            async with make_client(handler) as client:
                return await client.fetch_competitions()

        competitions = run(scenario())

        assert len(competitions) == 3
        request = handler.requests[0]
        assert request.method == "GET"
        assert request.url.path == "/v4/competitions"
        assert request.headers["X-Auth-Token"] == "test-key"
        assert request.headers["Accept"] == "application/json"

    def test_missing_key_sends_placeholder(self, make_client, competitions_payload):
        """No configured key still sends a request with the placeholder."""
        handler = RecordingHandler({'/competitions': competitions_payload})

        async def scenario():
            async with make_client(handler, api_key=None) as client:
                await client.fetch_competitions()

        run(scenario())
        assert handler.requests[0].headers["X-Auth-Token"] == PLACEHOLDER_API_KEY

    def test_credential_source_read_per_request(self, make_client, competitions_payload):
        """A key changed between requests is used by the next request."""
        handler = RecordingHandler({'/competitions': competitions_payload})
        keys = iter(["first-key", "second-key"])

        async def scenario():
            async with make_client(handler, api_key=None, credential_source=lambda: next(keys)) as client:
                await client.fetch_competitions()
                await client.fetch_competitions()

        run(scenario())
        assert [r.headers["X-Auth-Token"] for r in handler.requests] == ["first-key", "second-key"]

    def test_none_params_dropped(self, make_client, matches_payload):
        """Only provided filters appear in the query string."""
        handler = RecordingHandler({'/teams/57/matches': matches_payload})

        async def scenario():
            async with make_client(handler) as client:
                return await client.fetch_team_matches(57, date_from="2024-08-01")

        response = run(scenario())

        params = handler.requests[0].url.params
        assert params["limit"] == "50"
        assert params["dateFrom"] == "2024-08-01"
        assert "dateTo" not in params
        assert "status" not in params
        assert [m.id for m in response.matches] == [1, 2, 3]

    def test_competition_matches_params(self, make_client, matches_payload):
        handler = RecordingHandler({'/competitions/2021/matches': matches_payload})

        async def scenario():
            async with make_client(handler) as client:
                await client.fetch_competition_matches(2021, "2024-08-03", "2024-09-16", matchday=3)

        run(scenario())
        params = handler.requests[0].url.params
        assert params["dateFrom"] == "2024-08-03"
        assert params["dateTo"] == "2024-09-16"
        assert params["matchday"] == "3"

    def test_standings_accepts_code(self, make_client, standings_payload):
        handler = RecordingHandler({'/competitions/PL/standings': standings_payload})

        async def scenario():
            async with make_client(handler) as client:
                return await client.fetch_standings("PL")

        response = run(scenario())
        assert len(response.standings) == 3
        assert response.standings[0].table[0].team.name == "Arsenal"

    def test_scorers_limit(self, make_client, scorers_payload):
        handler = RecordingHandler({'/competitions/2021/scorers': scorers_payload})

        async def scenario():
            async with make_client(handler) as client:
                return await client.fetch_scorers(2021, limit=10)

        response = run(scenario())
        assert handler.requests[0].url.params["limit"] == "10"
        assert len(response.scorers) == 3

    def test_team_person_and_today(self, make_client, team_payload, person_payload, matches_payload):
        handler = RecordingHandler({
            '/teams/57': team_payload,
            '/persons/3': person_payload,
            '/matches': matches_payload,
        })

        async def scenario():
            async with make_client(handler) as client:
                team = await client.fetch_team(57)
                person = await client.fetch_person(3)
                today = await client.fetch_today_matches()
                return team, person, today

        team, person, today = run(scenario())
        assert team.name == "Arsenal FC"
        assert len(team.squad) == 4
        assert person.display_name == "Bukayo Saka"
        assert len(today.matches) == 3


class TestErrorMapping:
    """Non-200 statuses and transport failures."""

    @pytest.mark.parametrize("status, error_type", [
        (429, RateLimited),
        (403, Unauthorized),
        (404, NotFound),
        (500, ServerError),
        (503, ServerError),
    ])
    def test_status_classification(self, make_client, status, error_type):
        handler = RecordingHandler({'/competitions': httpx.Response(status, text="nope")})

        async def scenario():
            async with make_client(handler) as client:
                await client.fetch_competitions()

        with pytest.raises(error_type) as exc_info:
            run(scenario())
        assert isinstance(exc_info.value, FootballDataError)
        assert exc_info.value.status_code == status

    def test_invalid_json_is_decoding_error(self, make_client):
        handler = RecordingHandler({'/competitions': httpx.Response(200, text="<html>")})

        async def scenario():
            async with make_client(handler) as client:
                await client.fetch_competitions()

        with pytest.raises(DecodingError):
            run(scenario())

    def test_wrong_shape_is_decoding_error(self, make_client):
        """A 200 body missing the expected list fails to decode."""
        handler = RecordingHandler({'/competitions': {"count": 0}})

        async def scenario():
            async with make_client(handler) as client:
                await client.fetch_competitions()

        with pytest.raises(DecodingError) as exc_info:
            run(scenario())
        assert "competitions" in exc_info.value.detail

    def test_wrong_type_is_decoding_error(self, make_client):
        handler = RecordingHandler({'/competitions': {"competitions": [{"id": "2021", "name": "PL"}]}})

        async def scenario():
            async with make_client(handler) as client:
                await client.fetch_competitions()

        with pytest.raises(DecodingError):
            run(scenario())

    def test_transport_error_is_invalid_response(self, make_client):
        request = httpx.Request("GET", "https://api.football-data.org/v4/competitions")
        handler = RecordingHandler({'/competitions': httpx.ConnectError("connection refused", request=request)})

        async def scenario():
            async with make_client(handler) as client:
                await client.fetch_competitions()

        with pytest.raises(InvalidResponse):
            run(scenario())

    def test_total_timeout_is_invalid_response(self, make_client, competitions_payload):
        async def slow_handler(request):
            await asyncio.sleep(1)
            return httpx.Response(200, json=competitions_payload)

        async def scenario():
            async with make_client(slow_handler, total_timeout=0.05) as client:
                await client.fetch_competitions()

        with pytest.raises(InvalidResponse):
            run(scenario())

    def test_failures_are_tracked(self, make_client, competitions_payload):
        handler = RecordingHandler({'/competitions': competitions_payload})

        async def scenario():
            async with make_client(handler) as client:
                await client.fetch_competitions()
                with pytest.raises(NotFound):
                    await client.fetch_competition(9999)
                return client.tracker.get_session_stats()

        stats = run(scenario())
        assert stats['requests_made'] == 2
        assert stats['failed_requests'] == 1
        assert stats['failures_by_type'] == {'NotFound': 1}


class TestPacing:
    """Minimum spacing between issued requests."""

    def test_first_request_not_delayed(self, make_client, fake_clock, competitions_payload):
        handler = RecordingHandler({'/competitions': competitions_payload})

        async def scenario():
            async with make_client(handler) as client:
                await client.fetch_competitions()
                return client.last_request_time

        assert run(scenario()) == 1000.0
        assert fake_clock.sleeps == []

    def test_waits_remaining_interval(self, make_client, fake_clock, competitions_payload):
        handler = RecordingHandler({'/competitions': competitions_payload})

        async def scenario():
            async with make_client(handler) as client:
                await client.fetch_competitions()
                fake_clock.now += 4.0
                await client.fetch_competitions()

        run(scenario())
        assert fake_clock.sleeps == [pytest.approx(2.5)]

    def test_no_wait_after_interval(self, make_client, fake_clock, competitions_payload):
        handler = RecordingHandler({'/competitions': competitions_payload})

        async def scenario():
            async with make_client(handler) as client:
                await client.fetch_competitions()
                fake_clock.now += 10.0
                await client.fetch_competitions()

        run(scenario())
        assert fake_clock.sleeps == []

    def test_concurrent_requests_are_spaced(self, make_client, fake_clock, matches_payload):
        """Concurrent callers queue behind one gate instead of sharing a slot."""
        routes = {f'/teams/{team_id}/matches': matches_payload for team_id in (1, 2, 3)}
        handler = RecordingHandler(routes)
        issued = []

        async def scenario():
            async with make_client(handler) as client:
                original = client._wait_for_slot

                async def recording_wait():
                    await original()
                    issued.append(client.last_request_time)

                client._wait_for_slot = recording_wait
                await asyncio.gather(*(client.fetch_team_matches(t) for t in (1, 2, 3)))

        run(scenario())
        assert len(handler.requests) == 3
        assert sorted(issued) == [1000.0, 1006.5, 1013.0]
        assert fake_clock.sleeps == [pytest.approx(6.5), pytest.approx(6.5)]

    def test_cancelled_wait_keeps_timestamp(self, make_client, fake_clock, competitions_payload):
        """A request cancelled at the gate does not claim a slot."""
        handler = RecordingHandler({'/competitions': competitions_payload})

        async def never_wake(seconds):
            await asyncio.get_running_loop().create_future()

        async def scenario():
            async with make_client(handler, sleep=never_wake) as client:
                await client.fetch_competitions()
                first = client.last_request_time

                fake_clock.now += 1.0
                task = asyncio.create_task(client.fetch_competitions())
                await asyncio.sleep(0)
                await asyncio.sleep(0)
                task.cancel()
                with pytest.raises(asyncio.CancelledError):
                    await task
                return first, client.last_request_time

        first, after_cancel = run(scenario())
        assert after_cancel == first
        assert len(handler.requests) == 1
