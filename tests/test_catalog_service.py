"""
Tests for catalog ordering and filtering helpers.
"""

import pytest

from matchday.config import FREE_TIER_CODES
from matchday.models import CompetitionResponse, ScorersResponse, StandingsResponse, Team
from matchday.services import (
    filter_free_tier,
    matches_for_competition,
    nationality_breakdown,
    sort_scorers,
    sort_teams,
    split_standings,
)


class TestFreeTier:

    def test_only_free_plan_codes(self, competitions_payload):
        competitions = CompetitionResponse.from_dict(competitions_payload).competitions

        kept = filter_free_tier(competitions, FREE_TIER_CODES)

        assert [c.code for c in kept] == ["PL", "CL"]

    def test_missing_code_excluded(self):
        competitions = CompetitionResponse.from_dict({"competitions": [{"id": 1, "name": "No code"}]}).competitions
        assert filter_free_tier(competitions, FREE_TIER_CODES) == []

    def test_free_tier_has_twelve_codes(self):
        assert len(FREE_TIER_CODES) == 12
        assert FREE_TIER_CODES[0] == "PL"


class TestScorers:

    @pytest.fixture
    def scorers(self, scorers_payload):
        return ScorersResponse.from_dict(scorers_payload).scorers

    def test_goals_descending(self, scorers):
        assert [s.player.name for s in sort_scorers(scorers)] == [
            "Winger Two", "Striker One", "Playmaker Three"
        ]

    def test_assists_skips_players_without_assists(self, scorers):
        ranked = sort_scorers(scorers, by_assists=True)
        assert [s.player.name for s in ranked] == ["Playmaker Three", "Striker One"]

    def test_empty(self):
        assert sort_scorers([]) == []
        assert sort_scorers([], by_assists=True) == []


class TestTeamsAndStandings:

    def test_sort_teams_by_name(self):
        teams = [Team(id=2, name="Chelsea FC"), Team(id=1, name="Arsenal FC"), Team(id=3, name="Brentford FC")]
        assert [t.id for t in sort_teams(teams)] == [1, 3, 2]

    def test_league_has_no_group_tables(self, standings_payload):
        overall, groups = split_standings(StandingsResponse.from_dict(standings_payload).standings)

        assert [g.type for g in overall] == ["TOTAL", "HOME", "AWAY"]
        assert groups == []

    def test_cup_group_tables(self):
        response = StandingsResponse.from_dict({"standings": [
            {"stage": "GROUP_STAGE", "type": "TOTAL", "group": "GROUP_A", "table": []},
            {"stage": "GROUP_STAGE", "type": "TOTAL", "group": "GROUP_B", "table": []},
        ]})

        overall, groups = split_standings(response.standings)

        assert overall == []
        assert [g.group for g in groups] == ["GROUP_A", "GROUP_B"]


class TestSquadAndMatches:

    def test_nationality_breakdown(self, team_payload):
        squad = Team.from_dict(team_payload).squad

        assert nationality_breakdown(squad) == [("England", 2), ("Spain", 1), ("France", 1)]

    def test_missing_nationality_grouped(self):
        from matchday.models import Player

        squad = [Player(id=1), Player(id=2, nationality="Brazil"), Player(id=3)]
        assert nationality_breakdown(squad, other_label="Other") == [("Other", 2), ("Brazil", 1)]

    def test_matches_for_competition(self, make_match):
        matches = [make_match(1, competition_id=2021), make_match(2, competition_id=2001)]
        assert [m.id for m in matches_for_competition(matches, 2001)] == [2]
