"""Odds API client and payload helper tests."""

from __future__ import annotations

from types import SimpleNamespace

import httpx
import pytest
from tenacity import wait_none

from cashoutlab import config
from cashoutlab.data import odds_api_client as oac
from cashoutlab.ev.types import LegStatus

EVENT = {
    "id": "evt1",
    "home_team": "Kansas City Chiefs",
    "away_team": "Buffalo Bills",
    "bookmakers": [
        {
            "key": "draftkings",
            "title": "DraftKings",
            "markets": [
                {
                    "key": "h2h",
                    "outcomes": [
                        {"name": "Kansas City Chiefs", "price": -150},
                        {"name": "Buffalo Bills", "price": 130},
                    ],
                },
                {
                    "key": "player_pass_tds",
                    "outcomes": [
                        {"name": "Over", "description": "Josh Allen", "point": 1.5, "price": -120},
                        {"name": "Under", "description": "Josh Allen", "point": 1.5, "price": 100},
                    ],
                },
            ],
        },
        {
            "key": "fanduel",
            "title": "FanDuel",
            "markets": [
                {
                    "key": "player_pass_tds",
                    "outcomes": [
                        {"name": "Over", "description": "Patrick Mahomes", "point": 1.5, "price": -140},
                    ],
                },
            ],
        },
    ],
}


class Recorder:
    def __init__(self, status_code: int = 200, payload=None) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = status_code
        self.payload = payload if payload is not None else [EVENT]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(
            self.status_code,
            json=self.payload,
            headers={"x-requests-remaining": "499", "x-requests-used": "1"},
        )


def _client(recorder: Recorder) -> oac.OddsApiClient:
    return oac.OddsApiClient(
        api_key="test-key",
        base_url="https://odds.test/v4/",
        transport=httpx.MockTransport(recorder),
    )


def test_get_odds_requests_american_prices() -> None:
    recorder = Recorder()
    with _client(recorder) as client:
        events = client.get_odds("americanfootball_nfl", ["h2h", "spreads"], regions="us")
    assert events == [EVENT]
    request = recorder.requests[0]
    assert request.url.path == "/v4/sports/americanfootball_nfl/odds"
    assert request.url.params["apiKey"] == "test-key"
    assert request.url.params["markets"] == "h2h,spreads"
    assert request.url.params["oddsFormat"] == "american"
    assert request.url.params["regions"] == "us"
    assert "bookmakers" not in request.url.params


def test_get_odds_for_single_event() -> None:
    recorder = Recorder(payload=EVENT)
    with _client(recorder) as client:
        event = client.get_odds("americanfootball_nfl", ["player_pass_tds"], event_id="evt1", bookmakers="fanduel")
    assert event["id"] == "evt1"
    request = recorder.requests[0]
    assert request.url.path == "/v4/sports/americanfootball_nfl/events/evt1/odds"
    assert request.url.params["bookmakers"] == "fanduel"


def test_get_events() -> None:
    recorder = Recorder(payload=[{"id": "evt1"}])
    with _client(recorder) as client:
        assert client.get_events("basketball_nba") == [{"id": "evt1"}]
    assert recorder.requests[0].url.path == "/v4/sports/basketball_nba/events"
    assert recorder.requests[0].url.params["dateFormat"] == "iso"


def test_client_errors_are_not_retried() -> None:
    recorder = Recorder(status_code=401, payload={"message": "Invalid API key"})
    with _client(recorder) as client, pytest.raises(httpx.HTTPStatusError):
        client.get_events("basketball_nba")
    assert len(recorder.requests) == 1


def test_missing_api_key_raises(monkeypatch) -> None:
    monkeypatch.delenv("ODDS_API_KEY", raising=False)
    monkeypatch.setattr(config, "get_settings", lambda: SimpleNamespace(odds_api_key=""))
    with pytest.raises(RuntimeError):
        oac.OddsApiClient()


def test_filter_events_by_team_matches_teams_and_outcomes() -> None:
    other = {"home_team": "Dallas Cowboys", "away_team": "New York Giants", "bookmakers": []}
    assert oac.filter_events_by_team([EVENT, other], "chiefs") == [EVENT]
    assert oac.filter_events_by_team([EVENT, other], "GIANTS") == [other]
    assert oac.filter_events_by_team([EVENT, other], "Packers") == []


def test_filter_events_by_team_checks_outcome_names() -> None:
    event = {"home_team": "Home", "away_team": "Away", "bookmakers": EVENT["bookmakers"]}
    assert oac.filter_events_by_team([event], "buffalo") == [event]


def test_group_player_props_by_player() -> None:
    players = oac.group_player_props(EVENT, "player_pass_tds")
    assert set(players) == {"Josh Allen", "Patrick Mahomes"}
    assert [entry["name"] for entry in players["Josh Allen"]] == ["Over", "Under"]
    assert players["Patrick Mahomes"][0] == {
        "bookmaker": "FanDuel",
        "bookmaker_key": "fanduel",
        "market": "player_pass_tds",
        "name": "Over",
        "point": 1.5,
        "price": -140,
    }


def test_leg_from_outcome_labels_moneyline() -> None:
    leg = oac.leg_from_outcome({"name": "Buffalo Bills", "price": 130}, "h2h", original_odds="+120")
    assert leg.team == "Buffalo Bills (ML)"
    assert leg.status is LegStatus.PENDING
    assert leg.original_odds == "+120"
    assert leg.current_odds == 130


def test_leg_from_outcome_defaults_original_to_current() -> None:
    leg = oac.leg_from_outcome({"name": "Over", "price": -120}, "totals")
    assert leg.team == "Over (totals)"
    assert leg.original_odds == -120


def test_server_errors_are_retried(monkeypatch) -> None:
    monkeypatch.setattr(oac.OddsApiClient._request.retry, "wait", wait_none())
    recorder = Recorder(status_code=503, payload={"message": "Service unavailable"})
    with _client(recorder) as client, pytest.raises(httpx.HTTPStatusError):
        client.get_events("basketball_nba")
    assert len(recorder.requests) == 3
