"""Catalog of market keys accepted by The Odds API."""

from __future__ import annotations

from typing import Final, List

DEFAULT_MARKET: Final[str] = "h2h"

STANDARD_MARKETS: Final[frozenset[str]] = frozenset(
    {
        "h2h",
        "spreads",
        "totals",
        "outrights",
        "alternate_spreads",
        "alternate_totals",
        "btts",
        "draw_no_bet",
        "h2h_3_way",
        "team_totals",
        "alternate_team_totals",
    }
)

BASKETBALL_PROP_MARKETS: Final[frozenset[str]] = frozenset(
    {
        "player_points",
        "player_rebounds",
        "player_assists",
        "player_threes",
        "player_blocks",
        "player_steals",
        "player_blocks_steals",
        "player_turnovers",
        "player_points_rebounds_assists",
        "player_points_rebounds",
        "player_points_assists",
        "player_rebounds_assists",
        "player_double_double",
        "player_triple_double",
        "player_points_alternate",
        "player_rebounds_alternate",
        "player_assists_alternate",
        "player_blocks_alternate",
        "player_steals_alternate",
        "player_turnovers_alternate",
        "player_threes_alternate",
        "player_points_assists_alternate",
        "player_points_rebounds_alternate",
        "player_rebounds_assists_alternate",
        "player_points_rebounds_assists_alternate",
    }
)

BASEBALL_PROP_MARKETS: Final[frozenset[str]] = frozenset(
    {
        "batter_home_runs",
        "batter_hits",
        "batter_total_bases",
        "batter_rbis",
        "batter_runs_scored",
        "batter_hits_runs_rbis",
        "batter_singles",
        "batter_doubles",
        "batter_triples",
        "batter_walks",
        "batter_strikeouts",
        "batter_stolen_bases",
        "pitcher_strikeouts",
        "pitcher_record_a_win",
        "pitcher_hits_allowed",
        "pitcher_walks",
        "pitcher_earned_runs",
        "pitcher_outs",
        "batter_total_bases_alternate",
        "batter_home_runs_alternate",
        "batter_hits_alternate",
        "batter_rbis_alternate",
        "pitcher_hits_allowed_alternate",
        "pitcher_walks_alternate",
        "pitcher_strikeouts_alternate",
    }
)

VALID_MARKETS: Final[frozenset[str]] = STANDARD_MARKETS | BASKETBALL_PROP_MARKETS | BASEBALL_PROP_MARKETS


def sanitize_markets(raw: str | None) -> List[str]:
    """Turn a comma-separated market list into known market keys.

    Blank input defaults to moneyline. Unknown keys are dropped, so the result
    may be empty; callers treat that as a bad request.
    """

    if raw is None or not raw.strip():
        return [DEFAULT_MARKET]
    markets: List[str] = []
    for candidate in raw.split(","):
        key = candidate.strip()
        if key in VALID_MARKETS and key not in markets:
            markets.append(key)
    return markets
