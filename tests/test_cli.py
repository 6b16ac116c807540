"""Command-line evaluation tests."""

from __future__ import annotations

import json

from cashoutlab import cli


def _write(tmp_path, body: dict):
    path = tmp_path / "bet.json"
    path.write_text(json.dumps(body))
    return path


def test_cli_prints_result(tmp_path, capsys) -> None:
    path = _write(
        tmp_path,
        {
            "betType": "Single",
            "stake": 100,
            "cashoutOffer": 50,
            "legs": [{"team": "Favorite", "status": "Pending", "originalOdds": -150, "currentOdds": -150}],
        },
    )
    assert cli.main([str(path)]) == 0
    result = json.loads(capsys.readouterr().out)
    assert result["potentialPayout"] == 167.0
    assert result["expectedValue"] == 0.2
    assert result["recommendation"].startswith("Cash out")


def test_cli_reports_structured_error(tmp_path, capsys) -> None:
    path = _write(
        tmp_path,
        {
            "stake": 100,
            "cashoutOffer": 50,
            "legs": [{"team": "Underdog", "status": "Pending", "originalOdds": "+abc", "currentOdds": 200}],
        },
    )
    assert cli.main([str(path)]) == 1
    error = json.loads(capsys.readouterr().err)
    assert error["error"] == "InvalidOddsFormat"


def test_cli_reports_missing_field(tmp_path, capsys) -> None:
    path = _write(tmp_path, {"stake": 100, "cashoutOffer": 5})
    assert cli.main([str(path)]) == 2
    error = json.loads(capsys.readouterr().err)
    assert error == {"error": "MissingRequiredField", "message": "Missing required field: legs"}


def test_cli_rejects_boolean_stake(tmp_path, capsys) -> None:
    path = _write(
        tmp_path,
        {"stake": True, "cashoutOffer": 5, "legs": [{"team": "A", "status": "Hit / Won", "originalOdds": 100}]},
    )
    assert cli.main([str(path)]) == 2
    error = json.loads(capsys.readouterr().err)
    assert error["error"] == "InvalidNumericInput"
    assert "pydantic" not in error["message"]
