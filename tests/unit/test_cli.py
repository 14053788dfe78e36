"""Test the protrade CLI."""

import json

import pytest
from click.testing import CliRunner

from protrade_analytics.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def journal(dataset_file):
    trades = [
        {
            "id": f"t{i}",
            "date": f"2024-03-0{i + 1}",
            "time": "09:30",
            "symbol": "EURUSD",
            "assetCategory": "Forex",
            "strategy": "Breakout",
            "session": "London",
            "type": "buy",
            "entry": 1.085,
            "exit": 1.09,
            "sl": 1.0825,
            "tp": 1.09,
            "riskPercent": 1,
            "rrPlanned": 2,
            "rrActual": 2,
            "profit": profit,
            "status": "TP" if profit > 0 else "SL",
            "emotionBefore": "Focused",
            "emotionAfter": "Calm",
        }
        for i, profit in enumerate([100, -50, 100, 100, -50, 100])
    ]
    return dataset_file(
        trades,
        sessions=[{"name": "London", "initialCapital": 5000}],
        strategies=[{"name": "Breakout"}],
    )


def _invoke(runner, *args):
    return runner.invoke(main, ["--log-level", "WARNING", *args])


class TestQuantCommand:
    def test_outputs_metrics(self, runner, journal):
        result = _invoke(runner, "quant", str(journal))
        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["overall_grade"] in {"A", "B", "C", "D", "F"}
        assert 0 <= payload["composite_score"] <= 100
        assert payload["session_performance_stability"]["session_breakdown"][0]["session"] == "London"

    def test_compact_output_is_one_line(self, runner, journal):
        result = _invoke(runner, "--compact", "quant", str(journal))
        assert result.exit_code == 0, result.output
        assert len(result.stdout.strip().splitlines()) == 1

    def test_missing_dataset(self, runner, tmp_path):
        result = _invoke(runner, "quant", str(tmp_path / "missing.json"))
        assert result.exit_code == 1
        assert "Cannot read dataset" in result.output


class TestProfileCommand:
    def test_outputs_profile(self, runner, journal):
        result = _invoke(runner, "profile", str(journal), "--trader-id", "alice")
        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["trader_id"] == "alice"
        assert len(payload["improvement_plan"]["daily_routines"]) == 4

    def test_too_few_trades(self, runner, dataset_file):
        path = dataset_file([{"profit": 10}, {"profit": -5}])
        result = _invoke(runner, "profile", str(path))
        assert result.exit_code == 2
        assert "At least 5 trades required, got 2" in result.output

    def test_min_trades_from_config(self, runner, dataset_file, tmp_path):
        config = tmp_path / "protrade.toml"
        config.write_text("[profile]\nmin_trades = 2\n")
        path = dataset_file([{"profit": 10}, {"profit": -5}])
        result = runner.invoke(main, ["--config", str(config), "--log-level", "WARNING", "profile", str(path)])
        assert result.exit_code == 0, result.output


class TestDashboardCommand:
    def test_outputs_dashboard(self, runner, journal):
        result = _invoke(runner, "dashboard", str(journal), "--starting-balance", "2000")
        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert set(payload) == {
            "headline", "equity_curve", "hourly", "weekday", "daily",
            "breakdowns", "sessions", "mindset", "decision_quality",
        }
        assert payload["headline"]["total_trades"] == 6
        assert payload["equity_curve"][-1]["balance"] == 2300.0
        assert payload["sessions"][0]["equity"] == 5300.0
        assert set(payload["breakdowns"]) == {"session", "strategy", "asset_category"}
        assert len(payload["hourly"]) == 24
