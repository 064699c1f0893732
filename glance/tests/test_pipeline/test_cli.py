"""Tests for CLI commands."""

import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

from glance.cli import main
from glance.ingest.weather_fetcher import fallback_current


def _fake_cycle(snapshot) -> MagicMock:
    cycle = MagicMock()
    cycle.run = AsyncMock(return_value=snapshot)
    cycle.close = AsyncMock()
    return cycle


class TestCLI:
    def test_no_command_returns_1(self, capsys):
        result = main([])
        assert result == 1

    def test_config_show(self, tmp_path: Path, capsys):
        config_path = tmp_path / "test.yaml"
        config_path.write_text("")
        result = main(["--config", str(config_path), "config", "show"])
        assert result == 0
        captured = capsys.readouterr()
        assert "Europe/Berlin" in captured.out
        assert "precip_block_hours" in captured.out

    def test_missing_config_uses_defaults(self, tmp_path: Path, capsys):
        result = main([
            "--config", str(tmp_path / "missing.yaml"),
            "config", "get", "location.name",
        ])
        assert result == 0
        assert capsys.readouterr().out.strip() == "Berlin"

    def test_config_get(self, config_yaml_path: Path, capsys):
        result = main([
            "--config", str(config_yaml_path),
            "config", "get", "display.precip_block_hours",
        ])
        assert result == 0
        assert capsys.readouterr().out.strip() == "6"

    def test_config_get_list_index(self, config_yaml_path: Path, capsys):
        result = main([
            "--config", str(config_yaml_path), "config", "get", "display.hour_ticks.1",
        ])
        assert result == 0
        assert capsys.readouterr().out.strip() == "6"

    def test_config_get_unknown_key(self, config_yaml_path: Path, capsys):
        result = main([
            "--config", str(config_yaml_path), "config", "get", "display.nope",
        ])
        assert result == 1
        assert "Error" in capsys.readouterr().out

    def test_config_without_subcommand(self, config_yaml_path: Path, capsys):
        result = main(["--config", str(config_yaml_path), "config"])
        assert result == 1

    def test_invalid_config(self, tmp_path: Path, capsys):
        config_path = tmp_path / "bad.yaml"
        config_path.write_text("display:\n  precip_block_hours: 5\n")
        result = main(["--config", str(config_path), "config", "show"])
        assert result == 1
        assert "Invalid config" in capsys.readouterr().out

    def test_once_text(self, config_yaml_path: Path, make_snapshot, capsys):
        cycle = _fake_cycle(make_snapshot())
        with patch("glance.cli.RefreshCycle.from_config", return_value=cycle):
            result = main(["--config", str(config_yaml_path), "once"])

        assert result == 0
        assert "Now: 4° Partly Cloudy" in capsys.readouterr().out
        cycle.close.assert_awaited_once()

    def test_once_json(self, config_yaml_path: Path, make_snapshot, capsys):
        cycle = _fake_cycle(make_snapshot())
        with patch("glance.cli.RefreshCycle.from_config", return_value=cycle):
            result = main(["--config", str(config_yaml_path), "once", "--json"])

        assert result == 0
        data = json.loads(capsys.readouterr().out)
        assert data["current"]["temperature"] == 3.6

    def test_once_degraded_returns_1(self, config_yaml_path: Path, make_snapshot, berlin, capsys):
        snapshot = make_snapshot(current=fallback_current(berlin(2026, 2, 10, 12)))
        with patch("glance.cli.RefreshCycle.from_config", return_value=_fake_cycle(snapshot)):
            result = main(["--config", str(config_yaml_path), "once"])

        assert result == 1
        assert "unavailable" in capsys.readouterr().out
