"""Tests for config.py — parsing and loading."""

from datetime import date, time
from pathlib import Path

from cmbsg.config import parse_time, parse_date, load_config
from cmbsg.models import TournamentFormat

ROOT = Path(__file__).resolve().parent.parent


class TestParseTime:
    def test_24hour(self):
        assert parse_time("15:00") == time(15, 0)
        assert parse_time("9:30") == time(9, 30)

    def test_am_pm(self):
        assert parse_time("3pm") == time(15, 0)
        assert parse_time("5:30pm") == time(17, 30)
        assert parse_time("12am") == time(0, 0)
        assert parse_time("12pm") == time(12, 0)

    def test_french_style(self):
        assert parse_time("15h") == time(15, 0)
        assert parse_time("20h30") == time(20, 30)

    def test_whitespace_and_case(self):
        assert parse_time("  6PM ") == time(18, 0)


class TestParseDate:
    def test_basic(self):
        assert parse_date("2026-06-01") == date(2026, 6, 1)

    def test_whitespace(self):
        assert parse_date(" 2026-12-31 ") == date(2026, 12, 31)


def _write(tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadConfig:
    def test_loads_sample_config(self):
        config = load_config(ROOT / "config.yaml")
        gen = config["generation"]
        assert config["errors"] == []
        assert config["tournament"]["name"] == "Coupe Mario Brutus"
        assert gen.format is TournamentFormat.WORLD_CUP
        assert gen.team_count == 8
        assert gen.group_count == 2
        assert gen.kickoff_times == [time(15, 0), time(18, 0)]
        assert gen.venues == ["Stade Municipal", "Terrain Central"]
        assert "ASB" in config["teams"]
        assert config["teams"]["ASB"].players == ("Mario Brutus", "Luigi Brutus")

    def test_team_count_shorthand(self, tmp_path):
        path = _write(tmp_path, """
tournament:
  format: league
  start_date: 2026-06-01
  end_date: 2026-06-30
teams: 6
""")
        config = load_config(path)
        assert list(config["teams"]) == ["T1", "T2", "T3", "T4", "T5", "T6"]
        assert config["generation"].format is TournamentFormat.LEAGUE

    def test_plain_team_names(self, tmp_path):
        path = _write(tmp_path, """
tournament:
  format: league
  start_date: 2026-06-01
  end_date: 2026-06-30
teams: [Lions, Tigres]
""")
        config = load_config(path)
        assert config["teams"]["Lions"].name == "Lions"

    def test_unquoted_kickoff_time(self, tmp_path):
        path = _write(tmp_path, """
tournament:
  format: league
  start_date: 2026-06-01
  end_date: 2026-06-30
  kickoff_times: [15:00, "18:30"]
teams: 4
""")
        gen = load_config(path)["generation"]
        assert gen.kickoff_times == [time(15, 0), time(18, 30)]

    def test_defaults(self, tmp_path):
        path = _write(tmp_path, """
tournament:
  format: league
  start_date: 2026-06-01
  end_date: 2026-06-30
teams: 4
""")
        gen = load_config(path)["generation"]
        assert gen.venues == ["Stade Principal"]
        assert gen.kickoff_times == [time(15, 0)]
        assert gen.matches_per_day == 1
        assert gen.journeys is None

    def test_errors_collected(self, tmp_path, capsys):
        path = _write(tmp_path, """
tournament:
  format: league
  start_date: 2026-06-30
  end_date: 2026-06-01
teams:
  - {id: A, name: Alpha}
  - {id: A, name: Again}
""")
        config = load_config(path)
        assert any("Duplicate team id" in e for e in config["errors"])
        assert any("before start date" in e for e in config["errors"])
        assert "Config validation errors" in capsys.readouterr().out

    def test_too_few_teams(self, tmp_path):
        path = _write(tmp_path, """
tournament:
  format: world_cup
  start_date: 2026-06-01
  end_date: 2026-06-30
teams: 1
""")
        config = load_config(path)
        assert any("At least 2 teams" in e for e in config["errors"])

    def test_unknown_format(self, tmp_path):
        path = _write(tmp_path, """
tournament:
  format: swiss
  start_date: 2026-06-01
  end_date: 2026-06-30
teams: 4
""")
        config = load_config(path)
        assert config["generation"] is None
        assert any("swiss" in e for e in config["errors"])

    def test_fit_warnings(self, tmp_path):
        path = _write(tmp_path, """
tournament:
  format: champions_league
  start_date: 2026-06-01
  end_date: 2026-06-30
teams: 8
""")
        config = load_config(path)
        assert config["errors"] == []
        assert len(config["warnings"]) == 1

    def test_missing_dates(self, tmp_path, capsys):
        path = _write(tmp_path, """
tournament:
  format: league
  start_date: 2026-06-01
teams: 4
""")
        config = load_config(path)
        assert config["generation"] is None
        assert config["errors"] == ["Missing tournament.end_date"]
        assert "Missing tournament.end_date" in capsys.readouterr().out

    def test_group_count_advice(self, tmp_path):
        text = """
tournament:
  format: world_cup
  start_date: 2026-06-01
  end_date: 2026-07-31
{groups}
teams: 20
"""
        advised = load_config(_write(tmp_path, text.format(groups="")))
        assert any("6 groups of 4 are recommended" in w
                   for w in advised["warnings"])
        explicit = load_config(_write(tmp_path, text.format(
            groups="  groups: {count: 5}")))
        assert explicit["warnings"] == []
        assert explicit["generation"].group_count == 5
