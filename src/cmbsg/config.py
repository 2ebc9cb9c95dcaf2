"""Config loading and validation for the Coupe Mario Brutus scheduler."""

from datetime import date, time
from pathlib import Path

import yaml

from cmbsg.formats import format_fit_warnings
from cmbsg.models import GenerationConfig, Team, TournamentFormat


def parse_time(s: str) -> time:
    """Parse time strings like '15:00', '3pm', '5:30pm'."""
    s = s.strip()
    s_lower = s.lower()

    is_pm = s_lower.endswith("pm")
    is_am = s_lower.endswith("am")

    s_clean = s_lower
    if is_pm or is_am:
        s_clean = s_clean[:-2].strip()

    if ":" in s_clean:
        parts = s_clean.split(":")
        h = int(parts[0])
        m = int(parts[1])
    elif "h" in s_clean:
        # French style: 15h, 15h30
        h_str, _, m_str = s_clean.partition("h")
        h = int(h_str)
        m = int(m_str) if m_str else 0
    else:
        h = int(s_clean)
        m = 0

    if is_pm and h < 12:
        h += 12
    elif is_am and h == 12:
        h = 0

    return time(h, m)


def parse_date(s: str) -> date:
    """Parse date string YYYY-MM-DD."""
    parts = s.strip().split("-")
    return date(int(parts[0]), int(parts[1]), int(parts[2]))


def _time_value(v) -> time:
    # Unquoted 15:00 is a base-60 integer (900) to YAML 1.1
    if isinstance(v, int):
        h, m = divmod(v, 60)
        return time(h, m)
    return parse_time(str(v))


def _load_teams(raw_teams) -> list[Team]:
    if isinstance(raw_teams, int):
        # teams: 8 -> T1..T8
        return [Team(id=f"T{i}", name=f"Équipe {i}")
                for i in range(1, raw_teams + 1)]

    teams = []
    for entry in raw_teams or []:
        if isinstance(entry, dict):
            team_id = str(entry.get("id", entry.get("name", "")))
            teams.append(Team(
                id=team_id,
                name=str(entry.get("name", team_id)),
                group=str(entry.get("group", "")),
                players=tuple(str(p) for p in entry.get("players", [])),
            ))
        else:
            teams.append(Team(id=str(entry), name=str(entry)))
    return teams


def load_config(path: str | Path) -> dict:
    """Load and validate config YAML, returning structured data.

    Returns dict with:
    - tournament: {name, edition}
    - generation: GenerationConfig (None if the config is unusable)
    - teams: dict[id -> Team]
    - errors: list of problems that prevent generation
    - warnings: list of advisory messages
    """
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    errors = []
    warnings = []

    t = raw.get("tournament", {})
    tournament = {
        "name": t.get("name", ""),
        "edition": t.get("edition", ""),
    }

    teams = _load_teams(raw.get("teams", []))
    seen: set[str] = set()
    for team in teams:
        if team.id in seen:
            errors.append(f"Duplicate team id: {team.id}")
        seen.add(team.id)
    if len(teams) < 2:
        errors.append(f"At least 2 teams are needed, found {len(teams)}")

    fmt = None
    try:
        fmt = TournamentFormat.from_str(str(t.get("format", "league")))
    except ValueError as e:
        errors.append(str(e))

    start_date = end_date = None
    missing = [key for key in ("start_date", "end_date") if t.get(key) is None]
    for key in missing:
        errors.append(f"Missing tournament.{key}")
    if not missing:
        start_date = parse_date(str(t["start_date"]))
        end_date = parse_date(str(t["end_date"]))
        if end_date < start_date:
            errors.append(f"End date {end_date} is before start date {start_date}")

    groups = t.get("groups", {}) or {}
    generation = None
    if fmt is not None and start_date is not None:
        generation = GenerationConfig(
            teams=teams,
            format=fmt,
            start_date=start_date,
            end_date=end_date,
            venues=[str(v) for v in t.get("venues", [])],
            kickoff_times=[_time_value(v) for v in t.get("kickoff_times", [])],
            matches_per_day=int(t.get("matches_per_day", 1)),
            journeys=t.get("journeys"),
            group_count=groups.get("count"),
            teams_per_group=groups.get("teams_per_group"),
            match_id_prefix=str(t.get("match_id_prefix", "match")),
        )
        warnings.extend(format_fit_warnings(fmt, len(teams), groups.get("count")))
        if fmt is TournamentFormat.LEAGUE and groups:
            warnings.append("groups are ignored for the league format")

    if errors:
        print("Config validation errors:")
        for e in errors:
            print(f"  {e}")

    return {
        "tournament": tournament,
        "generation": generation,
        "teams": {team.id: team for team in teams},
        "errors": errors,
        "warnings": warnings,
    }
