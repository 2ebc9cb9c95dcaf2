"""Standalone verifier for generated schedules.

Validates a schedule by reading a schedule CSV + config.yaml.
Usage: cmbsg-verify <schedule.csv> [config.yaml]
"""

import csv
import sys
from datetime import datetime
from pathlib import Path

from cmbsg.config import load_config, parse_date, parse_time
from cmbsg.constraints import validate_schedule, format_validation_report
from cmbsg.models import (
    PLACEHOLDER_LABEL, Fixture, Leg, PlaceholderTeam, ScheduledMatch, Team,
)
from cmbsg.stats import compute_stats, format_stats_report


def parse_csv_schedule(csv_path: str | Path, config: dict) -> list[ScheduledMatch]:
    """Parse a schedule CSV (see output.format_csv) back into matches.

    Team names are resolved against the config's teams; unknown names
    become ad-hoc teams so the validator can still report on them.
    """
    by_name = {t.name: t for t in config["teams"].values()}
    matches = []

    with open(csv_path, encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            match_id = row.get("ID", "").strip()
            date_str = row.get("Date", "").strip()
            if not match_id or not date_str:
                continue

            def _side(name: str, side: str):
                name = name.strip()
                if name == PLACEHOLDER_LABEL:
                    return PlaceholderTeam(id=f"tbd-{match_id}-{side}")
                return by_name.get(name) or Team(id=name, name=name)

            leg_str = row.get("Leg", "").strip()
            fixture = Fixture(
                home=_side(row.get("Home", ""), "home"),
                away=_side(row.get("Away", ""), "away"),
                round_label=row.get("Round", "").strip(),
                group=row.get("Group", "").strip(),
                leg=Leg(leg_str) if leg_str else None,
            )
            d = parse_date(date_str)
            t = parse_time(row.get("Time", "15:00"))
            matches.append(ScheduledMatch(
                id=match_id,
                fixture=fixture,
                kickoff=datetime.combine(d, t),
                venue=row.get("Venue", "").strip(),
                status=row.get("Status", "upcoming").strip() or "upcoming",
            ))

    return matches


def main():
    if len(sys.argv) < 2:
        print("Usage: cmbsg-verify <schedule.csv> [config.yaml]")
        print("  Validates a schedule CSV against the config.")
        sys.exit(1)

    csv_path = sys.argv[1]
    config_path = sys.argv[2] if len(sys.argv) > 2 else "config.yaml"

    if not Path(csv_path).exists():
        print(f"Error: {csv_path} not found")
        sys.exit(1)
    if not Path(config_path).exists():
        print(f"Error: {config_path} not found")
        sys.exit(1)

    print(f"Loading config from {config_path}...")
    config = load_config(config_path)
    if config["generation"] is None:
        sys.exit(1)

    print(f"Parsing schedule from {csv_path}...")
    matches = parse_csv_schedule(csv_path, config)
    print(f"Loaded {len(matches)} matches")

    if not matches:
        print("No matches found in CSV. Check the format.")
        sys.exit(1)

    result = validate_schedule(matches, config["generation"])
    print(format_validation_report(result))
    print("\n" + format_stats_report(compute_stats(matches)))
    sys.exit(0 if result["valid"] else 1)


if __name__ == "__main__":
    main()
