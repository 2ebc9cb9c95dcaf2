"""Constraint validation for generated schedules.

Can validate either the in-memory match list or a re-imported CSV.
"""

from collections import defaultdict
from typing import Optional

from cmbsg.models import GenerationConfig, ScheduledMatch


def validate_schedule(matches: list[ScheduledMatch], config: GenerationConfig,
                      expected: Optional[int] = None) -> dict:
    """Validate a schedule against the generation config.

    Returns dict with:
    - valid: bool (True if no hard constraint violations)
    - errors: list of hard constraint violations
    - warnings: list of soft issues (shortfall, collisions)
    """
    errors = []
    warnings = []

    if expected is not None and len(matches) < expected:
        warnings.append(
            f"SHORTFALL: {len(matches)} of {expected} fixtures scheduled "
            f"between {config.start_date} and {config.end_date}"
        )

    per_day: dict = defaultdict(int)
    team_days: dict = defaultdict(lambda: defaultdict(int))  # team -> date -> count
    venue_slots: dict = defaultdict(int)  # (date, time, venue) -> count
    seen_ids: set[str] = set()
    configured_times = set(config.kickoff_times)
    previous = None

    for m in matches:
        label = f"{m.id} ({m.home.name} vs {m.away.name})"

        if m.id in seen_ids:
            errors.append(f"Duplicate match id: {m.id}")
        seen_ids.add(m.id)

        if not m.fixture.is_placeholder and m.home.id == m.away.id:
            errors.append(f"{label}: team plays itself")

        if not config.start_date <= m.date <= config.end_date:
            errors.append(
                f"{label}: {m.date} outside {config.start_date}..{config.end_date}"
            )

        if previous is not None and m.kickoff < previous.kickoff:
            message = (
                f"{label}: kicks off {m.kickoff:%Y-%m-%d %H:%M} before "
                f"{previous.id} ({previous.kickoff:%Y-%m-%d %H:%M})"
            )
            # More matches than kickoff times reuses the first time that day
            if m.date < previous.date:
                errors.append(message)
            else:
                warnings.append(message)
        previous = m

        per_day[m.date] += 1

        for team in (m.home, m.away):
            if not team.is_placeholder:
                team_days[team.id][m.date] += 1

        venue_slots[(m.date, m.start_time, m.venue)] += 1

        if m.venue not in config.venues:
            warnings.append(f"{label}: venue {m.venue!r} not configured")
        if m.start_time not in configured_times:
            warnings.append(
                f"{label}: kickoff {m.start_time:%H:%M} not a configured time"
            )

    for d in sorted(per_day):
        if per_day[d] > config.matches_per_day:
            errors.append(
                f"{d}: {per_day[d]} matches exceed {config.matches_per_day} per day"
            )

    for team_id in sorted(team_days):
        for d, count in sorted(team_days[team_id].items()):
            if count > 1:
                warnings.append(f"{team_id} plays {count} matches on {d}")

    for (d, t, venue), count in sorted(venue_slots.items()):
        if count > 1:
            warnings.append(
                f"{venue} hosts {count} matches at {t:%H:%M} on {d}"
            )

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "warnings": warnings,
    }


def format_validation_report(result: dict) -> str:
    """Format validation results as text."""
    lines = []
    lines.append("=" * 60)
    lines.append("SCHEDULE VALIDATION REPORT")
    lines.append("=" * 60)

    if result["valid"]:
        lines.append("\nRESULT: VALID (no hard constraint violations)")
    else:
        lines.append(f"\nRESULT: INVALID ({len(result['errors'])} violations)")

    if result["errors"]:
        lines.append(f"\n--- ERRORS ({len(result['errors'])}) ---")
        for e in result["errors"]:
            lines.append(f"  ERROR: {e}")

    if result["warnings"]:
        lines.append(f"\n--- WARNINGS ({len(result['warnings'])}) ---")
        for w in result["warnings"]:
            lines.append(f"  WARN: {w}")

    return "\n".join(lines)
