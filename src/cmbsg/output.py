"""Output formatters for generated schedules."""

import csv
from datetime import date
from io import StringIO
from pathlib import Path

from cmbsg.models import ScheduledMatch

CSV_COLUMNS = ["ID", "Date", "Time", "Venue", "Round", "Group", "Leg",
               "Home", "Away", "Status"]


def format_schedule(matches: list[ScheduledMatch],
                    title: str = "COUPE MARIO BRUTUS") -> str:
    """Format schedule as human-readable text, organized by day."""
    lines = []
    lines.append("=" * 80)
    lines.append(f"{title.upper()} SCHEDULE")
    lines.append("=" * 80)

    by_date: dict[date, list[ScheduledMatch]] = {}
    for m in matches:
        by_date.setdefault(m.date, []).append(m)

    for d in sorted(by_date):
        lines.append(f"\n  {d.strftime('%A')} {d.strftime('%d/%m/%Y')}")
        for m in sorted(by_date[d], key=lambda x: x.start_time):
            lines.append(
                f"    {m.start_time.strftime('%H:%M')}  {m.home.name:<18} vs "
                f"{m.away.name:<18} @ {m.venue:<18} {m.round_name}"
                + (f" [{m.group}]" if m.group else "")
            )

    lines.append("\n" + "=" * 80)
    lines.append("PER-TEAM SCHEDULES")
    lines.append("=" * 80)

    by_team: dict[str, list[ScheduledMatch]] = {}
    names: dict[str, str] = {}
    for m in matches:
        for team in (m.home, m.away):
            if team.is_placeholder:
                continue
            by_team.setdefault(team.id, []).append(m)
            names[team.id] = team.name

    for team_id in sorted(by_team):
        lines.append(f"\n{names[team_id]} ({team_id}):")
        for i, m in enumerate(sorted(by_team[team_id], key=lambda x: x.kickoff), 1):
            is_home = m.home.id == team_id
            opponent = m.away if is_home else m.home
            where = "vs" if is_home else "@ "
            lines.append(
                f"  {i:>2}. {m.kickoff.strftime('%d/%m %H:%M')}  {where} "
                f"{opponent.name:<18} ({m.venue})"
            )

    return "\n".join(lines)


def format_csv(matches: list[ScheduledMatch]) -> str:
    """Format schedule as CSV, one row per match in schedule order."""
    output = StringIO()
    writer = csv.writer(output)
    writer.writerow(CSV_COLUMNS)

    for m in matches:
        writer.writerow([
            m.id,
            m.date.isoformat(),
            m.start_time.strftime("%H:%M"),
            m.venue,
            m.fixture.round_label,
            m.group,
            m.leg.value if m.leg else "",
            m.home.name,
            m.away.name,
            m.status,
        ])

    return output.getvalue()


def write_schedule(matches: list[ScheduledMatch], output_prefix: str = "output",
                   title: str = "Coupe Mario Brutus") -> list[Path]:
    """Write all output files into {output_prefix}/ directory."""
    out_dir = Path(output_prefix)
    out_dir.mkdir(parents=True, exist_ok=True)

    schedule_path = out_dir / "schedule.txt"
    schedule_path.write_text(format_schedule(matches, title=title),
                             encoding="utf-8")
    print(f"Written: {schedule_path}")

    csv_path = out_dir / "schedule.csv"
    csv_path.write_text(format_csv(matches), encoding="utf-8")
    print(f"Written: {csv_path}")

    return [schedule_path, csv_path]
