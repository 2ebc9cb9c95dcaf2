"""Statistics and balance reporting for generated schedules."""

from collections import defaultdict

from cmbsg.models import ScheduledMatch


def compute_stats(matches: list[ScheduledMatch]) -> dict:
    """Compute statistics for a schedule.

    Placeholder (knockout) sides are counted as placeholder matches, not
    as teams.
    """
    home_counts = defaultdict(int)
    away_counts = defaultdict(int)
    total_games = defaultdict(int)
    matchup_counts = defaultdict(lambda: defaultdict(int))  # team -> opponent -> count
    venue_counts = defaultdict(int)
    day_counts = defaultdict(int)
    round_counts = defaultdict(int)
    team_names: dict[str, str] = {}
    placeholder_matches = 0

    for m in matches:
        venue_counts[m.venue] += 1
        day_counts[m.date] += 1
        round_counts[m.round_name] += 1

        if m.fixture.is_placeholder:
            placeholder_matches += 1
            continue

        h = m.home.id
        a = m.away.id
        team_names[h] = m.home.name
        team_names[a] = m.away.name
        home_counts[h] += 1
        away_counts[a] += 1
        total_games[h] += 1
        total_games[a] += 1
        matchup_counts[h][a] += 1
        matchup_counts[a][h] += 1

    dates = sorted(day_counts)
    return {
        "all_teams": sorted(team_names),
        "team_names": team_names,
        "home_counts": dict(home_counts),
        "away_counts": dict(away_counts),
        "total_games": dict(total_games),
        "matchup_counts": {t: dict(c) for t, c in matchup_counts.items()},
        "venue_counts": dict(venue_counts),
        "day_counts": dict(day_counts),
        "round_counts": dict(round_counts),
        "placeholder_matches": placeholder_matches,
        "total_matches": len(matches),
        "first_date": dates[0] if dates else None,
        "last_date": dates[-1] if dates else None,
    }


def format_stats_report(stats: dict) -> str:
    """Format statistics into a human-readable report."""
    lines = []
    lines.append("=" * 70)
    lines.append("SCHEDULE STATISTICS")
    lines.append("=" * 70)

    lines.append(f"Matches: {stats['total_matches']} "
                 f"({stats['placeholder_matches']} knockout placeholders)")
    if stats["first_date"] is not None:
        lines.append(f"From {stats['first_date']} to {stats['last_date']}")

    all_teams = stats["all_teams"]

    lines.append("\n--- HOME/AWAY BALANCE ---")
    lines.append(f"{'Team':<10} {'Home':>5} {'Away':>5} {'Total':>5} {'Diff':>5}")
    lines.append("-" * 34)
    for t in all_teams:
        h = stats["home_counts"].get(t, 0)
        a = stats["away_counts"].get(t, 0)
        diff = h - a
        flag = " ***" if abs(diff) > 1 else ""
        lines.append(f"{t:<10} {h:>5} {a:>5} {stats['total_games'].get(t, 0):>5} "
                     f"{diff:>+5}{flag}")

    if all_teams:
        lines.append("\n--- MATCHUP MATRIX ---")
        header = f"{'':>10}"
        for t in all_teams:
            header += f" {t[:5]:>5}"
        lines.append(header)
        lines.append("-" * (10 + 6 * len(all_teams)))
        for t1 in all_teams:
            row = f"{t1:>10}"
            for t2 in all_teams:
                if t1 == t2:
                    row += "     -"
                else:
                    c = stats["matchup_counts"].get(t1, {}).get(t2, 0)
                    row += f" {c:>5}"
            lines.append(row)

    lines.append("\n--- MATCHES PER VENUE ---")
    for venue, count in sorted(stats["venue_counts"].items()):
        lines.append(f"  {venue:<30} {count:>4}")

    lines.append("\n--- MATCHES PER ROUND ---")
    for name, count in stats["round_counts"].items():
        lines.append(f"  {name:<30} {count:>4}")

    return "\n".join(lines)
