"""Fixture generation strategies for the three tournament formats.

Each strategy turns a team list into an ordered, unscheduled list of
Fixtures. Nothing here knows about dates or venues; the calendar allocator
in scheduler.py places the fixtures in the order they are emitted.

- league: round-robin journeys, home-and-away by default
- world_cup: balanced groups (single round-robin) + knockout placeholders
- champions_league: balanced groups (home-and-away) + two-legged knockouts

In champions-league mode both semifinals are separate two-legged ties
("Demi-finale 1" and "Demi-finale 2", four fixtures), mirroring the
single-leg bracket, rather than a single "Demi-finale" home-and-away pair.
"""

import math
import random
from dataclasses import dataclass, field, replace
from string import ascii_uppercase
from typing import Optional

from cmbsg.models import (
    Fixture, GenerationConfig, Leg, PlaceholderTeam, Team, TournamentFormat,
)
from cmbsg.roundrobin import circle_round, generate_round_robin, rounds_per_cycle

GROUP_STAGE = "Phase de groupes"
KNOCKOUT_GROUP = "Élimination"
LEAGUE_GROUP = "A"
ROUND_OF_16 = "Huitièmes de finale"
QUARTER_FINAL = "Quarts de finale"
SEMI_FINAL = "Demi-finale"
FINAL = "Finale"

QUALIFIERS_PER_GROUP = 2
TEAMS_PER_GROUP = 4


@dataclass
class FormatInfo:
    """Display metadata and team-count guidance for a format."""
    name: str
    description: str
    min_teams: int
    max_teams: int
    recommended_teams: list[int] = field(default_factory=list)


FORMATS: dict[TournamentFormat, FormatInfo] = {
    TournamentFormat.LEAGUE: FormatInfo(
        name="Format Liga/Premier League",
        description="Championnat où toutes les équipes se rencontrent en "
                    "matchs aller-retour.",
        min_teams=6,
        max_teams=20,
        recommended_teams=[8, 10, 12, 16, 20],
    ),
    TournamentFormat.WORLD_CUP: FormatInfo(
        name="Format Coupe du Monde",
        description="Phase de groupes suivie de phases éliminatoires.",
        min_teams=8,
        max_teams=32,
        recommended_teams=[8, 16, 24, 32],
    ),
    TournamentFormat.CHAMPIONS_LEAGUE: FormatInfo(
        name="Format Ligue des Champions",
        description="Phase de groupes puis phases éliminatoires avec matchs "
                    "aller-retour.",
        min_teams=16,
        max_teams=32,
        recommended_teams=[16, 24, 32],
    ),
}


def recommended_groups(fmt: TournamentFormat, team_count: int) -> tuple[int, int]:
    """Return (group_count, teams_per_group) suggested for a team count."""
    if fmt is TournamentFormat.LEAGUE:
        return 1, team_count
    if team_count <= 8:
        return 2, TEAMS_PER_GROUP
    if team_count <= 12:
        return 3, TEAMS_PER_GROUP
    if team_count <= 16:
        return 4, TEAMS_PER_GROUP
    if team_count <= 24:
        return 6, TEAMS_PER_GROUP
    return 8, TEAMS_PER_GROUP


def format_fit_warnings(fmt: TournamentFormat, team_count: int,
                        group_count: Optional[int] = None) -> list[str]:
    """Advisory messages for a team count that does not suit a format.

    Covers counts outside the format's range and, for group formats with
    no explicit group count, a default grouping that differs from the
    recommended one.
    """
    info = FORMATS[fmt]
    recommended = ", ".join(str(n) for n in info.recommended_teams)
    warnings = []
    if team_count < info.min_teams:
        warnings.append(
            f"{info.name}: {team_count} teams is below the usual minimum "
            f"of {info.min_teams} (recommended: {recommended})"
        )
    if team_count > info.max_teams:
        warnings.append(
            f"{info.name}: {team_count} teams is above the usual maximum "
            f"of {info.max_teams} (recommended: {recommended})"
        )
    if fmt.is_group_based and group_count is None:
        default = default_group_count(team_count)
        suggested, per_group = recommended_groups(fmt, team_count)
        if suggested != default:
            warnings.append(
                f"{info.name}: {team_count} teams default to {default} groups; "
                f"{suggested} groups of {per_group} are recommended "
                f"(set groups.count)"
            )
    return warnings


def default_group_count(team_count: int) -> int:
    return max(1, math.ceil(team_count / TEAMS_PER_GROUP))


def group_label(index: int) -> str:
    """A, B, ..., Z, AA, AB, ..."""
    label = ""
    index += 1
    while index > 0:
        index, rem = divmod(index - 1, 26)
        label = ascii_uppercase[rem] + label
    return label


# ---------------------------------------------------------------------------
# League
# ---------------------------------------------------------------------------

def league_fixtures(teams: list[Team],
                    journeys: Optional[int] = None) -> list[Fixture]:
    """Round-robin league, one journey at a time.

    Journey j uses the circle-method rotation (j - 1) mod cycle, where a
    cycle is the number of rounds for everyone to meet once. Journeys past
    the first cycle are return journeys: same pairings, home and away
    swapped. The default journey count is two full cycles (home and away).
    """
    cycle = rounds_per_cycle(len(teams))
    if cycle == 0:
        return []
    if journeys is None:
        journeys = 2 * cycle

    fixtures = []
    for j in range(1, journeys + 1):
        is_return = j > cycle
        matchups, _ = circle_round(teams, j - 1)
        for m in matchups:
            if is_return:
                m = m.swapped()
            fixtures.append(Fixture(
                home=m.home,
                away=m.away,
                round_label=f"Journée {j}",
                group=LEAGUE_GROUP,
                leg=Leg.SECOND if is_return else Leg.FIRST,
            ))
    return fixtures


# ---------------------------------------------------------------------------
# Groups
# ---------------------------------------------------------------------------

def balance_groups(teams: list[Team], group_count: int,
                   rng: random.Random) -> dict[str, list[Team]]:
    """Shuffle teams and deal them into group_count groups.

    Group sizes differ by at most one. Groups left with fewer than two
    teams are dropped; survivors are labelled A, B, ... in order and each
    team comes back with its group label set.
    """
    shuffled = list(teams)
    rng.shuffle(shuffled)

    buckets: list[list[Team]] = [[] for _ in range(max(1, group_count))]
    for i, team in enumerate(shuffled):
        buckets[i % len(buckets)].append(team)

    groups: dict[str, list[Team]] = {}
    for members in buckets:
        if len(members) < 2:
            continue
        label = group_label(len(groups))
        groups[label] = [replace(t, group=label) for t in members]
    return groups


def group_stage_fixtures(groups: dict[str, list[Team]],
                         two_legged: bool = False) -> list[Fixture]:
    """Single round-robin per group, optionally followed by return legs.

    Home and away alternate by round parity. When two_legged, each group's
    first legs are followed by the mirrored second legs of that group.
    """
    fixtures = []
    for label, members in groups.items():
        first_legs = [
            Fixture(m.home, m.away, GROUP_STAGE, label,
                    Leg.FIRST if two_legged else None)
            for rnd in generate_round_robin(members, alternate_home=True)
            for m in rnd.matchups
        ]
        fixtures.extend(first_legs)
        if two_legged:
            fixtures.extend(f.reversed(Leg.SECOND) for f in first_legs)
    return fixtures


# ---------------------------------------------------------------------------
# Knockout placeholders
# ---------------------------------------------------------------------------

def knockout_rounds(qualified: int, two_legged: bool = False) -> list[tuple[str, int]]:
    """(round label, tie count) for the knockout phase, in playing order."""
    rounds = []
    if qualified >= 8:
        rounds.append((ROUND_OF_16, qualified // 2))
    if two_legged:
        rounds.append((QUARTER_FINAL, 2))
    elif qualified > 4:
        rounds.append((QUARTER_FINAL, min(4, math.ceil(qualified / 4))))
    rounds.append((f"{SEMI_FINAL} 1", 1))
    rounds.append((f"{SEMI_FINAL} 2", 1))
    return rounds


def knockout_placeholders(qualified: int,
                          two_legged: bool = False) -> list[Fixture]:
    """Reserve knockout fixtures between not-yet-known teams.

    Two-legged ties emit a first leg and its mirrored second leg; the
    final is always a single match.
    """
    fixtures = []
    tie_number = 0

    def _tie(round_label: str) -> None:
        nonlocal tie_number
        tie_number += 1
        home = PlaceholderTeam(id=f"tbd-{tie_number}-home")
        away = PlaceholderTeam(id=f"tbd-{tie_number}-away")
        if two_legged and round_label != FINAL:
            first = Fixture(home, away, round_label, KNOCKOUT_GROUP, Leg.FIRST)
            fixtures.append(first)
            fixtures.append(first.reversed(Leg.SECOND))
        else:
            fixtures.append(Fixture(home, away, round_label, KNOCKOUT_GROUP))

    for round_label, ties in knockout_rounds(qualified, two_legged):
        for _ in range(ties):
            _tie(round_label)
    _tie(FINAL)
    return fixtures


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

def generate_fixtures(config: GenerationConfig,
                      rng: Optional[random.Random] = None) -> list[Fixture]:
    """Ordered, unscheduled fixtures for the configured format.

    The caller is expected to have rejected configurations with fewer than
    two teams.
    """
    if config.format is TournamentFormat.LEAGUE:
        return league_fixtures(config.teams, config.journeys)

    if rng is None:
        rng = random.Random()
    group_count = config.group_count or default_group_count(config.team_count)
    groups = balance_groups(config.teams, group_count, rng)

    two_legged = config.format is TournamentFormat.CHAMPIONS_LEAGUE
    fixtures = group_stage_fixtures(groups, two_legged=two_legged)
    fixtures.extend(knockout_placeholders(
        QUALIFIERS_PER_GROUP * len(groups), two_legged=two_legged,
    ))
    return fixtures
