"""Round-robin pairing primitives (circle method)."""

from dataclasses import dataclass, field
from typing import Optional

from cmbsg.models import TeamRef

# Pads odd team lists; never leaves this module.
BYE = "__BYE__"


@dataclass
class Matchup:
    """A home/away pairing produced by one round of the circle method."""
    home: TeamRef
    away: TeamRef

    def swapped(self) -> "Matchup":
        return Matchup(self.away, self.home)


@dataclass
class Round:
    """A set of matchups where each team plays at most once."""
    number: int
    matchups: list[Matchup]
    bye_teams: list[TeamRef] = field(default_factory=list)


def padded_size(n: int) -> int:
    """Team count after adding the bye for odd n."""
    return n + 1 if n % 2 == 1 else n


def rounds_per_cycle(n: int) -> int:
    """Rounds needed for every team to meet every other team once."""
    if n < 2:
        return 0
    return padded_size(n) - 1


def rotate(order: list, steps: int = 1) -> list:
    """Fixed-pivot rotation.

    Position 0 never moves; every other entry moves one position towards
    the front per step and the entry at position 1 wraps round to the end.
    Rotating an n-long list by n - 1 steps gives back the original order.
    """
    rotated = list(order)
    if len(rotated) < 3:
        return rotated
    for _ in range(steps % (len(rotated) - 1)):
        rotated = [rotated[0]] + rotated[2:] + [rotated[1]]
    return rotated


def circle_round(teams: list[TeamRef],
                 round_index: int) -> tuple[list[Matchup], Optional[TeamRef]]:
    """Pairings for one round of the circle method.

    Pads with the bye when the team count is odd, rotates by
    round_index mod rounds_per_cycle and pairs position i with n-1-i.
    The pairing touching the bye is discarded; its real team is returned
    as the bye team.
    """
    order = list(teams)
    if len(order) < 2:
        return [], None
    if len(order) % 2 == 1:
        order.append(BYE)

    n = len(order)
    order = rotate(order, round_index % (n - 1))

    matchups = []
    bye_team = None
    for i in range(n // 2):
        t1 = order[i]
        t2 = order[n - 1 - i]
        if t1 is BYE:
            bye_team = t2
        elif t2 is BYE:
            bye_team = t1
        else:
            matchups.append(Matchup(t1, t2))
    return matchups, bye_team


def generate_round_robin(teams: list[TeamRef],
                         alternate_home: bool = False) -> list[Round]:
    """Generate a single round-robin with the circle method.

    For N teams: N-1 rounds if even, N rounds (one bye each) if odd.
    With alternate_home, every second round swaps home and away so the
    pivot team does not host every match.
    """
    if len(teams) < 2:
        return []

    rounds = []
    for r in range(rounds_per_cycle(len(teams))):
        matchups, bye_team = circle_round(teams, r)
        if alternate_home and r % 2 == 1:
            matchups = [m.swapped() for m in matchups]
        rounds.append(Round(
            number=r + 1,
            matchups=matchups,
            bye_teams=[bye_team] if bye_team is not None else [],
        ))
    return rounds


def verify_round_robin(rounds: list[Round], teams: list[TeamRef],
                       meetings: int = 1) -> dict:
    """Verify a round-robin schedule is valid and complete.

    Returns dict with:
    - valid: bool
    - errors: list of error strings
    - matchup_counts: dict of (id_a, id_b) -> count
    - games_per_team: dict of team id -> game count
    """
    errors = []
    matchup_counts: dict[tuple[str, str], int] = {}
    games_per_team: dict[str, int] = {t.id: 0 for t in teams}

    for rnd in rounds:
        teams_in_round = set()
        for m in rnd.matchups:
            for t in (m.home, m.away):
                if t.id in teams_in_round:
                    errors.append(f"Round {rnd.number}: {t.id} appears twice")
                teams_in_round.add(t.id)
                games_per_team[t.id] = games_per_team.get(t.id, 0) + 1

            key = tuple(sorted([m.home.id, m.away.id]))
            matchup_counts[key] = matchup_counts.get(key, 0) + 1

    ids = [t.id for t in teams]
    for i, t1 in enumerate(ids):
        for t2 in ids[i + 1:]:
            key = tuple(sorted([t1, t2]))
            count = matchup_counts.get(key, 0)
            if count != meetings:
                errors.append(
                    f"{t1} vs {t2}: played {count} times (expected {meetings})"
                )

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "matchup_counts": matchup_counts,
        "games_per_team": games_per_team,
    }
