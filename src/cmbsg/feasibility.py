"""Pre-flight estimate of whether a date range can hold a tournament.

The match count is an approximation: knockout rounds are estimated as
2 x groups - 1 matches (doubled when two-legged) rather than derived from
the placeholders the strategies actually emit, and league estimates assume
a full home-and-away season regardless of the journey count. The result is
advisory and never stops generation.
"""

import math

from cmbsg.formats import TEAMS_PER_GROUP, default_group_count
from cmbsg.models import GenerationConfig, TournamentFormat


def estimate_matches(fmt: TournamentFormat, team_count: int,
                     group_count: int, teams_per_group: int) -> int:
    if fmt is TournamentFormat.LEAGUE:
        return team_count * (team_count - 1)

    knockout = max(0, group_count * 2 - 1)
    if fmt is TournamentFormat.WORLD_CUP:
        group_matches = group_count * (teams_per_group * (teams_per_group - 1) // 2)
        return group_matches + knockout

    group_matches = group_count * (teams_per_group * (teams_per_group - 1))
    return group_matches + knockout * 2


def estimate_feasibility(config: GenerationConfig) -> dict:
    """Estimate matches and days needed for a config.

    Returns dict with:
    - total_days: days between start and end date
    - estimated_matches: approximate fixture count
    - required_days: ceil(estimated_matches / matches_per_day)
    - feasible: required_days <= total_days
    """
    total_days = (config.end_date - config.start_date).days
    group_count = config.group_count or default_group_count(config.team_count)
    teams_per_group = config.teams_per_group or TEAMS_PER_GROUP

    estimated = estimate_matches(config.format, config.team_count,
                                 group_count, teams_per_group)
    required_days = math.ceil(estimated / config.matches_per_day)

    return {
        "total_days": total_days,
        "estimated_matches": estimated,
        "required_days": required_days,
        "feasible": required_days <= total_days,
    }


def format_feasibility_warning(estimate: dict) -> str:
    if estimate["feasible"]:
        return (
            f"Estimated {estimate['estimated_matches']} matches over "
            f"{estimate['required_days']} days "
            f"({estimate['total_days']} available)"
        )
    return (
        f"WARNING: the selected period ({estimate['total_days']} days) may be "
        f"too short for {estimate['estimated_matches']} matches "
        f"({estimate['required_days']} days needed)"
    )
