#!/usr/bin/env python3
"""Coupe Mario Brutus Schedule Builder.

Generate mode (default):
    cmbsg [config.yaml] [--seed N] [-o DIR]

    Generates fixtures for the configured format, places them on the
    calendar and writes:
      {DIR}/schedule.txt  - Human-readable day-by-day + per-team schedule
      {DIR}/schedule.csv  - One row per match
      {DIR}/stats.txt     - Validation report + statistics

Verify mode:
    cmbsg --verify <schedule.csv> [config.yaml]

    Re-imports a schedule CSV and checks it against the config.
    Exit code 0 if valid, 1 if violations found.

Examples:
    cmbsg                          # default config, random groups
    cmbsg --seed 42 -o coupe2026   # reproducible groups, custom directory
    cmbsg --verify output/schedule.csv
"""

import argparse
import random
import sys
from pathlib import Path

from cmbsg.config import load_config
from cmbsg.constraints import validate_schedule, format_validation_report
from cmbsg.feasibility import estimate_feasibility, format_feasibility_warning
from cmbsg.formats import FORMATS
from cmbsg.output import write_schedule
from cmbsg.scheduler import ScheduleBuilder
from cmbsg.stats import compute_stats, format_stats_report
from cmbsg.verify import parse_csv_schedule


def main():
    parser = argparse.ArgumentParser(
        description="Coupe Mario Brutus Schedule Builder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Output files (generate mode):
  {prefix}/schedule.txt   Human-readable schedule (day view + per-team)
  {prefix}/schedule.csv   One row per match
  {prefix}/stats.txt      Validation report + statistics

Exit codes:
  0  Schedule valid (a shortfall is reported as a warning)
  1  Config errors, constraint violations, or nothing scheduled
""",
    )
    parser.add_argument(
        "config", nargs="?", default="config.yaml",
        help="Path to config YAML file (default: config.yaml)"
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Random seed for the group draw (group formats only)"
    )
    parser.add_argument(
        "--output-prefix", "-o", default="output",
        help="Output directory for generated files (default: output/)"
    )
    parser.add_argument(
        "--verify", metavar="CSV",
        help="Verify an existing schedule CSV instead of generating"
    )
    args = parser.parse_args()

    config_path = args.config
    if not Path(config_path).exists():
        print(f"Error: config file {config_path} not found")
        sys.exit(1)

    print(f"Loading config from {config_path}...")
    config = load_config(config_path)
    for w in config["warnings"]:
        print(f"Warning: {w}")
    if config["errors"]:
        sys.exit(1)
    generation = config["generation"]
    title = config["tournament"]["name"] or "Coupe Mario Brutus"

    if args.verify:
        print(f"Verifying schedule from {args.verify}...")
        matches = parse_csv_schedule(args.verify, config)
        print(f"Loaded {len(matches)} matches")

        result = validate_schedule(matches, generation)
        print(format_validation_report(result))
        print("\n" + format_stats_report(compute_stats(matches)))
        sys.exit(0 if result["valid"] else 1)

    # Advisory only
    estimate = estimate_feasibility(generation)
    print(format_feasibility_warning(estimate))

    info = FORMATS[generation.format]
    print(f"{info.name}: {info.description}")
    print(f"Generating {generation.format.value} schedule "
          f"for {generation.team_count} teams (seed={args.seed})...")
    builder = ScheduleBuilder(generation, random.Random(args.seed))
    matches = builder.generate()

    if not matches:
        print("Error: no matches were scheduled!")
        sys.exit(1)

    summary = builder.summary()
    print(f"Placed {summary['total_matches']} of {builder.requested} fixtures "
          f"over {summary['total_days']} days "
          f"({summary['matches_per_day']} per day)")

    print("\nValidating...")
    result = validate_schedule(matches, generation, expected=builder.requested)
    report = format_validation_report(result)
    print(report)

    stats_text = format_stats_report(compute_stats(matches))
    print("\n" + stats_text)

    print("\nWriting output files...")
    write_schedule(matches, output_prefix=args.output_prefix, title=title)

    stats_path = Path(args.output_prefix) / "stats.txt"
    stats_path.write_text(report + "\n\n" + stats_text, encoding="utf-8")
    print(f"Written: {stats_path}")

    if not result["valid"]:
        print(f"\nSchedule has {len(result['errors'])} constraint violations.")
        sys.exit(1)
    if len(matches) < builder.requested:
        print(f"\n{builder.requested - len(matches)} fixtures did not fit. "
              f"Extend the date range or raise matches_per_day.")
    else:
        print("\nSchedule generated successfully!")


if __name__ == "__main__":
    main()
