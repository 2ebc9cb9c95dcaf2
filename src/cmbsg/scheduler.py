"""Scheduling engine for the Coupe Mario Brutus schedule generator.

Two phases:
1. Fixture generation: the format strategy (formats.py) emits an ordered,
   unscheduled fixture list, knockout rounds as placeholders.
2. Calendar allocation: walk the fixtures and the day grid in lockstep,
   giving each fixture the earliest day with a free slot, a kickoff time
   and a venue.

Core principle: fixture order is never changed. If the date range runs out
of slots, allocation stops and the caller gets the matches placed so far.
"""

import math
import random
from datetime import date, datetime, time, timedelta
from typing import Optional

from cmbsg.formats import generate_fixtures
from cmbsg.models import CalendarDay, Fixture, GenerationConfig, ScheduledMatch


class Calendar:
    """Day grid for one generation run, indexed by offset from start date.

    Every date from start to end inclusive is materialised once, each with
    matches_per_day slots. Days are only changed through place().
    """

    def __init__(self, start_date: date, end_date: date, matches_per_day: int):
        self.start_date = start_date
        self.end_date = end_date
        self.matches_per_day = matches_per_day
        self._days: list[CalendarDay] = []

        current = start_date
        while current <= end_date:
            self._days.append(CalendarDay(date=current,
                                          available_slots=matches_per_day))
            current += timedelta(days=1)

    def __len__(self) -> int:
        return len(self._days)

    def __iter__(self):
        return iter(self._days)

    def day(self, offset: int) -> CalendarDay:
        if not 0 <= offset < len(self._days):
            raise ValueError(f"Day offset {offset} outside calendar "
                             f"(0..{len(self._days) - 1})")
        return self._days[offset]

    def offset_of(self, d: date) -> int:
        offset = (d - self.start_date).days
        self.day(offset)
        return offset

    def remaining(self, offset: int) -> int:
        return self.day(offset).available_slots

    def place(self, offset: int, match: ScheduledMatch) -> None:
        day = self.day(offset)
        if day.available_slots <= 0:
            raise ValueError(f"No slot left on {day.date}")
        day.matches.append(match)
        day.available_slots -= 1

    @property
    def total_matches(self) -> int:
        return sum(len(d.matches) for d in self._days)

    @property
    def capacity(self) -> int:
        return len(self._days) * self.matches_per_day

    def summary(self) -> dict:
        return {
            "total_days": len(self._days),
            "matches_per_day": self.matches_per_day,
            "total_matches": self.total_matches,
        }


# ---------------------------------------------------------------------------
# Slot selection
# ---------------------------------------------------------------------------

def pick_kickoff(day: CalendarDay, kickoff_times: list[time]) -> time:
    """First configured time not yet used that day, else the first time."""
    used = {m.start_time for m in day.matches}
    for t in kickoff_times:
        if t not in used:
            return t
    return kickoff_times[0]


def pick_venue(day: CalendarDay, venues: list[str], matches_per_day: int) -> str:
    """First venue still under its daily quota, else the first venue.

    The quota spreads a full day evenly: ceil(matches_per_day / venues).
    """
    quota = math.ceil(matches_per_day / len(venues))
    usage: dict[str, int] = {}
    for m in day.matches:
        usage[m.venue] = usage.get(m.venue, 0) + 1
    for venue in venues:
        if usage.get(venue, 0) < quota:
            return venue
    return venues[0]


def kickoff_at(d: date, t: time) -> datetime:
    return datetime(d.year, d.month, d.day, t.hour, t.minute, 0)


def allocate(fixtures: list[Fixture], calendar: Calendar,
             config: GenerationConfig) -> list[ScheduledMatch]:
    """Place fixtures on the calendar in order.

    The day cursor only moves forward. When it runs off the end of the
    calendar, allocation stops and only the matches placed so far are
    returned.
    """
    placed: list[ScheduledMatch] = []
    cursor = 0

    for fixture in fixtures:
        while cursor < len(calendar) and calendar.remaining(cursor) == 0:
            cursor += 1
        if cursor >= len(calendar):
            print(f"  Calendar full: {len(placed)} of {len(fixtures)} "
                  f"fixtures placed")
            break

        day = calendar.day(cursor)
        match = ScheduledMatch(
            id=f"{config.match_id_prefix}-{len(placed) + 1}",
            fixture=fixture,
            kickoff=kickoff_at(day.date, pick_kickoff(day, config.kickoff_times)),
            venue=pick_venue(day, config.venues, config.matches_per_day),
        )
        calendar.place(cursor, match)
        placed.append(match)

    return placed


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------

class ScheduleBuilder:
    """One generation run: owns the calendar for the config's date range."""

    def __init__(self, config: GenerationConfig,
                 rng: Optional[random.Random] = None):
        self.config = config
        self.rng = rng if rng is not None else random.Random()
        self.calendar = Calendar(config.start_date, config.end_date,
                                 config.matches_per_day)
        self.requested = 0

    def fixtures(self) -> list[Fixture]:
        return generate_fixtures(self.config, self.rng)

    def generate(self) -> list[ScheduledMatch]:
        fixtures = self.fixtures()
        self.requested = len(fixtures)
        return list(allocate(fixtures, self.calendar, self.config))

    def summary(self) -> dict:
        return self.calendar.summary()


def schedule(config: GenerationConfig,
             seed: Optional[int] = None) -> list[ScheduledMatch]:
    """Generate and place all fixtures for a config."""
    return ScheduleBuilder(config, random.Random(seed)).generate()
