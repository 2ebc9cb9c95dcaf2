"""Data models for the Coupe Mario Brutus schedule generator."""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import Optional, Union


class TournamentFormat(Enum):
    LEAGUE = "league"
    WORLD_CUP = "world_cup"
    CHAMPIONS_LEAGUE = "champions_league"

    @classmethod
    def from_str(cls, s: str) -> "TournamentFormat":
        key = s.strip().lower().replace("-", "_").replace(" ", "_")
        for fmt in cls:
            if fmt.value == key:
                return fmt
        raise ValueError(f"Unknown tournament format: {s!r}")

    @property
    def is_group_based(self) -> bool:
        return self is not TournamentFormat.LEAGUE


class Leg(Enum):
    FIRST = "first"
    SECOND = "second"

    @property
    def label(self) -> str:
        return "Aller" if self is Leg.FIRST else "Retour"


PLACEHOLDER_LABEL = "À déterminer"


@dataclass(frozen=True)
class Team:
    """A registered team. The scheduler never mutates it."""
    id: str
    name: str
    group: str = ""
    players: tuple[str, ...] = ()

    @property
    def is_placeholder(self) -> bool:
        return False


@dataclass(frozen=True)
class PlaceholderTeam:
    """An unresolved knockout participant ("winner of semifinal 1")."""
    id: str
    label: str = PLACEHOLDER_LABEL

    @property
    def name(self) -> str:
        return self.label

    @property
    def is_placeholder(self) -> bool:
        return True


TeamRef = Union[Team, PlaceholderTeam]


@dataclass
class Fixture:
    """An unscheduled pairing with its round/group/leg metadata."""
    home: TeamRef
    away: TeamRef
    round_label: str
    group: str
    leg: Optional[Leg] = None

    @property
    def round_name(self) -> str:
        if self.leg is None:
            return self.round_label
        return f"{self.round_label} ({self.leg.label})"

    @property
    def is_placeholder(self) -> bool:
        return self.home.is_placeholder or self.away.is_placeholder

    def reversed(self, leg: Optional[Leg] = None) -> "Fixture":
        """Return leg of this fixture: home/away swapped."""
        return Fixture(self.away, self.home, self.round_label, self.group, leg)


@dataclass
class ScheduledMatch:
    """A fixture with a concrete kickoff, venue and id."""
    id: str
    fixture: Fixture
    kickoff: datetime
    venue: str
    status: str = "upcoming"

    @property
    def home(self) -> TeamRef:
        return self.fixture.home

    @property
    def away(self) -> TeamRef:
        return self.fixture.away

    @property
    def date(self) -> date:
        return self.kickoff.date()

    @property
    def start_time(self) -> time:
        return self.kickoff.time()

    @property
    def round_name(self) -> str:
        return self.fixture.round_name

    @property
    def group(self) -> str:
        return self.fixture.group

    @property
    def leg(self) -> Optional[Leg]:
        return self.fixture.leg


@dataclass
class CalendarDay:
    """One date's worth of scheduling capacity."""
    date: date
    available_slots: int
    matches: list[ScheduledMatch] = field(default_factory=list)


DEFAULT_VENUE = "Stade Principal"
DEFAULT_KICKOFF = time(15, 0)


@dataclass
class GenerationConfig:
    """Everything one generation run needs."""
    teams: list[Team]
    format: TournamentFormat
    start_date: date
    end_date: date
    venues: list[str] = field(default_factory=list)
    kickoff_times: list[time] = field(default_factory=list)
    matches_per_day: int = 1
    journeys: Optional[int] = None  # league only
    group_count: Optional[int] = None  # group formats only
    teams_per_group: Optional[int] = None
    match_id_prefix: str = "match"

    def __post_init__(self):
        if not self.venues:
            self.venues = [DEFAULT_VENUE]
        if not self.kickoff_times:
            self.kickoff_times = [DEFAULT_KICKOFF]
        # earliest first, no duplicates
        self.kickoff_times = sorted(set(self.kickoff_times))
        self.matches_per_day = max(1, self.matches_per_day)

    @property
    def team_count(self) -> int:
        return len(self.teams)
