"""Core module for prospect-matcher."""

from dataclasses import dataclass, field
from typing import Any


class ValidationError(ValueError):
    """Raised when a dataset passed to the matcher is empty or not a list."""


class SchemaError(ValueError):
    """Raised when a configured column cannot be found in a dataset."""


@dataclass
class Prospect:
    """Represents a single entry parsed from an IBW text ranking."""

    number: int
    name: str
    team: str
    position: str
    age: float


@dataclass(frozen=True)
class Match:
    """A pairing of an IBW record with the Fantrax record it matched."""

    ibw_player: Any
    fantrax_player: Any
    match_type: str       # exact, name-only
    ibw_index: int        # Position of the IBW record in its input list


@dataclass
class MatchStats:
    """Aggregate counts collected during a matching pass."""

    exact_matches: int = 0
    name_only_matches: int = 0
    total_ibw_players: int = 0

    @property
    def total_matches(self) -> int:
        return self.exact_matches + self.name_only_matches

    @property
    def match_rate(self) -> float:
        """Share of IBW records that found a match, in percent."""
        if not self.total_ibw_players:
            return 0.0
        return 100.0 * self.total_matches / self.total_ibw_players


@dataclass
class MatchResult:
    """Outcome of reconciling a Fantrax export against an IBW ranking."""

    matches: list[Match] = field(default_factory=list)
    stats: MatchStats = field(default_factory=MatchStats)
    column_mapping: dict = field(default_factory=dict)
