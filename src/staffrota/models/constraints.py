"""Solver configuration and scoring weights."""
from dataclasses import dataclass, field
from typing import Dict, List

from .station import Station


@dataclass
class StationTarget:
    """Minimum head count for a station at one step of the fill order."""
    station: Station
    required: int = 1

    def to_dict(self) -> Dict:
        return {"station": self.station.value, "required": self.required}

    @classmethod
    def from_dict(cls, d: Dict) -> "StationTarget":
        return cls(station=Station.from_string(d["station"]), required=int(d.get("required", 1)))


def default_fill_plan() -> List[StationTarget]:
    """Ticket, Greeter, Planetarium, then the second Ticket seat."""
    return [
        StationTarget(Station.TICKET, 1),
        StationTarget(Station.GREETER, 1),
        StationTarget(Station.PLANETARIUM, 1),
        StationTarget(Station.TICKET, 2),
    ]


@dataclass
class ScoringWeights:
    """Additive candidate score terms. Lower total score wins."""

    consecutive_repeat: float = 5_000_000   # Same station as last rotation
    scarce_repeat: float = 10_000_000       # Scarce station a second time
    short_gap: float = 200_000              # Same station two rotations back
    escape_bonus: float = 1_000_000         # Subtracted when leaving the catch-all
    conservation: float = 2_000             # Keep scarce-station rookies in reserve
    variety: float = 1_000                  # Per prior time at this station
    jitter: float = 10.0                    # Upper bound of the random tie-break

    def validate(self) -> List[str]:
        """
        Check that the weights keep their dominance order.

        Returns:
            List of problems (empty if valid).
        """
        problems = []
        rule_terms = {
            "consecutive_repeat": self.consecutive_repeat,
            "scarce_repeat": self.scarce_repeat,
            "short_gap": self.short_gap,
            "escape_bonus": self.escape_bonus,
            "conservation": self.conservation,
            "variety": self.variety,
        }
        if self.jitter < 0:
            problems.append("jitter must be >= 0")
        for name, value in rule_terms.items():
            if value <= self.jitter:
                problems.append(f"{name} ({value}) must exceed jitter ({self.jitter})")
        if self.consecutive_repeat <= self.escape_bonus:
            problems.append("consecutive_repeat must outweigh escape_bonus")
        if self.short_gap <= self.variety:
            problems.append("short_gap must outweigh variety")
        return problems

    def to_dict(self) -> Dict:
        return {
            "consecutive_repeat": self.consecutive_repeat,
            "scarce_repeat": self.scarce_repeat,
            "short_gap": self.short_gap,
            "escape_bonus": self.escape_bonus,
            "conservation": self.conservation,
            "variety": self.variety,
            "jitter": self.jitter,
        }

    @classmethod
    def from_dict(cls, d: Dict) -> "ScoringWeights":
        weights = cls()
        for key, value in d.items():
            if hasattr(weights, key):
                setattr(weights, key, float(value))
        return weights


@dataclass
class SolverConfig:
    """Configuration for the rotation engine."""

    # Named stations in priority order; the catch-all drains whoever remains
    fill_plan: List[StationTarget] = field(default_factory=default_fill_plan)
    scarce_station: Station = Station.PLANETARIUM
    catch_all_station: Station = Station.MUSEUM

    weights: ScoringWeights = field(default_factory=ScoringWeights)

    # Shuffle the available pool before scoring (tie order only)
    shuffle_pool: bool = True

    def required_for(self, station: Station) -> int:
        """Highest head count the fill plan asks of ``station``."""
        return max((t.required for t in self.fill_plan if t.station == station), default=0)

    def to_dict(self) -> Dict:
        """Serialize to dictionary."""
        return {
            "fill_plan": [t.to_dict() for t in self.fill_plan],
            "scarce_station": self.scarce_station.value,
            "catch_all_station": self.catch_all_station.value,
            "weights": self.weights.to_dict(),
            "shuffle_pool": self.shuffle_pool,
        }

    @classmethod
    def from_dict(cls, d: Dict) -> "SolverConfig":
        """Create from dictionary."""
        cfg = cls()
        for key, value in d.items():
            if key == "fill_plan":
                value = [StationTarget.from_dict(t) for t in value]
            elif key in ("scarce_station", "catch_all_station"):
                value = Station.from_string(value)
            elif key == "weights":
                value = ScoringWeights.from_dict(value)
            if hasattr(cfg, key):
                setattr(cfg, key, value)
        return cfg
