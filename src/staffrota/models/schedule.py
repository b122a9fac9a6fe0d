"""Rotation assignment and day schedule models."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pandas as pd

from .calendar import Rotation
from .notification import NotificationLog
from .person import Person
from .station import ALL_STATIONS, WORKING_STATIONS, Station


def empty_buckets() -> Dict[Station, List[str]]:
    """One empty member list per station, pseudo-stations included."""
    return {s: [] for s in ALL_STATIONS}


@dataclass
class RotationAssignment:
    """Station membership for one rotation."""

    rotation: Rotation
    assignments: Dict[Station, List[str]] = field(default_factory=empty_buckets)

    # Partial-presence notices, slot id -> "Until 13:00" / "From 10:00"
    notices: Dict[str, str] = field(default_factory=dict)

    @property
    def id(self) -> int:
        return self.rotation.id

    @property
    def time_range(self) -> str:
        return self.rotation.time_range

    def members(self, station: Station) -> List[str]:
        return list(self.assignments.get(station, []))

    def station_of(self, person: str) -> Optional[Station]:
        """Bucket holding ``person``, or None."""
        for station, people in self.assignments.items():
            if person in people:
                return station
        return None

    def all_people(self) -> List[str]:
        return [p for station in ALL_STATIONS for p in self.assignments.get(station, [])]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "time_range": self.time_range,
            "assignments": {s.value: list(self.assignments.get(s, [])) for s in ALL_STATIONS},
            "notices": dict(self.notices),
        }


@dataclass
class DaySchedule:
    """Complete result of one engine run."""

    rotations: List[RotationAssignment] = field(default_factory=list)
    notifications: NotificationLog = field(default_factory=NotificationLog)
    roster: List[Person] = field(default_factory=list)

    # Final per-person history, slot id -> stations in order
    history: Dict[str, List[Station]] = field(default_factory=dict)

    seed: Optional[int] = None

    def get_rotation(self, rotation_id: int) -> Optional[RotationAssignment]:
        for rot in self.rotations:
            if rot.id == rotation_id:
                return rot
        return None

    def label(self, person: str) -> str:
        """Display name for a slot id."""
        for p in self.roster:
            if p.slot_id == person:
                return p.label
        return person

    def to_dataframe(self) -> pd.DataFrame:
        """Convert the day to one row per (rotation, person)."""
        columns = ["rotation", "time_range", "station", "person", "name", "notice"]
        rows = [
            {
                "rotation": rot.id,
                "time_range": rot.time_range,
                "station": station.value,
                "person": pid,
                "name": self.label(pid),
                "notice": rot.notices.get(pid, ""),
            }
            for rot in self.rotations
            for station in ALL_STATIONS
            for pid in rot.assignments.get(station, [])
        ]
        if not rows:
            return pd.DataFrame(columns=columns)
        return pd.DataFrame(rows, columns=columns)

    def to_matrix(self) -> pd.DataFrame:
        """Convert to person × rotation matrix of station names."""
        df = self.to_dataframe()
        if df.empty:
            return pd.DataFrame()
        piv = df.pivot_table(
            index="person",
            columns="rotation",
            values="station",
            aggfunc=lambda x: "/".join(sorted(set(str(v) for v in x))),
            fill_value="",
        )
        order = [p.slot_id for p in self.roster if p.slot_id in piv.index]
        return piv.reindex(order)

    def get_person_stats(self) -> pd.DataFrame:
        """Per-person station counts over the day."""
        columns = ["person"] + [s.value for s in ALL_STATIONS] + ["total_floor"]
        df = self.to_dataframe()
        if df.empty:
            return pd.DataFrame(columns=columns)

        stats = df.groupby("person")["station"].value_counts().unstack(fill_value=0)
        for s in ALL_STATIONS:
            if s.value not in stats.columns:
                stats[s.value] = 0
        stats = stats[[s.value for s in ALL_STATIONS]]
        stats["total_floor"] = stats[[s.value for s in WORKING_STATIONS]].sum(axis=1)
        return stats.reset_index()[columns]

    def summary(self) -> Dict[str, Any]:
        """Summary dictionary for display."""
        return {
            "people": len(self.roster),
            "rotations": len(self.rotations),
            "seed": self.seed,
            "notifications": self.notifications.counts(),
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rotations": [r.to_dict() for r in self.rotations],
            "notifications": self.notifications.to_list(),
            "roster": [p.to_dict() for p in self.roster],
            "names": {p.slot_id: p.label for p in self.roster},
            "seed": self.seed,
        }
