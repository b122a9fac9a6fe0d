"""Per-day inputs: shift exceptions, side tasks and operator pins."""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .calendar import DEFAULT_CALENDAR, Rotation, parse_hhmm
from .station import Station


@dataclass
class ShiftException:
    """The window a person is actually present for the day."""
    person: str
    start: str  # HH:mm
    end: str    # HH:mm
    id: str = ""

    def __post_init__(self):
        self.person = str(self.person).strip()
        if not self.id:
            self.id = f"{self.person}-{self.start}-{self.end}"

    def is_present(self, rotation: Rotation) -> bool:
        """Any overlap with the rotation counts as present for all of it."""
        return rotation.overlaps(parse_hhmm(self.start), parse_hhmm(self.end))

    def notice_for(self, rotation: Rotation) -> Optional[str]:
        """Partial-presence notice for a rotation the person only covers in part."""
        start = parse_hhmm(self.start)
        end = parse_hhmm(self.end)
        if rotation.start_minutes < end < rotation.end_minutes:
            return f"Until {self.end}"
        if rotation.start_minutes < start < rotation.end_minutes:
            return f"From {self.start}"
        return None

    def to_dict(self) -> dict:
        return {"id": self.id, "person": self.person, "start": self.start, "end": self.end}

    @classmethod
    def from_dict(cls, d: dict) -> "ShiftException":
        return cls(
            person=d.get("person", ""),
            start=str(d.get("start", "")),
            end=str(d.get("end", "")),
            id=str(d.get("id", "") or ""),
        )


@dataclass
class SideTaskRule:
    """Removes a person from the pool for one rotation."""
    rotation_id: int
    person: str
    note: str = ""
    id: str = ""

    def __post_init__(self):
        self.person = str(self.person).strip()
        if not self.id:
            self.id = f"{self.rotation_id}-{self.person}"

    def to_dict(self) -> dict:
        return {"id": self.id, "rotation_id": self.rotation_id, "person": self.person, "note": self.note}

    @classmethod
    def from_dict(cls, d: dict) -> "SideTaskRule":
        return cls(
            rotation_id=int(d.get("rotation_id", 0)),
            person=d.get("person", ""),
            note=str(d.get("note", "") or ""),
            id=str(d.get("id", "") or ""),
        )


@dataclass
class ForcedAssignment:
    """Operator pin: ``person`` works ``station`` during ``rotation_id``."""
    rotation_id: int
    station: Station
    person: str

    def __post_init__(self):
        self.person = str(self.person).strip()
        if not isinstance(self.station, Station):
            self.station = Station.from_string(self.station)

    def to_dict(self) -> dict:
        return {"rotation_id": self.rotation_id, "station": self.station.value, "person": self.person}

    @classmethod
    def from_dict(cls, d: dict) -> "ForcedAssignment":
        return cls(
            rotation_id=int(d.get("rotation_id", 0)),
            station=Station.from_string(d.get("station", "")),
            person=d.get("person", ""),
        )


@dataclass
class DayInput:
    """Everything the engine needs to schedule one day."""

    roster_size: int = 6
    calendar: List[Rotation] = field(default_factory=lambda: list(DEFAULT_CALENDAR))
    shift_exceptions: List[ShiftException] = field(default_factory=list)
    side_tasks: List[SideTaskRule] = field(default_factory=list)
    forced_assignments: List[ForcedAssignment] = field(default_factory=list)

    # Cosmetic labels, slot id -> name
    names: Dict[str, str] = field(default_factory=dict)

    # Stations worked before this run, oldest first
    prior_history: Dict[str, List[Station]] = field(default_factory=dict)

    def __post_init__(self):
        if self.roster_size < 0:
            self.roster_size = 0

    def forces_for(self, rotation_id: int) -> List[ForcedAssignment]:
        """Pins for one rotation, in input order."""
        return [f for f in self.forced_assignments if f.rotation_id == rotation_id]

    def to_dict(self) -> dict:
        return {
            "roster_size": self.roster_size,
            "calendar": [r.to_dict() for r in self.calendar],
            "shift_exceptions": [e.to_dict() for e in self.shift_exceptions],
            "side_tasks": [t.to_dict() for t in self.side_tasks],
            "forced_assignments": [f.to_dict() for f in self.forced_assignments],
            "names": dict(self.names),
            "prior_history": {
                pid: [s.value for s in stations] for pid, stations in self.prior_history.items()
            },
        }

    @classmethod
    def from_dict(cls, d: dict) -> "DayInput":
        """Create from dictionary (no validation, see ``models.validated``)."""
        calendar = [Rotation.from_dict(r) for r in d.get("calendar", [])] or list(DEFAULT_CALENDAR)
        return cls(
            roster_size=int(d.get("roster_size", 6)),
            calendar=calendar,
            shift_exceptions=[ShiftException.from_dict(e) for e in d.get("shift_exceptions", [])],
            side_tasks=[SideTaskRule.from_dict(t) for t in d.get("side_tasks", [])],
            forced_assignments=[ForcedAssignment.from_dict(f) for f in d.get("forced_assignments", [])],
            names={str(k): str(v) for k, v in (d.get("names") or {}).items()},
            prior_history={
                str(pid): [Station.from_string(s) for s in stations]
                for pid, stations in (d.get("prior_history") or {}).items()
            },
        )
