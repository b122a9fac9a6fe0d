"""Rotation windows making up a working day."""
from dataclasses import dataclass
from typing import List


def parse_hhmm(value: str) -> int:
    """Convert an ``HH:mm`` string to minutes from midnight."""
    hours, minutes = str(value).strip().split(":")
    return int(hours) * 60 + int(minutes)


def format_hhmm(minutes: int) -> str:
    """Convert minutes from midnight back to ``HH:mm``."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


@dataclass(frozen=True)
class Rotation:
    """A fixed time window during which station assignments are stable."""
    id: int
    start: str  # HH:mm
    end: str    # HH:mm

    @property
    def start_minutes(self) -> int:
        return parse_hhmm(self.start)

    @property
    def end_minutes(self) -> int:
        return parse_hhmm(self.end)

    @property
    def time_range(self) -> str:
        """Display range, e.g. ``09:00 - 10:30``."""
        return f"{self.start} - {self.end}"

    def overlaps(self, start_minutes: int, end_minutes: int) -> bool:
        """True if ``[start, end)`` shares any time with this rotation."""
        return not (end_minutes <= self.start_minutes or start_minutes >= self.end_minutes)

    def to_dict(self) -> dict:
        return {"id": self.id, "start": self.start, "end": self.end}

    @classmethod
    def from_dict(cls, d: dict) -> "Rotation":
        return cls(id=int(d["id"]), start=str(d["start"]), end=str(d["end"]))


DEFAULT_CALENDAR: List[Rotation] = [
    Rotation(1, "09:00", "10:30"),
    Rotation(2, "10:30", "12:00"),
    Rotation(3, "12:00", "14:00"),
    Rotation(4, "14:00", "15:30"),
    Rotation(5, "15:30", "17:00"),
]
