"""Station definitions and grouping constants."""
from enum import Enum


class Station(str, Enum):
    """Work areas a person can occupy during a rotation."""
    TICKET = "Ticket"
    GREETER = "Greeter"
    PLANETARIUM = "Planetarium"
    MUSEUM = "Museum"
    SIDE_TASK = "Side Task"   # Pre-committed away from the floor
    OFF_SHIFT = "Off Shift"   # Not present for the rotation

    @property
    def is_pseudo(self) -> bool:
        """True for buckets that take a person out of the solver."""
        return self in (Station.SIDE_TASK, Station.OFF_SHIFT)

    @property
    def is_working(self) -> bool:
        """True if this is a staffed floor station."""
        return not self.is_pseudo

    @classmethod
    def from_string(cls, s: str) -> "Station":
        """Parse a station from various string formats."""
        mapping = {
            "ticket": cls.TICKET, "tickets": cls.TICKET, "box office": cls.TICKET,
            "greeter": cls.GREETER, "greet": cls.GREETER,
            "planetarium": cls.PLANETARIUM, "arora": cls.PLANETARIUM, "dome": cls.PLANETARIUM,
            "museum": cls.MUSEUM, "floor": cls.MUSEUM,
            "side task": cls.SIDE_TASK, "side_task": cls.SIDE_TASK, "side": cls.SIDE_TASK,
            "off shift": cls.OFF_SHIFT, "off_shift": cls.OFF_SHIFT, "off": cls.OFF_SHIFT,
        }
        key = str(s).strip().lower()
        if key in mapping:
            return mapping[key]
        for member in cls:
            if member.value.lower() == key or member.name.lower() == key:
                return member
        raise ValueError(f"Unknown station: {s!r}")


# Order used for output buckets
WORKING_STATIONS = [Station.TICKET, Station.GREETER, Station.PLANETARIUM, Station.MUSEUM]
PSEUDO_STATIONS = [Station.SIDE_TASK, Station.OFF_SHIFT]
ALL_STATIONS = WORKING_STATIONS + PSEUDO_STATIONS
