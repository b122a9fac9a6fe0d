# staffrota/models - Data models for the rotation engine
from .calendar import DEFAULT_CALENDAR, Rotation
from .constraints import ScoringWeights, SolverConfig, StationTarget
from .day import DayInput, ForcedAssignment, ShiftException, SideTaskRule
from .notification import Notification, NotificationLog, Severity
from .person import Person, build_roster
from .schedule import DaySchedule, RotationAssignment
from .station import ALL_STATIONS, PSEUDO_STATIONS, WORKING_STATIONS, Station

__all__ = [
    "Person", "build_roster",
    "Station", "WORKING_STATIONS", "PSEUDO_STATIONS", "ALL_STATIONS",
    "Rotation", "DEFAULT_CALENDAR",
    "ShiftException", "SideTaskRule", "ForcedAssignment", "DayInput",
    "Notification", "NotificationLog", "Severity",
    "DaySchedule", "RotationAssignment",
    "SolverConfig", "ScoringWeights", "StationTarget",
]
