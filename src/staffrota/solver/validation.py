"""
Validation
==========
Audit a solved day against the rotation rules, independently of the
notifications the engine emitted while building it.
"""
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from staffrota.models.constraints import SolverConfig
from staffrota.models.day import DayInput
from staffrota.models.schedule import DaySchedule
from staffrota.models.station import Station
from staffrota.utils.logging_setup import get_logger

logger = get_logger("staffrota.solver.validation")


@dataclass
class Violation:
    """Single violation with details."""
    type: str  # "omission", "duplicate", "consecutive_repeat", "scarce_repeat", "shortage", "pin_ignored"
    severity: str  # "critical", "warning", "info"
    rotation_id: int
    message: str
    person: str = ""
    station: str = ""


@dataclass
class ValidationResult:
    """Validation metrics for a day."""
    omissions: int = 0            # Roster person missing from a rotation
    duplicates: int = 0           # Person in two buckets of one rotation
    consecutive_repeats: int = 0  # Same named station two rotations in a row
    scarce_repeats: int = 0       # Scarce station more than once in the day
    shortages: int = 0            # Named station below its requirement
    pins_ignored: int = 0         # Pins that did not end up in place

    violations: List[Violation] = field(default_factory=list)

    def add_violation(self, v: Violation):
        self.violations.append(v)

    def as_dict(self) -> Dict[str, int]:
        return {
            "omissions": self.omissions,
            "duplicates": self.duplicates,
            "consecutive_repeats": self.consecutive_repeats,
            "scarce_repeats": self.scarce_repeats,
            "shortages": self.shortages,
            "pins_ignored": self.pins_ignored,
        }

    @property
    def has_critical_issues(self) -> bool:
        """Omissions or duplicates mean the output is structurally broken."""
        return self.omissions > 0 or self.duplicates > 0

    def get_critical_violations(self) -> List[Violation]:
        return [v for v in self.violations if v.severity == "critical"]

    def get_warnings(self) -> List[Violation]:
        return [v for v in self.violations if v.severity == "warning"]


def validate_day(
    schedule: DaySchedule,
    config: Optional[SolverConfig] = None,
    day: Optional[DayInput] = None,
) -> ValidationResult:
    """
    Validate a solved day and count violations.

    Args:
        schedule: Output of ``solve_day``
        config: Solver configuration the day was solved with
        day: Input the day was solved from; enables the pin check

    Returns:
        ValidationResult with all metrics
    """
    config = config or SolverConfig()
    roster = [p.slot_id for p in schedule.roster]
    result = ValidationResult()

    # 1. Every person in exactly one bucket per rotation
    for rot in schedule.rotations:
        counts = Counter(rot.all_people())
        for person in roster:
            seen = counts.get(person, 0)
            if seen == 0:
                result.omissions += 1
                result.add_violation(Violation(
                    type="omission", severity="critical", rotation_id=rot.id, person=person,
                    message=f"Rotation {rot.id}: {person} is not placed anywhere",
                ))
            elif seen > 1:
                result.duplicates += 1
                result.add_violation(Violation(
                    type="duplicate", severity="critical", rotation_id=rot.id, person=person,
                    message=f"Rotation {rot.id}: {person} placed {seen} times",
                ))

    # 2. Named-station requirements
    for rot in (schedule.rotations if roster else []):
        for station in dict.fromkeys(t.station for t in config.fill_plan):
            required = config.required_for(station)
            found = len(rot.assignments.get(station, []))
            if found < required:
                result.shortages += 1
                result.add_violation(Violation(
                    type="shortage", severity="critical", rotation_id=rot.id,
                    station=station.value,
                    message=f"Rotation {rot.id}: {station.value} has {found}/{required}",
                ))

    # 3. Repeats across consecutive rotations and scarce station reuse
    for person in roster:
        previous = None
        scarce_seen = 0
        for rot in schedule.rotations:
            station = rot.station_of(person)
            if station is None:
                previous = None
                continue
            if (
                station == previous
                and station.is_working
                and station != config.catch_all_station
            ):
                result.consecutive_repeats += 1
                result.add_violation(Violation(
                    type="consecutive_repeat", severity="warning", rotation_id=rot.id,
                    person=person, station=station.value,
                    message=f"Rotation {rot.id}: {person} repeats {station.value}",
                ))
            if station == config.scarce_station:
                scarce_seen += 1
                if scarce_seen > 1:
                    result.scarce_repeats += 1
                    result.add_violation(Violation(
                        type="scarce_repeat", severity="warning", rotation_id=rot.id,
                        person=person, station=station.value,
                        message=f"Rotation {rot.id}: {person} on {station.value} again",
                    ))
            previous = station

    # 4. Pins honored unless the person was off shift
    if day is not None:
        last_pin = {}
        for force in day.forced_assignments:
            last_pin[(force.rotation_id, force.person)] = force.station
        for (rotation_id, person), station in last_pin.items():
            rot = schedule.get_rotation(rotation_id)
            if rot is None or person not in roster:
                continue
            actual = rot.station_of(person)
            if actual != station and actual != Station.OFF_SHIFT:
                result.pins_ignored += 1
                result.add_violation(Violation(
                    type="pin_ignored", severity="critical", rotation_id=rotation_id,
                    person=person, station=station.value,
                    message=f"Rotation {rotation_id}: {person} pinned to {station.value} but placed on "
                            f"{actual.value if actual else 'nothing'}",
                ))

    logger.debug(f"Validation: {result.as_dict()}")
    return result
