"""
Pydantic Validated Models
=========================
Strict validation of a day's input at the boundary (CLI, JSON documents).

Usage:
    from staffrota.models.validated import ValidatedDayInput

    day = ValidatedDayInput.model_validate(payload).to_dataclass()

The engine itself works on the plain dataclasses in ``models.day`` and
assumes well-formed input.
"""
import re
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .calendar import DEFAULT_CALENDAR, Rotation, parse_hhmm
from .day import DayInput, ForcedAssignment, ShiftException, SideTaskRule
from .station import Station

HHMM = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _check_hhmm(value: str) -> str:
    value = str(value).strip()
    if not HHMM.match(value):
        raise ValueError(f"time must be HH:mm, got {value!r}")
    return value


def _check_station(value) -> Station:
    if isinstance(value, Station):
        return value
    return Station.from_string(value)


class ValidatedRotation(BaseModel):
    """A calendar window with a non-empty, non-inverted span."""
    id: int = Field(ge=1)
    start: str
    end: str

    @field_validator("start", "end")
    @classmethod
    def validate_time(cls, v: str) -> str:
        return _check_hhmm(v)

    @model_validator(mode="after")
    def validate_window(self):
        if parse_hhmm(self.end) <= parse_hhmm(self.start):
            raise ValueError(f"rotation {self.id} ends before it starts")
        return self


class ValidatedShiftException(BaseModel):
    person: str = Field(min_length=1)
    start: str
    end: str
    id: str = ""

    @field_validator("start", "end")
    @classmethod
    def validate_time(cls, v: str) -> str:
        return _check_hhmm(v)

    @model_validator(mode="after")
    def validate_window(self):
        if parse_hhmm(self.end) <= parse_hhmm(self.start):
            raise ValueError(f"shift exception for {self.person} ends before it starts")
        return self


class ValidatedSideTask(BaseModel):
    rotation_id: int = Field(ge=1)
    person: str = Field(min_length=1)
    note: str = ""
    id: str = ""


class ValidatedForcedAssignment(BaseModel):
    rotation_id: int = Field(ge=1)
    station: Station
    person: str = Field(min_length=1)

    @field_validator("station", mode="before")
    @classmethod
    def parse_station(cls, v):
        return _check_station(v)


class ValidatedDayInput(BaseModel):
    """
    Pydantic-validated day input.

    Use this for strict validation at API boundaries.
    Can be converted to the dataclass DayInput.
    """
    model_config = ConfigDict(validate_assignment=True)

    roster_size: int = Field(default=6, ge=0, le=500, description="Number of people (slots B1..Bn)")
    calendar: List[ValidatedRotation] = Field(
        default_factory=lambda: [ValidatedRotation(**r.to_dict()) for r in DEFAULT_CALENDAR]
    )
    shift_exceptions: List[ValidatedShiftException] = Field(default_factory=list)
    side_tasks: List[ValidatedSideTask] = Field(default_factory=list)
    forced_assignments: List[ValidatedForcedAssignment] = Field(default_factory=list)
    names: Dict[str, str] = Field(default_factory=dict)
    prior_history: Dict[str, List[Station]] = Field(default_factory=dict)

    @field_validator("prior_history", mode="before")
    @classmethod
    def parse_history(cls, v):
        if not v:
            return {}
        return {str(pid): [_check_station(s) for s in stations] for pid, stations in v.items()}

    @model_validator(mode="after")
    def validate_model(self):
        """Cross-field validation."""
        if not self.calendar:
            raise ValueError("calendar must contain at least one rotation")
        ids = [r.id for r in self.calendar]
        if len(set(ids)) != len(ids):
            raise ValueError("rotation ids must be unique")
        known = set(ids)
        for rule in self.side_tasks:
            if rule.rotation_id not in known:
                raise ValueError(f"side task references unknown rotation {rule.rotation_id}")
        for force in self.forced_assignments:
            if force.rotation_id not in known:
                raise ValueError(f"forced assignment references unknown rotation {force.rotation_id}")
        return self

    def to_dataclass(self) -> DayInput:
        """Convert to dataclass DayInput for the engine."""
        return DayInput(
            roster_size=self.roster_size,
            calendar=[Rotation(r.id, r.start, r.end) for r in self.calendar],
            shift_exceptions=[
                ShiftException(person=e.person, start=e.start, end=e.end, id=e.id)
                for e in self.shift_exceptions
            ],
            side_tasks=[
                SideTaskRule(rotation_id=t.rotation_id, person=t.person, note=t.note, id=t.id)
                for t in self.side_tasks
            ],
            forced_assignments=[
                ForcedAssignment(rotation_id=f.rotation_id, station=f.station, person=f.person)
                for f in self.forced_assignments
            ],
            names=dict(self.names),
            prior_history={pid: list(stations) for pid, stations in self.prior_history.items()},
        )

    @classmethod
    def from_dataclass(cls, day: DayInput) -> "ValidatedDayInput":
        """Create from dataclass DayInput."""
        return cls.model_validate(day.to_dict())
