"""Pytest configuration and fixtures."""
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest

from staffrota.models.calendar import DEFAULT_CALENDAR, Rotation
from staffrota.models.constraints import ScoringWeights, SolverConfig
from staffrota.models.day import DayInput, ForcedAssignment, ShiftException, SideTaskRule
from staffrota.models.station import Station


@pytest.fixture
def default_config():
    """Default solver configuration."""
    return SolverConfig()


@pytest.fixture
def no_jitter_config():
    """Configuration without the random tie-break, for exact score checks."""
    return SolverConfig(weights=ScoringWeights(jitter=0.0), shuffle_pool=False)


@pytest.fixture
def single_rotation():
    return [Rotation(1, "09:00", "10:30")]


@pytest.fixture
def sample_day():
    """Six people over the default calendar with one of each kind of input."""
    return DayInput(
        roster_size=6,
        calendar=list(DEFAULT_CALENDAR),
        shift_exceptions=[ShiftException(person="B1", start="09:00", end="12:00")],
        side_tasks=[SideTaskRule(rotation_id=2, person="B2", note="Inventory")],
        forced_assignments=[ForcedAssignment(rotation_id=3, station=Station.PLANETARIUM, person="B3")],
        names={"B1": "Jarred", "B2": "Jack"},
    )
