"""Rotation-by-rotation assignment engine."""
import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional

from staffrota.models.constraints import SolverConfig
from staffrota.models.day import DayInput
from staffrota.models.notification import NotificationLog, Severity
from staffrota.models.person import build_roster
from staffrota.models.schedule import DaySchedule, RotationAssignment
from staffrota.models.station import Station
from staffrota.solver.availability import (
    announce_shift_exceptions,
    effective_exceptions,
    resolve_availability,
)
from staffrota.solver.filler import RotationFiller
from staffrota.solver.history import History
from staffrota.solver.overrides import apply_forced_assignments
from staffrota.utils.logging_setup import SolverLogger, log_function_call

logger = logging.getLogger("staffrota.solver")


@dataclass
class RunState:
    """Accumulator threaded through every rotation of one run."""
    history: History
    log: NotificationLog = field(default_factory=NotificationLog)
    rotations: List[RotationAssignment] = field(default_factory=list)


@log_function_call
def solve_day(
    day: DayInput,
    config: Optional[SolverConfig] = None,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
) -> DaySchedule:
    """
    Assign every roster person to a station for every rotation of the day.

    Rotations are processed in calendar order because each one scores
    against the history written by the ones before it. Rule breaks and
    shortages are reported in the returned notification log, never raised.

    Args:
        day: Roster size, calendar, exceptions, side tasks and pins
        config: Solver configuration (uses defaults if None)
        rng: Source of tie-break randomness; takes precedence over ``seed``
        seed: Seed for a fresh ``random.Random`` when ``rng`` is not given

    Returns:
        DaySchedule with one RotationAssignment per rotation
    """
    config = config or SolverConfig()
    if rng is None:
        rng = random.Random(seed)

    problems = config.weights.validate()
    if problems:
        logger.warning(f"Scoring weights lose their ordering: {'; '.join(problems)}")

    roster = build_roster(day.roster_size, day.names)
    roster_ids = [p.slot_id for p in roster]
    known = set(roster_ids)
    prior = {}
    for person, stations in day.prior_history.items():
        if person not in known:
            logger.warning(f"Prior history for {person} ignored, not on the roster")
            continue
        prior[person] = stations
    state = RunState(history=History(roster_ids, prior))

    slog = SolverLogger()
    slog.phase(f"Solving {len(day.calendar)} rotations for {len(roster)} people")

    if not roster:
        logger.warning("Empty roster - returning empty rotations")
        state.rotations = [RotationAssignment(rotation=rot) for rot in day.calendar]
        return DaySchedule(
            rotations=state.rotations,
            notifications=state.log,
            roster=roster,
            history=state.history.snapshot(),
            seed=seed,
        )

    exceptions = effective_exceptions(roster_ids, day.shift_exceptions)
    announce_shift_exceptions(exceptions, state.log)

    for index, rotation in enumerate(day.calendar):
        slog.enter(f"Rotation {rotation.id} ({rotation.time_range})")
        result = RotationAssignment(rotation=rotation)

        availability = resolve_availability(
            roster_ids, rotation, index, exceptions, day.side_tasks, state.history, state.log
        )
        result.notices = dict(availability.notices)
        result.assignments[Station.OFF_SHIFT].extend(availability.off_shift)
        result.assignments[Station.SIDE_TASK].extend(availability.side_task)

        pool = list(availability.available)
        pinned = apply_forced_assignments(
            rotation,
            index,
            day.forces_for(rotation.id),
            result.assignments,
            pool,
            availability.off_shift_set,
            known,
            state.history,
            config,
            state.log,
        )
        slog.detail("pinned", pinned)

        if config.shuffle_pool:
            rng.shuffle(pool)
        slog.detail("pool", len(pool))

        RotationFiller(rotation, index, result.assignments, pool, state.history, config, rng, state.log).run()
        short = [n for n in state.log.by_rotation(rotation.id) if n.severity == Severity.CRITICAL]
        slog.check("named stations staffed", not short, f"{len(short)} shortage(s)" if short else "")
        state.rotations.append(result)
        slog.exit(f"Rotation {rotation.id} done")

    counts = state.log.counts()
    slog.step(
        f"Done: {counts['critical']} critical, {counts['warning']} warning, {counts['info']} info"
    )
    return DaySchedule(
        rotations=state.rotations,
        notifications=state.log,
        roster=roster,
        history=state.history.snapshot(),
        seed=seed,
    )


def reshuffle(day: DayInput, config: Optional[SolverConfig] = None) -> DaySchedule:
    """Solve again with fresh randomness; pins are unaffected."""
    seed = random.SystemRandom().randrange(2**32)
    logger.info(f"Re-shuffling with seed {seed}")
    return solve_day(day, config=config, seed=seed)
