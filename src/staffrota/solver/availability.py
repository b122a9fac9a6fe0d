"""
Availability Resolver
=====================
Partitions the roster for one rotation into off-shift, side-task and
available people.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set

from staffrota.models.calendar import Rotation
from staffrota.models.day import ShiftException, SideTaskRule
from staffrota.models.notification import NotificationLog
from staffrota.models.station import Station
from staffrota.solver.history import History

logger = logging.getLogger("staffrota.solver.availability")


@dataclass
class Availability:
    """Roster partition for one rotation."""
    available: List[str] = field(default_factory=list)
    side_task: List[str] = field(default_factory=list)
    off_shift: List[str] = field(default_factory=list)

    # Partial-presence notices for people who only cover part of the window
    notices: Dict[str, str] = field(default_factory=dict)

    @property
    def off_shift_set(self) -> Set[str]:
        return set(self.off_shift)


def effective_exceptions(
    roster: Iterable[str],
    shift_exceptions: Iterable[ShiftException],
) -> Dict[str, ShiftException]:
    """First shift exception per roster person; the rest are ignored."""
    people = set(roster)
    chosen: Dict[str, ShiftException] = {}
    for exc in shift_exceptions:
        if exc.person not in people:
            logger.warning(f"Shift exception {exc.id} names {exc.person}, who is not on the roster")
            continue
        if exc.person in chosen:
            logger.warning(f"Ignoring extra shift exception {exc.id} for {exc.person}")
            continue
        chosen[exc.person] = exc
    return chosen


def announce_shift_exceptions(
    exceptions: Dict[str, ShiftException],
    log: NotificationLog,
) -> None:
    """One info notification per effective exception, not tied to a rotation."""
    for exc in exceptions.values():
        log.info(
            f"shift-{exc.id}",
            f"{exc.person} has a custom shift ({exc.start}-{exc.end}).",
        )


def resolve_availability(
    roster: List[str],
    rotation: Rotation,
    index: int,
    exceptions: Dict[str, ShiftException],
    side_tasks: Iterable[SideTaskRule],
    history: History,
    log: NotificationLog,
) -> Availability:
    """
    Classify every roster person for one rotation.

    Off-shift and side-task people are recorded in ``history`` at ``index``;
    available people are left for the override processor and the filler.

    Args:
        roster: Slot ids in roster order
        rotation: The rotation being resolved
        index: Position of the rotation in the calendar
        exceptions: Effective shift exception per person
        side_tasks: All side-task rules for the day
        history: Run history, mutated
        log: Run notification log, mutated

    Returns:
        Availability partition
    """
    on_side_task = {t.person for t in side_tasks if t.rotation_id == rotation.id}
    result = Availability()

    for person in roster:
        exc = exceptions.get(person)
        if exc is not None and not exc.is_present(rotation):
            result.off_shift.append(person)
            history.record(person, index, Station.OFF_SHIFT)
            continue

        if exc is not None:
            notice = exc.notice_for(rotation)
            if notice:
                result.notices[person] = notice

        if person in on_side_task:
            result.side_task.append(person)
            history.record(person, index, Station.SIDE_TASK)
            log.info(
                f"side-{rotation.id}-{person}",
                f"{person} assigned to Side Task in Rotation {rotation.id}.",
                rotation_id=rotation.id,
            )
        else:
            result.available.append(person)

    logger.debug(
        f"Rotation {rotation.id}: {len(result.available)} available, "
        f"{len(result.side_task)} side task, {len(result.off_shift)} off shift"
    )
    return result
