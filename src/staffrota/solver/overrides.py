"""
Override Processor
==================
Applies operator pins before automatic filling.
"""
import logging
from typing import Dict, Iterable, List, Set

from staffrota.models.calendar import Rotation
from staffrota.models.constraints import SolverConfig
from staffrota.models.day import ForcedAssignment
from staffrota.models.notification import NotificationLog
from staffrota.models.station import Station
from staffrota.solver.history import History
from staffrota.solver.scoring import CONSECUTIVE_REPEAT, SCARCE_REPEAT, detect_rule_breaks

logger = logging.getLogger("staffrota.solver.overrides")


def apply_forced_assignments(
    rotation: Rotation,
    index: int,
    forces: Iterable[ForcedAssignment],
    buckets: Dict[Station, List[str]],
    pool: List[str],
    off_shift: Set[str],
    roster: Set[str],
    history: History,
    config: SolverConfig,
    log: NotificationLog,
) -> List[str]:
    """
    Place pinned people ahead of scoring.

    Pins are never rejected, only reported when they break a rule. Pins for
    off-shift people are ignored. A later pin for the same person in the
    same rotation replaces an earlier one.

    Args:
        rotation: Rotation being processed
        index: Position of the rotation in the calendar
        forces: Pins for this rotation, in input order
        buckets: Station membership for the rotation, mutated
        pool: Available slot ids, mutated
        off_shift: People absent this rotation
        roster: Known slot ids
        history: Run history, mutated
        config: Solver configuration
        log: Run notification log, mutated

    Returns:
        Slot ids that were pinned
    """
    pinned: List[str] = []
    for force in forces:
        person, station = force.person, force.station
        if person not in roster:
            logger.warning(f"Rotation {rotation.id}: pin for unknown person {person} ignored")
            continue
        if person in off_shift:
            logger.info(f"Rotation {rotation.id}: {person} is off shift, pin to {station.value} ignored")
            continue

        if person not in buckets[station]:
            past = history.stations(person, before=index)
            breaks = detect_rule_breaks(station, past, config)
            if CONSECUTIVE_REPEAT in breaks:
                log.warning(
                    f"warn-force-repeat-{rotation.id}-{person}",
                    f"Manual Override: {person} is repeating {station.value} consecutively "
                    f"in Rotation {rotation.id}.",
                    rotation_id=rotation.id,
                )
            if SCARCE_REPEAT in breaks:
                log.warning(
                    f"warn-force-scarce-{rotation.id}-{person}",
                    f"Manual Override: {person} is assigned {station.value} more than once "
                    f"(Rotation {rotation.id}).",
                    rotation_id=rotation.id,
                )

        for other, members in buckets.items():
            if other != station and person in members:
                members.remove(person)
        if person in pool:
            pool.remove(person)
        if person not in buckets[station]:
            buckets[station].append(person)
        history.record(person, index, station)
        if person not in pinned:
            pinned.append(person)
        logger.debug(f"Rotation {rotation.id}: pinned {person} to {station.value}")
    return pinned
