"""
Rotation Filler
===============
Fills named stations in priority order, then drains the pool into the
catch-all station.
"""
import logging
import random
from typing import Dict, List

from staffrota.models.calendar import Rotation
from staffrota.models.constraints import SolverConfig
from staffrota.models.notification import NotificationLog
from staffrota.models.station import Station
from staffrota.solver.history import History
from staffrota.solver.scoring import (
    CONSECUTIVE_REPEAT,
    SCARCE_REPEAT,
    detect_rule_breaks,
    rank_candidates,
)

logger = logging.getLogger("staffrota.solver.filler")


class RotationFiller:
    """Greedy station filling for one rotation."""

    def __init__(
        self,
        rotation: Rotation,
        index: int,
        buckets: Dict[Station, List[str]],
        pool: List[str],
        history: History,
        config: SolverConfig,
        rng: random.Random,
        log: NotificationLog,
    ):
        self.rotation = rotation
        self.index = index
        self.buckets = buckets
        self.pool = pool
        self.history = history
        self.config = config
        self.rng = rng
        self.log = log

    def fill(self, station: Station, target: int) -> int:
        """
        Bring ``station`` up to ``target`` members, counting pinned ones.

        Returns:
            Number of members after filling
        """
        members = self.buckets[station]
        needed = max(0, target - len(members))

        for _ in range(needed):
            if not self.pool:
                if target > 0 and station != self.config.catch_all_station:
                    self._report_shortage(station, target)
                break
            self._place(station)
        return len(members)

    def drain(self) -> int:
        """Everyone still available goes to the catch-all station."""
        station = self.config.catch_all_station
        return self.fill(station, len(self.buckets[station]) + len(self.pool))

    def run(self) -> Dict[Station, List[str]]:
        """Execute the fill plan, then drain."""
        for step in self.config.fill_plan:
            self.fill(step.station, step.required)
        self.drain()
        return self.buckets

    def _place(self, station: Station) -> str:
        ranked = rank_candidates(
            station, self.pool, self.history, self.config, self.rng, before=self.index
        )
        best = ranked[0].person
        logger.debug(
            f"Rotation {self.rotation.id} {station.value}: picked {best} "
            f"(score={ranked[0].score:.1f}, pool={len(self.pool)})"
        )

        past = self.history.stations(best, before=self.index)
        breaks = detect_rule_breaks(station, past, self.config)
        if CONSECUTIVE_REPEAT in breaks and station != self.config.catch_all_station:
            self.log.warning(
                f"warn-repeat-{self.rotation.id}-{best}",
                f"{best} is repeating {station.value} back-to-back in Rotation "
                f"{self.rotation.id} (No other options).",
                rotation_id=self.rotation.id,
            )
        if SCARCE_REPEAT in breaks:
            self.log.warning(
                f"warn-scarce-{self.rotation.id}-{best}",
                f"{best} is assigned {station.value} for a second time in Rotation "
                f"{self.rotation.id} (No other options).",
                rotation_id=self.rotation.id,
            )

        self.buckets[station].append(best)
        self.history.record(best, self.index, station)
        self.pool.remove(best)
        return best

    def _report_shortage(self, station: Station, target: int) -> None:
        found = len(self.buckets[station])
        self.log.critical(
            f"missing-{self.rotation.id}-{station.value}-{target}",
            f"Not enough staff for {station.value} in Rotation {self.rotation.id}. "
            f"Needed {target}, found {found}.",
            rotation_id=self.rotation.id,
        )
