"""Per-person station history carried across rotations."""
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from staffrota.models.station import Station


class History:
    """
    Ordered record of the stations each person held, one entry per rotation.

    Entries are keyed by the rotation's position in the calendar. Recording
    twice for the same position replaces the entry, so a pin that overrides
    a side task leaves exactly one entry for that rotation.
    """

    def __init__(
        self,
        people: Iterable[str] = (),
        prior: Optional[Mapping[str, Sequence[Station]]] = None,
    ):
        self._entries: Dict[str, List[Tuple[int, Station]]] = {p: [] for p in people}
        for person, stations in (prior or {}).items():
            stations = list(stations)
            seeded = [(i - len(stations), s) for i, s in enumerate(stations)]
            self._entries[person] = seeded + self._entries.get(person, [])

    def record(self, person: str, index: int, station: Station) -> bool:
        """
        Record ``station`` for ``person`` at rotation position ``index``.

        Returns:
            True if history changed.
        """
        entries = self._entries.setdefault(person, [])
        if entries and entries[-1][0] == index:
            if entries[-1][1] == station:
                return False
            entries[-1] = (index, station)
            return True
        entries.append((index, station))
        return True

    def recorded_at(self, person: str, index: int) -> Optional[Station]:
        for i, station in self._entries.get(person, []):
            if i == index:
                return station
        return None

    def stations(self, person: str, before: Optional[int] = None) -> List[Station]:
        """Stations held by ``person``, optionally only before position ``before``."""
        entries = self._entries.get(person, [])
        if before is None:
            return [s for _, s in entries]
        return [s for i, s in entries if i < before]

    def last(self, person: str, before: Optional[int] = None) -> Optional[Station]:
        past = self.stations(person, before)
        return past[-1] if past else None

    def count(self, person: str, station: Station, before: Optional[int] = None) -> int:
        return sum(1 for s in self.stations(person, before) if s == station)

    def has_done(self, person: str, station: Station, before: Optional[int] = None) -> bool:
        return station in self.stations(person, before)

    def __len__(self) -> int:
        return len(self._entries)

    def snapshot(self) -> Dict[str, List[Station]]:
        """Copy of every person's stations in order."""
        return {p: [s for _, s in entries] for p, entries in self._entries.items()}
