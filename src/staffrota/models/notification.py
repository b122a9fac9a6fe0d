"""Notification log emitted alongside a day's assignment."""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional

import pandas as pd

logger = logging.getLogger("staffrota.notifications")


class Severity(str, Enum):
    """Notification severity."""
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"

    @property
    def log_level(self) -> int:
        """Logging level a notification of this severity is mirrored at."""
        return {
            Severity.INFO: logging.INFO,
            Severity.WARNING: logging.WARNING,
            Severity.CRITICAL: logging.ERROR,
        }[self]


@dataclass(frozen=True)
class Notification:
    """A single diagnostic record."""
    id: str
    severity: Severity
    message: str
    rotation_id: Optional[int] = None

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "severity": self.severity.value,
            "message": self.message,
            "rotation_id": self.rotation_id,
        }


class NotificationLog:
    """
    Append-only notification stream for one run.

    Records are never retracted. Emitting an id that is already present is
    a no-op, so re-entering a check in the same rotation does not duplicate it.
    """

    def __init__(self):
        self._items: List[Notification] = []
        self._ids = set()

    def emit(
        self,
        severity: Severity,
        id: str,
        message: str,
        rotation_id: Optional[int] = None,
    ) -> Optional[Notification]:
        """Append a notification and mirror it to the log."""
        if id in self._ids:
            return None
        note = Notification(id=id, severity=Severity(severity), message=message, rotation_id=rotation_id)
        self._items.append(note)
        self._ids.add(id)
        logger.log(note.severity.log_level, f"[{note.severity.value}] {message}")
        return note

    def info(self, id: str, message: str, rotation_id: Optional[int] = None) -> Optional[Notification]:
        return self.emit(Severity.INFO, id, message, rotation_id)

    def warning(self, id: str, message: str, rotation_id: Optional[int] = None) -> Optional[Notification]:
        return self.emit(Severity.WARNING, id, message, rotation_id)

    def critical(self, id: str, message: str, rotation_id: Optional[int] = None) -> Optional[Notification]:
        return self.emit(Severity.CRITICAL, id, message, rotation_id)

    def __iter__(self) -> Iterator[Notification]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, id: str) -> bool:
        return id in self._ids

    @property
    def items(self) -> List[Notification]:
        """Snapshot of all notifications in emission order."""
        return list(self._items)

    def by_rotation(self, rotation_id: int) -> List[Notification]:
        return [n for n in self._items if n.rotation_id == rotation_id]

    def by_severity(self, severity: Severity) -> List[Notification]:
        severity = Severity(severity)
        return [n for n in self._items if n.severity == severity]

    @property
    def has_critical(self) -> bool:
        return any(n.severity == Severity.CRITICAL for n in self._items)

    def counts(self) -> Dict[str, int]:
        """Number of notifications per severity."""
        out = {s.value: 0 for s in Severity}
        for n in self._items:
            out[n.severity.value] += 1
        return out

    def to_list(self) -> List[Dict]:
        return [n.to_dict() for n in self._items]

    def to_dataframe(self) -> pd.DataFrame:
        """Convert notifications to a DataFrame."""
        if not self._items:
            return pd.DataFrame(columns=["id", "severity", "message", "rotation_id"])
        return pd.DataFrame(self.to_list())
