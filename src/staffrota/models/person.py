"""Person model for roster slots."""
from dataclasses import dataclass
from typing import Dict, List, Optional

SLOT_PREFIX = "B"


@dataclass
class Person:
    """
    A roster slot.

    ``slot_id`` is the identity that owns history. ``name`` is a cosmetic
    label: renaming a slot, or swapping names between two slots, does not
    move any history with it.
    """

    slot_id: str
    name: Optional[str] = None

    def __post_init__(self):
        """Normalize fields."""
        self.slot_id = str(self.slot_id).strip()
        if self.name is not None:
            self.name = str(self.name).strip() or None

    @property
    def label(self) -> str:
        """Display label, falling back to the slot id."""
        return self.name or self.slot_id

    def to_dict(self) -> dict:
        return {"slot_id": self.slot_id, "name": self.name}


def slot_ids(size: int) -> List[str]:
    """Slot ids ``B1..Bn`` for a roster of ``size`` people."""
    return [f"{SLOT_PREFIX}{i}" for i in range(1, max(0, size) + 1)]


def build_roster(size: int, names: Optional[Dict[str, str]] = None) -> List[Person]:
    """
    Build the roster for a day.

    Args:
        size: Number of people on the team
        names: Optional slot id -> display name map

    Returns:
        List of Person objects in slot order
    """
    names = names or {}
    return [Person(slot_id=sid, name=names.get(sid)) for sid in slot_ids(size)]
