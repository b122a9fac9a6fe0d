"""
Station Display Rules
=====================
Central source of truth for station labels and export colors.
"""
from dataclasses import dataclass
from typing import Dict

from .station import ALL_STATIONS, Station


@dataclass
class StationStyle:
    code: str
    label: str
    color_bg: str
    color_text: str
    is_pseudo: bool


STATIONS: Dict[Station, StationStyle] = {
    Station.TICKET: StationStyle("TK", "Ticket", "FEF3C7", "78350F", False),
    Station.GREETER: StationStyle("GR", "Greeter", "FFEDD5", "7C2D12", False),
    Station.PLANETARIUM: StationStyle("PL", "Planetarium", "D1FAE5", "064E3B", False),
    Station.MUSEUM: StationStyle("MU", "Museum", "E0E7FF", "312E81", False),
    Station.SIDE_TASK: StationStyle("ST", "Side Task", "F1F5F9", "475569", True),
    Station.OFF_SHIFT: StationStyle("OFF", "Off Shift", "F8FAFC", "94A3B8", True),
}

# Ordered list for exports
STATION_ORDER = list(ALL_STATIONS)


def style_for(station: Station) -> StationStyle:
    return STATIONS[station]
