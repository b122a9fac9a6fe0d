"""Excel export functionality for solved days."""
import io
from pathlib import Path
from typing import Union

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from staffrota.models.rules import STATION_ORDER, style_for
from staffrota.models.schedule import DaySchedule
from staffrota.models.station import Station

SEVERITY_COLORS = {
    "info": "DBEAFE",
    "warning": "FEF3C7",
    "critical": "FEE2E2",
}

THIN = Side(border_style="thin", color="CCCCCC")
BORDER_THIN = Border(top=THIN, bottom=THIN, left=THIN, right=THIN)


def _fill(color: str) -> PatternFill:
    return PatternFill(start_color=color, end_color=color, fill_type="solid")


def _write_header(ws, headers, row: int = 1):
    for j, value in enumerate(headers, start=1):
        cell = ws.cell(row=row, column=j, value=value)
        cell.font = Font(bold=True)
        cell.alignment = Alignment(horizontal="center", vertical="center")
        cell.border = BORDER_THIN


def _write_board(ws, schedule: DaySchedule):
    """Rotation rows × station columns, names joined per cell."""
    _write_header(ws, ["Rotation", "Time"] + [s.value for s in STATION_ORDER])
    for j, station in enumerate(STATION_ORDER, start=3):
        ws.cell(row=1, column=j).fill = _fill(style_for(station).color_bg)

    for r, rot in enumerate(schedule.rotations, start=2):
        ws.cell(row=r, column=1, value=rot.id).border = BORDER_THIN
        ws.cell(row=r, column=2, value=rot.time_range).border = BORDER_THIN
        for j, station in enumerate(STATION_ORDER, start=3):
            labels = []
            for pid in rot.assignments.get(station, []):
                notice = rot.notices.get(pid)
                label = schedule.label(pid)
                labels.append(f"{label} ({notice})" if notice else label)
            cell = ws.cell(row=r, column=j, value=", ".join(labels))
            cell.alignment = Alignment(wrap_text=True, vertical="top")
            cell.border = BORDER_THIN

    ws.column_dimensions["A"].width = 10
    ws.column_dimensions["B"].width = 16
    for j in range(3, len(STATION_ORDER) + 3):
        ws.column_dimensions[get_column_letter(j)].width = 22
    ws.freeze_panes = "C2"


def _write_matrix(ws, schedule: DaySchedule):
    """Person rows × rotation columns, colored by station."""
    _write_header(ws, ["Person", "Name"] + [f"R{rot.id} {rot.time_range}" for rot in schedule.rotations])
    for r, person in enumerate(schedule.roster, start=2):
        ws.cell(row=r, column=1, value=person.slot_id).font = Font(bold=True)
        ws.cell(row=r, column=2, value=person.label)
        for c, rot in enumerate(schedule.rotations, start=3):
            station = rot.station_of(person.slot_id)
            cell = ws.cell(row=r, column=c, value=station.value if station else "")
            if station is not None:
                style = style_for(station)
                cell.fill = _fill(style.color_bg)
                cell.font = Font(color=style.color_text, italic=station == Station.SIDE_TASK)
            cell.alignment = Alignment(horizontal="center", vertical="center")
            cell.border = BORDER_THIN

    for j in range(1, len(schedule.rotations) + 3):
        ws.column_dimensions[get_column_letter(j)].width = 16
    ws.freeze_panes = "C2"


def _write_notifications(ws, schedule: DaySchedule):
    _write_header(ws, ["Severity", "Rotation", "Message", "Id"])
    for r, note in enumerate(schedule.notifications, start=2):
        values = [note.severity.value, note.rotation_id or "", note.message, note.id]
        for j, value in enumerate(values, start=1):
            cell = ws.cell(row=r, column=j, value=value)
            cell.fill = _fill(SEVERITY_COLORS[note.severity.value])
            cell.border = BORDER_THIN
    for col, width in zip("ABCD", (12, 10, 80, 36)):
        ws.column_dimensions[col].width = width
    ws.freeze_panes = "A2"


def _write_stats(ws, schedule: DaySchedule):
    stats = schedule.get_person_stats()
    if stats.empty:
        return
    _write_header(ws, list(stats.columns))
    for i in range(len(stats)):
        for j in range(len(stats.columns)):
            value = stats.iat[i, j]
            ws.cell(row=2 + i, column=1 + j, value=value if isinstance(value, str) else int(value))
    for j in range(1, len(stats.columns) + 1):
        ws.column_dimensions[get_column_letter(j)].width = 14
    ws.freeze_panes = "A2"


def export_to_excel(
    schedule: DaySchedule,
    output: Union[str, Path, io.BytesIO],
) -> None:
    """
    Export a solved day to an Excel workbook.

    Sheets: board (rotation × station), matrix (person × rotation),
    notifications and per-person station counts.

    Args:
        schedule: DaySchedule from ``solve_day``
        output: File path or BytesIO buffer
    """
    wb = Workbook()

    ws_board = wb.active
    ws_board.title = "Board"
    _write_board(ws_board, schedule)

    _write_matrix(wb.create_sheet("Matrix"), schedule)
    _write_notifications(wb.create_sheet("Notifications"), schedule)
    _write_stats(wb.create_sheet("Stats"), schedule)

    if isinstance(output, io.BytesIO):
        wb.save(output)
    else:
        wb.save(str(output))


def export_to_csv(schedule: DaySchedule, output: Union[str, Path, io.StringIO]) -> None:
    """Export one row per (rotation, person) to CSV."""
    df = schedule.to_dataframe()
    if isinstance(output, io.StringIO):
        df.to_csv(output, index=False)
    else:
        df.to_csv(str(output), index=False)
