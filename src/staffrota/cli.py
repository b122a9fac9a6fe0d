from __future__ import annotations

import argparse
import json
import logging

from pydantic import ValidationError

from staffrota.io.day_loader import load_day_input
from staffrota.io.excel_export import export_to_csv, export_to_excel
from staffrota.models.day import DayInput
from staffrota.solver.engine import reshuffle, solve_day
from staffrota.solver.validation import validate_day
from staffrota.utils.logging_setup import setup_logging
from staffrota.utils.structured_logging import configure_structlog, get_structured_logger


def _load(args: argparse.Namespace) -> DayInput:
    if args.input:
        day = load_day_input(args.input)
    else:
        day = load_day_input({})
    if args.roster is not None:
        day.roster_size = max(0, int(args.roster))
    return day


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Station rotation engine")
    p.add_argument("--input", help="JSON day document (calendar, exceptions, side tasks, pins)")
    p.add_argument("--roster", type=int, help="Roster size, overrides the document (slots B1..Bn)")
    p.add_argument("--seed", type=int, help="Seed for a reproducible run")
    p.add_argument("--reshuffle", action="store_true", help="Use fresh randomness (ignores --seed)")
    p.add_argument("--excel", help="Write the solved day to this .xlsx file")
    p.add_argument("--csv", help="Write the solved day to this .csv file")
    p.add_argument("--json", dest="json_out", action="store_true", help="Print the solved day as JSON")
    p.add_argument("--json-logs", action="store_true", help="Structured JSON run events")
    p.add_argument("--log-file", default=None, help="Also log to this file")
    p.add_argument("-v", "--verbose", action="count", default=0)
    args = p.parse_args(argv)

    level = "DEBUG" if args.verbose > 1 else "INFO" if args.verbose else "WARNING"
    setup_logging(level=level, log_file=args.log_file)
    configure_structlog(json_output=args.json_logs, level=getattr(logging, level))
    events = get_structured_logger("staffrota.cli")

    try:
        day = _load(args)
    except (ValueError, ValidationError) as e:
        events.error("invalid_input", error=str(e))
        return 2

    schedule = reshuffle(day) if args.reshuffle else solve_day(day, seed=args.seed)
    audit = validate_day(schedule, day=day)
    events.info("day_solved", seed=schedule.seed, **schedule.summary()["notifications"], **audit.as_dict())

    if args.excel:
        export_to_excel(schedule, args.excel)
    if args.csv:
        export_to_csv(schedule, args.csv)

    if args.json_out:
        print(json.dumps(schedule.to_dict(), ensure_ascii=False, indent=2))
    else:
        for rot in schedule.rotations:
            print(f"Rotation {rot.id} ({rot.time_range})")
            for station, people in rot.assignments.items():
                if people:
                    print(f" - {station.value}: {', '.join(schedule.label(pid) for pid in people)}")
        if len(schedule.notifications):
            print("Notifications:")
            for note in schedule.notifications:
                print(f" [{note.severity.value}] {note.message}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
