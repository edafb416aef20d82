from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import List, Sequence, TextIO

from .errors import WorkloadError
from .models import Process, validate_processes

logger = logging.getLogger(__name__)

HEADER_FIELDS = {"pid", "arrival_time", "burst_time", "priority"}


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.

    Anything that is not ``.json`` is read as CSV.
    """
    path = Path(path)
    loader = _load_json if path.suffix.lower() == ".json" else load_processes

    try:
        with path.open("r", encoding="utf-8", newline="") as f:
            processes = loader(f)
    except UnicodeDecodeError as exc:
        raise WorkloadError(f"Workload file {path} is not valid UTF-8: {exc.reason}") from exc
    except OSError as exc:
        raise WorkloadError(f"Cannot read workload file {path}: {exc.strerror or exc}") from exc

    logger.debug("loaded %d processes from %s", len(processes), path)
    return processes


def load_processes(stream: TextIO) -> List[Process]:
    """
    Parse CSV process records from an open text stream.

    Rows are ``processID,burstDuration,arrivalTime[,priority]``. A first row
    naming the columns (``pid,arrival_time,burst_time,priority``) switches to
    header-keyed parsing instead.
    """
    try:
        rows = [row for row in csv.reader(stream, strict=True) if row]
    except csv.Error as exc:
        raise WorkloadError(f"Malformed CSV: {exc}") from exc

    if rows and {cell.strip().lower() for cell in rows[0]} & HEADER_FIELDS:
        header = [cell.strip().lower() for cell in rows[0]]
        processes = []
        for line, row in enumerate(rows[1:], start=2):
            if len(row) > len(header):
                raise WorkloadError(f"Record {line}: expected at most {len(header)} fields, got {len(row)}")
            processes.append(_process_from_mapping(dict(zip(header, row)), line))
    else:
        processes = [_process_from_row(row, line) for line, row in enumerate(rows, start=1)]

    validate_processes(processes)
    return processes


def _load_json(f: TextIO) -> List[Process]:
    try:
        raw = json.load(f)
    except json.JSONDecodeError as exc:
        raise WorkloadError(f"Malformed JSON: {exc}") from exc

    if not isinstance(raw, list):
        raise WorkloadError("JSON workload must be a list of process objects")

    processes = [_process_from_mapping(entry, idx) for idx, entry in enumerate(raw, start=1)]
    validate_processes(processes)
    return processes


def _parse_int(value, what: str, where: int) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError) as exc:
        raise WorkloadError(f"Record {where}: {what} {value!r} is not an integer") from exc


def _process_from_row(row: Sequence[str], line: int) -> Process:
    if len(row) not in (3, 4):
        raise WorkloadError(f"Record {line}: expected 3 or 4 fields, got {len(row)}")

    return Process(
        pid=_parse_int(row[0], "process id", line),
        burst_time=_parse_int(row[1], "burst duration", line),
        arrival_time=_parse_int(row[2], "arrival time", line),
        priority=_parse_int(row[3], "priority", line) if len(row) == 4 else 0,
    )


def _process_from_mapping(mapping, where: int) -> Process:
    if not isinstance(mapping, dict):
        raise WorkloadError(f"Record {where}: invalid process entry {mapping!r}")

    try:
        pid = mapping["pid"]
        arrival_time = mapping["arrival_time"]
        burst_time = mapping["burst_time"]
    except KeyError as exc:
        raise WorkloadError(f"Record {where}: missing field {exc.args[0]!r}") from exc

    priority_val = mapping.get("priority")
    priority = _parse_int(priority_val, "priority", where) if priority_val not in (None, "") else 0

    return Process(
        pid=_parse_int(pid, "pid", where),
        arrival_time=_parse_int(arrival_time, "arrival time", where),
        burst_time=_parse_int(burst_time, "burst time", where),
        priority=priority,
    )
