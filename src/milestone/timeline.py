"""Chronological views over the project catalogue."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from .models import ProjectRecord


@dataclass(frozen=True)
class TimelineEntry:
    record: ProjectRecord
    is_first: bool
    is_last: bool
    date_label: str
    duration_label: Optional[str]


def group_by_year(records: Iterable[ProjectRecord]) -> Dict[int, List[ProjectRecord]]:
    """Group records by start year; newest year first, newest record first within a year."""
    ordered = sorted(records, key=lambda record: record.start_date, reverse=True)
    groups: Dict[int, List[ProjectRecord]] = {}
    for record in ordered:
        groups.setdefault(record.start_date.year, []).append(record)
    return groups


def timeline_entries(records: Iterable[ProjectRecord]) -> List[TimelineEntry]:
    ordered = sorted(records, key=lambda record: record.start_date)
    last_index = len(ordered) - 1
    entries: List[TimelineEntry] = []
    for index, record in enumerate(ordered):
        entries.append(
            TimelineEntry(
                record=record,
                is_first=index == 0,
                is_last=index == last_index,
                date_label=f"{record.start_date.strftime('%b')} {record.start_date.day}",
                duration_label=record.duration_text() if record.end_date is not None else None,
            )
        )
    return entries
