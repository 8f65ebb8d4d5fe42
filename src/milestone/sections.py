"""Optional content sections of a project record.

A section is shown when its fields hold content or when the user explicitly
enabled it (``ProjectRecord.enabled_sections``). Adding and deleting a section
are the only operations that touch the enabled set.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional

from .models import LIST_FIELDS, ProjectRecord, is_blank


class SectionId(str, Enum):
    OVERVIEW = "overview"
    DETAILS = "details"
    VISUALS = "visuals"
    LINKS = "links"
    NOTES = "notes"
    TAGS = "tags"


CANONICAL_ORDER = tuple(SectionId)


@dataclass(frozen=True)
class SectionSpec:
    title: str
    has_content: Callable[[ProjectRecord], bool]
    clear: Callable[[ProjectRecord], None]
    seed: Optional[Callable[[ProjectRecord], None]] = None


@dataclass(frozen=True)
class Visibility:
    active: List[SectionId]
    available: List[SectionId]


def _clear_overview(record: ProjectRecord) -> None:
    record.problem = ""
    record.solution = ""
    record.goals = ""


def _clear_details(record: ProjectRecord) -> None:
    record.key_features = []
    record.challenges = ""


def _clear_visuals(record: ProjectRecord) -> None:
    record.images = []


def _clear_links(record: ProjectRecord) -> None:
    record.github_url = None
    record.live_url = None
    record.figma_url = None


def _clear_notes(record: ProjectRecord) -> None:
    record.notes = ""


def _clear_tags(record: ProjectRecord) -> None:
    record.tags = []


def _seed_details(record: ProjectRecord) -> None:
    if not record.key_features:
        record.key_features = [""]


def _seed_tags(record: ProjectRecord) -> None:
    if not record.tags:
        record.tags = [""]


SECTION_TABLE: Dict[SectionId, SectionSpec] = {
    SectionId.OVERVIEW: SectionSpec(
        title="Overview",
        has_content=lambda r: not (is_blank(r.problem) and is_blank(r.solution) and is_blank(r.goals)),
        clear=_clear_overview,
    ),
    SectionId.DETAILS: SectionSpec(
        title="Details",
        has_content=lambda r: bool(r.key_features) or not is_blank(r.challenges),
        clear=_clear_details,
        seed=_seed_details,
    ),
    SectionId.VISUALS: SectionSpec(
        title="Visuals",
        has_content=lambda r: bool(r.images),
        clear=_clear_visuals,
    ),
    SectionId.LINKS: SectionSpec(
        title="Links",
        has_content=lambda r: any(not is_blank(url) for url in (r.github_url, r.live_url, r.figma_url)),
        clear=_clear_links,
    ),
    SectionId.NOTES: SectionSpec(
        title="Notes",
        has_content=lambda r: not is_blank(r.notes),
        clear=_clear_notes,
    ),
    SectionId.TAGS: SectionSpec(
        title="Tags",
        has_content=lambda r: bool(r.tags),
        clear=_clear_tags,
        seed=_seed_tags,
    ),
}


def parse_section(value: str) -> SectionId:
    """Look up a section by name; raises ``ValueError`` for unknown names."""
    if value is not None and not isinstance(value, str):
        raise ValueError(f"Section name must be a string, got {value!r}")
    try:
        return SectionId((value or "").strip().lower())
    except ValueError:
        names = ", ".join(section.value for section in CANONICAL_ORDER)
        raise ValueError(f"Unknown section '{value}'. Expected one of: {names}") from None


def is_active(record: ProjectRecord, section: SectionId) -> bool:
    return section.value in record.enabled_sections or SECTION_TABLE[section].has_content(record)


def recompute_visibility(record: ProjectRecord) -> Visibility:
    active: List[SectionId] = []
    available: List[SectionId] = []
    for section in CANONICAL_ORDER:
        (active if is_active(record, section) else available).append(section)
    return Visibility(active=active, available=available)


def active_sections(record: ProjectRecord) -> List[SectionId]:
    return recompute_visibility(record).active


def available_to_add(record: ProjectRecord) -> List[SectionId]:
    return recompute_visibility(record).available


def add_section(record: ProjectRecord, section: SectionId) -> None:
    spec = SECTION_TABLE[section]
    record.enabled_sections.add(section.value)
    if spec.seed is not None:
        spec.seed(record)


def delete_section(record: ProjectRecord, section: SectionId) -> None:
    SECTION_TABLE[section].clear(record)
    record.enabled_sections.discard(section.value)


def prune_blank_entries(record: ProjectRecord) -> None:
    """Drop list entries that are empty after trimming whitespace."""
    for name in LIST_FIELDS:
        values = getattr(record, name)
        setattr(record, name, [value for value in values if not is_blank(value)])
