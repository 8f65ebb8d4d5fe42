"""Project record model shared by the CLI, web server and store."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional, Set

LINK_FIELDS = ("github_url", "live_url", "figma_url")
LIST_FIELDS = ("tech_stack", "key_features", "tags")


class ProjectStatus(str, Enum):
    IN_PROGRESS = "inProgress"
    COMPLETED = "completed"
    LAUNCHED = "launched"

    @property
    def label(self) -> str:
        return {
            ProjectStatus.IN_PROGRESS: "In progress",
            ProjectStatus.COMPLETED: "Completed",
            ProjectStatus.LAUNCHED: "Launched",
        }[self]

    @property
    def color(self) -> str:
        return {
            ProjectStatus.IN_PROGRESS: "orange",
            ProjectStatus.COMPLETED: "green",
            ProjectStatus.LAUNCHED: "blue",
        }[self]


class ProjectType(str, Enum):
    PERSONAL = "personal"
    TEAM = "team"

    @property
    def label(self) -> str:
        return "Personal" if self is ProjectType.PERSONAL else "Team"


def normalize_url(value: Optional[str]) -> Optional[str]:
    """Return ``None`` for missing or blank link input, the trimmed URL otherwise."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def is_blank(value: Optional[str]) -> bool:
    return not (value or "").strip()


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def duration_between(start: date, end: Optional[date], today: Optional[date] = None) -> str:
    end = end or today or date.today()
    days = max((end - start).days, 0)
    if days == 0:
        return "Same day"
    if days < 30:
        return _plural(days, "day")
    if days < 365:
        return _plural(days // 30, "month")
    years = days // 365
    remaining_months = (days % 365) // 30
    if remaining_months > 0:
        return f"{_plural(years, 'year')} {_plural(remaining_months, 'month')}"
    return _plural(years, "year")


@dataclass
class ProjectRecord:
    """A single catalogued project.

    Link fields never hold blank strings: any write of an empty or
    whitespace-only value stores ``None``. The ``id`` is assigned once.
    """

    title: str
    description: str
    start_date: date
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    tagline: str = ""
    role: str = ""
    team_size: str = ""
    end_date: Optional[date] = None
    status: ProjectStatus = ProjectStatus.IN_PROGRESS
    project_type: ProjectType = ProjectType.PERSONAL
    is_favorite: bool = False
    tech_stack: List[str] = field(default_factory=list)
    key_features: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    images: List[bytes] = field(default_factory=list)
    github_url: Optional[str] = None
    live_url: Optional[str] = None
    figma_url: Optional[str] = None
    problem: str = ""
    solution: str = ""
    goals: str = ""
    challenges: str = ""
    notes: str = ""
    thumbnail: Optional[bytes] = None
    enabled_sections: Set[str] = field(default_factory=set)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "id" and "id" in self.__dict__:
            raise AttributeError("Project id is immutable")
        if name in LINK_FIELDS:
            value = normalize_url(value)
        super().__setattr__(name, value)

    def duration_text(self, today: Optional[date] = None) -> str:
        return duration_between(self.start_date, self.end_date, today)

    def date_range_text(self) -> str:
        start = self.start_date.strftime("%Y.%m")
        if self.end_date is None:
            return f"{start} - Present"
        return f"{start} - {self.end_date.strftime('%Y.%m')}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "tagline": self.tagline,
            "description": self.description,
            "role": self.role,
            "teamSize": self.team_size,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat() if self.end_date else None,
            "status": self.status.value,
            "statusColor": self.status.color,
            "projectType": self.project_type.value,
            "isFavorite": self.is_favorite,
            "techStack": list(self.tech_stack),
            "keyFeatures": list(self.key_features),
            "tags": list(self.tags),
            "imageCount": len(self.images),
            "hasThumbnail": self.thumbnail is not None,
            "githubURL": self.github_url,
            "liveURL": self.live_url,
            "figmaURL": self.figma_url,
            "problem": self.problem,
            "solution": self.solution,
            "goals": self.goals,
            "challenges": self.challenges,
            "notes": self.notes,
            "enabledSections": sorted(self.enabled_sections),
            "duration": self.duration_text(),
            "dateRange": self.date_range_text(),
        }


_PAYLOAD_TEXT_FIELDS = {
    "title": "title",
    "tagline": "tagline",
    "description": "description",
    "role": "role",
    "teamSize": "team_size",
    "problem": "problem",
    "solution": "solution",
    "goals": "goals",
    "challenges": "challenges",
    "notes": "notes",
    "githubURL": "github_url",
    "liveURL": "live_url",
    "figmaURL": "figma_url",
}
_PAYLOAD_LIST_FIELDS = {"techStack": "tech_stack", "keyFeatures": "key_features", "tags": "tags"}


def parse_date(value: Optional[str]) -> Optional[date]:
    """Parse an ISO date (a trailing time part is ignored); raises ``ValueError`` when malformed."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"Invalid date {value!r}. Use YYYY-MM-DD.")
    value = value.strip()
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        raise ValueError(f"Invalid date '{value}'. Use YYYY-MM-DD.") from None


def apply_payload(record: ProjectRecord, payload: Dict[str, Any]) -> None:
    """Apply a camelCase JSON payload (as produced by ``to_dict``) to a record.

    Only keys present in the payload are touched. Values of the wrong JSON
    type, bad enum values and bad dates raise ``ValueError`` before anything
    is written.
    """
    changes: Dict[str, Any] = {}
    for key, attribute in _PAYLOAD_TEXT_FIELDS.items():
        if key in payload:
            value = payload[key]
            if value is None:
                changes[attribute] = None if attribute in LINK_FIELDS else ""
            elif isinstance(value, str):
                changes[attribute] = value
            else:
                raise ValueError(f"'{key}' must be a string")
    for key, attribute in _PAYLOAD_LIST_FIELDS.items():
        if key in payload:
            values = payload[key] or []
            if not isinstance(values, list) or not all(isinstance(value, str) for value in values):
                raise ValueError(f"'{key}' must be a list of strings")
            changes[attribute] = list(values)
    if "startDate" in payload:
        start = parse_date(payload["startDate"])
        if start is None:
            raise ValueError("startDate is required")
        changes["start_date"] = start
    if "endDate" in payload:
        changes["end_date"] = parse_date(payload["endDate"])
    if "status" in payload:
        changes["status"] = ProjectStatus(payload["status"])
    if "projectType" in payload:
        changes["project_type"] = ProjectType(payload["projectType"])
    if "isFavorite" in payload:
        changes["is_favorite"] = bool(payload["isFavorite"])
    if "title" in changes and is_blank(changes["title"]):
        raise ValueError("title must not be blank")

    for attribute, value in changes.items():
        setattr(record, attribute, value)


def record_from_payload(payload: Dict[str, Any]) -> ProjectRecord:
    title = payload.get("title")
    if title is not None and not isinstance(title, str):
        raise ValueError("'title' must be a string")
    title = (title or "").strip()
    if not title:
        raise ValueError("title is required")
    start = parse_date(payload.get("startDate")) or date.today()
    record = ProjectRecord(title=title, description="", start_date=start)
    apply_payload(record, {key: value for key, value in payload.items() if key not in ("title", "startDate")})
    return record


def new_project_template(today: Optional[date] = None) -> ProjectRecord:
    """Record created by the list screen's "add" action."""
    return ProjectRecord(
        title="New Project",
        description="Describe the project",
        start_date=today or date.today(),
        tech_stack=["Python"],
    )
