from datetime import date

import pytest

from milestone.models import (
    ProjectRecord,
    ProjectStatus,
    ProjectType,
    apply_payload,
    new_project_template,
    record_from_payload,
)


def test_new_record_has_empty_defaults(record):
    assert record.status is ProjectStatus.IN_PROGRESS
    assert record.project_type is ProjectType.PERSONAL
    assert record.tech_stack == [] and record.tags == [] and record.images == []
    assert record.github_url is None
    assert record.thumbnail is None
    assert record.enabled_sections == set()
    assert record.id


def test_blank_urls_are_stored_as_absent(record):
    record.github_url = ""
    record.live_url = "   "
    record.figma_url = " https://figma.com/file/abc "

    assert record.github_url is None
    assert record.live_url is None
    assert record.figma_url == "https://figma.com/file/abc"


def test_blank_urls_are_normalized_at_construction():
    record = ProjectRecord(title="t", description="d", start_date=date(2024, 1, 1), github_url="")

    assert record.github_url is None


def test_id_cannot_be_reassigned(record):
    with pytest.raises(AttributeError):
        record.id = "other"


@pytest.mark.parametrize(
    "end, expected",
    [
        (date(2024, 1, 1), "Same day"),
        (date(2024, 1, 2), "1 day"),
        (date(2024, 1, 20), "19 days"),
        (date(2024, 3, 1), "2 months"),
        (date(2025, 1, 1), "1 year"),
        (date(2025, 3, 15), "1 year 2 months"),
    ],
)
def test_duration_text(record, end, expected):
    record.end_date = end

    assert record.duration_text() == expected


def test_ongoing_duration_runs_until_today(record):
    assert record.duration_text(today=date(2024, 1, 11)) == "10 days"


def test_date_range_text(record):
    assert record.date_range_text() == "2024.01 - Present"
    record.end_date = date(2024, 9, 30)
    assert record.date_range_text() == "2024.01 - 2024.09"


def test_status_colors():
    assert ProjectStatus.IN_PROGRESS.color == "orange"
    assert ProjectStatus.COMPLETED.color == "green"
    assert ProjectStatus.LAUNCHED.color == "blue"


def test_apply_payload_updates_only_given_keys(record):
    record.notes = "keep"

    apply_payload(
        record,
        {
            "title": "Renamed",
            "status": "launched",
            "projectType": "team",
            "endDate": "2024-06-30",
            "techStack": ["Python", "Flask"],
            "githubURL": "",
        },
    )

    assert record.title == "Renamed"
    assert record.status is ProjectStatus.LAUNCHED
    assert record.project_type is ProjectType.TEAM
    assert record.end_date == date(2024, 6, 30)
    assert record.tech_stack == ["Python", "Flask"]
    assert record.github_url is None
    assert record.notes == "keep"


def test_apply_payload_rejects_bad_values_without_partial_writes(record):
    with pytest.raises(ValueError):
        apply_payload(record, {"title": "Changed", "status": "abandoned"})

    assert record.title == "Portfolio site"


def test_apply_payload_rejects_malformed_dates(record):
    with pytest.raises(ValueError, match="Invalid date"):
        apply_payload(record, {"startDate": "June 1st"})


def test_record_from_payload_requires_title():
    with pytest.raises(ValueError, match="title"):
        record_from_payload({"title": "  ", "description": "d"})


def test_record_from_payload():
    record = record_from_payload(
        {"title": "CLI", "description": "A tool", "startDate": "2023-05-02", "tags": ["cli"]}
    )

    assert record.start_date == date(2023, 5, 2)
    assert record.tags == ["cli"]


def test_apply_payload_rejects_non_string_list_entries(record):
    with pytest.raises(ValueError, match="list of strings"):
        apply_payload(record, {"tags": [None, 3]})

    assert record.tags == []


def test_apply_payload_rejects_non_string_text_and_dates(record):
    with pytest.raises(ValueError, match="Invalid date"):
        apply_payload(record, {"startDate": 20240101})
    with pytest.raises(ValueError, match="must be a string"):
        apply_payload(record, {"notes": ["not", "text"]})

    assert record.start_date == date(2024, 1, 1)
    assert record.notes == ""


def test_record_from_payload_rejects_non_string_title():
    with pytest.raises(ValueError, match="title"):
        record_from_payload({"title": 7, "description": "d"})


def test_to_dict_reports_blobs_as_counts(record):
    record.images = [b"a", b"b"]

    data = record.to_dict()

    assert data["imageCount"] == 2
    assert data["hasThumbnail"] is False
    assert data["startDate"] == "2024-01-01"
    assert data["endDate"] is None


def test_new_project_template():
    record = new_project_template(today=date(2025, 2, 3))

    assert record.title == "New Project"
    assert record.start_date == date(2025, 2, 3)
    assert record.end_date is None
    assert record.tech_stack == ["Python"]
