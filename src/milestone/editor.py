"""Transient editing state for a single project's detail screen."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Set

from . import sections
from .models import LIST_FIELDS, ProjectRecord
from .sections import SectionId, Visibility

logger = logging.getLogger(__name__)

DEFAULT_EXPANDED = (SectionId.OVERVIEW, SectionId.DETAILS, SectionId.LINKS)
LOAD_SLOTS = ("thumbnail", "images")


class ProjectEditor:
    """Edit session over one ``ProjectRecord``.

    Index-based list edits ignore indices outside the current sequence and
    report that by returning ``False``.
    """

    def __init__(self, record: ProjectRecord, expanded: Optional[Iterable[SectionId]] = None) -> None:
        self.record = record
        self.is_edit_mode = False
        self.expanded_sections: Set[str] = {
            section.value for section in (DEFAULT_EXPANDED if expanded is None else expanded)
        }
        self._load_tokens: Dict[str, int] = {slot: 0 for slot in LOAD_SLOTS}

    # ------------------------------------------------------------------
    # Modes and sections
    # ------------------------------------------------------------------

    def toggle_edit_mode(self) -> bool:
        self.is_edit_mode = not self.is_edit_mode
        if not self.is_edit_mode:
            sections.prune_blank_entries(self.record)
        return self.is_edit_mode

    def toggle_favorite(self) -> bool:
        self.record.is_favorite = not self.record.is_favorite
        return self.record.is_favorite

    def toggle_section(self, section: SectionId) -> bool:
        if section.value in self.expanded_sections:
            self.expanded_sections.discard(section.value)
        else:
            self.expanded_sections.add(section.value)
        return self.is_section_expanded(section)

    def is_section_expanded(self, section: SectionId) -> bool:
        return section.value in self.expanded_sections

    @property
    def visibility(self) -> Visibility:
        return sections.recompute_visibility(self.record)

    @property
    def active_sections(self) -> List[SectionId]:
        return self.visibility.active

    @property
    def available_to_add(self) -> List[SectionId]:
        return self.visibility.available

    def add_section(self, section: SectionId) -> None:
        sections.add_section(self.record, section)
        self.expanded_sections.add(section.value)

    def delete_section(self, section: SectionId) -> None:
        sections.delete_section(self.record, section)

    # ------------------------------------------------------------------
    # List fields
    # ------------------------------------------------------------------

    def _items(self, field_name: str) -> List[str]:
        if field_name not in LIST_FIELDS:
            raise ValueError(f"'{field_name}' is not an editable list field")
        return getattr(self.record, field_name)

    def append_item(self, field_name: str, value: str = "") -> int:
        items = self._items(field_name)
        items.append(value)
        return len(items) - 1

    def update_item(self, field_name: str, index: int, value: str) -> bool:
        items = self._items(field_name)
        if not 0 <= index < len(items):
            return False
        items[index] = value
        return True

    def remove_item(self, field_name: str, index: int) -> bool:
        items = self._items(field_name)
        if not 0 <= index < len(items):
            return False
        del items[index]
        return True

    def remove_image(self, index: int) -> bool:
        if not 0 <= index < len(self.record.images):
            return False
        del self.record.images[index]
        return True

    # ------------------------------------------------------------------
    # Media loads
    # ------------------------------------------------------------------

    def begin_load(self, slot: str) -> int:
        """Issue a token for a new picker load; older tokens for the slot become stale."""
        if slot not in self._load_tokens:
            raise ValueError(f"Unknown media slot '{slot}'")
        self._load_tokens[slot] += 1
        return self._load_tokens[slot]

    def _is_current(self, slot: str, token: int) -> bool:
        if token != self._load_tokens[slot]:
            logger.debug("Discarding stale %s load (token %s, latest %s)", slot, token, self._load_tokens[slot])
            return False
        return True

    def complete_thumbnail_load(self, token: int, data: Optional[bytes]) -> bool:
        if not self._is_current("thumbnail", token) or data is None:
            return False
        self.record.thumbnail = data
        return True

    def complete_images_load(self, token: int, blobs: Iterable[Optional[bytes]]) -> bool:
        if not self._is_current("images", token):
            return False
        loaded = [blob for blob in blobs if blob is not None]
        self.record.images.extend(loaded)
        return bool(loaded)
