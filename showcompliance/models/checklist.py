"""Checklist item model for show compliance tracking.

This module defines the ChecklistItem model which represents one task a
show organiser must complete, from the KC licence application a year out
to the post-show returns. Most items are instantiated from the template
catalog when the checklist is seeded; secretaries can also add their own.
"""

from datetime import UTC, date, datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from showcompliance.models.show import Show


class Phase(str, Enum):
    pre_planning = "pre_planning"
    planning = "planning"
    pre_show = "pre_show"
    final_prep = "final_prep"
    show_day = "show_day"
    post_show = "post_show"


class ChecklistStatus(str, Enum):
    not_started = "not_started"
    in_progress = "in_progress"
    complete = "complete"
    not_applicable = "not_applicable"


class Urgency(str, Enum):
    none = "none"
    due_soon = "due_soon"
    overdue = "overdue"


class ExpiryState(str, Enum):
    not_tracked = "not_tracked"
    ok = "ok"
    expiring_soon = "expiring_soon"
    expired = "expired"


class ChecklistItem(SQLModel, table=True):
    """A compliance task on a show's checklist.

    Attributes:
        id: Unique identifier (UUID).
        show_id: Foreign key to the owning Show.
        template_key: Key of the catalog blueprint this item was created
            from, or None for items a secretary added by hand.
        template_version: Catalog version at seed time.
        entity_type: "judge" for per-judge items, otherwise None.
        entity_name: The judge's name for per-judge items.
        entity_key: Part of the seeding uniqueness key; the judge name for
            per-judge items and "" otherwise, so show-wide items collide
            on (show_id, template_key) alone.
        title: Display text.
        description: Guidance on what the task involves.
        phase: Planning window the task belongs to.
        sort_order: Display order within the phase, unique per show/phase.
        status: Stored manual status. For automation-linked items the
            status shown to users may differ (see checklist.status).
        due_date: Absolute due date, snapshotted at seed time.
        completed_at: When the stored status last became complete.
        auto_detect_key: Automation signal this item tracks. Items with a
            key cannot be deleted.
        assigned_to_name: Free-text owner of the task.
        notes: Free-text notes.
        requires_document: Item expects an evidence document.
        has_expiry: The attached document carries an expiry date.
        file_upload_id: Attached evidence document, if any.
        document_file_name: Cached file name of the attached document.
        document_url: Cached public URL of the attached document.
        document_expiry_date: Expiry of the attached document.
    """
    __table_args__ = (
        UniqueConstraint("show_id", "template_key", "entity_key"),
        UniqueConstraint("show_id", "phase", "sort_order"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    show_id: UUID = Field(foreign_key="show.id", index=True)
    template_key: str | None = Field(default=None, index=True)
    template_version: int | None = None
    entity_type: str | None = None
    entity_name: str | None = None
    entity_key: str = Field(default="")
    title: str
    description: str | None = None
    phase: Phase = Field(index=True)
    sort_order: int = Field(default=0)
    status: ChecklistStatus = Field(default=ChecklistStatus.not_started)
    due_date: date | None = Field(default=None, index=True)
    completed_at: datetime | None = None
    auto_detect_key: str | None = None
    assigned_to_name: str | None = None
    notes: str | None = None
    requires_document: bool = Field(default=False)
    has_expiry: bool = Field(default=False)
    file_upload_id: UUID | None = Field(default=None, foreign_key="fileupload.id")
    document_file_name: str | None = None
    document_url: str | None = None
    document_expiry_date: date | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    # Relationship
    show: Optional["Show"] = Relationship(back_populates="checklist_items")

    @property
    def is_automation_linked(self) -> bool:
        return bool(self.auto_detect_key)


class ChecklistItemCreate(SQLModel):
    title: str
    phase: Phase
    description: str | None = None
    due_date: date | None = None
    assigned_to_name: str | None = None
    notes: str | None = None


class ChecklistItemUpdate(SQLModel):
    """Partial update; only fields present in the request are written."""
    status: ChecklistStatus | None = None
    assigned_to_name: str | None = None
    notes: str | None = None
    file_upload_id: UUID | None = None
    document_expiry_date: date | None = None


class ChecklistItemRead(SQLModel):
    id: UUID
    show_id: UUID
    template_key: str | None
    entity_type: str | None
    entity_name: str | None
    title: str
    description: str | None
    phase: Phase
    sort_order: int
    status: ChecklistStatus
    due_date: date | None
    completed_at: datetime | None
    auto_detect_key: str | None
    assigned_to_name: str | None
    notes: str | None
    requires_document: bool
    has_expiry: bool
    file_upload_id: UUID | None
    document_file_name: str | None
    document_url: str | None
    document_expiry_date: date | None


class ChecklistItemView(ChecklistItemRead):
    """An item as users see it, with automation and deadlines resolved."""
    effective_status: ChecklistStatus
    is_auto_detected: bool
    urgency: Urgency
    expiry_state: ExpiryState
