"""Show and judge records consumed by the checklist engine.

The platform's real show, venue and judge data lives in another subsystem.
These tables hold only the fields the checklist needs: the start date that
deadlines are computed from, the show type that decides whether
championship-only tasks apply, the judge roster for per-judge tasks, and
the few fields that automation signals are derived from.
"""

from datetime import UTC, date, datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from showcompliance.models.checklist import ChecklistItem


class ShowType(str, Enum):
    championship = "championship"
    open = "open"
    limited = "limited"
    companion = "companion"


class ShowStatus(str, Enum):
    draft = "draft"
    published = "published"
    entries_open = "entries_open"
    entries_closed = "entries_closed"
    in_progress = "in_progress"
    completed = "completed"


class Show(SQLModel, table=True):
    """A dog show that owns a compliance checklist.

    Attributes:
        id: Unique identifier (UUID).
        name: Display name of the show.
        start_date: First day of the show. Checklist due dates are
            calculated from this date when the checklist is seeded.
        show_type: Championship shows get extra KC tasks (challenge
            certificates, marked catalogue).
        status: Publication lifecycle; drives the schedule and entry
            automation signals.
        venue_name: Set once a venue is booked.
        kc_licence_no: Kennel Club licence number once approved.
        judges: Judges currently assigned to the show.
        checklist_items: The show's compliance checklist.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str
    start_date: date
    show_type: ShowType = Field(default=ShowType.open)
    status: ShowStatus = Field(default=ShowStatus.draft)
    venue_name: str | None = None
    kc_licence_no: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    # Relationships
    judges: list["ShowJudge"] = Relationship(back_populates="show")
    checklist_items: list["ChecklistItem"] = Relationship(back_populates="show")

    @property
    def is_championship(self) -> bool:
        return self.show_type == ShowType.championship

    def judge_names(self) -> list[str]:
        """Distinct judge names in assignment order.

        A judge may be assigned to several breeds, so the roster is
        deduplicated before per-judge tasks are fanned out.
        """
        names: list[str] = []
        for judge in self.judges:
            if judge.name not in names:
                names.append(judge.name)
        return names


class ShowJudge(SQLModel, table=True):
    """A judge assigned to a show."""
    __table_args__ = (UniqueConstraint("show_id", "name"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    show_id: UUID = Field(foreign_key="show.id", index=True)
    name: str

    # Relationship
    show: Optional["Show"] = Relationship(back_populates="judges")


class ShowCreate(SQLModel):
    name: str
    start_date: date
    show_type: ShowType = ShowType.open
    status: ShowStatus = ShowStatus.draft
    venue_name: str | None = None
    kc_licence_no: str | None = None


class ShowUpdate(SQLModel):
    name: str | None = None
    start_date: date | None = None
    show_type: ShowType | None = None
    status: ShowStatus | None = None
    venue_name: str | None = None
    kc_licence_no: str | None = None


class ShowRead(SQLModel):
    id: UUID
    name: str
    start_date: date
    show_type: ShowType
    status: ShowStatus
    venue_name: str | None
    kc_licence_no: str | None
    judges: list[str] = []


class JudgeCreate(SQLModel):
    name: str
