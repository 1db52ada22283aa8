"""Automation signals reported by other subsystems.

Some checklist items complete themselves once the platform knows the work
is done, e.g. "Set up show classes" once classes exist. Signals that cannot
be read off the show record are reported here by the subsystem that owns
the underlying data.
"""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class AutomationSignal(SQLModel, table=True):
    """Latest reported value of one automation signal for a show."""
    __table_args__ = (UniqueConstraint("show_id", "key"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    show_id: UUID = Field(foreign_key="show.id", index=True)
    key: str
    value: bool = Field(default=False)
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class SignalUpdate(SQLModel):
    value: bool
