"""Create, update and delete checklist items.

Every operation is scoped to one show: an item id from another show is
reported as not found. Automation-linked items (those with an
auto_detect_key) can never be deleted, and their status cannot be written
by hand while their signal is true.
"""
import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from showcompliance.checklist.errors import AutomationProtected, NotFound, ValidationError
from showcompliance.checklist.status import ensure_status_writable, next_status
from showcompliance.models import ChecklistItem, ChecklistStatus, FileUpload, Phase
from showcompliance.models.checklist import ChecklistItemCreate, ChecklistItemUpdate

logger = logging.getLogger(__name__)

SORT_ORDER_RETRIES = 3


def get_item(session: Session, show_id: UUID, item_id: UUID) -> ChecklistItem:
    item = session.get(ChecklistItem, item_id)
    if not item or item.show_id != show_id:
        raise NotFound("Checklist item not found")
    return item


def list_items(session: Session, show_id: UUID) -> list[ChecklistItem]:
    """All of a show's items in display order within each phase."""
    statement = (
        select(ChecklistItem)
        .where(ChecklistItem.show_id == show_id)
        .order_by(ChecklistItem.sort_order)
    )
    return list(session.exec(statement).all())


def _next_sort_order(session: Session, show_id: UUID, phase: Phase) -> int:
    current = session.exec(
        select(func.max(ChecklistItem.sort_order))
        .where(ChecklistItem.show_id == show_id)
        .where(ChecklistItem.phase == phase)
    ).one()
    return 0 if current is None else current + 1


def create_custom_item(
    session: Session, show_id: UUID, data: ChecklistItemCreate
) -> ChecklistItem:
    """
    Add a secretary's own task to the checklist.

    Custom items never carry an automation key and go to the end of their
    phase.
    """
    title = (data.title or "").strip()
    if not title:
        raise ValidationError("Title is required")
    try:
        phase = Phase(data.phase)
    except ValueError:
        raise ValidationError(f"Unknown phase: {data.phase}")

    # Two secretaries adding to the same phase can race for the next sort
    # order; the loser's insert hits the unique constraint and tries again.
    for _ in range(SORT_ORDER_RETRIES):
        item = ChecklistItem(
            show_id=show_id,
            title=title,
            description=data.description,
            phase=phase,
            sort_order=_next_sort_order(session, show_id, phase),
            due_date=data.due_date,
            assigned_to_name=data.assigned_to_name,
            notes=data.notes,
        )
        session.add(item)
        try:
            session.commit()
        except IntegrityError:
            session.rollback()
            logger.warning(f"Sort order conflict adding '{title}' to show {show_id}, retrying")
            continue
        session.refresh(item)
        logger.info(f"Custom checklist item added to show {show_id}: {title}")
        return item

    raise ValidationError("Could not add the item, please try again")


def _apply_status(item: ChecklistItem, status: ChecklistStatus) -> None:
    item.status = status
    if status == ChecklistStatus.complete:
        item.completed_at = datetime.now(UTC)
    else:
        item.completed_at = None


def _attach_document(item: ChecklistItem, upload: FileUpload | None) -> None:
    """Point the item at an upload, or detach it when upload is None.

    Detaching leaves the stored file alone; its lifecycle belongs to the
    document store.
    """
    if upload is None:
        item.file_upload_id = None
        item.document_file_name = None
        item.document_url = None
        return

    item.file_upload_id = upload.id
    item.document_file_name = upload.file_name
    item.document_url = upload.public_url


def update_item(
    session: Session,
    show_id: UUID,
    item_id: UUID,
    changes: ChecklistItemUpdate,
    signals: Mapping[str, bool],
) -> ChecklistItem:
    """
    Apply a partial update to an item.

    Only fields present in the request are written, so two secretaries
    editing different fields of the same item do not overwrite each other.
    The whole update is rejected if it sets a status automation owns.
    """
    item = get_item(session, show_id, item_id)
    fields = changes.model_dump(exclude_unset=True)

    if "status" in fields:
        if fields["status"] is None:
            raise ValidationError("Status cannot be empty")
        ensure_status_writable(item, signals)
    if fields.get("document_expiry_date") is not None and not item.has_expiry:
        raise ValidationError(f"'{item.title}' does not track a document expiry date")

    upload = None
    if fields.get("file_upload_id") is not None:
        upload = session.get(FileUpload, fields["file_upload_id"])
        if not upload:
            raise NotFound("Uploaded document not found")

    if "status" in fields:
        _apply_status(item, ChecklistStatus(fields["status"]))
    if "assigned_to_name" in fields:
        item.assigned_to_name = fields["assigned_to_name"]
    if "notes" in fields:
        item.notes = fields["notes"]
    if "file_upload_id" in fields:
        _attach_document(item, upload)
    if "document_expiry_date" in fields:
        item.document_expiry_date = fields["document_expiry_date"]

    item.updated_at = datetime.now(UTC)
    session.add(item)
    session.commit()
    session.refresh(item)
    return item


def cycle_item_status(
    session: Session,
    show_id: UUID,
    item_id: UUID,
    signals: Mapping[str, bool],
) -> ChecklistItem:
    """Advance not_started -> in_progress -> complete -> not_started."""
    item = get_item(session, show_id, item_id)
    ensure_status_writable(item, signals)

    _apply_status(item, next_status(item.status))
    item.updated_at = datetime.now(UTC)
    session.add(item)
    session.commit()
    session.refresh(item)
    return item


def delete_item(session: Session, show_id: UUID, item_id: UUID) -> None:
    """Remove an item permanently. Automation-linked items cannot be deleted."""
    item = get_item(session, show_id, item_id)
    if item.is_automation_linked:
        raise AutomationProtected(
            f"'{item.title}' is tracked automatically and cannot be deleted"
        )

    title = item.title
    session.delete(item)
    session.commit()
    logger.info(f"Checklist item deleted from show {show_id}: {title}")
