"""Checklist routes for a show's compliance checklist."""
from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlmodel import Session

from showcompliance.checklist.mutations import (
    create_custom_item,
    cycle_item_status,
    delete_item,
    list_items,
    update_item,
)
from showcompliance.checklist.progress import calculate_progress
from showcompliance.checklist.seeding import seed_checklist
from showcompliance.checklist.signals import collect_signals
from showcompliance.checklist.status import describe_item
from showcompliance.core.config import settings
from showcompliance.core.database import get_session
from showcompliance.models.checklist import (
    ChecklistItem,
    ChecklistItemCreate,
    ChecklistItemUpdate,
    ChecklistItemView,
)
from showcompliance.routes.shows import get_show_or_404

router = APIRouter(prefix="/shows/{show_id}/checklist", tags=["checklist"])


def _view(item: ChecklistItem, signals: dict[str, bool], today: date) -> ChecklistItemView:
    return describe_item(
        item,
        signals,
        today,
        due_soon_days=settings.due_soon_days,
        warning_days=settings.expiry_warning_days,
    )


@router.get("")
async def get_checklist(show_id: UUID, session: Session = Depends(get_session)):
    """
    Show the checklist with automation and deadlines resolved.

    Each item carries its effective status (complete when its automation
    signal is true), urgency and document expiry state, alongside the
    show-wide progress summary.
    """
    show = get_show_or_404(session, show_id)
    signals = collect_signals(session, show)
    today = date.today()
    items = list_items(session, show_id)

    return {
        "items": [_view(item, signals, today) for item in items],
        "progress": calculate_progress(items, signals, today, settings.due_soon_days),
    }


@router.post("/seed")
async def seed(show_id: UUID, session: Session = Depends(get_session)):
    """
    Generate the checklist from the template catalog.

    Repeat calls only add per-judge tasks for judges assigned since the
    last seed.
    """
    show = get_show_or_404(session, show_id)
    created = seed_checklist(session, show)
    return {"seeded": bool(created), "count": len(created)}


@router.get("/progress")
async def get_progress(show_id: UUID, session: Session = Depends(get_session)):
    show = get_show_or_404(session, show_id)
    signals = collect_signals(session, show)
    return calculate_progress(
        list_items(session, show_id), signals, date.today(), settings.due_soon_days
    )


@router.get("/signals")
async def get_signals(show_id: UUID, session: Session = Depends(get_session)):
    """Current automation signals for the show."""
    show = get_show_or_404(session, show_id)
    return collect_signals(session, show)


@router.post("/items", status_code=201, response_model=ChecklistItemView)
async def add_item(
    show_id: UUID,
    data: ChecklistItemCreate,
    session: Session = Depends(get_session),
):
    """Add a custom item to the end of a phase."""
    get_show_or_404(session, show_id)
    item = create_custom_item(session, show_id, data)
    return _view(item, {}, date.today())


@router.patch("/items/{item_id}", response_model=ChecklistItemView)
async def edit_item(
    show_id: UUID,
    item_id: UUID,
    data: ChecklistItemUpdate,
    session: Session = Depends(get_session),
):
    """
    Update status, assignee, notes or the evidence document.

    Send file_upload_id as null to detach a document. Status changes on
    items that automation has completed are rejected with 409.
    """
    show = get_show_or_404(session, show_id)
    signals = collect_signals(session, show)
    item = update_item(session, show_id, item_id, data, signals)
    return _view(item, signals, date.today())


@router.post("/items/{item_id}/cycle", response_model=ChecklistItemView)
async def cycle_item(
    show_id: UUID,
    item_id: UUID,
    session: Session = Depends(get_session),
):
    """Advance the item to the next status in the manual cycle."""
    show = get_show_or_404(session, show_id)
    signals = collect_signals(session, show)
    item = cycle_item_status(session, show_id, item_id, signals)
    return _view(item, signals, date.today())


@router.delete("/items/{item_id}")
async def remove_item(
    show_id: UUID,
    item_id: UUID,
    session: Session = Depends(get_session),
):
    """Delete an item. Items tracked by automation cannot be deleted."""
    get_show_or_404(session, show_id)
    delete_item(session, show_id, item_id)
    return {"deleted": True}
