"""Show routes for the show and judge records the checklist depends on."""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from showcompliance.checklist.seeding import seed_checklist
from showcompliance.checklist.signals import KNOWN_SIGNALS, record_signal
from showcompliance.core.database import get_session
from showcompliance.models import Show, ShowJudge
from showcompliance.models.show import JudgeCreate, ShowCreate, ShowRead, ShowUpdate
from showcompliance.models.signal import SignalUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/shows", tags=["shows"])


def get_show_or_404(session: Session, show_id: UUID) -> Show:
    show = session.get(Show, show_id)
    if not show:
        raise HTTPException(status_code=404, detail="Show not found")
    return show


def show_read(show: Show) -> ShowRead:
    return ShowRead.model_validate(show, update={"judges": show.judge_names()})


@router.post("", status_code=201, response_model=ShowRead)
async def create_show(data: ShowCreate, session: Session = Depends(get_session)):
    """Register a show so its checklist can be seeded."""
    show = Show.model_validate(data)
    session.add(show)
    session.commit()
    session.refresh(show)
    return show_read(show)


@router.get("/{show_id}", response_model=ShowRead)
async def get_show(show_id: UUID, session: Session = Depends(get_session)):
    return show_read(get_show_or_404(session, show_id))


@router.patch("/{show_id}", response_model=ShowRead)
async def update_show(
    show_id: UUID,
    data: ShowUpdate,
    session: Session = Depends(get_session),
):
    """
    Update show details.

    Checklist due dates are a snapshot taken at seed time, so changing the
    start date here does not move existing deadlines.
    """
    show = get_show_or_404(session, show_id)
    show.sqlmodel_update(data.model_dump(exclude_unset=True))
    session.add(show)
    session.commit()
    session.refresh(show)
    return show_read(show)


@router.post("/{show_id}/judges", status_code=201, response_model=ShowRead)
async def add_judge(
    show_id: UUID,
    data: JudgeCreate,
    session: Session = Depends(get_session),
):
    """
    Assign a judge to the show.

    If the checklist already exists, per-judge tasks for the new judge are
    added straight away.
    """
    show = get_show_or_404(session, show_id)
    name = data.name.strip()
    if not name:
        raise HTTPException(status_code=422, detail="Judge name is required")

    session.add(ShowJudge(show_id=show.id, name=name))
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        raise HTTPException(status_code=409, detail=f"{name} is already judging this show")

    session.refresh(show)
    if show.checklist_items:
        seed_checklist(session, show)
        session.refresh(show)
    return show_read(show)


@router.put("/{show_id}/signals/{key}")
async def report_signal(
    show_id: UUID,
    key: str,
    data: SignalUpdate,
    session: Session = Depends(get_session),
):
    """Record an automation signal reported by another subsystem."""
    get_show_or_404(session, show_id)
    if key not in KNOWN_SIGNALS:
        logger.warning(f"Unrecognised automation signal reported: {key}")
    signal = record_signal(session, show_id, key, data.value)
    return {"key": signal.key, "value": signal.value}
