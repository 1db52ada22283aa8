"""Automation signals for a show's checklist.

A signal is a boolean fact about show state that completes a checklist
item automatically. Some signals can be read straight off the show record;
the rest are reported by the subsystems that own the data (classes,
stewards, rings, judge contracts) and stored as AutomationSignal rows.
"""
import logging
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from showcompliance.models import AutomationSignal, Show, ShowStatus

logger = logging.getLogger(__name__)

KNOWN_SIGNALS = (
    "judge_offers_sent",
    "venue_set",
    "kc_licence_recorded",
    "classes_created",
    "show_published",
    "entries_opened",
    "entries_closed",
    "stewards_assigned",
    "judges_assigned",
    "rings_created",
)

_PUBLISHED = {
    ShowStatus.published,
    ShowStatus.entries_open,
    ShowStatus.entries_closed,
    ShowStatus.in_progress,
    ShowStatus.completed,
}
_ENTRIES_OPENED = _PUBLISHED - {ShowStatus.published}
_ENTRIES_CLOSED = _ENTRIES_OPENED - {ShowStatus.entries_open}


def derive_show_signals(show: Show) -> dict[str, bool]:
    """Signals that follow directly from the show record."""
    status = ShowStatus(show.status)
    return {
        "venue_set": bool(show.venue_name),
        "kc_licence_recorded": bool(show.kc_licence_no),
        "show_published": status in _PUBLISHED,
        "entries_opened": status in _ENTRIES_OPENED,
        "entries_closed": status in _ENTRIES_CLOSED,
        "judges_assigned": len(show.judges) > 0,
    }


def collect_signals(session: Session, show: Show) -> dict[str, bool]:
    """
    Build the signal map for a show.

    Reported signals are merged with the ones derived from the show record;
    the show record wins where both exist. Signals are a convenience, so a
    database failure here is logged and yields an empty map: the checklist
    then shows stored statuses only.
    """
    try:
        rows = session.exec(
            select(AutomationSignal).where(AutomationSignal.show_id == show.id)
        ).all()
        signals = {row.key: row.value for row in rows}
        signals.update(derive_show_signals(show))
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Failed to collect automation signals for show {show.id}: {e}")
        return {}
    return signals


def _find_signal(session: Session, show_id: UUID, key: str) -> AutomationSignal | None:
    return session.exec(
        select(AutomationSignal)
        .where(AutomationSignal.show_id == show_id)
        .where(AutomationSignal.key == key)
    ).first()


def record_signal(session: Session, show_id: UUID, key: str, value: bool) -> AutomationSignal:
    """
    Store the latest reported value of a signal.

    Two first reports of the same key can race to insert the row; the
    loser rolls back and writes its value over the winner's row instead.
    """
    signal = _find_signal(session, show_id, key)

    if signal is None:
        signal = AutomationSignal(show_id=show_id, key=key, value=value)
        session.add(signal)
        try:
            session.commit()
        except IntegrityError:
            session.rollback()
            logger.info(f"Signal {key} for show {show_id} was reported concurrently, updating")
            signal = _find_signal(session, show_id, key)
        else:
            session.refresh(signal)
            logger.info(f"Signal {key}={value} recorded for show {show_id}")
            return signal

    signal.value = value
    signal.updated_at = datetime.now(UTC)
    session.add(signal)
    session.commit()
    session.refresh(signal)
    logger.info(f"Signal {key}={value} recorded for show {show_id}")
    return signal
