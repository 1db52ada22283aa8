"""Effective status, urgency and document expiry for checklist items.

Automation-linked items have two statuses. The stored status is whatever a
secretary last set by hand. The effective status is what users see: it is
complete whenever the item's automation signal is true, whatever the
stored status says. The override is computed on every read and never
written back, so switching a signal off reveals the manual status again.

Signals are passed in explicitly as a mapping of key to bool. Missing keys
read as false.
"""
from collections.abc import Mapping
from datetime import date, timedelta

from showcompliance.checklist.errors import AutomationProtected
from showcompliance.models.checklist import (
    ChecklistItem,
    ChecklistItemView,
    ChecklistStatus,
    ExpiryState,
    Urgency,
)

DUE_SOON_DAYS = 14
EXPIRY_WARNING_DAYS = 30

DONE_STATUSES = frozenset({ChecklistStatus.complete, ChecklistStatus.not_applicable})

# Manual cycle order; not_applicable is only reachable through a direct set
CYCLE_ORDER = (
    ChecklistStatus.not_started,
    ChecklistStatus.in_progress,
    ChecklistStatus.complete,
)


def is_auto_detected(item: ChecklistItem, signals: Mapping[str, bool]) -> bool:
    """True when the item's automation signal is positively asserted."""
    if not item.auto_detect_key:
        return False
    return signals.get(item.auto_detect_key) is True


def effective_status(item: ChecklistItem, signals: Mapping[str, bool]) -> ChecklistStatus:
    if is_auto_detected(item, signals):
        return ChecklistStatus.complete
    return ChecklistStatus(item.status)


def is_done(item: ChecklistItem, signals: Mapping[str, bool]) -> bool:
    return effective_status(item, signals) in DONE_STATUSES


def next_status(status: ChecklistStatus) -> ChecklistStatus:
    """Next status in the manual cycle, wrapping back to not_started."""
    try:
        index = CYCLE_ORDER.index(ChecklistStatus(status))
    except ValueError:
        return ChecklistStatus.not_started
    return CYCLE_ORDER[(index + 1) % len(CYCLE_ORDER)]


def ensure_status_writable(item: ChecklistItem, signals: Mapping[str, bool]) -> None:
    """
    Reject manual status writes on items automation currently owns.

    A write would be hidden by the override straight away, so it is refused
    rather than silently stored.
    """
    if is_auto_detected(item, signals):
        raise AutomationProtected(
            f"'{item.title}' is completed automatically and its status cannot be changed by hand"
        )


def classify_urgency(
    item: ChecklistItem,
    signals: Mapping[str, bool],
    today: date | None = None,
    due_soon_days: int = DUE_SOON_DAYS,
) -> Urgency:
    """
    Classify how pressing an item's deadline is.

    Finished items are never urgent. Otherwise an item is overdue once its
    due date has passed, and due soon when the due date falls between today
    and today + due_soon_days inclusive.
    """
    if item.due_date is None or is_done(item, signals):
        return Urgency.none

    today = today or date.today()
    if item.due_date < today:
        return Urgency.overdue
    if item.due_date <= today + timedelta(days=due_soon_days):
        return Urgency.due_soon
    return Urgency.none


def classify_document_expiry(
    item: ChecklistItem,
    today: date | None = None,
    warning_days: int = EXPIRY_WARNING_DAYS,
) -> ExpiryState:
    """Classify the attached document's expiry, independent of status."""
    if not item.has_expiry or item.document_expiry_date is None:
        return ExpiryState.not_tracked

    today = today or date.today()
    if item.document_expiry_date < today:
        return ExpiryState.expired
    if item.document_expiry_date <= today + timedelta(days=warning_days):
        return ExpiryState.expiring_soon
    return ExpiryState.ok


def describe_item(
    item: ChecklistItem,
    signals: Mapping[str, bool],
    today: date | None = None,
    due_soon_days: int = DUE_SOON_DAYS,
    warning_days: int = EXPIRY_WARNING_DAYS,
) -> ChecklistItemView:
    """Build the read view of an item with automation and deadlines resolved."""
    return ChecklistItemView.model_validate(
        item,
        update={
            "effective_status": effective_status(item, signals),
            "is_auto_detected": is_auto_detected(item, signals),
            "urgency": classify_urgency(item, signals, today, due_soon_days),
            "expiry_state": classify_document_expiry(item, today, warning_days),
        },
    )
