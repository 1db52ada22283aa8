"""Roll checklist item statuses up into completion figures."""
from collections.abc import Iterable, Mapping
from datetime import date

from sqlmodel import SQLModel

from showcompliance.checklist.status import DUE_SOON_DAYS, classify_urgency, is_done
from showcompliance.checklist.templates import ordered_phases
from showcompliance.models.checklist import ChecklistItem, Phase, Urgency


class ChecklistProgress(SQLModel):
    """Completion summary for one show's checklist.

    Attributes:
        overall_percent: Share of items done, 0-100.
        per_phase: Percent done per phase, keyed by phase value in
            canonical phase order. Phases without items report 0.
        overdue_count: Unfinished items past their due date.
        due_soon_count: Unfinished items due within the due-soon window.
        completed_count: Items whose effective status is complete or
            not applicable.
        total: Number of items.
    """
    overall_percent: int
    per_phase: dict[str, int]
    overdue_count: int
    due_soon_count: int
    completed_count: int
    total: int


def percent(done: int, total: int) -> int:
    """Whole-number percentage rounded half up; an empty total is 0%."""
    if total == 0:
        return 0
    return (200 * done + total) // (2 * total)


def calculate_progress(
    items: Iterable[ChecklistItem],
    signals: Mapping[str, bool],
    today: date | None = None,
    due_soon_days: int = DUE_SOON_DAYS,
) -> ChecklistProgress:
    """
    Summarise checklist completion.

    An item counts as done when its effective status is complete or not
    applicable, so automation-completed items count even though their
    stored status may still be not_started.
    """
    phase_totals = {phase.value: [0, 0] for phase in ordered_phases()}
    completed = overdue = due_soon = total = 0

    for item in items:
        total += 1
        counts = phase_totals[Phase(item.phase).value]
        counts[1] += 1
        if is_done(item, signals):
            completed += 1
            counts[0] += 1
            continue

        urgency = classify_urgency(item, signals, today, due_soon_days)
        if urgency == Urgency.overdue:
            overdue += 1
        elif urgency == Urgency.due_soon:
            due_soon += 1

    return ChecklistProgress(
        overall_percent=percent(completed, total),
        per_phase={phase: percent(done, count) for phase, (done, count) in phase_totals.items()},
        overdue_count=overdue,
        due_soon_count=due_soon,
        completed_count=completed,
        total=total,
    )
