"""Due date arithmetic for checklist items."""
from datetime import date, timedelta


def calculate_due_date(show_date: date, relative_due_days: int) -> date:
    """
    Calculate the absolute due date of a task.

    relative_due_days counts days before the show, so 365 is due a year
    before the show date and -14 is due two weeks after it.
    """
    return show_date - timedelta(days=relative_due_days)
