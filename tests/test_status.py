"""Tests for effective status, urgency and document expiry."""

from datetime import date, timedelta
from uuid import uuid4

import pytest

from showcompliance.checklist.errors import AutomationProtected
from showcompliance.checklist.status import (
    classify_document_expiry,
    classify_urgency,
    describe_item,
    effective_status,
    ensure_status_writable,
    is_auto_detected,
    next_status,
)
from showcompliance.models import ChecklistItem, ChecklistStatus, ExpiryState, Phase, Urgency

TODAY = date(2026, 3, 1)


def make_item(**kwargs) -> ChecklistItem:
    defaults = {
        "show_id": uuid4(),
        "title": "Confirm venue",
        "phase": Phase.pre_planning,
    }
    defaults.update(kwargs)
    return ChecklistItem(**defaults)


class TestEffectiveStatus:
    """Tests for resolving the status users see."""

    def test_manual_item_uses_stored_status(self):
        """Test manual items show their stored status."""
        item = make_item(status=ChecklistStatus.in_progress)
        assert effective_status(item, {}) == ChecklistStatus.in_progress

    def test_signal_true_overrides_stored_status(self):
        """Test a true signal shows the item as complete."""
        item = make_item(auto_detect_key="venue_set", status=ChecklistStatus.not_started)
        assert effective_status(item, {"venue_set": True}) == ChecklistStatus.complete

    def test_override_is_not_written_back(self):
        """Test the override leaves the stored status alone."""
        item = make_item(auto_detect_key="venue_set", status=ChecklistStatus.not_started)
        effective_status(item, {"venue_set": True})
        assert item.status == ChecklistStatus.not_started

    def test_signal_turned_off_reveals_stored_status(self):
        """Test switching the signal off reveals the manual status."""
        item = make_item(auto_detect_key="venue_set", status=ChecklistStatus.not_started)
        assert effective_status(item, {"venue_set": True}) == ChecklistStatus.complete
        assert effective_status(item, {"venue_set": False}) == ChecklistStatus.not_started

    def test_missing_signal_reads_as_false(self):
        """Test an absent signal counts as false."""
        item = make_item(auto_detect_key="venue_set", status=ChecklistStatus.in_progress)
        assert effective_status(item, {"classes_created": True}) == ChecklistStatus.in_progress
        assert is_auto_detected(item, {}) is False

    def test_override_beats_not_applicable(self):
        """Test a true signal overrides not applicable."""
        item = make_item(auto_detect_key="venue_set", status=ChecklistStatus.not_applicable)
        assert effective_status(item, {"venue_set": True}) == ChecklistStatus.complete

    def test_signal_ignored_for_items_without_key(self):
        """Test signals do not affect items without a key."""
        item = make_item(status=ChecklistStatus.not_started)
        assert effective_status(item, {"venue_set": True}) == ChecklistStatus.not_started


class TestNextStatus:
    """Tests for the manual status cycle."""

    def test_cycle(self):
        """Test the cycle order wraps back to not started."""
        assert next_status(ChecklistStatus.not_started) == ChecklistStatus.in_progress
        assert next_status(ChecklistStatus.in_progress) == ChecklistStatus.complete
        assert next_status(ChecklistStatus.complete) == ChecklistStatus.not_started

    def test_not_applicable_restarts_cycle(self):
        """Test not applicable cycles to not started."""
        assert next_status(ChecklistStatus.not_applicable) == ChecklistStatus.not_started


class TestEnsureStatusWritable:
    """Tests for automation write protection."""

    def test_rejects_when_signal_true(self):
        """Test writes are refused while the signal is true."""
        item = make_item(auto_detect_key="venue_set")
        with pytest.raises(AutomationProtected):
            ensure_status_writable(item, {"venue_set": True})

    def test_allows_when_signal_false(self):
        """Test writes are allowed while the signal is false."""
        item = make_item(auto_detect_key="venue_set")
        ensure_status_writable(item, {"venue_set": False})

    def test_allows_manual_items(self):
        """Test manual items are always writable."""
        ensure_status_writable(make_item(), {"venue_set": True})


class TestClassifyUrgency:
    """Tests for deadline urgency."""

    def test_due_yesterday_is_overdue(self):
        """Test an item due yesterday is overdue."""
        item = make_item(due_date=TODAY - timedelta(days=1))
        assert classify_urgency(item, {}, TODAY) == Urgency.overdue

    def test_due_today_is_due_soon(self):
        """Test an item due today is due soon."""
        item = make_item(due_date=TODAY)
        assert classify_urgency(item, {}, TODAY) == Urgency.due_soon

    def test_due_in_14_days_is_due_soon(self):
        """Test the due soon window includes day 14."""
        item = make_item(due_date=TODAY + timedelta(days=14))
        assert classify_urgency(item, {}, TODAY) == Urgency.due_soon

    def test_due_in_15_days_is_not_urgent(self):
        """Test day 15 falls outside the due soon window."""
        item = make_item(due_date=TODAY + timedelta(days=15))
        assert classify_urgency(item, {}, TODAY) == Urgency.none

    def test_no_due_date_is_not_urgent(self):
        """Test items without a due date are never urgent."""
        assert classify_urgency(make_item(), {}, TODAY) == Urgency.none

    @pytest.mark.parametrize(
        "status", [ChecklistStatus.complete, ChecklistStatus.not_applicable]
    )
    def test_finished_items_never_urgent(self, status):
        """Test finished items are never urgent."""
        item = make_item(status=status, due_date=TODAY - timedelta(days=30))
        assert classify_urgency(item, {}, TODAY) == Urgency.none

    def test_auto_completed_item_never_urgent(self):
        """Test automation-completed items are never urgent."""
        item = make_item(auto_detect_key="venue_set", due_date=TODAY - timedelta(days=30))
        assert classify_urgency(item, {"venue_set": True}, TODAY) == Urgency.none
        assert classify_urgency(item, {}, TODAY) == Urgency.overdue

    def test_custom_window(self):
        """Test the due soon window can be widened."""
        item = make_item(due_date=TODAY + timedelta(days=20))
        assert classify_urgency(item, {}, TODAY, due_soon_days=21) == Urgency.due_soon


class TestClassifyDocumentExpiry:
    """Tests for document expiry classification."""

    def test_not_tracked_without_expiry_flag(self):
        """Test items without expiry tracking report not tracked."""
        item = make_item(document_expiry_date=TODAY - timedelta(days=1))
        assert classify_document_expiry(item, TODAY) == ExpiryState.not_tracked

    def test_not_tracked_without_date(self):
        """Test a missing expiry date reports not tracked."""
        item = make_item(has_expiry=True)
        assert classify_document_expiry(item, TODAY) == ExpiryState.not_tracked

    def test_expired(self):
        """Test a past expiry date is expired."""
        item = make_item(has_expiry=True, document_expiry_date=TODAY - timedelta(days=1))
        assert classify_document_expiry(item, TODAY) == ExpiryState.expired

    def test_expiring_today_is_expiring_soon(self):
        """Test a document expiring today is expiring soon."""
        item = make_item(has_expiry=True, document_expiry_date=TODAY)
        assert classify_document_expiry(item, TODAY) == ExpiryState.expiring_soon

    def test_expiring_in_30_days(self):
        """Test the warning window includes day 30."""
        item = make_item(has_expiry=True, document_expiry_date=TODAY + timedelta(days=30))
        assert classify_document_expiry(item, TODAY) == ExpiryState.expiring_soon

    def test_ok_beyond_warning_window(self):
        """Test day 31 is outside the warning window."""
        item = make_item(has_expiry=True, document_expiry_date=TODAY + timedelta(days=31))
        assert classify_document_expiry(item, TODAY) == ExpiryState.ok

    def test_independent_of_status(self):
        """Test expiry is classified whatever the item status."""
        item = make_item(
            has_expiry=True,
            status=ChecklistStatus.complete,
            document_expiry_date=TODAY - timedelta(days=1),
        )
        assert classify_document_expiry(item, TODAY) == ExpiryState.expired


class TestDescribeItem:
    """Tests for the item read view."""

    def test_view_combines_stored_and_resolved_fields(self):
        """Test the view carries stored and resolved fields."""
        item = make_item(
            auto_detect_key="venue_set",
            due_date=TODAY - timedelta(days=3),
            notes="Deposit paid",
        )
        view = describe_item(item, {"venue_set": True}, TODAY)

        assert view.id == item.id
        assert view.notes == "Deposit paid"
        assert view.status == ChecklistStatus.not_started
        assert view.effective_status == ChecklistStatus.complete
        assert view.is_auto_detected is True
        assert view.urgency == Urgency.none
        assert view.expiry_state == ExpiryState.not_tracked
