"""Tests for automation signal collection."""

from sqlalchemy.exc import OperationalError
from sqlmodel import select

from showcompliance.checklist import signals as signal_provider
from showcompliance.checklist.signals import (
    KNOWN_SIGNALS,
    collect_signals,
    derive_show_signals,
    record_signal,
)
from showcompliance.models import AutomationSignal, ShowStatus


class TestDeriveShowSignals:
    """Tests for signals read off the show record."""

    def test_draft_show(self, open_show):
        """Test a bare draft show asserts nothing."""
        signals = derive_show_signals(open_show)

        assert signals["venue_set"] is False
        assert signals["kc_licence_recorded"] is False
        assert signals["show_published"] is False
        assert signals["entries_opened"] is False
        assert signals["judges_assigned"] is False

    def test_published_show_with_venue_and_judges(self, championship_show):
        """Test a published show with venue and judges."""
        signals = derive_show_signals(championship_show)

        assert signals["venue_set"] is True
        assert signals["show_published"] is True
        assert signals["entries_opened"] is False
        assert signals["entries_closed"] is False
        assert signals["judges_assigned"] is True

    def test_status_progression(self, open_show):
        """Test later statuses imply the earlier ones."""
        open_show.status = ShowStatus.entries_closed
        signals = derive_show_signals(open_show)

        assert signals["show_published"] is True
        assert signals["entries_opened"] is True
        assert signals["entries_closed"] is True

    def test_derived_keys_are_known(self, open_show):
        """Test derived signals are all known keys."""
        assert set(derive_show_signals(open_show)) <= set(KNOWN_SIGNALS)


class TestRecordSignal:
    """Tests for storing reported signals."""

    def test_creates_then_updates(self, session, open_show):
        """Test a second report updates the same row."""
        record_signal(session, open_show.id, "classes_created", True)
        record_signal(session, open_show.id, "classes_created", False)

        rows = session.exec(
            select(AutomationSignal).where(AutomationSignal.show_id == open_show.id)
        ).all()
        assert len(rows) == 1
        assert rows[0].value is False

    def test_concurrent_first_report_updates_winning_row(self, session, open_show, monkeypatch):
        """Test a racing first report updates the row that won."""
        session.add(AutomationSignal(show_id=open_show.id, key="classes_created", value=False))
        session.commit()

        find_signal = signal_provider._find_signal
        lookups = []

        def stale_lookup(session, show_id, key):
            lookups.append(key)
            if len(lookups) == 1:
                return None
            return find_signal(session, show_id, key)

        monkeypatch.setattr(signal_provider, "_find_signal", stale_lookup)

        signal = record_signal(session, open_show.id, "classes_created", True)

        assert signal.value is True
        rows = session.exec(
            select(AutomationSignal).where(AutomationSignal.show_id == open_show.id)
        ).all()
        assert len(rows) == 1
        assert rows[0].value is True


class TestCollectSignals:
    """Tests for building a show's signal map."""

    def test_merges_reported_and_derived(self, session, championship_show):
        """Test reported and derived signals are merged."""
        record_signal(session, championship_show.id, "classes_created", True)

        signals = collect_signals(session, championship_show)

        assert signals["classes_created"] is True
        assert signals["venue_set"] is True
        assert "rings_created" not in signals

    def test_show_record_wins_over_reported_value(self, session, open_show):
        """Test the show record overrides a reported value."""
        record_signal(session, open_show.id, "venue_set", True)
        assert collect_signals(session, open_show)["venue_set"] is False

    def test_database_failure_yields_empty_map(self, session, open_show, monkeypatch):
        """Test a database error degrades to no signals."""
        def broken_exec(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("database is locked"))

        monkeypatch.setattr(session, "exec", broken_exec)

        assert collect_signals(session, open_show) == {}
