"""Recurring templates: due-date arithmetic and materialization."""
import logging
import sqlite3
from datetime import date

import pytest

from dailydhan.database.recurring_dao import RecurringDAO
from dailydhan.services.recurring_service import RecurringService, compute_next_due_date


class TestComputeNextDueDate:
    def test_monthly_chain(self):
        first = compute_next_due_date("2024-01-15", "monthly")
        second = compute_next_due_date(first, "monthly")
        third = compute_next_due_date(second, "monthly")
        assert (first, second, third) == ("2024-02-15", "2024-03-15", "2024-04-15")

    @pytest.mark.parametrize("current, frequency, expected", [
        ("2024-01-31", "monthly", "2024-02-29"),
        ("2023-01-31", "monthly", "2023-02-28"),
        ("2024-12-15", "monthly", "2025-01-15"),
        ("2024-02-29", "yearly", "2025-02-28"),
        ("2024-12-31", "daily", "2025-01-01"),
        ("2024-02-26", "weekly", "2024-03-04"),
        (date(2024, 3, 1), "daily", "2024-03-02"),
    ])
    def test_calendar_edges(self, current, frequency, expected):
        assert compute_next_due_date(current, frequency) == expected

    @pytest.mark.parametrize("current, frequency, anchor, expected", [
        ("2024-02-29", "monthly", 31, "2024-03-31"),
        ("2024-03-31", "monthly", 31, "2024-04-30"),
        ("2024-04-30", "monthly", 31, "2024-05-31"),
        ("2025-02-28", "yearly", 29, "2026-02-28"),
        ("2027-02-28", "yearly", 29, "2028-02-29"),
        ("2024-01-01", "daily", 31, "2024-01-02"),
    ])
    def test_anchor_day(self, current, frequency, anchor, expected):
        assert compute_next_due_date(current, frequency, anchor) == expected

    def test_unknown_frequency(self):
        with pytest.raises(ValueError, match="frequency"):
            compute_next_due_date("2024-01-01", "fortnightly")

    def test_invalid_date(self):
        with pytest.raises(ValueError):
            compute_next_due_date("not-a-date", "daily")


class TestSave:
    def test_first_due_is_one_period_after_start(self, recurring_service, food):
        rule = recurring_service.save(100, "expense", food.id, None, "monthly", "2024-01-15")
        assert rule.next_due_date == "2024-02-15"
        assert rule.is_active
        assert rule.category_name == "Food"

    def test_invalid_frequency_rejected(self, recurring_service):
        with pytest.raises(ValueError, match="frequency"):
            recurring_service.save(100, "expense", None, None, "hourly", "2024-01-15")

    def test_invalid_amount_rejected(self, recurring_service):
        with pytest.raises(ValueError, match="valid amount"):
            recurring_service.save("ten", "expense", None, None, "monthly", "2024-01-15")

    def test_edit_before_first_run_recomputes(self, recurring_service):
        rule = recurring_service.save(100, "expense", None, None, "monthly", "2024-01-15")
        edited = recurring_service.save(100, "expense", None, None, "weekly", "2024-01-15",
                                        recurring_id=rule.id)
        assert edited.next_due_date == "2024-01-22"

    def test_edit_never_moves_due_date_back(self, recurring_service):
        rule = recurring_service.save(100, "expense", None, None, "monthly", "2024-01-15")
        recurring_service.process_due_recurring_transactions(date(2024, 2, 20))

        edited = recurring_service.save(250, "expense", None, None, "monthly", "2024-01-15",
                                        recurring_id=rule.id)

        assert edited.amount == 250
        assert edited.next_due_date == "2024-03-15"


class TestProcessDue:
    def test_creates_due_occurrence_once(self, recurring_service, transaction_service, food, cash):
        rule = recurring_service.save(100, "expense", food.id, cash.id, "monthly", "2024-01-15")

        created = recurring_service.process_due_recurring_transactions(date(2024, 2, 20))

        assert [(t.date, t.amount, t.wallet_id) for t in created] == [("2024-02-15", 100, cash.id)]
        refreshed = recurring_service.get_by_id(rule.id)
        assert refreshed.next_due_date == "2024-03-15"
        assert refreshed.last_created_date == "2024-02-20"

        assert recurring_service.process_due_recurring_transactions(date(2024, 2, 20)) == []
        assert len(transaction_service.get_all()) == 1

    def test_nothing_due(self, recurring_service):
        recurring_service.save(100, "expense", None, None, "monthly", "2024-01-15")
        assert recurring_service.process_due_recurring_transactions(date(2024, 2, 14)) == []

    def test_default_note(self, recurring_service):
        recurring_service.save(100, "expense", None, None, "monthly", "2024-01-15")
        [tx] = recurring_service.process_due_recurring_transactions(date(2024, 2, 15))
        assert tx.note == "Recurring: monthly"

    def test_template_note_is_kept(self, recurring_service):
        recurring_service.save(100, "expense", None, None, "monthly", "2024-01-15", note="Gym")
        [tx] = recurring_service.process_due_recurring_transactions(date(2024, 2, 15))
        assert tx.note == "Gym"

    def test_catches_up_missed_occurrences(self, recurring_service):
        rule = recurring_service.save(10, "expense", None, None, "daily", "2024-01-01")

        created = recurring_service.process_due_recurring_transactions(date(2024, 1, 5))

        assert [t.date for t in created] == ["2024-01-02", "2024-01-03", "2024-01-04", "2024-01-05"]
        assert recurring_service.get_by_id(rule.id).next_due_date == "2024-01-06"

    def test_month_end_start_keeps_its_day(self, recurring_service):
        rule = recurring_service.save(10, "expense", None, None, "monthly", "2024-01-31")

        created = recurring_service.process_due_recurring_transactions(date(2024, 5, 31))

        assert [t.date for t in created] == ["2024-02-29", "2024-03-31", "2024-04-30", "2024-05-31"]
        assert recurring_service.get_by_id(rule.id).next_due_date == "2024-06-30"

    def test_month_end_start_across_runs(self, recurring_service):
        recurring_service.save(10, "expense", None, None, "monthly", "2024-01-31")

        first = recurring_service.process_due_recurring_transactions(date(2024, 3, 1))
        second = recurring_service.process_due_recurring_transactions(date(2024, 3, 31))

        assert [t.date for t in first] == ["2024-02-29"]
        assert [t.date for t in second] == ["2024-03-31"]

    def test_leap_day_yearly_returns_in_leap_years(self, recurring_service):
        recurring_service.save(10, "income", None, None, "yearly", "2024-02-29")

        created = recurring_service.process_due_recurring_transactions(date(2028, 3, 1))

        assert [t.date for t in created] == ["2025-02-28", "2026-02-28", "2027-02-28", "2028-02-29"]

    def test_single_step_per_call(self, recurring_service):
        recurring_service.save(10, "expense", None, None, "daily", "2024-01-01")

        first = recurring_service.process_due_recurring_transactions(date(2024, 1, 5), max_occurrences=1)
        second = recurring_service.process_due_recurring_transactions(date(2024, 1, 5), max_occurrences=1)

        assert [t.date for t in first] == ["2024-01-02"]
        assert [t.date for t in second] == ["2024-01-03"]

    def test_catch_up_limit(self, db, recurring_dao, tx_dao, category_dao, wallet_dao):
        service = RecurringService(recurring_dao, tx_dao, category_dao, wallet_dao, db,
                                   catch_up_limit=2)
        rule = service.save(10, "expense", None, None, "daily", "2024-01-01")

        created = service.process_due_recurring_transactions(date(2024, 1, 31))

        assert len(created) == 2
        assert service.get_by_id(rule.id).next_due_date == "2024-01-04"

    def test_paused_template_is_frozen(self, recurring_service):
        rule = recurring_service.save(10, "expense", None, None, "monthly", "2024-01-15")
        recurring_service.set_active(rule.id, False)

        assert recurring_service.process_due_recurring_transactions(date(2024, 6, 1)) == []
        assert recurring_service.get_by_id(rule.id).next_due_date == "2024-02-15"

        recurring_service.set_active(rule.id, True)
        created = recurring_service.process_due_recurring_transactions(date(2024, 3, 1))
        assert [t.date for t in created] == ["2024-02-15"]

    def test_broken_template_skipped(self, recurring_service, db, caplog):
        good = recurring_service.save(10, "expense", None, None, "monthly", "2024-01-15")
        bad = recurring_service.save(20, "expense", None, None, "monthly", "2024-01-15")
        conn = db.get_connection()
        conn.execute(
            "UPDATE recurring_transactions SET frequency = 'fortnightly' WHERE id = ?", (bad.id,)
        )
        conn.commit()

        with caplog.at_level(logging.WARNING):
            created = recurring_service.process_due_recurring_transactions(date(2024, 2, 15))

        assert [t.amount for t in created] == [10]
        assert recurring_service.get_by_id(good.id).next_due_date == "2024-03-15"
        assert recurring_service.get_by_id(bad.id).next_due_date == "2024-02-15"
        assert "Failed to create transaction from recurring" in caplog.text

    def test_insert_and_advance_are_atomic(self, recurring_service, transaction_service, monkeypatch):
        def failing_advance(self, recurring_id, next_due_date, last_created_date):
            raise sqlite3.OperationalError("database is locked")

        rule = recurring_service.save(10, "expense", None, None, "monthly", "2024-01-15")
        monkeypatch.setattr(RecurringDAO, "advance", failing_advance)

        assert recurring_service.process_due_recurring_transactions(date(2024, 2, 15)) == []
        assert transaction_service.get_all() == []
        assert recurring_service.get_by_id(rule.id).next_due_date == "2024-02-15"

    def test_delete_keeps_created_transactions(self, recurring_service, transaction_service):
        rule = recurring_service.save(10, "expense", None, None, "monthly", "2024-01-15")
        recurring_service.process_due_recurring_transactions(date(2024, 2, 15))

        recurring_service.delete(rule.id)

        assert recurring_service.get_all() == []
        assert len(transaction_service.get_all()) == 1
