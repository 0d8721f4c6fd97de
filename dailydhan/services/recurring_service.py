import logging
import sqlite3
from datetime import date

from dailydhan.database.category_dao import CategoryDAO
from dailydhan.database.db_manager import DatabaseManager
from dailydhan.database.recurring_dao import RecurringDAO
from dailydhan.database.transaction_dao import TransactionDAO
from dailydhan.database.wallet_dao import WalletDAO
from dailydhan.models.recurring_transaction import RecurringTransaction
from dailydhan.models.transaction import Transaction
from dailydhan.utils.constants import FREQUENCIES, RECURRING_CATCHUP_LIMIT, TRANSACTION_TYPES
from dailydhan.utils.currency import parse_amount
from dailydhan.utils.date_helpers import (
    add_days,
    add_months,
    add_years,
    clamp_day_to_month,
    format_date,
    parse_date,
    today,
)

logger = logging.getLogger(__name__)


def compute_next_due_date(current, frequency: str, anchor_day: int | None = None) -> str:
    """Advance a due date by one frequency unit.

    Monthly and yearly steps land on anchor_day (default: the current day),
    clamped to the target month's length. With the start date's day as the
    anchor, 31 Jan runs 29 Feb, 31 Mar, 30 Apr and 29 Feb runs 28 Feb in
    common years and 29 Feb again in leap years.
    """
    d = current if isinstance(current, date) else parse_date(current)
    if d is None:
        raise ValueError(f"Invalid due date: {current!r}")
    if frequency == "daily":
        return format_date(add_days(d, 1))
    if frequency == "weekly":
        return format_date(add_days(d, 7))
    if frequency == "monthly":
        nxt = add_months(d, 1)
    elif frequency == "yearly":
        nxt = add_years(d, 1)
    else:
        raise ValueError(f"Invalid frequency: {frequency!r}")
    if anchor_day:
        nxt = nxt.replace(day=clamp_day_to_month(nxt.year, nxt.month, anchor_day))
    return format_date(nxt)


class RecurringService:
    def __init__(
        self,
        recurring_dao: RecurringDAO,
        tx_dao: TransactionDAO,
        category_dao: CategoryDAO,
        wallet_dao: WalletDAO,
        db: DatabaseManager,
        catch_up_limit: int = RECURRING_CATCHUP_LIMIT,
    ):
        self._dao = recurring_dao
        self._tx_dao = tx_dao
        self._category_dao = category_dao
        self._wallet_dao = wallet_dao
        self._db = db
        self._catch_up_limit = max(1, catch_up_limit)

    def get_all(self) -> list[RecurringTransaction]:
        return self._dao.get_all()

    def get_by_id(self, recurring_id: int) -> RecurringTransaction | None:
        return self._dao.get_by_id(recurring_id)

    def get_due(self, reference_date: date | None = None) -> list[RecurringTransaction]:
        return self._dao.get_due(format_date(reference_date or today()))

    def save(
        self,
        amount,
        type_: str,
        category_id: int | None,
        wallet_id: int | None,
        frequency: str,
        start_date,
        note: str | None = None,
        is_active: bool = True,
        recurring_id: int | None = None,
    ) -> RecurringTransaction:
        """Create a template, or edit one when recurring_id is given.

        The first occurrence falls one period after start_date. Editing never
        moves next_due_date back behind a date that was already materialized.
        """
        amount, start_date = self._validate(
            amount, type_, category_id, wallet_id, frequency, start_date
        )
        note = (note or "").strip() or None
        next_due = compute_next_due_date(start_date, frequency)

        if recurring_id is None:
            return self._dao.create(
                amount=amount, type_=type_, category_id=category_id,
                wallet_id=wallet_id, frequency=frequency, start_date=start_date,
                next_due_date=next_due, note=note, is_active=is_active,
            )

        existing = self._dao.get_by_id(recurring_id)
        if existing is None:
            raise ValueError("Recurring transaction not found.")
        if existing.last_created_date and existing.next_due_date > next_due:
            next_due = existing.next_due_date
        return self._dao.update(
            recurring_id=recurring_id, amount=amount, type_=type_,
            category_id=category_id, wallet_id=wallet_id, frequency=frequency,
            start_date=start_date, next_due_date=next_due, note=note,
            is_active=is_active,
        )

    def set_active(self, recurring_id: int, is_active: bool):
        """Pausing freezes next_due_date; resuming picks up from it."""
        self._dao.set_active(recurring_id, is_active)

    def delete(self, recurring_id: int):
        self._dao.delete(recurring_id)

    def process_due_recurring_transactions(
        self,
        reference_date: date | None = None,
        max_occurrences: int | None = None,
    ) -> list[Transaction]:
        """
        Materialize every due occurrence of every active template up to
        reference_date (default: today). Returns the created transactions.

        Each occurrence is inserted and its template advanced in one atomic
        block, so a due date is never materialized twice. At most
        max_occurrences (default: the configured catch-up limit) are created
        per template per call; a longer backlog continues on the next call.
        """
        as_of = format_date(reference_date or today())
        limit = max(1, max_occurrences or self._catch_up_limit)
        created: list[Transaction] = []

        for template in self._dao.get_due(as_of):
            try:
                created.extend(self._materialize(template, as_of, limit))
            except (sqlite3.Error, ValueError) as e:
                logger.warning(
                    "Failed to create transaction from recurring %s: %s", template.id, e
                )

        if created:
            logger.info("Created %d transaction(s) from recurring templates", len(created))
        return created

    def _materialize(self, template: RecurringTransaction, as_of: str,
                     limit: int) -> list[Transaction]:
        due_date = parse_date(template.next_due_date)
        if due_date is None:
            raise ValueError(f"Invalid next due date {template.next_due_date!r}")
        due = format_date(due_date)
        start = parse_date(template.start_date)
        anchor_day = start.day if start else None
        note = template.note or f"Recurring: {template.frequency}"
        created = []

        while due <= as_of and len(created) < limit:
            next_due = compute_next_due_date(due, template.frequency, anchor_day)
            with self._db.transaction():
                tx = self._tx_dao.create(
                    amount=template.amount,
                    type_=template.type,
                    date=due,
                    category_id=template.category_id,
                    wallet_id=template.wallet_id,
                    note=note,
                )
                self._dao.advance(template.id, next_due, as_of)
            created.append(tx)
            due = next_due

        if due <= as_of:
            logger.info(
                "Recurring %s still behind (next due %s); catching up on the next run",
                template.id, due,
            )
        return created

    def _validate(self, amount, type_, category_id, wallet_id, frequency, start_date):
        amount = parse_amount(amount)
        if type_ not in TRANSACTION_TYPES:
            raise ValueError("Type must be income or expense.")
        if frequency not in FREQUENCIES:
            raise ValueError("Invalid frequency.")
        start = start_date if isinstance(start_date, date) else parse_date(start_date)
        if start is None:
            raise ValueError("Invalid start date.")
        if category_id is not None and self._category_dao.get_by_id(category_id) is None:
            raise ValueError("Selected category no longer exists.")
        if wallet_id is not None and self._wallet_dao.get_by_id(wallet_id) is None:
            raise ValueError("Selected wallet no longer exists.")
        return amount, format_date(start)
