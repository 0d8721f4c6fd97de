from dailydhan.database.category_dao import CategoryDAO
from dailydhan.database.transaction_dao import TransactionDAO
from dailydhan.database.wallet_dao import WalletDAO
from dailydhan.models.transaction import Transaction
from dailydhan.utils.constants import TRANSACTION_TYPES
from dailydhan.utils.currency import parse_amount
from dailydhan.utils.date_helpers import month_window, normalize_date


class TransactionService:
    def __init__(self, tx_dao: TransactionDAO, category_dao: CategoryDAO, wallet_dao: WalletDAO):
        self._dao = tx_dao
        self._category_dao = category_dao
        self._wallet_dao = wallet_dao

    def get_all(self) -> list[Transaction]:
        return self._dao.get_all()

    def get_recent(self, limit: int = 5) -> list[Transaction]:
        return self._dao.get_recent(limit)

    def get_by_id(self, tx_id: int) -> Transaction | None:
        return self._dao.get_by_id(tx_id)

    def get_for_month(
        self,
        year: int,
        month: int,
        type_filter: str | None = None,
        category_id: int | None = None,
        wallet_id: int | None = None,
    ) -> list[Transaction]:
        start, end = month_window(year, month)
        return self._dao.get_between(start, end, type_filter, category_id, wallet_id)

    def create(
        self,
        amount,
        type_: str,
        date,
        category_id: int | None = None,
        wallet_id: int | None = None,
        note: str | None = None,
    ) -> Transaction:
        amount, date = self._validate(amount, type_, date, category_id, wallet_id)
        return self._dao.create(
            amount=amount, type_=type_, date=date,
            category_id=category_id, wallet_id=wallet_id,
            note=(note or "").strip() or None,
        )

    def update(
        self,
        tx_id: int,
        amount,
        type_: str,
        date,
        category_id: int | None = None,
        wallet_id: int | None = None,
        note: str | None = None,
    ) -> Transaction:
        if self._dao.get_by_id(tx_id) is None:
            raise ValueError("Transaction not found.")
        amount, date = self._validate(amount, type_, date, category_id, wallet_id)
        return self._dao.update(
            tx_id, amount, type_, date, category_id, wallet_id,
            (note or "").strip() or None,
        )

    def delete(self, tx_id: int):
        self._dao.delete(tx_id)

    def _validate(self, amount, type_: str, date, category_id, wallet_id) -> tuple[float, str]:
        amount = parse_amount(amount)
        if type_ not in TRANSACTION_TYPES:
            raise ValueError(f"Invalid type: {type_}")
        # Reports compare dates as strings, so only padded ISO dates are stored
        date = normalize_date(date)
        if date is None:
            raise ValueError("Invalid date format. Use YYYY-MM-DD.")
        if category_id is not None and self._category_dao.get_by_id(category_id) is None:
            raise ValueError("Selected category no longer exists.")
        if wallet_id is not None and self._wallet_dao.get_by_id(wallet_id) is None:
            raise ValueError("Selected wallet no longer exists.")
        return amount, date
