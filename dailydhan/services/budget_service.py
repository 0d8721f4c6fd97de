from dailydhan.database.budget_dao import BudgetDAO
from dailydhan.database.category_dao import CategoryDAO
from dailydhan.database.db_manager import DatabaseManager
from dailydhan.models.budget import Budget, BudgetStatus
from dailydhan.utils.constants import BUDGET_PERIODS
from dailydhan.utils.currency import parse_amount
from dailydhan.utils.date_helpers import month_window, year_window


class BudgetService:
    def __init__(
        self,
        budget_dao: BudgetDAO,
        category_dao: CategoryDAO,
        db: DatabaseManager,
    ):
        self._budget_dao = budget_dao
        self._category_dao = category_dao
        self._db = db

    def get_all(self) -> list[Budget]:
        return self._budget_dao.get_all()

    def get_budgets(self, period: str, year: int, month: int | None = None) -> list[Budget]:
        if period not in BUDGET_PERIODS or (period == "monthly" and month is None):
            return []
        return self._budget_dao.get_for_period(period, year, month)

    def save(self, category_id, amount, period: str, year: int,
             month: int | None = None) -> Budget:
        """Set the ceiling for a category and period, replacing any previous amount."""
        category_id, amount, month = self._validate(category_id, amount, period, year, month)
        return self._budget_dao.save(category_id, amount, period, year, month)

    def update(self, budget_id: int, category_id, amount, period: str, year: int,
               month: int | None = None) -> Budget:
        """Edit as delete + reinsert, so category or period may change too."""
        if self._budget_dao.get_by_id(budget_id) is None:
            raise ValueError("Budget not found.")
        category_id, amount, month = self._validate(category_id, amount, period, year, month)
        with self._db.transaction():
            self._budget_dao.delete(budget_id)
            return self._budget_dao.save(category_id, amount, period, year, month)

    def delete(self, budget_id: int):
        self._budget_dao.delete(budget_id)

    def budget_vs_actual(self, period: str, year: int,
                         month: int | None = None) -> list[BudgetStatus]:
        """Budgets of the period with the expense actually spent against each."""
        if period == "monthly" and month is not None:
            start, end = month_window(year, month)
        elif period == "yearly":
            start, end = year_window(year)
        else:
            return []
        return self._budget_dao.get_vs_actual(period, year, month, start, end)

    def get_expense_categories(self):
        """Return categories valid for budgeting."""
        return self._category_dao.get_by_type("expense")

    def _validate(self, category_id, amount, period, year, month):
        if not category_id:
            raise ValueError("Please select a category.")
        if self._category_dao.get_by_id(category_id) is None:
            raise ValueError("Selected category no longer exists.")
        try:
            amount = parse_amount(amount)
        except ValueError:
            raise ValueError("Please enter a valid budget amount.") from None
        if period not in BUDGET_PERIODS:
            raise ValueError("Budget period must be monthly or yearly.")
        if not isinstance(year, int) or year < 1:
            raise ValueError("Please select a valid year.")
        if period == "monthly":
            try:
                month = int(month)
            except (TypeError, ValueError):
                month = None
            if month is None or not 1 <= month <= 12:
                raise ValueError("Please select a month for a monthly budget.")
        else:
            month = None
        return category_id, amount, month
