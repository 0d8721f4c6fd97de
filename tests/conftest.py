import os

import pytest

os.environ.setdefault("MPLBACKEND", "Agg")

from dailydhan.database.budget_dao import BudgetDAO
from dailydhan.database.category_dao import CategoryDAO
from dailydhan.database.db_manager import DatabaseManager
from dailydhan.database.recurring_dao import RecurringDAO
from dailydhan.database.report_dao import ReportDAO
from dailydhan.database.transaction_dao import TransactionDAO
from dailydhan.database.wallet_dao import WalletDAO
from dailydhan.services.budget_service import BudgetService
from dailydhan.services.category_service import CategoryService
from dailydhan.services.recurring_service import RecurringService
from dailydhan.services.report_service import ReportService
from dailydhan.services.transaction_service import TransactionService
from dailydhan.services.wallet_service import WalletService


@pytest.fixture
def db():
    manager = DatabaseManager(":memory:").open()
    manager.initialize()
    yield manager
    manager.close()


@pytest.fixture
def wallet_dao(db):
    return WalletDAO(db)


@pytest.fixture
def category_dao(db):
    return CategoryDAO(db)


@pytest.fixture
def tx_dao(db):
    return TransactionDAO(db)


@pytest.fixture
def budget_dao(db):
    return BudgetDAO(db)


@pytest.fixture
def recurring_dao(db):
    return RecurringDAO(db)


@pytest.fixture
def wallet_service(wallet_dao):
    return WalletService(wallet_dao)


@pytest.fixture
def category_service(category_dao, db):
    return CategoryService(category_dao, db)


@pytest.fixture
def transaction_service(tx_dao, category_dao, wallet_dao):
    return TransactionService(tx_dao, category_dao, wallet_dao)


@pytest.fixture
def budget_service(budget_dao, category_dao, db):
    return BudgetService(budget_dao, category_dao, db)


@pytest.fixture
def recurring_service(recurring_dao, tx_dao, category_dao, wallet_dao, db):
    return RecurringService(recurring_dao, tx_dao, category_dao, wallet_dao, db)


@pytest.fixture
def report_service(db, tx_dao):
    return ReportService(ReportDAO(db), tx_dao)


@pytest.fixture
def food(category_service):
    return category_service.save("Food", "expense")


@pytest.fixture
def salary(category_dao):
    return category_dao.get_by_name_and_type("Salary", "income")


@pytest.fixture
def cash(wallet_service):
    return wallet_service.create("Cash")
