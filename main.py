import logging
import os
import sys

# Ensure project root is on sys.path when run directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from dailydhan.database.db_manager import DatabaseManager
from dailydhan.database.wallet_dao import WalletDAO
from dailydhan.database.transaction_dao import TransactionDAO
from dailydhan.database.category_dao import CategoryDAO
from dailydhan.database.budget_dao import BudgetDAO
from dailydhan.database.recurring_dao import RecurringDAO
from dailydhan.database.report_dao import ReportDAO

from dailydhan.services.wallet_service import WalletService
from dailydhan.services.transaction_service import TransactionService
from dailydhan.services.category_service import CategoryService
from dailydhan.services.budget_service import BudgetService
from dailydhan.services.recurring_service import RecurringService
from dailydhan.services.report_service import ReportService
from dailydhan.services.backup_service import BackupService
from dailydhan.services.chart_service import ChartService

from dailydhan.utils import app_config
from dailydhan.utils.constants import APP_NAME, DB_FILE
from dailydhan.utils.currency import currency_symbol, format_currency


def build_app(config: dict | None = None) -> dict:
    """Wire the store, DAOs and services; the returned dict is what screens consume."""
    config = app_config.load_config() if config is None else config

    # ── Database ─────────────────────────────────────────────────────────────
    db_folder = app_config.get_db_folder(config)
    if db_folder:
        os.makedirs(db_folder, exist_ok=True)
    db = DatabaseManager(os.path.join(db_folder, DB_FILE) if db_folder else DB_FILE).open()
    db.initialize()

    # ── DAOs ─────────────────────────────────────────────────────────────────
    wallet_dao = WalletDAO(db)
    tx_dao = TransactionDAO(db)
    category_dao = CategoryDAO(db)
    budget_dao = BudgetDAO(db)
    recurring_dao = RecurringDAO(db)
    report_dao = ReportDAO(db)

    # ── Services ─────────────────────────────────────────────────────────────
    return {
        "db": db,
        "wallets": WalletService(wallet_dao),
        "transactions": TransactionService(tx_dao, category_dao, wallet_dao),
        "categories": CategoryService(category_dao, db),
        "budgets": BudgetService(budget_dao, category_dao, db),
        "recurring": RecurringService(
            recurring_dao, tx_dao, category_dao, wallet_dao, db,
            catch_up_limit=app_config.get_catch_up_limit(config),
        ),
        "reports": ReportService(report_dao, tx_dao),
        "backups": BackupService(db, app_config.get_backup_dir(config)),
        "currency_symbol": currency_symbol(app_config.get_setting("currency", config)),
    }


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = app_config.load_config()
    app = build_app(config)

    # ── Apply due recurring templates ────────────────────────────────────────
    created = app["recurring"].process_due_recurring_transactions()

    # ── Dashboard summary ────────────────────────────────────────────────────
    symbol = app["currency_symbol"]
    dashboard = app["reports"].dashboard()
    summary = dashboard.summary
    print(f"{APP_NAME} - {dashboard.year}-{dashboard.month:02d}")
    print(f"  Income:  {format_currency(summary.income, symbol)}")
    print(f"  Expense: {format_currency(summary.expense, symbol)}")
    print(f"  Balance: {format_currency(summary.balance, symbol)}")
    if created:
        print(f"  {len(created)} recurring transaction(s) added")
    for item in dashboard.expense_breakdown[:5]:
        print(f"    {item.name}: {format_currency(item.total_amount, symbol)}")

    # ── Optional chart export ────────────────────────────────────────────────
    chart_dir = app_config.get_setting("chart_dir", config)
    if chart_dir:
        charts = ChartService()
        charts.render_category_pie(
            dashboard.expense_breakdown, os.path.join(chart_dir, "expenses.png")
        )
        charts.render_income_expense_bars(
            dashboard.series, os.path.join(chart_dir, "income_expense.png")
        )

    app["db"].close()


if __name__ == "__main__":
    main()
