APP_NAME = "DailyDhan"
DB_FILE = "dailydhan.db"
BACKUP_PREFIX = "dailydhan-backup-"
PRE_RESTORE_PREFIX = "dailydhan-pre-restore-"
DATE_FORMAT = "%Y-%m-%d"
RECURRING_CATCHUP_LIMIT = 60
DASHBOARD_MONTHS = 6
RECENT_TRANSACTIONS_LIMIT = 5

TRANSACTION_TYPES = ("income", "expense")
WALLET_TYPES = ("cash", "bank", "upi", "credit_card")
BANK_WALLET_TYPES = ("bank", "credit_card")
BUDGET_PERIODS = ("monthly", "yearly")
FREQUENCIES = ("daily", "weekly", "monthly", "yearly")

WALLET_TYPE_LABELS = {
    "cash": "Cash",
    "bank": "Bank Account",
    "upi": "UPI",
    "credit_card": "Credit Card",
}

DEFAULT_INCOME_CATEGORIES = [
    {"name": "Salary",       "type": "income", "icon": "cash-multiple", "color": "#34A853"},
    {"name": "Freelance",    "type": "income", "icon": "briefcase",     "color": "#1A73E8"},
    {"name": "Investment",   "type": "income", "icon": "chart-line",    "color": "#4CAF50"},
    {"name": "Gift",         "type": "income", "icon": "gift",          "color": "#E91E63"},
    {"name": "Business",     "type": "income", "icon": "store",         "color": "#FB8C00"},
    {"name": "Other Income", "type": "income", "icon": "wallet",        "color": "#9C27B0"},
]

DEFAULT_EXPENSE_CATEGORIES = [
    {"name": "Food & Dining",     "type": "expense", "icon": "food-fork-drink",     "color": "#F4B400"},
    {"name": "Transportation",    "type": "expense", "icon": "car",                 "color": "#1A73E8"},
    {"name": "Shopping",          "type": "expense", "icon": "shopping",            "color": "#E91E63"},
    {"name": "Bills & Utilities", "type": "expense", "icon": "file-invoice-dollar", "color": "#FF9800"},
    {"name": "Entertainment",     "type": "expense", "icon": "movie",               "color": "#9C27B0"},
    {"name": "Healthcare",        "type": "expense", "icon": "medical-bag",         "color": "#E91E63"},
    {"name": "Education",         "type": "expense", "icon": "school",              "color": "#3F51B5"},
    {"name": "Travel",            "type": "expense", "icon": "airplane",            "color": "#00BCD4"},
    {"name": "Groceries",         "type": "expense", "icon": "cart",                "color": "#4CAF50"},
    {"name": "Rent",              "type": "expense", "icon": "home",                "color": "#795548"},
    {"name": "Insurance",         "type": "expense", "icon": "shield-check",        "color": "#607D8B"},
    {"name": "Personal Care",     "type": "expense", "icon": "account",             "color": "#FF5722"},
    {"name": "Subscriptions",     "type": "expense", "icon": "credit-card",         "color": "#009688"},
    {"name": "Other Expense",     "type": "expense", "icon": "dots-horizontal",     "color": "#9E9E9E"},
]

DEFAULT_CATEGORIES = DEFAULT_INCOME_CATEGORIES + DEFAULT_EXPENSE_CATEGORIES

CATEGORY_COLOR_PALETTE = [
    "#1A73E8",  # blue
    "#F4B400",  # gold
    "#34A853",  # green
    "#E91E63",  # pink
    "#FB8C00",  # orange
    "#9C27B0",  # purple
    "#00BCD4",  # cyan
    "#FF5722",  # deep orange
    "#795548",  # brown
    "#607D8B",  # blue grey
    "#4CAF50",  # light green
    "#FF9800",  # amber
    "#3F51B5",  # indigo
    "#009688",  # teal
    "#CDDC39",  # lime
]

# Keyed by lower-cased, trimmed category name
CATEGORY_ICON_MAP = {c["name"].lower(): c["icon"] for c in DEFAULT_CATEGORIES}

DEFAULT_INCOME_ICON = "wallet"
DEFAULT_EXPENSE_ICON = "dots-horizontal"

INCOME_COLOR = "#4CAF50"
EXPENSE_COLOR = "#F44336"


def palette_color_for(category_id: int) -> str:
    return CATEGORY_COLOR_PALETTE[category_id % len(CATEGORY_COLOR_PALETTE)]


def default_icon_for(name: str, type_: str) -> str:
    icon = CATEGORY_ICON_MAP.get((name or "").strip().lower())
    if icon:
        return icon
    return DEFAULT_INCOME_ICON if type_ == "income" else DEFAULT_EXPENSE_ICON
