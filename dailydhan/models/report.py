"""Typed result rows for the aggregation queries behind reports and the dashboard."""
from dataclasses import dataclass, field
from typing import Optional

from dailydhan.models.transaction import Transaction


@dataclass
class MonthlySummary:
    income: float = 0.0
    expense: float = 0.0

    @property
    def balance(self) -> float:
        return self.income - self.expense


@dataclass
class MonthlyTotals:
    year: int
    month: int
    month_name: str
    income: float = 0.0
    expense: float = 0.0

    @property
    def net(self) -> float:
        return self.income - self.expense


@dataclass
class CategoryTotal:
    id: int
    name: str
    color: Optional[str]
    icon: Optional[str]
    total_amount: float = 0.0
    transaction_count: int = 0


@dataclass
class CategoryAnalysis:
    id: int
    name: str
    type: str
    color: Optional[str]
    icon: Optional[str]
    total_expense: float = 0.0
    total_income: float = 0.0
    transaction_count: int = 0

    @property
    def total(self) -> float:
        return self.total_expense + self.total_income


@dataclass
class WalletTotals:
    id: int
    name: str
    type: str
    bank_name: Optional[str]
    last_4_digits: Optional[str]
    total_income: float = 0.0
    total_expense: float = 0.0
    transaction_count: int = 0

    @property
    def net(self) -> float:
        return self.total_income - self.total_expense


@dataclass
class YearlySummary:
    income: float = 0.0
    expense: float = 0.0
    income_count: int = 0
    expense_count: int = 0

    @property
    def balance(self) -> float:
        return self.income - self.expense


@dataclass
class DashboardData:
    year: int
    month: int
    summary: MonthlySummary
    expense_breakdown: list[CategoryTotal] = field(default_factory=list)
    series: list[MonthlyTotals] = field(default_factory=list)
    recent_transactions: list[Transaction] = field(default_factory=list)
