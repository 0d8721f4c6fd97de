from dataclasses import dataclass
from typing import Optional


@dataclass
class Budget:
    id: int
    category_id: int
    amount: float
    period: str             # 'monthly' | 'yearly'
    year: int
    month: Optional[int] = None     # 1-12, required when period is monthly
    category_name: str = ""
    category_icon: Optional[str] = None
    category_color: Optional[str] = None
    category_type: str = ""
    created_at: str = ""


@dataclass
class BudgetStatus:
    budget_id: int
    category_id: int
    budget_amount: float
    period: str
    year: int
    month: Optional[int]
    category_name: str
    category_icon: Optional[str] = None
    category_color: Optional[str] = None
    actual_spending: float = 0.0
    transaction_count: int = 0

    @property
    def remaining(self) -> float:
        return self.budget_amount - self.actual_spending

    @property
    def percentage(self) -> float:
        """Spent share of the budget in percent, capped at 100."""
        if self.budget_amount <= 0:
            return 0.0
        return min(self.actual_spending / self.budget_amount * 100, 100.0)

    @property
    def is_over_budget(self) -> bool:
        return self.actual_spending > self.budget_amount
