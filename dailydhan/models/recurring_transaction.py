from dataclasses import dataclass
from typing import Optional


@dataclass
class RecurringTransaction:
    id: int
    amount: float
    type: str               # 'income' | 'expense'
    category_id: Optional[int]
    wallet_id: Optional[int]
    frequency: str          # 'daily' | 'weekly' | 'monthly' | 'yearly'
    start_date: str         # 'YYYY-MM-DD'
    next_due_date: str      # 'YYYY-MM-DD'
    note: Optional[str] = None
    is_active: bool = True
    last_created_date: Optional[str] = None
    created_at: str = ""
    category_name: str = ""
    category_icon: Optional[str] = None
    category_color: Optional[str] = None
    wallet_name: str = ""
