from dataclasses import dataclass
from typing import Optional


@dataclass
class Transaction:
    id: int
    amount: float
    type: str               # 'income' | 'expense'
    category_id: Optional[int]
    wallet_id: Optional[int]
    date: str               # ISO-8601 date or timestamp
    note: Optional[str] = None
    attachment: Optional[str] = None
    category_name: str = ""
    category_icon: Optional[str] = None
    category_color: Optional[str] = None
    wallet_name: str = ""
