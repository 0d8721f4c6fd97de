from dataclasses import dataclass
from typing import Optional


@dataclass
class Category:
    id: int
    name: str
    type: str           # 'income' | 'expense'
    icon: Optional[str] = None
    color: Optional[str] = None
