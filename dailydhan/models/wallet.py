from dataclasses import dataclass
from typing import Optional
from dailydhan.utils.constants import WALLET_TYPE_LABELS


@dataclass
class Wallet:
    id: int
    name: str
    type: str = "cash"          # 'cash' | 'bank' | 'upi' | 'credit_card'
    balance: float = 0.0        # stored, never used in computations
    bank_name: Optional[str] = None
    last_4_digits: Optional[str] = None

    @property
    def type_label(self) -> str:
        return WALLET_TYPE_LABELS.get(self.type, self.type)
