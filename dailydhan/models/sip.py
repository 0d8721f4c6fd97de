from dataclasses import dataclass, field


@dataclass
class SipYear:
    year: int
    invested: float
    value: float

    @property
    def returns(self) -> float:
        return self.value - self.invested


@dataclass
class SipResult:
    future_value: float = 0.0
    total_invested: float = 0.0
    yearly: list[SipYear] = field(default_factory=list)

    @property
    def total_returns(self) -> float:
        return self.future_value - self.total_invested
