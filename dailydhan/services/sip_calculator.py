"""Future value of a monthly systematic investment plan (SIP).

    r  = (1 + R/100) ** (1/12) - 1          monthly rate from annual return R%
    FV = P * ((1 + r) ** n - 1) / r * (1 + r)

with P the monthly investment and n the number of months. A zero return
degenerates to P * n.
"""
from dailydhan.models.sip import SipResult, SipYear


def monthly_rate(annual_return_pct: float) -> float:
    if annual_return_pct <= 0:
        return 0.0
    return (1 + annual_return_pct / 100) ** (1 / 12) - 1


def future_value(monthly_investment: float, rate: float, months: float) -> float:
    if rate > 0:
        return monthly_investment * (((1 + rate) ** months - 1) / rate) * (1 + rate)
    return monthly_investment * months


def calculate_sip(monthly_investment, annual_return_pct, years) -> SipResult:
    """Invalid or non-positive inputs give an all-zero result."""
    try:
        amount = float(monthly_investment or 0)
        annual = float(annual_return_pct or 0)
        period = float(years or 0)
    except (TypeError, ValueError):
        return SipResult()
    if amount <= 0 or annual < 0 or period <= 0:
        return SipResult()

    rate = monthly_rate(annual)
    months = period * 12
    yearly = [
        SipYear(
            year=year,
            invested=amount * year * 12,
            value=future_value(amount, rate, year * 12),
        )
        for year in range(1, int(period) + 1)
    ]
    return SipResult(
        future_value=future_value(amount, rate, months),
        total_invested=amount * months,
        yearly=yearly,
    )
