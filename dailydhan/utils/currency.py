CURRENCIES = {
    "USD": {"symbol": "$",   "name": "US Dollar"},
    "EUR": {"symbol": "€",   "name": "Euro"},
    "GBP": {"symbol": "£",   "name": "British Pound"},
    "JPY": {"symbol": "¥",   "name": "Japanese Yen"},
    "AUD": {"symbol": "A$",  "name": "Australian Dollar"},
    "CAD": {"symbol": "C$",  "name": "Canadian Dollar"},
    "CHF": {"symbol": "CHF", "name": "Swiss Franc"},
    "CNY": {"symbol": "¥",   "name": "Chinese Yuan"},
    "INR": {"symbol": "₹",   "name": "Indian Rupee"},
    "SGD": {"symbol": "S$",  "name": "Singapore Dollar"},
    "AED": {"symbol": "د.إ", "name": "UAE Dirham"},
    "PKR": {"symbol": "₨",   "name": "Pakistani Rupee"},
    "BDT": {"symbol": "৳",   "name": "Bangladeshi Taka"},
    "LKR": {"symbol": "Rs",  "name": "Sri Lankan Rupee"},
    "NPR": {"symbol": "Rs",  "name": "Nepalese Rupee"},
}


def currency_symbol(code: str) -> str:
    """Symbol for an ISO currency code; unknown codes render as the code."""
    entry = CURRENCIES.get((code or "").upper())
    return entry["symbol"] if entry else code


def format_currency(amount: float, symbol: str = "₹") -> str:
    """Format a float as currency string, e.g. '₹1,234.56'."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_compact(value: float) -> str:
    """Axis label: 12k for 12,000, plain integer below a thousand."""
    return f"{value / 1000:.0f}k" if abs(value) >= 1000 else f"{value:.0f}"


def parse_amount(value) -> float:
    """Coerce user input to a positive float; raises ValueError with a display message."""
    if isinstance(value, bool) or value is None:
        raise ValueError("Please enter a valid amount.")
    try:
        amount = float(str(value).replace(",", "").strip())
    except ValueError:
        raise ValueError("Please enter a valid amount.") from None
    if amount != amount or amount in (float("inf"), float("-inf")):
        raise ValueError("Please enter a valid amount.")
    if amount <= 0:
        raise ValueError("Amount must be positive.")
    return amount
