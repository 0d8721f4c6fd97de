from datetime import date, datetime, timedelta, timezone
import calendar
from dailydhan.utils.constants import DATE_FORMAT


def today() -> date:
    return date.today()


def parse_date(date_str: str) -> date | None:
    """Parse a YYYY-MM-DD string (or the date part of an ISO timestamp),
    returning None on failure."""
    if not date_str:
        return None
    head = str(date_str).strip()[:10]
    for fmt in ("%Y-%m-%d", "%Y/%m/%d", "%Y.%m.%d"):
        try:
            return datetime.strptime(head, fmt).date()
        except ValueError:
            continue
    return None


def format_date(d: date) -> str:
    return d.strftime(DATE_FORMAT)


def normalize_date(value) -> str | None:
    """Storage form of a user date: zero-padded YYYY-MM-DD.

    A full ISO timestamp whose date part is already zero-padded is kept as
    given. Returns None when the value is not a date.
    """
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        return format_date(value)
    d = parse_date(value)
    if d is None:
        return None
    text = str(value).strip()
    canonical = format_date(d)
    if len(text) > 10 and text[:10] == canonical:
        return text
    return canonical


def month_start(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}-01"


def next_month_start(year: int, month: int) -> str:
    if month == 12:
        return month_start(year + 1, 1)
    return month_start(year, month + 1)


def month_window(year: int, month: int) -> tuple[str, str]:
    """Half-open [first day, first day of next month) as ISO strings.

    Lexicographic comparison against stored dates works for both plain
    dates and full ISO timestamps.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month}")
    return month_start(year, month), next_month_start(year, month)


def year_window(year: int) -> tuple[str, str]:
    return f"{year:04d}-01-01", f"{year + 1:04d}-01-01"


def shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    """Move (year, month) by offset months; negative goes back."""
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def month_short_name(month: int) -> str:
    return calendar.month_abbr[month]


def clamp_day_to_month(year: int, month: int, day: int) -> int:
    """Clamp day to valid range for the given year/month."""
    max_day = calendar.monthrange(year, month)[1]
    return min(day, max_day)


def add_months(d: date, n: int) -> date:
    """Add n months to date d, clamping day to month end."""
    month = d.month - 1 + n
    year = d.year + month // 12
    month = month % 12 + 1
    day = clamp_day_to_month(year, month, d.day)
    return d.replace(year=year, month=month, day=day)


def add_years(d: date, n: int) -> date:
    """Add n years; 29 February becomes 28 February in non-leap years."""
    year = d.year + n
    return d.replace(year=year, day=clamp_day_to_month(year, d.month, d.day))


def add_days(d: date, n: int) -> date:
    return d + timedelta(days=n)


def file_timestamp(moment: datetime | None = None) -> str:
    """UTC ISO-8601 timestamp with ':' and '.' replaced by '-',
    e.g. 2024-03-05T10-15-30-123Z."""
    moment = moment or datetime.now(timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H-%M-%S-") + f"{moment.microsecond // 1000:03d}Z"
