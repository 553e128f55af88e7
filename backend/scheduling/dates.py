from datetime import date, datetime, timedelta

from backend.models.doctor import DayOfWeek

DAYS_PER_WEEK = 7

# date.weekday() numbers Monday as 0
_WEEKDAYS = [
    DayOfWeek.MONDAY,
    DayOfWeek.TUESDAY,
    DayOfWeek.WEDNESDAY,
    DayOfWeek.THURSDAY,
    DayOfWeek.FRIDAY,
    DayOfWeek.SATURDAY,
    DayOfWeek.SUNDAY,
]


def get_day_of_week(day: date) -> DayOfWeek:
    return _WEEKDAYS[day.weekday()]


def format_date(day: date) -> str:
    return day.strftime('%Y-%m-%d')


def parse_date(date_text: str) -> datetime:
    """Parse a ``YYYY-MM-DD`` string to a naive datetime at local midnight."""
    return datetime.strptime(date_text.strip(), '%Y-%m-%d')


def format_display_date(day: date | str) -> str:
    """Format a date for display, e.g. ``Mon, Nov 17, 2025``."""
    if isinstance(day, str):
        day = parse_date(day)
    return f'{day:%a}, {day:%b} {day.day}, {day.year}'


def get_next_week_dates(reference_date: date | None = None) -> list[date]:
    start = reference_date or date.today()
    return [start + timedelta(days=offset) for offset in range(DAYS_PER_WEEK)]


def is_past_date(day: date | str, today: date | None = None) -> bool:
    if isinstance(day, str):
        day = parse_date(day).date()
    elif isinstance(day, datetime):
        day = day.date()
    return day < (today or date.today())
