"""Display formatting for counts, dates and descriptions."""

from __future__ import annotations

from datetime import datetime

from app.utils.dates import days_between, parse_timestamp, utcnow


def format_count(n: int) -> str:
    """Compact counter: 1234 → '1.2K', 3_400_000 → '3.4M'."""
    if n >= 1_000_000:
        return f"{n / 1_000_000:.1f}M"
    if n >= 1_000:
        return f"{n / 1_000:.1f}K"
    return str(n)


def format_number(n: int | float) -> str:
    """Thousands separators, at most three decimals for floats."""
    if isinstance(n, int):
        return f"{n:,}"
    return f"{n:,.3f}".rstrip("0").rstrip(".")


def _plural(value: int, unit: str) -> str:
    return f"{value} {unit}{'' if value == 1 else 's'} ago"


def format_relative_time(timestamp: str | datetime, now: datetime | None = None) -> str:
    """Human "time ago" text. Months are 30 days, years 365."""
    then = parse_timestamp(timestamp)
    seconds = days_between(then, now or utcnow()) * 86400

    if seconds < 60:
        return "just now"
    minutes = int(seconds // 60)
    if minutes < 60:
        return _plural(minutes, "minute")
    hours = minutes // 60
    if hours < 24:
        return _plural(hours, "hour")
    days = hours // 24
    if days < 30:
        return _plural(days, "day")
    months = days // 30
    if months < 12:
        return _plural(months, "month")
    return _plural(max(1, days // 365), "year")


def truncate(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."
