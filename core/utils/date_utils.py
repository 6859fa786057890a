"""
Date helpers

Payment and joining dates are date-only values. The dashboard submits them
either as "YYYY-MM-DD" or as an ISO datetime at UTC midnight
("2025-01-15T00:00:00.000Z"); both are stored normalized to midnight UTC.
"""
from datetime import date, datetime, timezone as dt_timezone

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime


def normalize_to_utc_midnight(value):
    """
    Return an aware datetime at 00:00 UTC for the calendar date of `value`.

    Aware datetimes are converted to UTC before the date is taken; naive
    datetimes are treated as UTC.

    Raises:
        ValueError: if `value` cannot be read as a date
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=dt_timezone.utc)
    elif isinstance(value, str):
        text = value.strip()
        parsed = parse_datetime(text)
        if parsed is None:
            parsed_date = parse_date(text)
            if parsed_date is None:
                raise ValueError(f"Invalid date: {value!r}")
            return datetime(parsed_date.year, parsed_date.month, parsed_date.day, tzinfo=dt_timezone.utc)
    else:
        raise ValueError(f"Invalid date: {value!r}")

    if timezone.is_aware(parsed):
        parsed = parsed.astimezone(dt_timezone.utc)
    return datetime(parsed.year, parsed.month, parsed.day, tzinfo=dt_timezone.utc)


def current_period():
    """(month, year) of the current UTC date"""
    today = timezone.now().astimezone(dt_timezone.utc).date()
    return today.month, today.year
