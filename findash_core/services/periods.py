from __future__ import annotations

import datetime as dt

import pandas as pd


def period_key(day: dt.date) -> str:
    """YYYY-MM key of the calendar month containing ``day``."""
    return day.strftime("%Y-%m")


def shift_period(period: str, months: int) -> str:
    return str(pd.Period(period, freq="M") + months)


def previous_period(period: str) -> str:
    return shift_period(period, -1)


def add_months(day: dt.date, months: int) -> dt.date:
    # DateOffset clamps to the last day of shorter months (Jan 31 + 1 -> Feb 28/29)
    return (pd.Timestamp(day) + pd.DateOffset(months=months)).date()


def month_label(day: dt.date, offset: int = 0) -> str:
    """Human readable "Mon YYYY" for the month ``offset`` months after ``day``."""
    return (pd.Period(day, freq="M") + offset).strftime("%b %Y")


def short_month_name(period: str) -> str:
    return pd.Period(period, freq="M").strftime("%b")


def months_between(start: dt.date, end: dt.date) -> int:
    """
    Number of whole calendar months from ``start`` to ``end``.
    A partial trailing month does not count, so Jan 15 -> Mar 14 is 1.
    """
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if months > 0 and end.day < start.day:
        months -= 1
    elif months < 0 and end.day > start.day:
        months += 1
    return months
