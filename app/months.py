"""
Month name resolution for the month-scoping filter.
"""
from __future__ import annotations

from typing import Optional

MONTHS = {
    "january": "01",
    "february": "02",
    "march": "03",
    "april": "04",
    "may": "05",
    "june": "06",
    "july": "07",
    "august": "08",
    "september": "09",
    "october": "10",
    "november": "11",
    "december": "12",
}


def resolve_month(name: Optional[str]) -> Optional[str]:
    """Return the two-digit code for a month name, or ``None`` if unknown."""
    if not name:
        return None
    return MONTHS.get(name.strip().lower())


def month_pattern(code: str) -> str:
    """Regex matching ``dateOfSale`` values in month ``code`` of any year.

    This is a lexical prefix test on the stored text, not a date comparison.
    """
    return rf"^\d{{4}}-{code}-\d{{2}}"
