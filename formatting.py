"""Display helpers that mirror the id-ID locale used by the storefront UI."""

from datetime import datetime

_ID_MONTHS_SHORT = [
    "Jan", "Feb", "Mar", "Apr", "Mei", "Jun",
    "Jul", "Agu", "Sep", "Okt", "Nov", "Des",
]


def format_idr(amount: int) -> str:
    """Format an amount as rupiah with a no-break space, e.g. ``Rp 45.000``."""
    sign = "-" if amount < 0 else ""
    grouped = f"{abs(amount):,}".replace(",", ".")
    return f"{sign}Rp\u00a0{grouped}"


def format_datetime_id(value: datetime) -> str:
    """``20 Okt 2026, 14.30``"""
    month = _ID_MONTHS_SHORT[value.month - 1]
    return f"{value.day:02d} {month} {value.year}, {value.hour:02d}.{value.minute:02d}"
