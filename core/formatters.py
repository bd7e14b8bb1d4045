# core/formatters.py

# all pure utilities & date helpers
# must never import from models!

import datetime
from typing import Any

DATE_FORMAT = "%d/%m/%Y"

# === generic text formatters ===


def format_banner_text(title: str, width: int = 40) -> str:
    line = "=" * width
    centered_title = f"{title:^{width}}"

    return f"{line}\n{centered_title}\n{line}"


def format_list_with_and(items: list[Any]) -> str:
    if not items:
        return ""

    if len(items) == 1:
        return str(items[0])

    if len(items) == 2:
        return " and ".join(str(item) for item in items)

    return ", ".join(str(item) for item in items[:-1]) + f", and {items[-1]}"


# === number formatters ===


def format_gpa(gpa: float) -> str:
    return f"{gpa:.2f}" if gpa > 0.0 else "[UNGRADED]"


# === date formatters ===


def format_date(date: datetime.date) -> str:
    return date.strftime(DATE_FORMAT)


def parse_date(date_str: str) -> datetime.date:
    """
    Parses a `dd/mm/yyyy` string.

    Raises:
        ValueError: If the string does not match the format or is not a real date.
    """
    return datetime.datetime.strptime(date_str.strip(), DATE_FORMAT).date()
