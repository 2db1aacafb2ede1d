# src/tododos/core/fields.py

"""Parsing helpers for values typed into the add/edit dialogs."""

from __future__ import annotations

import re
from datetime import date

from .models import Priority

# Typed during edit to explicitly empty the due date or the tag list.
CLEAR_TOKENS = frozenset({"none", "keine"})

ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
DOTTED_DATE = re.compile(r"^(\d{1,2})\.(\d{1,2})\.(\d{4})$")
SHORT_DATE = re.compile(r"^(\d{1,2})\.(\d{1,2})$")


def is_clear_token(raw: str) -> bool:
    return raw.strip().lower() in CLEAR_TOKENS


def parse_priority(raw: str) -> Priority | None:
    return Priority.parse(raw)


def parse_due_date(raw: str, *, today: date | None = None) -> str:
    """
    Parse a due date and return it as YYYY-MM-DD.

    Accepted:
    - "2024-03-01"
    - "1.3.2024" / "01.03.2024" (day.month.year)
    - "1.3" (day.month, current year)

    Raises:
        ValueError: no format matches or the date does not exist (e.g. 31.02.2024).
    """
    value = raw.strip()
    if not value:
        raise ValueError("Date cannot be empty")

    if m := ISO_DATE.match(value):
        year, month, day = (int(g) for g in m.groups())
    elif m := DOTTED_DATE.match(value):
        day, month, year = (int(g) for g in m.groups())
    elif m := SHORT_DATE.match(value):
        day, month = (int(g) for g in m.groups())
        year = (today or date.today()).year
    else:
        raise ValueError(
            f"Invalid date format: '{value}'. Use YYYY-MM-DD, D.M.YYYY or D.M."
        )

    try:
        parsed = date(year, month, day)
    except ValueError as e:
        raise ValueError(f"Invalid date: '{value}' ({e})") from e
    return parsed.isoformat()


def parse_tags(raw: str) -> list[str]:
    return [tag.strip() for tag in raw.split(",") if tag.strip()]
