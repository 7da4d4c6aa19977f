from __future__ import annotations

from decimal import Decimal


def format_decimal(value: Decimal | None) -> str:
    # Avoid scientific notation, keep exported precision.
    if value is None:
        return ""
    return format(value, "f")


def format_flag(value: bool) -> str:
    return "true" if value else "false"
