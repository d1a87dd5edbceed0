"""Validation helpers for user-supplied expense input."""

from __future__ import annotations

from datetime import date
from decimal import ROUND_DOWN, Decimal, InvalidOperation

from .exceptions import ValidationError
from .models import parse_date
from .storage import FIELD_SEPARATOR

_CENTS_PER_UNIT = Decimal(100)


def parse_amount(raw: object, field: str = "amount") -> int:
    """Convert a decimal currency string to a non-negative count of cents.

    Inputs with up to two fraction digits convert exactly; further digits are
    truncated toward zero.
    """
    text = str(raw).strip() if raw is not None else ""
    if not text:
        raise ValidationError(f"{field} is required")
    try:
        amount = Decimal(text)
    except InvalidOperation as exc:
        raise ValidationError(f"{field} must be a numeric value") from exc

    if not amount.is_finite():
        raise ValidationError(f"{field} must be a finite number")
    if amount < 0:
        raise ValidationError(f"{field} cannot be negative")

    cents = (amount * _CENTS_PER_UNIT).to_integral_value(rounding=ROUND_DOWN)
    return int(cents)


def parse_user_date(raw: object, field: str = "date") -> date:
    if not isinstance(raw, str):
        raise ValidationError(f"{field} must be a string")
    try:
        return parse_date(raw)
    except ValueError as exc:
        raise ValidationError(f"{field} must use the MM/DD/YYYY format") from exc


def validate_text(value: object, field: str, *, required: bool = False) -> str:
    if value is None:
        value = ""
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    trimmed = value.strip()
    if required and not trimmed:
        raise ValidationError(f"{field} cannot be empty")
    if FIELD_SEPARATOR in trimmed or "\n" in trimmed or "\r" in trimmed:
        # The flat file has no escaping; such a value would not load back.
        raise ValidationError(f"{field} cannot contain commas or line breaks")
    return trimmed
