"""Input shape checks shared by the domain services."""

from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, TypeVar

from moneytrack.domain.errors import ValidationError

E = TypeVar("E", bound=Enum)

# Money columns are Numeric(12, 2): whole cents, at most ten integer digits
CENT = Decimal("0.01")
MAX_MONEY = Decimal("10000000000")


def coerce_enum(enum_cls: type[E], value: Any, field_name: str) -> E:
    """Accept an enum member or its string value.

    Raises:
        ValidationError: If the value is not one of the enum's labels
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"Invalid {field_name} '{value}' (expected one of: {allowed})") from None


def coerce_money(value: Any, field_name: str) -> Decimal:
    """Convert a numeric input to Decimal without passing through float.

    Raises:
        ValidationError: If the value is not a finite number of whole cents
    """
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field_name} must be a number, got {value!r}")
    if isinstance(value, float):
        value = repr(value)
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number, got {value!r}") from None
    if not amount.is_finite():
        raise ValidationError(f"{field_name} must be a finite number, got {value!r}")
    if abs(amount) >= MAX_MONEY:
        raise ValidationError(f"{field_name} is too large, got {amount}")
    if amount != amount.quantize(CENT):
        raise ValidationError(f"{field_name} cannot have fractions of a cent, got {amount}")
    return amount


def require_positive_amount(value: Any, field_name: str = "Amount") -> Decimal:
    """Return the amount as Decimal, or raise if it is not strictly positive."""
    amount = coerce_money(value, field_name)
    if amount <= 0:
        raise ValidationError(f"{field_name} must be greater than zero, got {amount}")
    return amount


def require_name(value: Any, field_name: str = "Name") -> str:
    """Return a stripped, non-empty name."""
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()
