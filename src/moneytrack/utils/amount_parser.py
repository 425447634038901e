"""Amount parsing utilities."""

import re
from decimal import Decimal, InvalidOperation

from moneytrack.domain.errors import ValidationError

_CURRENCY_SYMBOLS = re.compile(r"[$€£¥]|\b(?:COP|USD|EUR)\b", re.IGNORECASE)


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles "123.45", "$123.45", "1,234.56" and "COP 50000". Amounts are
    magnitudes: a leading minus sign is rejected because the transaction
    type decides the direction.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValidationError: If the string is empty, not a number or negative
    """
    if amount_str is None or not str(amount_str).strip():
        raise ValidationError("Empty amount string")

    cleaned = _CURRENCY_SYMBOLS.sub("", str(amount_str)).replace(",", "").strip()
    if cleaned.startswith("-") or (cleaned.startswith("(") and cleaned.endswith(")")):
        raise ValidationError(
            f"Amount '{amount_str}' must be positive; the transaction type sets its direction"
        )

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValidationError(f"Could not parse amount '{amount_str}'") from None
    if not amount.is_finite():
        raise ValidationError(f"Could not parse amount '{amount_str}'")
    return amount


def parse_signed_amount(amount_str: str) -> Decimal:
    """Parse an opening balance, which may be negative."""
    text = str(amount_str or "").strip()
    if text.startswith("-"):
        return -parse_amount(text[1:])
    return parse_amount(text)
