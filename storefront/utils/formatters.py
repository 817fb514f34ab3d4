"""
Formatting helpers shared by the models and the JSON API.
Amounts are kept as Decimal internally and rendered as plain JSON numbers.
"""
from decimal import Decimal, InvalidOperation
from datetime import datetime, timezone
from typing import Union, Optional


def to_money(value: Union[int, float, Decimal, str]) -> Decimal:
    """
    Convert a price-like value to Decimal without float artifacts.

    Examples:
        to_money(29.99) -> Decimal('29.99')
        to_money('100') -> Decimal('100')

    Raises:
        ValueError: if the value is not numeric.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f'Invalid amount: {value!r}')
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise ValueError(f'Invalid amount: {value!r}')
    if not amount.is_finite():
        raise ValueError(f'Invalid amount: {value!r}')
    return amount


def money_json(value: Optional[Decimal]) -> Union[int, float]:
    """
    Render an amount for JSON output.

    Integral amounts are emitted as ints so that 100 stays 100 and not 100.0.
    """
    if value is None:
        return 0
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


def iso_datetime(value: Optional[datetime]) -> Optional[str]:
    """ISO-8601 timestamp with a trailing Z for UTC values."""
    if value is None:
        return None
    text = value.isoformat(timespec='milliseconds')
    return text.replace('+00:00', 'Z')
