import math
import re
from decimal import Decimal
from typing import Any

from src.config.settings_env import settings

_NON_NUMERIC = re.compile(r"[^0-9.]")
_LEADING_NUMBER = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def _to_finite_float(value: Any) -> float:
    try:
        number = float(value)
    except (OverflowError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def normalize_amount(value: Any) -> float:
    """Coerce a monetary value into a finite float.

    Numbers pass through (NaN and infinities become 0). Strings are stripped of
    everything except digits and decimal points and the leading number is
    parsed, so ``"₹1,234.50"`` gives ``1234.5``. Anything else gives 0.
    """
    if isinstance(value, bool):
        return 0.0

    if isinstance(value, (int, float, Decimal)):
        return _to_finite_float(value)

    if isinstance(value, str):
        cleaned = _NON_NUMERIC.sub("", value)
        match = _LEADING_NUMBER.match(cleaned)
        if not match:
            return 0.0
        return _to_finite_float(match.group(0))

    return 0.0


def format_currency(amount: Any, symbol: str | None = None) -> str:
    """Render an amount rounded to whole units with comma thousands separators.

    Grouping is done with the format mini-language so the output never depends
    on the process locale.
    """
    if symbol is None:
        symbol = settings.CURRENCY_SYMBOL

    if isinstance(amount, bool) or not isinstance(amount, (int, float, Decimal)):
        return f"{symbol}0"

    number = _to_finite_float(amount)

    # Half-up rounding
    rounded = math.floor(number + 0.5)
    return f"{symbol}{rounded:,}"
