"""Filter rules: each returns (passed, explanation, rule_id)."""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable

from showtime.errors import InvalidLimit
from showtime.models.entry import GenericEntry

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")

# Everything except digits and the decimal point is dropped
_NON_NUMERIC = re.compile(r"[^0-9.]")
# A minus sign ahead of the amount, optionally with a currency symbol between
_NEGATIVE = re.compile(r"-\s*[^\d\s.]?\s*\.?\d")


def _to_cents(price: Decimal) -> Decimal:
    """Round to cents; amounts too large for the decimal context stay unrounded."""
    try:
        return price.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return price


def extract_price(value: Any, free_labels: Iterable[str] = ("free",)) -> Decimal:
    """
    Numeric price from a feed value such as "$9.99", "9.99000", 12 or "Free".
    Strips currency symbols, separators and text; anything unparsable is free (0).
    Negative amounts are unparsable too. The result is rounded half-up to cents
    before any comparison, so "$9.991" reads as 9.99.
    """
    if isinstance(value, bool) or value is None:
        return ZERO
    if isinstance(value, (int, float)):
        try:
            price = Decimal(str(value))
        except InvalidOperation:
            return ZERO
        if not price.is_finite() or price < 0:
            return ZERO
        return _to_cents(price)
    if not isinstance(value, str):
        return ZERO

    text = value.strip().lower()
    if text in set(free_labels) or _NEGATIVE.search(text):
        return ZERO
    digits = _NON_NUMERIC.sub("", text)
    if not digits or digits.count(".") > 1 or digits == ".":
        return ZERO
    return _to_cents(Decimal(digits))


def to_limit(limit: Any) -> Decimal:
    """Convert a price limit to Decimal; raises InvalidLimit for NaN or non-numbers."""
    if isinstance(limit, bool):
        raise InvalidLimit(f"Price limit must be a number, got {limit!r}")
    try:
        value = Decimal(str(limit).strip())
    except (InvalidOperation, ValueError) as e:
        raise InvalidLimit(f"Price limit must be a number, got {limit!r}") from e
    if value.is_nan():
        raise InvalidLimit("Price limit must not be NaN")
    return value


def apply_price_rule(
    entry: GenericEntry,
    limit: Decimal,
    *,
    price_field: str = "price",
    free_labels: Iterable[str] = ("free",),
) -> tuple[bool, str, str]:
    """
    Price: extracted price <= limit.
    Negative limit excludes everything, free entries included.
    """
    if limit < 0:
        return False, f"Excluded: negative limit {limit}", "price"

    raw = entry.get(price_field)
    price = extract_price(raw, free_labels)
    if price > limit:
        return False, f"Excluded: price {price} above limit {limit}", "price"
    if price == 0:
        return True, f"Free (raw price {raw!r})", "price"
    return True, f"Price {price} within limit {limit}", "price"
