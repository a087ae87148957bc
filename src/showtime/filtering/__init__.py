"""Price filtering for catalog entries."""

from .engine import FilterEngine, FilterResult, filter_by_limit
from .rules import apply_price_rule, extract_price, to_limit

__all__ = [
    "FilterEngine",
    "FilterResult",
    "apply_price_rule",
    "extract_price",
    "filter_by_limit",
    "to_limit",
]
