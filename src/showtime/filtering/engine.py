"""Filter engine with pluggable rules and explanation trail."""

from decimal import Decimal
from typing import Any, Callable, Optional

from pydantic import BaseModel, Field

from showtime.models.entry import GenericEntry
from showtime.models.rules import CatalogRules

from .rules import apply_price_rule, extract_price, to_limit


class FilterResult(BaseModel):
    """Result of filtering one catalog entry against a price limit."""

    passed: bool = Field(..., description="All rules passed")
    explanations: list[str] = Field(default_factory=list)
    price: Decimal = Field(..., description="Price extracted from the entry")
    entry: GenericEntry = Field(..., description="The entry that was filtered")
    excluded_by_rule: Optional[str] = Field(
        default=None,
        description="First rule that excluded the entry",
    )


RuleFn = Callable[[GenericEntry, Decimal], tuple[bool, str, str]]


class FilterEngine:
    """
    Applies the price limit (and any extra rules) to generic entries.
    Order of entries is preserved in every result list.
    """

    def __init__(self, limit: Any, rules: Optional[CatalogRules] = None):
        self.limit = to_limit(limit)
        self.rules = rules or CatalogRules()
        self._rules: list[RuleFn] = [self._price_rule]

    def _price_rule(self, entry: GenericEntry, limit: Decimal) -> tuple[bool, str, str]:
        return apply_price_rule(
            entry,
            limit,
            price_field=self.rules.price_field,
            free_labels=self.rules.free_labels,
        )

    def filter(self, entry: GenericEntry) -> FilterResult:
        """Apply all rules and return FilterResult with explanation trail."""
        explanations: list[str] = []
        all_passed = True
        excluded_by: Optional[str] = None

        for rule_fn in self._rules:
            passed, explanation, rule_id = rule_fn(entry, self.limit)
            explanations.append(explanation)
            if not passed:
                all_passed = False
                if excluded_by is None:
                    excluded_by = rule_id

        return FilterResult(
            passed=all_passed,
            explanations=explanations,
            price=extract_price(entry.get(self.rules.price_field), self.rules.free_labels),
            entry=entry,
            excluded_by_rule=excluded_by,
        )

    def filter_many(self, entries: list[GenericEntry]) -> list[FilterResult]:
        """Filter multiple entries; returns all with full results."""
        return [self.filter(entry) for entry in entries]

    def filter_passed(self, entries: list[GenericEntry]) -> list[FilterResult]:
        """Filter and return only results that passed."""
        if self.limit < 0:
            return []
        return [r for r in self.filter_many(entries) if r.passed]


def filter_by_limit(
    entries: list[GenericEntry],
    limit: Any,
    rules: Optional[CatalogRules] = None,
) -> list[GenericEntry]:
    """Entries whose price is <= limit, in input order."""
    engine = FilterEngine(limit, rules)
    return [r.entry for r in engine.filter_passed(entries)]
