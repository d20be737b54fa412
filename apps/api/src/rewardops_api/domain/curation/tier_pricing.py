"""Validation for per-tier claim cost ladders."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from .errors import TierPricingValidationError
from .items import TIER_ORDER


@dataclass
class TierPricingReport:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def check_tier_pricing(
    pricing: Mapping[str, int | None],
    base_cost: int | None = None,
    *,
    require_all: bool = True,
) -> TierPricingReport:
    """Higher tiers must never pay more than lower ones.

    ``base_cost`` is only used for warnings; the same ladder is applied to
    every item of a bulk selection regardless of its own price.
    """

    report = TierPricingReport()

    for tier in TIER_ORDER:
        value = pricing.get(tier.value)
        if value is None:
            if require_all:
                report.errors.append(f"{tier.value.capitalize()} price is required")
            continue
        if value < 0:
            report.errors.append(f"{tier.value.capitalize()} price cannot be negative")

    for lower, higher in zip(TIER_ORDER, TIER_ORDER[1:]):
        lower_cost = pricing.get(lower.value)
        higher_cost = pricing.get(higher.value)
        if lower_cost is None or higher_cost is None:
            continue
        if higher_cost > lower_cost:
            report.errors.append(
                f"{higher.value.capitalize()} ({higher_cost}) should not cost more than "
                f"{lower.value.capitalize()} ({lower_cost})"
            )

    bronze = pricing.get("bronze")
    if base_cost is not None and bronze is not None and bronze > base_cost:
        report.warnings.append(f"Bronze price ({bronze}) exceeds base cost ({base_cost})")

    values = [pricing.get(tier.value) for tier in TIER_ORDER]
    if bronze and all(value == bronze for value in values):
        report.warnings.append("All tiers have the same price. Consider adding tier-based discounts.")

    return report


def validate_tier_pricing(pricing: Mapping[str, int | None]) -> dict[str, int]:
    report = check_tier_pricing(pricing)
    if not report.is_valid:
        raise TierPricingValidationError("Invalid tier pricing", report.errors)
    return {tier.value: int(pricing[tier.value]) for tier in TIER_ORDER}  # type: ignore[arg-type]


__all__ = ["TierPricingReport", "check_tier_pricing", "validate_tier_pricing"]
