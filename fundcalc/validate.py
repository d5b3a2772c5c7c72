"""Semantic validation and sanity checks for scenarios."""

from __future__ import annotations

from dataclasses import dataclass, field
import math
from typing import Iterable

from .schema import DISTRIBUTING, RETAINING, Absolute, Configuration, Percent, ValueAdjustment

PROFIT_DISTRIBUTION = {DISTRIBUTING, RETAINING}

# Sparer-Pauschbetrag for jointly assessed couples since 2023.
JOINT_TAX_ALLOWANCE = 2000.0


@dataclass(slots=True)
class ValidationResult:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def _check_enum(result: ValidationResult, path: str, value: str, allowed: Iterable[str]) -> None:
    allowed_set = set(allowed)
    if value not in allowed_set:
        expected = ", ".join(sorted(allowed_set))
        result.errors.append(f"{path}: '{value}' is not valid; expected one of [{expected}]")


def _check_finite(result: ValidationResult, path: str, value: float) -> bool:
    if not math.isfinite(value):
        result.errors.append(f"{path}: must be a finite number")
        return False
    return True


def _check_range(
    result: ValidationResult,
    path: str,
    value: float,
    minimum: float | None = None,
    maximum: float | None = None,
) -> None:
    if not _check_finite(result, path, value):
        return
    if minimum is not None and value < minimum:
        result.errors.append(f"{path}: must be >= {minimum:g}")
    if maximum is not None and value > maximum:
        result.errors.append(f"{path}: must be <= {maximum:g}")


def _adjustment_value(adjustment: ValueAdjustment) -> float:
    if isinstance(adjustment, Percent):
        return adjustment.rate
    return adjustment.amount


def _check_adjustment(result: ValidationResult, path: str, adjustment: ValueAdjustment, non_negative: bool = False) -> None:
    suffix = "rate" if isinstance(adjustment, Percent) else "amount"
    _check_range(result, f"{path}.{suffix}", _adjustment_value(adjustment), minimum=0.0 if non_negative else None)


def validate_scenario(config: Configuration) -> ValidationResult:
    result = ValidationResult()

    _check_range(result, "entry_funds", config.entry_funds, minimum=0.0)
    _check_range(result, "annual_contribution_base", config.annual_contribution_base, minimum=0.0)
    if config.duration_years < 1:
        result.errors.append("duration_years: must be >= 1")

    _check_enum(result, "profit_distribution", config.profit_distribution, PROFIT_DISTRIBUTION)

    _check_adjustment(result, "contribution_growth", config.contribution_growth)
    _check_adjustment(result, "market_return", config.market_return)
    _check_adjustment(result, "annual_profit_rate", config.annual_profit_rate)
    _check_adjustment(result, "transaction_cost", config.transaction_cost, non_negative=True)
    _check_adjustment(result, "custody_fee", config.custody_fee, non_negative=True)
    _check_range(result, "management_fee_rate", config.management_fee_rate, minimum=0.0, maximum=100.0)

    tax = config.tax_settings
    _check_range(result, "tax_settings.tax_rate", tax.tax_rate, minimum=0.0, maximum=100.0)
    _check_range(result, "tax_settings.tax_allowance", tax.tax_allowance, minimum=0.0)
    _check_range(result, "tax_settings.exemption_cut", tax.exemption_cut, minimum=0.0, maximum=100.0)
    _check_finite(result, "tax_settings.base_interest_rate", tax.base_interest_rate)

    if isinstance(config.transaction_cost, Percent) and config.transaction_cost.rate > 100.0:
        result.errors.append("transaction_cost.rate: must be <= 100")

    return result


def check_scenario_sanity(config: Configuration) -> ValidationResult:
    """Warnings for assumptions that are allowed but probably unintended."""
    result = ValidationResult()

    if config.profit_distribution == RETAINING:
        result.warnings.append(
            "profit_distribution: 'retaining' has no tax model yet; accrual and realization tax are reported as 0"
        )
    if not (isinstance(config.custody_fee, Absolute) and config.custody_fee.amount == 0.0):
        result.warnings.append("custody_fee: is carried in the scenario but not applied by the projection")

    tax = config.tax_settings
    if tax.tax_allowance > JOINT_TAX_ALLOWANCE:
        result.warnings.append(
            f"tax_settings.tax_allowance: {tax.tax_allowance:,.2f} EUR exceeds the joint allowance of "
            f"{JOINT_TAX_ALLOWANCE:,.2f} EUR"
        )
    if tax.base_interest_rate < 0:
        result.warnings.append("tax_settings.base_interest_rate: negative rate yields no lump-sum floor")

    if isinstance(config.market_return, Percent) and config.market_return.rate > 12.0:
        result.warnings.append(f"market_return.rate: {config.market_return.rate:g}% per year is unusually high")
    if config.management_fee_rate > 3.0:
        result.warnings.append(f"management_fee_rate: {config.management_fee_rate:g}% per year is unusually high")
    if isinstance(config.transaction_cost, Percent) and config.transaction_cost.rate > 5.0:
        result.warnings.append(f"transaction_cost.rate: {config.transaction_cost.rate:g}% is unusually high")

    return result
