"""Chart payload generation for the self-contained report."""

from __future__ import annotations

from .engine import ProjectionResult


def _series(result: ProjectionResult, key: str) -> list[float]:
    return [float(getattr(row, key)) for row in result.ledgers]


def _tax_stacks(result: ProjectionResult) -> dict[str, list[float]]:
    return {
        "accrual": _series(result, "accrual_tax"),
        "realization": _series(result, "realization_tax"),
    }


def _cost_stacks(result: ProjectionResult) -> dict[str, list[float]]:
    return {
        "transaction": _series(result, "transaction_cost"),
        "management": _series(result, "management_fee"),
    }


def build_chart_payload(result: ProjectionResult) -> dict[str, object]:
    return {
        "years": result.years,
        "closingBalance": _series(result, "closing_balance"),
        "afterSale": _series(result, "after_sale_balance"),
        "contributions": _series(result, "cumulative_contributions"),
        "netGain": _series(result, "net_gain_after_tax"),
        "taxBurden": _tax_stacks(result),
        "costs": _cost_stacks(result),
    }
