"""Core year-by-year deterministic projection engine."""

from __future__ import annotations

from dataclasses import dataclass, replace

from .schema import Configuration
from .tax import compute_accrual_tax, compute_realization_tax, lump_sum_floor


@dataclass(frozen=True, slots=True)
class AnnualLedger:
    year: int
    opening_balance: float = 0.0
    contribution: float = 0.0
    transaction_cost: float = 0.0
    market_growth: float = 0.0
    management_fee: float = 0.0
    distributed_profit: float = 0.0
    lump_sum_floor: float = 0.0
    accrual_tax: float = 0.0
    cumulative_accrual_tax: float = 0.0
    cumulative_profit: float = 0.0
    closing_balance: float = 0.0
    realization_tax: float = 0.0
    after_sale_balance: float = 0.0
    cumulative_contributions: float = 0.0
    net_gain_after_tax: float = 0.0


@dataclass(slots=True)
class ProjectionResult:
    ledgers: list[AnnualLedger]

    @property
    def years(self) -> list[int]:
        return [row.year for row in self.ledgers]

    @property
    def final(self) -> AnnualLedger:
        return self.ledgers[-1]


def seed_ledger(config: Configuration) -> AnnualLedger:
    """Year 0: the initial deposit net of its transaction cost, no growth yet."""
    contribution = config.entry_funds
    transaction_cost = config.transaction_cost.evaluate(contribution)
    closing = contribution - transaction_cost
    return AnnualLedger(
        year=0,
        contribution=contribution,
        transaction_cost=transaction_cost,
        closing_balance=closing,
        after_sale_balance=closing,
        cumulative_contributions=contribution,
        net_gain_after_tax=closing - contribution,
    )


def _next_contribution(prior: AnnualLedger, config: Configuration, year: int) -> float:
    if year == 1:
        return config.annual_contribution_base
    return prior.contribution + config.contribution_growth.evaluate(prior.contribution)


def advance_year(prior: AnnualLedger, config: Configuration) -> AnnualLedger:
    """Derive the ledger of ``prior.year + 1`` from the finalized prior ledger."""
    year = prior.year + 1
    contribution = _next_contribution(prior, config, year)
    cumulative_contributions = prior.cumulative_contributions + contribution

    opening = prior.closing_balance
    transaction_cost = config.transaction_cost.evaluate(contribution)
    invested = opening + contribution - transaction_cost

    distributed_profit = config.annual_profit_rate.evaluate(invested)
    market_growth = config.market_return.evaluate(invested)
    if not config.is_distributing:
        # Retained profit is not paid out. Adding it after zeroing is a no-op;
        # kept literal until the intended compounding is clarified.
        distributed_profit = 0.0
        market_growth += distributed_profit

    grown = invested + distributed_profit + market_growth
    management_fee = grown * (config.management_fee_rate / 100.0)
    after_fees = grown - management_fee

    ledger = AnnualLedger(
        year=year,
        opening_balance=opening,
        contribution=contribution,
        transaction_cost=transaction_cost,
        market_growth=market_growth,
        management_fee=management_fee,
        distributed_profit=distributed_profit,
        lump_sum_floor=lump_sum_floor(invested, config.tax_settings.base_interest_rate),
        cumulative_contributions=cumulative_contributions,
    )

    accrual_tax = compute_accrual_tax(ledger, config)
    ledger = replace(
        ledger,
        accrual_tax=accrual_tax,
        cumulative_accrual_tax=prior.cumulative_accrual_tax + accrual_tax,
        cumulative_profit=prior.cumulative_profit + distributed_profit,
        # Distributed profit leaves the fund as cash; accrual tax is paid from
        # the cash balance, not from the fund.
        closing_balance=after_fees - distributed_profit,
    )

    realization_tax = compute_realization_tax(ledger, config)
    after_sale = ledger.closing_balance - realization_tax
    # This year's accrual tax is not due yet, so only earlier years count.
    paid_accrual_tax = ledger.cumulative_accrual_tax - accrual_tax
    return replace(
        ledger,
        realization_tax=realization_tax,
        after_sale_balance=after_sale,
        net_gain_after_tax=after_sale - cumulative_contributions + ledger.cumulative_profit - paid_accrual_tax,
    )


def run_projection(config: Configuration) -> ProjectionResult:
    ledger = seed_ledger(config)
    ledgers = [ledger]
    for _ in range(config.duration_years):
        ledger = advance_year(ledger, config)
        ledgers.append(ledger)
    return ProjectionResult(ledgers=ledgers)
