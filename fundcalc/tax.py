"""German fund taxation: Vorabpauschale accrual tax and realization tax."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .schema import Configuration

if TYPE_CHECKING:
    from .engine import AnnualLedger

# Fixed by law (InvStG 18 (4)): the Basisertrag is 70 % of the Basiszins yield.
LUMP_SUM_FACTOR = 0.7


def _taxable_share(exemption_cut: float) -> float:
    return 1.0 - (exemption_cut / 100.0)


def lump_sum_floor(invested: float, base_interest_rate: float) -> float:
    """Statutory minimum taxable yield (Basisertrag) of the invested amount."""
    return max(0.0, invested * (base_interest_rate / 100.0) * LUMP_SUM_FACTOR)


def compute_accrual_tax(ledger: AnnualLedger, config: Configuration) -> float:
    """Tax due on hold for the year (Vorabpauschale plus distributed profit).

    The deemed yield is the lump-sum floor capped by the actual market growth,
    unless the distribution already exceeds the floor. Distributed profit is
    taxed on top. The allowance is applied fresh each year and is not netted
    against what the realization tax uses.
    """
    if not config.is_distributing:
        # Needs every prior year's lump-sum floor; not modelled yet.
        return 0.0

    tax = config.tax_settings
    profit = ledger.distributed_profit
    if profit > ledger.lump_sum_floor:
        base = profit
    else:
        base = min(ledger.market_growth, ledger.lump_sum_floor)
    taxable = max(0.0, base) + profit
    after_exemption = taxable * _taxable_share(tax.exemption_cut)
    return max(0.0, after_exemption - tax.tax_allowance) * (tax.tax_rate / 100.0)


def compute_realization_tax(ledger: AnnualLedger, config: Configuration) -> float:
    """Capital gains tax due if the whole position were sold at year end.

    Gains are measured against all contributions since inception. Accrual tax
    paid in earlier years is not netted out.
    """
    if not config.is_distributing:
        # All prior lump-sum floors have to be considered.
        return 0.0

    tax = config.tax_settings
    share = _taxable_share(tax.exemption_cut)
    already_taxed = ledger.distributed_profit * share
    remaining_allowance = max(0.0, tax.tax_allowance - already_taxed)
    gain = ledger.closing_balance - ledger.cumulative_contributions
    taxable_gain = max(0.0, gain * share - remaining_allowance)
    return taxable_gain * (tax.tax_rate / 100.0)
