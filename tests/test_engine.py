from dataclasses import replace

import pytest

from fundcalc.engine import AnnualLedger, advance_year, run_projection, seed_ledger
from fundcalc.schema import Absolute, Configuration, Percent, TaxSettings, default_configuration


def _taxed_config(**overrides) -> Configuration:
    config = replace(
        default_configuration(),
        tax_settings=TaxSettings(tax_rate=26.375, tax_allowance=0.0, exemption_cut=0.0, base_interest_rate=2.0),
    )
    return replace(config, **overrides)


def test_seed_ledger_models_initial_deposit():
    ledger = seed_ledger(default_configuration())

    assert ledger.year == 0
    assert ledger.contribution == 5000.0
    assert ledger.transaction_cost == pytest.approx(75.0)
    assert ledger.closing_balance == pytest.approx(4925.0)
    assert ledger.after_sale_balance == pytest.approx(4925.0)
    assert ledger.cumulative_contributions == 5000.0
    assert ledger.net_gain_after_tax == pytest.approx(-75.0)
    assert ledger.opening_balance == 0.0
    assert ledger.market_growth == 0.0
    assert ledger.accrual_tax == 0.0
    assert ledger.realization_tax == 0.0


def test_projection_length_covers_year_zero_through_duration():
    result = run_projection(replace(default_configuration(), duration_years=1))
    assert result.years == [0, 1]

    result = run_projection(default_configuration())
    assert result.years == list(range(22))
    assert result.final.year == 21


def test_advance_year_from_synthetic_prior_ledger():
    prior = AnnualLedger(
        year=4,
        contribution=2000.0,
        closing_balance=10000.0,
        cumulative_contributions=9000.0,
        cumulative_accrual_tax=50.0,
        cumulative_profit=20.0,
    )
    config = Configuration(
        entry_funds=0.0,
        annual_contribution_base=1000.0,
        contribution_growth=Percent(10.0),
        market_return=Percent(5.0),
        duration_years=10,
        annual_profit_rate=Percent(0.0),
        transaction_cost=Absolute(0.0),
        management_fee_rate=0.0,
        tax_settings=TaxSettings(tax_rate=0.0, tax_allowance=0.0, exemption_cut=0.0, base_interest_rate=0.0),
    )

    ledger = advance_year(prior, config)

    assert ledger.year == 5
    assert ledger.contribution == pytest.approx(2200.0)
    assert ledger.opening_balance == 10000.0
    assert ledger.market_growth == pytest.approx(610.0)
    assert ledger.closing_balance == pytest.approx(12810.0)
    assert ledger.cumulative_contributions == pytest.approx(11200.0)
    assert ledger.cumulative_accrual_tax == pytest.approx(50.0)
    assert ledger.cumulative_profit == pytest.approx(20.0)
    # Earlier accrual tax is deducted; this year's is not due yet.
    assert ledger.net_gain_after_tax == pytest.approx(12810.0 - 11200.0 + 20.0 - 50.0)


def test_first_year_uses_base_contribution_then_grows():
    result = run_projection(default_configuration())
    assert result.ledgers[1].contribution == 1000.0
    assert result.ledgers[2].contribution == pytest.approx(1150.0)
    assert result.ledgers[3].contribution == pytest.approx(1322.5)


def test_closing_balance_follows_step_sequence():
    result = run_projection(_taxed_config())
    for row in result.ledgers[1:]:
        expected = (
            row.opening_balance
            + row.contribution
            - row.transaction_cost
            + row.market_growth
            + row.distributed_profit
            - row.management_fee
            - row.distributed_profit
        )
        assert row.closing_balance == pytest.approx(expected)


def test_opening_balance_is_prior_closing_balance():
    result = run_projection(default_configuration())
    for prior, row in zip(result.ledgers, result.ledgers[1:]):
        assert row.opening_balance == prior.closing_balance


def test_management_fee_is_taken_after_growth_and_profit():
    config = default_configuration()
    row = run_projection(config).ledgers[3]
    invested = row.opening_balance + row.contribution - row.transaction_cost
    grown = invested + row.distributed_profit + row.market_growth

    assert row.distributed_profit == pytest.approx(invested * 0.0138)
    assert row.market_growth == pytest.approx(invested * 0.03)
    assert row.management_fee == pytest.approx(grown * 0.0022)
    assert row.lump_sum_floor == pytest.approx(invested * 0.034 * 0.7)


def test_running_totals_accumulate_year_over_year():
    result = run_projection(_taxed_config())
    assert result.ledgers[0].cumulative_contributions == 5000.0
    for prior, row in zip(result.ledgers, result.ledgers[1:]):
        assert row.cumulative_contributions == pytest.approx(prior.cumulative_contributions + row.contribution)
        assert row.cumulative_accrual_tax == pytest.approx(prior.cumulative_accrual_tax + row.accrual_tax)
        assert row.cumulative_profit == pytest.approx(prior.cumulative_profit + row.distributed_profit)


def test_net_gain_excludes_current_accrual_tax():
    result = run_projection(_taxed_config())
    assert any(row.accrual_tax > 0 for row in result.ledgers)
    for row in result.ledgers[1:]:
        expected = (
            row.after_sale_balance
            - row.cumulative_contributions
            + row.cumulative_profit
            - (row.cumulative_accrual_tax - row.accrual_tax)
        )
        assert row.net_gain_after_tax == pytest.approx(expected)
        assert row.after_sale_balance == pytest.approx(row.closing_balance - row.realization_tax)


def test_accrual_tax_without_exemption_or_allowance_reduces_to_plain_rate():
    result = run_projection(_taxed_config())
    for row in result.ledgers[1:]:
        profit = row.distributed_profit
        base = profit if profit > row.lump_sum_floor else min(row.market_growth, row.lump_sum_floor)
        assert row.accrual_tax == pytest.approx(max(0.0, base + profit) * 0.26375)


def test_projection_is_repeatable():
    config = _taxed_config()
    assert run_projection(config).ledgers == run_projection(config).ledgers


def test_cumulative_contributions_are_non_decreasing():
    result = run_projection(_taxed_config(market_return=Percent(6.0)))
    totals = [row.cumulative_contributions for row in result.ledgers]
    assert totals == sorted(totals)


def test_absolute_transaction_cost_ignores_contribution_size():
    result = run_projection(replace(default_configuration(), transaction_cost=Absolute(0.9)))
    assert all(row.transaction_cost == 0.9 for row in result.ledgers)


def test_absolute_market_return_is_fixed_amount():
    result = run_projection(replace(default_configuration(), market_return=Absolute(100.0)))
    assert all(row.market_growth == 100.0 for row in result.ledgers[1:])


def test_retaining_profit_keeps_growth_literal_and_skips_tax():
    config = replace(_taxed_config(), profit_distribution="retaining")
    result = run_projection(config)

    for row in result.ledgers[1:]:
        invested = row.opening_balance + row.contribution - row.transaction_cost
        assert row.distributed_profit == 0.0
        # The zeroed profit is added to growth, so growth is the market return only.
        assert row.market_growth == pytest.approx(invested * 0.03)
        assert row.accrual_tax == 0.0
        assert row.realization_tax == 0.0
        assert row.cumulative_profit == 0.0
        assert row.after_sale_balance == row.closing_balance


def test_distributed_profit_leaves_the_fund():
    distributing = run_projection(default_configuration())
    retaining = run_projection(replace(default_configuration(), profit_distribution="retaining"))

    # Same growth on the same year-1 base; only the payout differs.
    assert distributing.ledgers[1].closing_balance == pytest.approx(retaining.ledgers[1].closing_balance - 81.558 * 0.0022)
    assert distributing.ledgers[1].cumulative_profit == pytest.approx(81.558)
