import pytest

from tests.helpers import SAMPLE_SCENARIO
from fundcalc.engine import run_projection
from fundcalc.schema import load_scenario


def test_sample_scenario_year_zero_golden_values():
    result = run_projection(load_scenario(SAMPLE_SCENARIO))
    first = result.ledgers[0]

    assert round(first.contribution, 2) == 5000.00
    assert round(first.transaction_cost, 2) == 75.00
    assert round(first.closing_balance, 2) == 4925.00
    assert round(first.after_sale_balance, 2) == 4925.00
    assert round(first.net_gain_after_tax, 2) == -75.00


def test_sample_scenario_year_one_golden_values():
    result = run_projection(load_scenario(SAMPLE_SCENARIO))
    row = result.ledgers[1]

    assert row.opening_balance == pytest.approx(4925.0)
    assert row.contribution == pytest.approx(1000.0)
    assert row.transaction_cost == pytest.approx(15.0)
    assert row.market_growth == pytest.approx(177.3)
    assert row.distributed_profit == pytest.approx(81.558)
    assert row.management_fee == pytest.approx(13.5714876)
    assert row.lump_sum_floor == pytest.approx(140.658)
    assert row.accrual_tax == 0.0
    assert row.closing_balance == pytest.approx(6073.7285124)
    assert row.realization_tax == 0.0
    assert row.after_sale_balance == pytest.approx(6073.7285124)
    assert row.cumulative_contributions == pytest.approx(6000.0)
    assert row.cumulative_profit == pytest.approx(81.558)
    assert row.net_gain_after_tax == pytest.approx(155.2865124)


def test_sample_scenario_taxes_kick_in_once_allowance_is_exceeded():
    result = run_projection(load_scenario(SAMPLE_SCENARIO))
    last = result.final

    assert len(result.ledgers) == 22
    assert last.year == 21
    assert last.accrual_tax > 0
    assert last.cumulative_accrual_tax > 0
    assert last.realization_tax > 0
    assert result.ledgers[1].accrual_tax == 0.0
