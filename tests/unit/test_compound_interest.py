"""Unit tests for the compound interest projection"""

import pytest
from budgetkollen.domain.compound_interest import (
    calculate_compound_interest,
    calculate_final_values,
    calculate_wealth_projection,
)
from budgetkollen.domain.models import CompoundInterestInputs


def test_reference_projection():
    """10 000 start, 1 000/month at 7% for 10 years"""
    inputs = CompoundInterestInputs(start_sum=10000, monthly_savings=1000, yearly_return=0.07, investment_horizon=10)

    data = calculate_compound_interest(inputs)

    assert len(data) == 10
    assert [d.year for d in data] == list(range(1, 11))
    assert data[-1].total_value == pytest.approx(190723.24, abs=0.01)
    assert data[-1].compound_returns == pytest.approx(60723.24, abs=0.01)
    assert data[-1].accumulated_savings == pytest.approx(120000)


@pytest.mark.parametrize(
    "start_sum,monthly_savings,yearly_return,horizon",
    [
        (10000, 1000, 0.07, 10),
        (0, 1000, 0.05, 20),
        (50000, 0, 0.04, 15),
        (10000, 1000, 0.0, 10),
        (10000, 2000, 0.5, 50),
        (0, 0, 0.07, 5),
    ],
)
def test_returns_equal_value_minus_contributions(start_sum, monthly_savings, yearly_return, horizon):
    inputs = CompoundInterestInputs(
        start_sum=start_sum,
        monthly_savings=monthly_savings,
        yearly_return=yearly_return,
        investment_horizon=horizon,
    )

    for year in calculate_compound_interest(inputs):
        expected = year.total_value - year.start_sum - year.accumulated_savings
        assert year.compound_returns == pytest.approx(expected, abs=0.01)


def test_zero_return_is_plain_saving():
    inputs = CompoundInterestInputs(start_sum=25000, monthly_savings=1500, yearly_return=0.0, investment_horizon=12)

    data = calculate_compound_interest(inputs)

    assert data[-1].total_value == 25000 + 1500 * 12 * 12
    assert data[-1].compound_returns == 0


def test_value_strictly_increases_while_saving():
    inputs = CompoundInterestInputs(start_sum=0, monthly_savings=500, yearly_return=0.03, investment_horizon=30)

    values = [d.total_value for d in calculate_compound_interest(inputs)]

    assert all(b > a for a, b in zip(values, values[1:]))


def test_savings_escalation():
    """10% yearly increase from year 2: 1 000, 1 100, 1 210"""
    inputs = CompoundInterestInputs(
        start_sum=0,
        monthly_savings=1000,
        yearly_return=0.0,
        investment_horizon=3,
        annual_savings_increase=10,
    )

    data = calculate_compound_interest(inputs)

    assert [d.current_monthly_savings for d in data] == pytest.approx([1000, 1100, 1210])
    assert [d.accumulated_savings for d in data] == pytest.approx([12000, 25200, 39720])

    for previous, current in zip(data, data[1:]):
        increase = current.accumulated_savings - previous.accumulated_savings
        assert increase == pytest.approx(12 * current.current_monthly_savings)


def test_fixed_amount_withdrawal_phase():
    inputs = CompoundInterestInputs(
        start_sum=100000,
        monthly_savings=1000,
        yearly_return=0.0,
        investment_horizon=5,
        withdrawal_year=3,
        withdrawal_amount=30000,
        withdrawal_type="amount",
    )

    data = calculate_compound_interest(inputs)

    assert [d.is_withdrawal_phase for d in data] == [False, False, True, True, True]
    assert [d.withdrawal for d in data] == [None, None, 30000, 30000, 30000]
    assert [d.current_monthly_savings for d in data] == [1000, 1000, 0, 0, 0]
    assert [d.total_value for d in data] == [112000, 124000, 94000, 64000, 34000]
    # Contributions frozen once withdrawals start
    assert data[-1].accumulated_savings == 24000
    assert data[2].portfolio_value == 94000
    # Portfolio below the start sum charts as start sum only
    assert (data[2].chart_start_sum, data[2].chart_savings, data[2].chart_returns) == (94000, 0, 0)


def test_withdrawal_capped_at_balance_and_full_horizon_runs():
    inputs = CompoundInterestInputs(
        start_sum=50000,
        monthly_savings=0,
        yearly_return=0.0,
        investment_horizon=4,
        withdrawal_year=1,
        withdrawal_amount=30000,
        withdrawal_type="amount",
    )

    data = calculate_compound_interest(inputs)

    assert len(data) == 4
    assert data[0].withdrawal == 30000
    assert data[1].withdrawal == 20000
    assert data[1].total_value == 0
    assert data[3].total_value == 0
    assert all(d.total_value >= 0 for d in data)


def test_percentage_withdrawal():
    inputs = CompoundInterestInputs(
        start_sum=100000,
        monthly_savings=0,
        yearly_return=0.0,
        investment_horizon=2,
        withdrawal_year=1,
        withdrawal_percentage=10,
        withdrawal_type="percentage",
    )

    data = calculate_compound_interest(inputs)

    assert [d.withdrawal for d in data] == pytest.approx([10000, 9000])
    assert data[-1].total_value == pytest.approx(81000)


def test_withdrawal_type_none_ignores_plan():
    inputs = CompoundInterestInputs(
        start_sum=100000,
        monthly_savings=0,
        yearly_return=0.0,
        investment_horizon=3,
        withdrawal_year=1,
        withdrawal_amount=30000,
        withdrawal_type="none",
    )

    assert all(not d.is_withdrawal_phase for d in calculate_compound_interest(inputs))


def test_user_age():
    inputs = CompoundInterestInputs(start_sum=0, monthly_savings=100, yearly_return=0.05, investment_horizon=3, age=30)

    assert [d.user_age for d in calculate_compound_interest(inputs)] == [31, 32, 33]


def test_chart_values_match_breakdown_before_withdrawals():
    inputs = CompoundInterestInputs(start_sum=10000, monthly_savings=1000, yearly_return=0.07, investment_horizon=5)

    for year in calculate_compound_interest(inputs):
        assert year.chart_start_sum == year.start_sum
        assert year.chart_savings == year.accumulated_savings
        assert year.chart_returns == year.compound_returns


@pytest.mark.parametrize(
    "withdrawal_type,withdrawal_amount,withdrawal_percentage,annual_savings_increase",
    [
        ("amount", 20000, None, 0),
        ("percentage", None, 4, 0),
        ("amount", 60000, None, 3),
        ("percentage", None, 10, 2),
    ],
)
def test_value_identity_holds_every_year_with_withdrawals(
    withdrawal_type, withdrawal_amount, withdrawal_percentage, annual_savings_increase
):
    inputs = CompoundInterestInputs(
        start_sum=100000,
        monthly_savings=2000,
        yearly_return=0.07,
        investment_horizon=20,
        withdrawal_year=10,
        withdrawal_amount=withdrawal_amount,
        withdrawal_percentage=withdrawal_percentage,
        withdrawal_type=withdrawal_type,
        annual_savings_increase=annual_savings_increase,
    )

    withdrawn = 0.0
    for year in calculate_compound_interest(inputs):
        withdrawn += year.withdrawal or 0
        expected = year.start_sum + year.accumulated_savings + year.compound_returns - withdrawn
        assert year.total_value == pytest.approx(expected, abs=0.01)

    assert withdrawn > 0


def test_chart_split_during_withdrawals():
    inputs = CompoundInterestInputs(
        start_sum=100000,
        monthly_savings=1000,
        yearly_return=0.05,
        investment_horizon=8,
        withdrawal_year=4,
        withdrawal_amount=30000,
        withdrawal_type="amount",
    )

    withdrawal_years = [d for d in calculate_compound_interest(inputs) if d.is_withdrawal_phase]

    assert len(withdrawal_years) == 5
    for year in withdrawal_years:
        assert year.chart_start_sum + year.chart_savings + year.chart_returns == pytest.approx(year.total_value)
        assert year.chart_start_sum == pytest.approx(min(year.start_sum, year.total_value))
        assert year.chart_savings >= 0
        assert year.chart_returns >= 0

    # Above the start sum the remainder keeps the savings to returns ratio
    first = withdrawal_years[0]
    assert first.total_value > first.start_sum
    assert first.chart_savings / first.chart_returns == pytest.approx(
        first.accumulated_savings / first.compound_returns
    )


def test_chart_split_of_emptied_portfolio():
    inputs = CompoundInterestInputs(
        start_sum=50000,
        monthly_savings=0,
        yearly_return=0.0,
        investment_horizon=3,
        withdrawal_year=1,
        withdrawal_amount=30000,
        withdrawal_type="amount",
    )

    last = calculate_compound_interest(inputs)[-1]

    assert last.total_value == 0
    assert (last.chart_start_sum, last.chart_savings, last.chart_returns) == (0, 0, 0)


def test_zero_horizon():
    inputs = CompoundInterestInputs(start_sum=10000, monthly_savings=1000, yearly_return=0.07, investment_horizon=0)

    assert calculate_compound_interest(inputs) == []

    final = calculate_final_values(inputs)
    assert final.total_value == 10000
    assert final.total_savings == 0
    assert final.total_returns == 0
    assert final.total_withdrawn == 0


def test_final_values_with_withdrawals():
    inputs = CompoundInterestInputs(
        start_sum=100000,
        monthly_savings=1000,
        yearly_return=0.0,
        investment_horizon=5,
        withdrawal_year=3,
        withdrawal_amount=30000,
        withdrawal_type="amount",
    )

    final = calculate_final_values(inputs)

    assert final.total_value == 34000
    assert final.total_withdrawn == 90000
    assert final.theoretical_total_value == 124000
    assert final.total_savings == 24000


def test_wealth_projection():
    assert calculate_wealth_projection(0) == 0
    # 20 years at 7% beats plain saving
    assert calculate_wealth_projection(1000, current_buffer=10000) > 10000 + 1000 * 12 * 20
