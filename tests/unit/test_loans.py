"""Unit tests for loan cost scenarios"""

import pytest
from budgetkollen.domain.exceptions import InvalidLoanParametersError
from budgetkollen.domain.loans import (
    calculate_loan_scenarios,
    calculate_monthly_payment,
    calculate_total_loan_cost,
    get_optimal_scenario,
    get_worst_case_scenario,
    validate_loan_parameters,
)
from budgetkollen.domain.models import LoanParameters


@pytest.fixture
def loan() -> LoanParameters:
    return LoanParameters(amount=3_000_000, interest_rates=(3.5, 4.0, 4.5), amortization_rates=(1.0, 2.0))


def test_cartesian_product_interest_outer(loan: LoanParameters):
    scenarios = calculate_loan_scenarios(loan)

    assert [(s.interest_rate, s.amortization_rate) for s in scenarios] == [
        (3.5, 1.0),
        (3.5, 2.0),
        (4.0, 1.0),
        (4.0, 2.0),
        (4.5, 1.0),
        (4.5, 2.0),
    ]


def test_monthly_costs(loan: LoanParameters):
    """3 MSEK at 3.5% / 2% -> 8 750 + 5 000"""
    scenario = calculate_loan_scenarios(loan)[1]

    assert scenario.monthly_interest == pytest.approx(8750)
    assert scenario.monthly_amortization == pytest.approx(5000)
    assert scenario.total_monthly_payment == pytest.approx(13750)


def test_no_loan_single_zero_scenario():
    for params in (LoanParameters(), LoanParameters(amount=0, interest_rates=(3.0,), amortization_rates=(2.0,))):
        scenarios = calculate_loan_scenarios(params)

        assert len(scenarios) == 1
        assert scenarios[0].total_monthly_payment == 0


def test_single_rate_variant():
    scenarios = calculate_loan_scenarios(LoanParameters.single(2_000_000, 4.0, 2.0))

    assert len(scenarios) == 1
    assert scenarios[0].total_monthly_payment == pytest.approx(2_000_000 * 0.06 / 12)


def test_single_rate_without_loan_forces_zero():
    params = LoanParameters.single(2_000_000, 4.0, 2.0, has_loan=False)

    assert params.amount == 0
    assert params.interest_rates == ()
    assert not params.has_loan


@pytest.mark.parametrize(
    "amount,interest,amortization",
    [(0, 4.0, 2.0), (-1, 4.0, 2.0), (1_000_000, 0, 2.0), (1_000_000, 4.0, 0)],
)
def test_single_rate_active_loan_requires_positive_values(amount, interest, amortization):
    with pytest.raises(InvalidLoanParametersError):
        LoanParameters.single(amount, interest, amortization, has_loan=True)


def test_monthly_payment():
    assert calculate_monthly_payment(1_200_000, 5.0, 1.0) == pytest.approx(6000)
    assert calculate_monthly_payment(0, 5.0, 1.0) == 0


def test_total_loan_cost():
    summary = calculate_total_loan_cost(1_200_000, 5.0, 2.0, years=10)

    assert summary.total_interest == pytest.approx(600_000)
    assert summary.total_amortization == pytest.approx(240_000)
    assert summary.total_payments == pytest.approx(840_000)
    assert summary.remaining_principal == pytest.approx(960_000)


def test_total_loan_cost_principal_never_negative():
    summary = calculate_total_loan_cost(1_000_000, 3.0, 10.0, years=20)
    assert summary.remaining_principal == 0


def test_optimal_and_worst_case(loan: LoanParameters):
    assert (get_optimal_scenario(loan).interest_rate, get_optimal_scenario(loan).amortization_rate) == (3.5, 1.0)
    assert (get_worst_case_scenario(loan).interest_rate, get_worst_case_scenario(loan).amortization_rate) == (4.5, 2.0)


def test_validate_loan_parameters(loan: LoanParameters):
    assert validate_loan_parameters(loan).is_valid

    result = validate_loan_parameters(LoanParameters(amount=1_000_000, interest_rates=(150.0,)))
    assert not result.is_valid
    assert "Interest rate must be between 0 and 100" in result.errors
    assert "Amortization rate is required when loan amount > 0" in result.errors

    assert not validate_loan_parameters(LoanParameters(amount=-5)).is_valid


@pytest.mark.parametrize(
    "interest_rates,amortization_rates,error",
    [
        ((0.0,), (2.0,), "Interest rates must be positive when loan amount > 0"),
        ((3.5,), (0.0,), "Amortization rates must be positive when loan amount > 0"),
        ((-5.0,), (1.0,), "Interest rate must be between 0 and 100"),
    ],
)
def test_validate_active_loan_needs_positive_rates(interest_rates, amortization_rates, error):
    result = validate_loan_parameters(
        LoanParameters(amount=2_000_000, interest_rates=interest_rates, amortization_rates=amortization_rates)
    )

    assert not result.is_valid
    assert error in result.errors


def test_validate_zero_rates_without_amount():
    no_loan = LoanParameters(amount=0, interest_rates=(0.0,), amortization_rates=(0.0,))
    assert validate_loan_parameters(no_loan).is_valid
