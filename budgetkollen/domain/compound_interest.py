"""Compound interest projection with escalating contributions and scheduled withdrawals"""

from dataclasses import dataclass
from typing import List, Tuple

from budgetkollen.domain.models import CompoundInterestData, CompoundInterestInputs, FinalValues

WEALTH_PROJECTION_RETURN = 0.07
WEALTH_PROJECTION_YEARS = 20


@dataclass
class _SimulationState:
    """Values carried from one simulated year to the next"""

    current_value: float
    total_savings: float
    current_monthly_savings: float
    total_withdrawn: float


def _monthly_rate(yearly_return: float) -> float:
    """Monthly rate that compounds to the annual return over 12 months"""
    return (1 + yearly_return) ** (1 / 12) - 1


def _is_withdrawal_phase(inputs: CompoundInterestInputs, year: int) -> bool:
    return inputs.withdrawal_type != "none" and inputs.withdrawal_year is not None and year >= inputs.withdrawal_year


def _withdrawal_for_year(inputs: CompoundInterestInputs, current_value: float) -> float:
    """Withdrawal at the start of a withdrawal-phase year; never more than the balance"""
    if inputs.withdrawal_type == "percentage" and inputs.withdrawal_percentage:
        return current_value * (inputs.withdrawal_percentage / 100)
    if inputs.withdrawal_type == "amount" and inputs.withdrawal_amount:
        return max(0.0, min(inputs.withdrawal_amount, current_value))
    return 0.0


def _chart_values(
    start_sum: float,
    accumulated_savings: float,
    compound_returns: float,
    current_value: float,
    is_withdrawal_phase: bool,
) -> Tuple[float, float, float]:
    """
    Split the portfolio into start sum / savings / returns for stacked charts.

    During withdrawal the historical totals exceed the remaining value, so
    the start sum is kept (capped at the value) and the rest is divided
    pro rata between savings and returns.
    """
    if not is_withdrawal_phase:
        return start_sum, accumulated_savings, compound_returns
    if current_value <= 0:
        return 0.0, 0.0, 0.0

    adjusted_start_sum = min(start_sum, current_value)
    remaining_value = max(0.0, current_value - adjusted_start_sum)
    savings_and_returns = accumulated_savings + compound_returns

    if savings_and_returns > 0 and remaining_value > 0:
        return (
            adjusted_start_sum,
            remaining_value * accumulated_savings / savings_and_returns,
            remaining_value * compound_returns / savings_and_returns,
        )
    return adjusted_start_sum, 0.0, remaining_value


def _simulate_year(
    inputs: CompoundInterestInputs,
    year: int,
    monthly_rate: float,
    state: _SimulationState,
) -> Tuple[CompoundInterestData, _SimulationState]:
    is_withdrawal_phase = _is_withdrawal_phase(inputs, year)

    # Withdrawal happens at the beginning of the year, before growth
    withdrawal = _withdrawal_for_year(inputs, state.current_value) if is_withdrawal_phase else 0.0
    value = state.current_value - withdrawal
    total_withdrawn = state.total_withdrawn + withdrawal

    # Contributions escalate yearly until the withdrawal phase freezes them
    monthly_savings = state.current_monthly_savings
    if year > 1 and inputs.annual_savings_increase > 0 and not is_withdrawal_phase:
        monthly_savings = monthly_savings * (1 + inputs.annual_savings_increase / 100)

    contribution = 0.0 if is_withdrawal_phase else monthly_savings
    total_savings = state.total_savings
    for _ in range(12):
        value = value * (1 + monthly_rate) + contribution
        total_savings += contribution

    compound_returns = max(0.0, value + total_withdrawn - inputs.start_sum - total_savings)
    chart_start_sum, chart_savings, chart_returns = _chart_values(
        inputs.start_sum, total_savings, compound_returns, value, is_withdrawal_phase
    )

    data = CompoundInterestData(
        year=year,
        start_sum=inputs.start_sum,
        accumulated_savings=total_savings,
        compound_returns=compound_returns,
        total_value=value,
        chart_start_sum=chart_start_sum,
        chart_savings=chart_savings,
        chart_returns=chart_returns,
        is_withdrawal_phase=is_withdrawal_phase,
        withdrawal=withdrawal if withdrawal > 0 else None,
        current_monthly_savings=0.0 if is_withdrawal_phase else monthly_savings,
        user_age=inputs.age + year if inputs.age else None,
        portfolio_value=value if is_withdrawal_phase else None,
        withdrawal_phase_value=value if is_withdrawal_phase else None,
    )

    next_state = _SimulationState(
        current_value=value,
        total_savings=total_savings,
        current_monthly_savings=monthly_savings,
        total_withdrawn=total_withdrawn,
    )
    return data, next_state


def calculate_compound_interest(inputs: CompoundInterestInputs) -> List[CompoundInterestData]:
    """
    Project a portfolio year by year with monthly compounding.

    Each year:
    1. Withdraw (percentage of value or fixed amount) if in withdrawal phase
    2. Escalate monthly savings by annual_savings_increase (not in withdrawal phase)
    3. Grow 12 months at the equivalent monthly rate, adding savings after each month

    Runs exactly investment_horizon years, even if the portfolio is depleted.

    Example:
        start 10 000, 1 000/month, 7%, 10 years -> total value ~190 723.24
    """
    monthly_rate = _monthly_rate(inputs.yearly_return)
    state = _SimulationState(
        current_value=inputs.start_sum,
        total_savings=0.0,
        current_monthly_savings=inputs.monthly_savings,
        total_withdrawn=0.0,
    )

    data = []
    for year in range(1, max(0, inputs.investment_horizon) + 1):
        year_data, state = _simulate_year(inputs, year, monthly_rate, state)
        data.append(year_data)

    return data


def calculate_final_values(inputs: CompoundInterestInputs) -> FinalValues:
    """Summary of the last simulated year plus total withdrawals"""
    data = calculate_compound_interest(inputs)

    if not data:
        return FinalValues(
            total_value=inputs.start_sum,
            theoretical_total_value=inputs.start_sum,
            start_sum=inputs.start_sum,
            total_savings=0.0,
            total_returns=0.0,
            total_withdrawn=0.0,
        )

    final_year = data[-1]
    total_withdrawn = sum(year.withdrawal or 0.0 for year in data)

    return FinalValues(
        total_value=final_year.total_value,
        theoretical_total_value=final_year.total_value + total_withdrawn,
        start_sum=final_year.start_sum,
        total_savings=final_year.accumulated_savings,
        total_returns=final_year.compound_returns,
        total_withdrawn=total_withdrawn,
    )


def calculate_wealth_projection(monthly_savings: float, current_buffer: float = 0.0) -> float:
    """Portfolio value after 20 years at 7% when saving the monthly surplus"""
    inputs = CompoundInterestInputs(
        start_sum=current_buffer,
        monthly_savings=monthly_savings,
        yearly_return=WEALTH_PROJECTION_RETURN,
        investment_horizon=WEALTH_PROJECTION_YEARS,
    )
    return calculate_final_values(inputs).total_value
