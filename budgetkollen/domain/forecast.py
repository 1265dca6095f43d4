"""Loan payoff forecast - yearly balance, cost and savings with salary growth"""

from typing import List

from budgetkollen.domain.budget import calculate_total_income
from budgetkollen.domain.models import CalculatorState, ForecastYear

SALARY_INCREASE_RATE = 0.025  # 2.5% annual salary increase
MAX_FORECAST_YEARS = 50


def project_loan(
    loan_amount: float,
    interest_rate: float,
    amortization_rate: float,
    monthly_net_income: float,
    salary_increase_rate: float = SALARY_INCREASE_RATE,
    max_years: int = MAX_FORECAST_YEARS,
) -> List[ForecastYear]:
    """
    Forecast a straight-line amortized loan year by year.

    Rates are decimals (0.03 for 3%). Each year pays interest on the opening
    balance and amortizes a fixed share of the original loan; remaining_loan
    is the closing balance. Stops after the payoff year or max_years,
    whichever comes first.

    Example:
        9 000 000 at 3% interest, 3% amortization
        -> year 1: remaining 8 730 000, yearly cost 540 000, monthly 45 000
    """
    if loan_amount <= 0:
        return []

    yearly_amortization = loan_amount * amortization_rate
    forecast = []
    opening_balance = loan_amount

    for year in range(1, max_years + 1):
        if opening_balance <= 0:
            break

        amortization = min(yearly_amortization, opening_balance)
        yearly_cost = opening_balance * interest_rate + amortization
        monthly_cost = yearly_cost / 12
        monthly_income = monthly_net_income * (1 + salary_increase_rate) ** (year - 1)

        # Closing balance from the original amount avoids drift from repeated subtraction
        closing_balance = max(0.0, loan_amount - yearly_amortization * year)

        forecast.append(
            ForecastYear(
                year=year,
                remaining_loan=closing_balance,
                yearly_cost=yearly_cost,
                monthly_cost=monthly_cost,
                monthly_income=monthly_income,
                monthly_savings=monthly_income - monthly_cost,
            )
        )
        opening_balance = closing_balance

    return forecast


def calculate_forecast(
    state: CalculatorState,
    salary_increase_rate: float = SALARY_INCREASE_RATE,
    max_years: int = MAX_FORECAST_YEARS,
) -> List[ForecastYear]:
    """Forecast the state's primary rate pair (first interest and amortization rate)"""
    loan = state.loan_parameters
    if not loan.has_loan:
        return []

    return project_loan(
        loan_amount=loan.amount,
        interest_rate=loan.interest_rates[0] / 100,
        amortization_rate=loan.amortization_rates[0] / 100,
        monthly_net_income=calculate_total_income(state.income).net,
        salary_increase_rate=salary_increase_rate,
        max_years=max_years,
    )


def calculate_loan_payoff_years(state: CalculatorState) -> int:
    """Years until payoff (capped at the forecast horizon); 0 without a loan"""
    return len(calculate_forecast(state))


def total_interest(forecast: List[ForecastYear], loan_amount: float) -> float:
    """Interest paid over a forecast: yearly cost minus that year's amortization"""
    total = 0.0
    previous_balance = loan_amount
    for year in forecast:
        amortization = previous_balance - year.remaining_loan
        total += year.yearly_cost - amortization
        previous_balance = year.remaining_loan
    return total


def average_monthly_savings(forecast: List[ForecastYear]) -> float:
    if not forecast:
        return 0.0
    return sum(year.monthly_savings for year in forecast) / len(forecast)


def calculate_total_interest(state: CalculatorState) -> float:
    """Interest paid over the forecast period"""
    return total_interest(calculate_forecast(state), state.loan_parameters.amount)


def calculate_average_monthly_savings(state: CalculatorState) -> float:
    return average_monthly_savings(calculate_forecast(state))


def validate_forecast_inputs(state: CalculatorState) -> bool:
    """A forecast needs a positive amount and positive interest and amortization rates"""
    loan = state.loan_parameters
    return (
        loan.amount > 0
        and bool(loan.interest_rates)
        and bool(loan.amortization_rates)
        and loan.interest_rates[0] > 0
        and loan.amortization_rates[0] > 0
    )
