"""Loan cost scenarios - interest plus straight-line amortization"""

from typing import List

from budgetkollen.domain.models import LoanCostSummary, LoanParameters, LoanScenario, ValidationResult


def _monthly_cost(amount: float, annual_rate_percent: float) -> float:
    return amount * (annual_rate_percent / 100) / 12


def calculate_loan_scenarios(loan_parameters: LoanParameters) -> List[LoanScenario]:
    """
    One scenario per interest rate x amortization rate combination.

    Interest rates are the outer loop, so scenarios for the same interest
    rate are adjacent. Without an active loan a single zero scenario is
    returned.

    Example:
        3 000 000 kr at 3.5% interest, 2% amortization
        -> 8 750 + 5 000 = 13 750 kr/month
    """
    if not loan_parameters.has_loan:
        return [
            LoanScenario(
                interest_rate=0.0,
                amortization_rate=0.0,
                monthly_interest=0.0,
                monthly_amortization=0.0,
                total_monthly_payment=0.0,
            )
        ]

    amount = loan_parameters.amount
    scenarios = []
    for interest_rate in loan_parameters.interest_rates:
        for amortization_rate in loan_parameters.amortization_rates:
            monthly_interest = _monthly_cost(amount, interest_rate)
            monthly_amortization = _monthly_cost(amount, amortization_rate)
            scenarios.append(
                LoanScenario(
                    interest_rate=interest_rate,
                    amortization_rate=amortization_rate,
                    monthly_interest=monthly_interest,
                    monthly_amortization=monthly_amortization,
                    total_monthly_payment=monthly_interest + monthly_amortization,
                )
            )

    return scenarios


def calculate_monthly_payment(amount: float, interest_rate: float, amortization_rate: float) -> float:
    """Interest plus amortization per month; rates in percent"""
    if amount <= 0:
        return 0.0
    return _monthly_cost(amount, interest_rate) + _monthly_cost(amount, amortization_rate)


def calculate_total_loan_cost(
    amount: float,
    interest_rate: float,
    amortization_rate: float,
    years: int,
) -> LoanCostSummary:
    """
    Loan costs over a number of years at constant monthly payments.

    Interest is charged on the original amount (flat projection), matching
    the monthly payment shown in scenarios. Remaining principal never goes
    below zero.
    """
    if amount <= 0 or years <= 0:
        return LoanCostSummary(
            total_interest=0.0,
            total_amortization=0.0,
            total_payments=0.0,
            remaining_principal=max(0.0, amount),
        )

    months = years * 12
    total_interest = _monthly_cost(amount, interest_rate) * months
    total_amortization = _monthly_cost(amount, amortization_rate) * months

    return LoanCostSummary(
        total_interest=total_interest,
        total_amortization=total_amortization,
        total_payments=total_interest + total_amortization,
        remaining_principal=max(0.0, amount - total_amortization),
    )


def get_optimal_scenario(loan_parameters: LoanParameters) -> LoanScenario | None:
    """Scenario with the lowest total monthly payment"""
    scenarios = calculate_loan_scenarios(loan_parameters)
    if not scenarios:
        return None
    return min(scenarios, key=lambda s: s.total_monthly_payment)


def get_worst_case_scenario(loan_parameters: LoanParameters) -> LoanScenario | None:
    """Scenario with the highest total monthly payment (stress test)"""
    scenarios = calculate_loan_scenarios(loan_parameters)
    if not scenarios:
        return None
    return max(scenarios, key=lambda s: s.total_monthly_payment)


def validate_loan_parameters(loan_parameters: LoanParameters) -> ValidationResult:
    """Check amount and rate bounds; an active loan needs positive rates of each kind"""
    errors = []

    if loan_parameters.amount < 0:
        errors.append("Loan amount cannot be negative")

    if any(rate < 0 or rate > 100 for rate in loan_parameters.interest_rates):
        errors.append("Interest rate must be between 0 and 100")

    if any(rate < 0 or rate > 100 for rate in loan_parameters.amortization_rates):
        errors.append("Amortization rate must be between 0 and 100")

    if loan_parameters.amount > 0:
        if not loan_parameters.interest_rates:
            errors.append("Interest rate is required when loan amount > 0")
        elif any(rate <= 0 for rate in loan_parameters.interest_rates):
            errors.append("Interest rates must be positive when loan amount > 0")
        if not loan_parameters.amortization_rates:
            errors.append("Amortization rate is required when loan amount > 0")
        elif any(rate <= 0 for rate in loan_parameters.amortization_rates):
            errors.append("Amortization rates must be positive when loan amount > 0")

    return ValidationResult(is_valid=not errors, errors=errors)
