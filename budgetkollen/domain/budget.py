"""Household budget scenarios - net income, expenses and housing cost per rate combination"""

from collections.abc import Mapping
from numbers import Real
from typing import List

from budgetkollen.domain.loans import calculate_loan_scenarios as calculate_loan_cost_scenarios
from budgetkollen.domain.models import (
    CalculationResult,
    CalculatorState,
    ExpensesByCategory,
    ExpenseValue,
    IncomeState,
    IncomeTotals,
)
from budgetkollen.domain.tax import calculate_net_income


def _sum_leaves(value: ExpenseValue) -> float:
    if isinstance(value, Mapping):
        return sum(_sum_leaves(child) for child in value.values())
    # bool is a Real subclass but never an amount
    if isinstance(value, Real) and not isinstance(value, bool):
        return max(0.0, float(value))
    return 0.0


def calculate_total_expenses(expenses: ExpensesByCategory) -> float:
    """
    Sum every numeric leaf regardless of nesting depth.

    Accepts both flat ({"food": 5000}) and nested
    ({"food": {"groceries": 3000, "diningOut": 1000}}) category maps.
    Negative and non-numeric leaves count as zero.
    """
    return _sum_leaves(expenses)


def get_effective_total_expenses(state: CalculatorState) -> float:
    """Simple mode uses the single total; detailed mode sums the categories"""
    if state.expense_view_mode == "simple":
        return max(0.0, float(state.total_expenses or 0.0))
    return calculate_total_expenses(state.expenses)


def _primary_net(income: IncomeState, gross: float) -> float:
    return calculate_net_income(gross, False, income.selected_kommun, income.include_church_tax).net


def _secondary_net(income: IncomeState, gross: float) -> float:
    return calculate_net_income(gross, True, secondary_tax_rate=income.secondary_income_tax_rate).net


def _non_taxable(income: IncomeState) -> float:
    return income.child_benefits + income.other_benefits + income.other_incomes


def calculate_total_income(income: IncomeState) -> IncomeTotals:
    """
    Gross and net monthly income across all sources.

    Primary incomes get municipal tax with deductions, secondary incomes the
    flat secondary rate, and benefits/other incomes are untaxed.
    """
    gross = income.income1 + income.income2 + income.secondary_income1 + income.secondary_income2 + _non_taxable(
        income
    )
    net = (
        _primary_net(income, income.income1)
        + _primary_net(income, income.income2)
        + _secondary_net(income, income.secondary_income1)
        + _secondary_net(income, income.secondary_income2)
        + _non_taxable(income)
    )
    return IncomeTotals(gross=gross, net=net)


def calculate_loan_scenarios(state: CalculatorState) -> List[CalculationResult]:
    """
    Main entry point: one budget result per loan rate combination.

    remaining_savings = total net income - expenses - housing cost, where
    housing cost is monthly interest + amortization. Savings may be negative.
    Without a loan a single result with zero housing cost is returned.
    """
    income = state.income
    totals = calculate_total_income(income)
    total_expenses = get_effective_total_expenses(state)
    loan_amount = state.loan_parameters.amount if state.loan_parameters.has_loan else 0.0

    income1_net = _primary_net(income, income.income1)
    income2_net = _primary_net(income, income.income2)
    secondary_income1_net = _secondary_net(income, income.secondary_income1)
    secondary_income2_net = _secondary_net(income, income.secondary_income2)

    results = []
    for scenario in calculate_loan_cost_scenarios(state.loan_parameters):
        total_housing_cost = scenario.total_monthly_payment
        results.append(
            CalculationResult(
                interest_rate=scenario.interest_rate,
                amortization_rate=scenario.amortization_rate,
                loan_amount=loan_amount,
                monthly_interest=scenario.monthly_interest,
                monthly_amortization=scenario.monthly_amortization,
                total_housing_cost=total_housing_cost,
                total_expenses=total_expenses,
                remaining_savings=totals.net - total_expenses - total_housing_cost,
                income1_net=income1_net,
                income2_net=income2_net,
                secondary_income1_net=secondary_income1_net,
                secondary_income2_net=secondary_income2_net,
                child_benefits=income.child_benefits,
                other_benefits=income.other_benefits,
                other_incomes=income.other_incomes,
                current_buffer=income.current_buffer,
                total_income=IncomeTotals(gross=totals.gross, net=totals.net),
            )
        )

    return results
