"""Financial health scoring engine - composite 0-100 score from a budget scenario"""

from typing import Dict, List

from budgetkollen.domain.budget import calculate_loan_scenarios
from budgetkollen.domain.models import CalculationResult, CalculatorState, FinancialHealthScore, HealthMetrics
from budgetkollen.utils.math_utils import clamp, safe_divide

SCORE_WEIGHTS: Dict[str, float] = {
    "debt_to_income_ratio": 0.25,
    "emergency_fund_coverage": 0.25,
    "savings_rate": 0.20,
    "housing_cost_ratio": 0.15,
    "discretionary_income_ratio": 0.15,
}

# Component scaling: value at which a component reaches 100 (or drops to 0)
DTI_ZERO_SCORE_MULTIPLE = 6.0
EMERGENCY_FUND_TARGET_MONTHS = 3.0
SAVINGS_RATE_TARGET = 0.5
HOUSING_COST_RATIO_LIMIT = 0.3
DISCRETIONARY_RATIO_TARGET = 0.5

# Recommendation thresholds
DTI_RECOMMENDATION_THRESHOLD = 4.3
EMERGENCY_FUND_MIN_MONTHS = 3.0
SAVINGS_RATE_MIN = 0.2
HOUSING_COST_RATIO_MAX = 0.3
DISCRETIONARY_RATIO_MIN = 0.2

EXCELLENT_THRESHOLD = 80
GOOD_THRESHOLD = 60


def calculate_health_metrics(result: CalculationResult, current_buffer: float) -> HealthMetrics:
    """
    Derive ratios from one scenario.

    - DTI: loan amount as a multiple of annual gross income (skuldkvot)
    - Emergency fund: months of total outflow (expenses + housing) covered by buffer
    - Savings, housing and discretionary ratios are relative to total net income
    Ratios with a zero denominator are None.
    """
    net_income = result.total_income.net
    gross_income = result.total_income.gross
    total_outflow = result.total_expenses + result.total_housing_cost

    return HealthMetrics(
        debt_to_income_ratio=safe_divide(result.loan_amount, gross_income * 12),
        emergency_fund_coverage=safe_divide(current_buffer, total_outflow),
        savings_rate=safe_divide(result.remaining_savings, net_income),
        housing_cost_ratio=safe_divide(result.total_housing_cost, net_income),
        discretionary_income_ratio=safe_divide(net_income - total_outflow, net_income),
    )


def _component_scores(metrics: HealthMetrics) -> Dict[str, float]:
    """Map each metric to 0-100; undefined metrics score 0"""
    scores = {key: 0.0 for key in SCORE_WEIGHTS}

    if metrics.debt_to_income_ratio is not None:
        scores["debt_to_income_ratio"] = 100 * (1 - min(metrics.debt_to_income_ratio, DTI_ZERO_SCORE_MULTIPLE) / DTI_ZERO_SCORE_MULTIPLE)
    if metrics.emergency_fund_coverage is not None:
        scores["emergency_fund_coverage"] = 100 * metrics.emergency_fund_coverage / EMERGENCY_FUND_TARGET_MONTHS
    if metrics.savings_rate is not None:
        scores["savings_rate"] = 100 * metrics.savings_rate / SAVINGS_RATE_TARGET
    if metrics.housing_cost_ratio is not None:
        scores["housing_cost_ratio"] = 100 * (1 - metrics.housing_cost_ratio / HOUSING_COST_RATIO_LIMIT)
    if metrics.discretionary_income_ratio is not None:
        scores["discretionary_income_ratio"] = 100 * metrics.discretionary_income_ratio / DISCRETIONARY_RATIO_TARGET

    return {key: clamp(value, 0.0, 100.0) for key, value in scores.items()}


def calculate_overall_score(metrics: HealthMetrics) -> int:
    """
    Weighted composite from 0 (poor) to 100 (excellent).

    Scoring weights:
    - 25%: Debt-to-income (0x = 100, 6x or more = 0)
    - 25%: Emergency fund (3 months of outflow or more = 100)
    - 20%: Savings rate (50% of net income or more = 100)
    - 15%: Housing cost ratio (0% = 100, 30% or more = 0)
    - 15%: Discretionary income ratio (50% or more = 100)

    Every component is monotonic in its metric and clamped to [0, 100], so
    the composite never decreases with savings or buffer and never increases
    with debt or housing cost.
    """
    scores = _component_scores(metrics)
    total = sum(scores[key] * weight for key, weight in SCORE_WEIGHTS.items())
    return int(round(clamp(total, 0.0, 100.0)))


def generate_recommendations(metrics: HealthMetrics) -> List[str]:
    """Recommendation keys in fixed rule order; rules on undefined metrics are skipped"""
    recommendations = []

    if metrics.debt_to_income_ratio is not None and metrics.debt_to_income_ratio > DTI_RECOMMENDATION_THRESHOLD:
        recommendations.append("recommendation_reduce_dti")
    if metrics.emergency_fund_coverage is not None and metrics.emergency_fund_coverage < EMERGENCY_FUND_MIN_MONTHS:
        recommendations.append("recommendation_emergency_fund")
    if metrics.savings_rate is not None and metrics.savings_rate < SAVINGS_RATE_MIN:
        recommendations.append("recommendation_savings_rate")
    if metrics.housing_cost_ratio is not None and metrics.housing_cost_ratio > HOUSING_COST_RATIO_MAX:
        recommendations.append("recommendation_housing_cost")
    if metrics.discretionary_income_ratio is not None and metrics.discretionary_income_ratio < DISCRETIONARY_RATIO_MIN:
        recommendations.append("recommendation_discretionary_income")

    return recommendations


def categorize_score(score: int) -> str:
    """
    Map score to a performance band.

    - 80+:   excellent
    - 60-79: good
    - <60:   poor
    """
    if score >= EXCELLENT_THRESHOLD:
        return "excellent"
    elif score >= GOOD_THRESHOLD:
        return "good"
    else:
        return "poor"


def calculate_financial_health_score_for_result(
    result: CalculationResult,
    current_buffer: float | None = None,
) -> FinancialHealthScore:
    """
    Main entry point: score one scenario result.

    current_buffer defaults to the buffer carried on the result. With no net
    income the overall score is 0 and income ratios are None.
    """
    buffer = result.current_buffer if current_buffer is None else max(0.0, current_buffer)
    metrics = calculate_health_metrics(result, buffer)

    overall_score = calculate_overall_score(metrics) if result.total_income.net > 0 else 0

    return FinancialHealthScore(
        overall_score=overall_score,
        metrics=metrics,
        recommendations=generate_recommendations(metrics),
        category=categorize_score(overall_score),
    )


def calculate_financial_health_score(state: CalculatorState) -> FinancialHealthScore:
    """Score the primary scenario (first rate combination) of a calculator state"""
    primary = calculate_loan_scenarios(state)[0]
    return calculate_financial_health_score_for_result(primary)
