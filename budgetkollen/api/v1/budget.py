"""POST /v1/budget/* - household loan scenarios and financial health"""

import logging
import time

from fastapi import APIRouter, HTTPException, Request

from budgetkollen.api.dependencies import get_request_id
from budgetkollen.api.v1.schemas import (
    CalculationResultSchema,
    CalculatorStateSchema,
    FinancialHealthScoreSchema,
    ScenarioSchema,
    ScenariosResponse,
)
from budgetkollen.domain.budget import calculate_loan_scenarios
from budgetkollen.domain.exceptions import InvalidLoanParametersError
from budgetkollen.domain.scoring import calculate_financial_health_score, calculate_financial_health_score_for_result
from budgetkollen.infrastructure.observability.logging import log_calculation
from budgetkollen.infrastructure.observability.metrics import record_health_score, record_scenarios

router = APIRouter()


@router.post("/budget/scenarios", response_model=ScenariosResponse)
def create_scenarios(body: CalculatorStateSchema, request: Request):
    """
    Budget outcome for every loan rate combination.

    Flow:
    1. Validate and map the request to a calculator state
    2. Compute net incomes, expenses and housing cost per rate combination
    3. Score each scenario's financial health
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        state = body.to_domain()
    except InvalidLoanParametersError as e:
        logging.warning(f"Invalid loan parameters: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    results = calculate_loan_scenarios(state)
    scenarios = []
    for result in results:
        health = calculate_financial_health_score_for_result(result)
        record_health_score(health.overall_score)
        scenarios.append(
            ScenarioSchema(
                result=CalculationResultSchema.model_validate(result),
                health=FinancialHealthScoreSchema.model_validate(health),
            )
        )

    record_scenarios(len(scenarios))
    log_calculation(
        request_id,
        "scenarios",
        (time.time() - start_time) * 1000,
        scenario_count=len(scenarios),
        min_remaining_savings=min(r.remaining_savings for r in results),
    )

    return ScenariosResponse(scenarios=scenarios)


@router.post("/budget/health-score", response_model=FinancialHealthScoreSchema)
def create_health_score(body: CalculatorStateSchema, request: Request):
    """Financial health of the primary scenario (first interest and amortization rate)"""
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        state = body.to_domain()
    except InvalidLoanParametersError as e:
        logging.warning(f"Invalid loan parameters: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    health = calculate_financial_health_score(state)

    record_health_score(health.overall_score)
    log_calculation(
        request_id,
        "health_score",
        (time.time() - start_time) * 1000,
        overall_score=health.overall_score,
        category=health.category,
    )

    return FinancialHealthScoreSchema.model_validate(health)
