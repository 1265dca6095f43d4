"""POST /v1/forecast - loan payoff forecast"""

import logging
import time

from fastapi import APIRouter, HTTPException, Request

from budgetkollen.api.dependencies import get_request_id
from budgetkollen.api.v1.schemas import ForecastRequest, ForecastResponse, ForecastYearSchema
from budgetkollen.domain.exceptions import InvalidLoanParametersError
from budgetkollen.domain.forecast import average_monthly_savings, calculate_forecast, total_interest
from budgetkollen.infrastructure.observability.logging import log_calculation
from budgetkollen.infrastructure.observability.metrics import record_calculation

router = APIRouter()


@router.post("/forecast", response_model=ForecastResponse)
def create_forecast(body: ForecastRequest, request: Request):
    """
    Forecast loan balance, cost and savings until payoff.

    Returns an empty forecast when the state has no loan.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        state = body.to_domain()
    except InvalidLoanParametersError as e:
        logging.warning(f"Invalid loan parameters: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    forecast = calculate_forecast(state, body.salary_increase_rate, body.max_years)

    record_calculation("forecast")
    log_calculation(request_id, "forecast", (time.time() - start_time) * 1000, payoff_years=len(forecast))

    return ForecastResponse(
        years=[ForecastYearSchema.model_validate(year) for year in forecast],
        payoff_years=len(forecast),
        total_interest=total_interest(forecast, state.loan_parameters.amount),
        average_monthly_savings=average_monthly_savings(forecast),
    )
