"""POST /v1/compound-interest - yearly portfolio projection"""

import time

from fastapi import APIRouter, Request

from budgetkollen.api.dependencies import get_request_id
from budgetkollen.api.v1.schemas import (
    CompoundInterestDataSchema,
    CompoundInterestRequest,
    CompoundInterestResponse,
    FinalValuesSchema,
)
from budgetkollen.domain.compound_interest import calculate_compound_interest, calculate_final_values
from budgetkollen.infrastructure.observability.logging import log_calculation
from budgetkollen.infrastructure.observability.metrics import record_calculation

router = APIRouter()


@router.post("/compound-interest", response_model=CompoundInterestResponse)
def create_projection(body: CompoundInterestRequest, request: Request):
    """
    Project a portfolio with monthly compounding.

    Returns:
        One row per year (1..investment_horizon) and the final summary
    """
    start_time = time.time()
    inputs = body.to_domain()

    years = calculate_compound_interest(inputs)
    final_values = calculate_final_values(inputs)

    record_calculation("compound_interest")
    log_calculation(
        get_request_id(request),
        "compound_interest",
        (time.time() - start_time) * 1000,
        investment_horizon=inputs.investment_horizon,
        withdrawal_type=inputs.withdrawal_type,
    )

    return CompoundInterestResponse(
        years=[CompoundInterestDataSchema.model_validate(year) for year in years],
        final_values=FinalValuesSchema.model_validate(final_values),
    )
