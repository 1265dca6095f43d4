"""Tax endpoints - net income and municipality rates"""

import time
from typing import List

from fastapi import APIRouter, HTTPException, Request

from budgetkollen.api.dependencies import get_request_id
from budgetkollen.api.v1.schemas import (
    KommunSchema,
    NetIncomeRequest,
    NetIncomesRequest,
    NetIncomesResponse,
    TaxResultSchema,
)
from budgetkollen.domain.kommuner import find_kommun, get_kommun_options
from budgetkollen.domain.tax import calculate_multiple_incomes, calculate_net_income
from budgetkollen.infrastructure.observability.logging import log_calculation
from budgetkollen.infrastructure.observability.metrics import record_calculation

router = APIRouter()


@router.post("/tax/net-income", response_model=TaxResultSchema)
def net_income(body: NetIncomeRequest, request: Request):
    """Gross to net for one income (primary or secondary)"""
    start_time = time.time()

    result = calculate_net_income(
        body.gross,
        body.is_secondary,
        body.kommun,
        body.include_church_tax,
        body.secondary_tax_rate,
        body.periods_per_year,
    )
    response = TaxResultSchema.model_validate(result)

    record_calculation("tax")
    log_calculation(
        get_request_id(request),
        "tax",
        (time.time() - start_time) * 1000,
        is_secondary=body.is_secondary,
    )
    return response


@router.post("/tax/net-incomes", response_model=NetIncomesResponse)
def net_incomes(body: NetIncomesRequest, request: Request):
    """Batch gross to net; results keep request order"""
    start_time = time.time()

    results = [
        TaxResultSchema.model_validate(result)
        for result in calculate_multiple_incomes([income.to_domain() for income in body.incomes])
    ]

    record_calculation("tax")
    log_calculation(get_request_id(request), "tax_batch", (time.time() - start_time) * 1000, incomes=len(results))
    return NetIncomesResponse(results=results)


@router.get("/kommuner", response_model=List[KommunSchema])
def list_kommuner():
    """All municipalities with municipal and church tax rates"""
    return [KommunSchema.model_validate(k) for k in get_kommun_options()]


@router.get("/kommuner/{kommun_namn}", response_model=KommunSchema)
def get_kommun(kommun_namn: str):
    kommun = find_kommun(kommun_namn)
    if kommun is None:
        raise HTTPException(status_code=404, detail="Kommun not found")
    return KommunSchema.model_validate(kommun)
