"""Pytest fixtures for testing"""

import pytest
from fastapi.testclient import TestClient
from budgetkollen.api.main import create_app
from budgetkollen.domain.models import CalculatorState, IncomeState, LoanParameters


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def sample_income() -> IncomeState:
    """Single adult, 30 000 kr/month, default municipality"""
    return IncomeState(income1=30000, current_buffer=50000)


@pytest.fixture
def sample_expenses() -> dict:
    """Nested detailed-mode expenses totalling 6 500 kr/month"""
    return {
        "housing": {"electricity": 1000, "water": 500},
        "food": 5000,
    }


@pytest.fixture
def sample_state(sample_income: IncomeState, sample_expenses: dict) -> CalculatorState:
    """3 MSEK mortgage with two interest and two amortization candidates"""
    return CalculatorState(
        loan_parameters=LoanParameters(
            amount=3_000_000,
            interest_rates=(3.5, 4.0),
            amortization_rates=(1.0, 2.0),
        ),
        income=sample_income,
        expenses=sample_expenses,
    )


@pytest.fixture
def sample_state_payload() -> dict:
    """API request body matching sample_state"""
    return {
        "loan_parameters": {
            "amount": 3000000,
            "interest_rates": [3.5, 4.0],
            "amortization_rates": [1.0, 2.0],
        },
        "income": {"income1": 30000, "current_buffer": 50000},
        "expenses": {"housing": {"electricity": 1000, "water": 500}, "food": 5000},
    }
