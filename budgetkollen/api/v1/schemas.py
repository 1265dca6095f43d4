"""Pydantic schemas for API request/response validation"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from budgetkollen.domain.exceptions import InvalidLoanParametersError
from budgetkollen.domain.loans import validate_loan_parameters
from budgetkollen.domain.models import (
    CalculatorState,
    CompoundInterestInputs,
    IncomeSource,
    IncomeState,
    LoanParameters,
)


class ResponseModel(BaseModel):
    """Base for responses built from domain dataclasses"""

    model_config = ConfigDict(from_attributes=True)


# --- Tax ---


class IncomeSourceSchema(BaseModel):
    """One monthly income for gross to net calculation"""

    gross: float = Field(..., description="Gross income for the period in kr")
    is_secondary: bool = False
    kommun: Optional[str] = Field(None, description="Municipality name, exact match")
    include_church_tax: bool = False
    secondary_tax_rate: Optional[float] = Field(None, description="Flat secondary rate in percent (25-40)")

    def to_domain(self) -> IncomeSource:
        return IncomeSource(
            amount=self.gross,
            is_secondary=self.is_secondary,
            kommun=self.kommun,
            include_church_tax=self.include_church_tax,
            secondary_tax_rate=self.secondary_tax_rate,
        )


class NetIncomeRequest(IncomeSourceSchema):
    """Request body for POST /v1/tax/net-income"""

    periods_per_year: int = Field(12, ge=1, le=12, description="12 for monthly amounts, 1 for annual")


class NetIncomesRequest(BaseModel):
    """Request body for POST /v1/tax/net-incomes (monthly amounts)"""

    incomes: List[IncomeSourceSchema]


class TaxResultSchema(ResponseModel):
    gross: float
    net: float
    tax: float
    kommunalskatt: float
    statlig_skatt: float


class NetIncomesResponse(BaseModel):
    results: List[TaxResultSchema]


class KommunSchema(ResponseModel):
    kommun_namn: str
    kommunal_skatt: float
    kyrko_skatt: float
    summa_inkl_kyrka: float


# --- Budget ---


class LoanParametersSchema(BaseModel):
    """Multi-rate loan: one scenario per interest x amortization rate"""

    amount: float = Field(0.0, ge=0)
    interest_rates: List[float] = Field(default_factory=list, description="Annual interest rates in percent")
    amortization_rates: List[float] = Field(default_factory=list, description="Annual amortization rates in percent")

    def to_domain(self) -> LoanParameters:
        """
        Raises:
            InvalidLoanParametersError: rate out of bounds, or a loan amount without positive rates
        """
        loan_parameters = LoanParameters(
            amount=self.amount,
            interest_rates=tuple(self.interest_rates),
            amortization_rates=tuple(self.amortization_rates),
        )
        validation = validate_loan_parameters(loan_parameters)
        if not validation.is_valid:
            raise InvalidLoanParametersError("; ".join(validation.errors))
        return loan_parameters


class SingleLoanSchema(BaseModel):
    """Single-rate loan with has-loan flag"""

    has_loan: bool = False
    amount: float = 0.0
    interest_rate: float = 0.0
    amortization_rate: float = 0.0

    def to_domain(self) -> LoanParameters:
        return LoanParameters.single(self.amount, self.interest_rate, self.amortization_rate, self.has_loan)


class IncomeSchema(BaseModel):
    """Monthly gross amounts; negative or null amounts are treated as zero"""

    income1: Optional[float] = 0.0
    income2: Optional[float] = 0.0
    secondary_income1: Optional[float] = 0.0
    secondary_income2: Optional[float] = 0.0
    child_benefits: Optional[float] = 0.0
    other_benefits: Optional[float] = 0.0
    other_incomes: Optional[float] = 0.0
    current_buffer: Optional[float] = 0.0
    number_of_adults: Literal[1, 2] = Field(1, description="Informational; incomes are taxed individually")
    selected_kommun: Optional[str] = None
    include_church_tax: bool = False
    secondary_income_tax_rate: float = Field(34.0, ge=25, le=40)

    def to_domain(self) -> IncomeState:
        return IncomeState(**self.model_dump())


class CalculatorStateSchema(BaseModel):
    """Request body for the budget endpoints; give either loan_parameters or loan"""

    loan_parameters: Optional[LoanParametersSchema] = None
    loan: Optional[SingleLoanSchema] = None
    income: IncomeSchema = Field(default_factory=IncomeSchema)
    expenses: Dict[str, Any] = Field(default_factory=dict, description="Category -> amount or subcategory map")
    expense_view_mode: Literal["simple", "detailed"] = "detailed"
    total_expenses: float = Field(0.0, ge=0)

    def to_domain(self) -> CalculatorState:
        """
        Raises:
            InvalidLoanParametersError: loan_parameters or loan fails validation
        """
        if self.loan_parameters is not None:
            loan_parameters = self.loan_parameters.to_domain()
        elif self.loan is not None:
            loan_parameters = self.loan.to_domain()
        else:
            loan_parameters = LoanParameters()

        return CalculatorState(
            loan_parameters=loan_parameters,
            income=self.income.to_domain(),
            expenses=self.expenses,
            expense_view_mode=self.expense_view_mode,
            total_expenses=self.total_expenses,
        )


class IncomeTotalsSchema(ResponseModel):
    gross: float
    net: float


class HealthMetricsSchema(ResponseModel):
    debt_to_income_ratio: Optional[float]
    emergency_fund_coverage: Optional[float]
    savings_rate: Optional[float]
    housing_cost_ratio: Optional[float]
    discretionary_income_ratio: Optional[float]


class FinancialHealthScoreSchema(ResponseModel):
    overall_score: int
    metrics: HealthMetricsSchema
    recommendations: List[str]
    category: str


class CalculationResultSchema(ResponseModel):
    interest_rate: float
    amortization_rate: float
    loan_amount: float
    monthly_interest: float
    monthly_amortization: float
    total_housing_cost: float
    total_expenses: float
    remaining_savings: float
    income1_net: float
    income2_net: float
    secondary_income1_net: float
    secondary_income2_net: float
    child_benefits: float
    other_benefits: float
    other_incomes: float
    current_buffer: float
    total_income: IncomeTotalsSchema


class ScenarioSchema(BaseModel):
    result: CalculationResultSchema
    health: FinancialHealthScoreSchema


class ScenariosResponse(BaseModel):
    """Response for POST /v1/budget/scenarios"""

    scenarios: List[ScenarioSchema]


# --- Compound interest ---


class CompoundInterestRequest(BaseModel):
    """Request body for POST /v1/compound-interest"""

    start_sum: float = Field(..., ge=0)
    monthly_savings: float = Field(..., ge=0)
    yearly_return: float = Field(..., ge=-1, le=1, description="Decimal, 0.07 for 7%")
    investment_horizon: int = Field(..., ge=0, le=50, description="Years")
    age: Optional[int] = Field(None, ge=0, le=120)
    withdrawal_year: Optional[int] = Field(None, ge=1)
    withdrawal_amount: Optional[float] = Field(None, ge=0)
    withdrawal_percentage: Optional[float] = Field(None, ge=0, le=100)
    withdrawal_type: Literal["none", "amount", "percentage"] = "none"
    annual_savings_increase: float = Field(0.0, ge=0, le=100)

    def to_domain(self) -> CompoundInterestInputs:
        return CompoundInterestInputs(**self.model_dump())


class CompoundInterestDataSchema(ResponseModel):
    year: int
    start_sum: float
    accumulated_savings: float
    compound_returns: float
    total_value: float
    chart_start_sum: float
    chart_savings: float
    chart_returns: float
    is_withdrawal_phase: bool
    withdrawal: Optional[float] = None
    current_monthly_savings: Optional[float] = None
    user_age: Optional[int] = None
    portfolio_value: Optional[float] = None
    withdrawal_phase_value: Optional[float] = None


class FinalValuesSchema(ResponseModel):
    total_value: float
    theoretical_total_value: float
    start_sum: float
    total_savings: float
    total_returns: float
    total_withdrawn: float


class CompoundInterestResponse(BaseModel):
    years: List[CompoundInterestDataSchema]
    final_values: FinalValuesSchema


# --- Forecast ---


class ForecastRequest(CalculatorStateSchema):
    """Request body for POST /v1/forecast"""

    salary_increase_rate: float = Field(0.025, ge=0, le=0.5, description="Decimal, 0.025 for 2.5%")
    max_years: int = Field(50, ge=1, le=50)


class ForecastYearSchema(ResponseModel):
    year: int
    remaining_loan: float
    yearly_cost: float
    monthly_cost: float
    monthly_income: float
    monthly_savings: float


class ForecastResponse(BaseModel):
    years: List[ForecastYearSchema]
    payoff_years: int
    total_interest: float
    average_monthly_savings: float
