"""Domain models - pure Python dataclasses representing household finance entities"""

from dataclasses import dataclass, field
from typing import List, Literal, Mapping, Tuple, Union

from budgetkollen.domain.exceptions import InvalidLoanParametersError

ExpenseValue = Union[float, Mapping[str, "ExpenseValue"]]
ExpensesByCategory = Mapping[str, ExpenseValue]
ExpenseViewMode = Literal["simple", "detailed"]
WithdrawalType = Literal["none", "amount", "percentage"]


def _non_negative(value: float | None) -> float:
    """Treat missing or negative amounts as zero"""
    if value is None or value < 0:
        return 0.0
    return float(value)


@dataclass(frozen=True)
class KommunData:
    """Municipality tax rates in percent (one row of the static reference table)"""

    kommun_namn: str
    kommunal_skatt: float
    kyrko_skatt: float
    summa_inkl_kyrka: float


@dataclass
class TaxResult:
    """Gross to net breakdown for a single income"""

    gross: float
    net: float
    tax: float
    kommunalskatt: float
    statlig_skatt: float


@dataclass
class IncomeSource:
    """One entry for batch net income calculation"""

    amount: float
    is_secondary: bool = False
    kommun: str | None = None
    include_church_tax: bool = False
    secondary_tax_rate: float | None = None


@dataclass
class IncomeState:
    """
    Monthly household income, one record per household.

    number_of_adults is informational: each income is taxed on its own and
    no calculation scales by household size.
    """

    income1: float = 0.0
    income2: float = 0.0
    secondary_income1: float = 0.0
    secondary_income2: float = 0.0
    child_benefits: float = 0.0
    other_benefits: float = 0.0
    other_incomes: float = 0.0
    current_buffer: float = 0.0
    number_of_adults: int = 1
    selected_kommun: str | None = None
    include_church_tax: bool = False
    secondary_income_tax_rate: float = 34.0

    def __post_init__(self) -> None:
        self.income1 = _non_negative(self.income1)
        self.income2 = _non_negative(self.income2)
        self.secondary_income1 = _non_negative(self.secondary_income1)
        self.secondary_income2 = _non_negative(self.secondary_income2)
        self.child_benefits = _non_negative(self.child_benefits)
        self.other_benefits = _non_negative(self.other_benefits)
        self.other_incomes = _non_negative(self.other_incomes)
        self.current_buffer = _non_negative(self.current_buffer)


@dataclass(frozen=True)
class LoanParameters:
    """
    Loan principal with candidate annual rates in percent.

    Canonical multi-rate shape: every (interest, amortization) pair becomes
    one scenario. Use LoanParameters.single() for the single-rate variant
    with a has-loan flag.
    """

    amount: float = 0.0
    interest_rates: Tuple[float, ...] = ()
    amortization_rates: Tuple[float, ...] = ()

    @classmethod
    def single(
        cls,
        amount: float,
        interest_rate: float,
        amortization_rate: float,
        has_loan: bool = True,
    ) -> "LoanParameters":
        """
        Build from the single-rate variant.

        has_loan=False forces amount and rates to zero. has_loan=True requires
        a positive amount and positive interest and amortization rates.

        Raises:
            InvalidLoanParametersError: active loan with missing amount or rates
        """
        if not has_loan:
            return cls()

        if amount <= 0:
            raise InvalidLoanParametersError("Loan amount must be positive when has_loan is set")
        if interest_rate <= 0 or amortization_rate <= 0:
            raise InvalidLoanParametersError(
                "Interest rate and amortization rate must be positive when has_loan is set"
            )

        return cls(
            amount=float(amount),
            interest_rates=(float(interest_rate),),
            amortization_rates=(float(amortization_rate),),
        )

    @property
    def has_loan(self) -> bool:
        return self.amount > 0 and bool(self.interest_rates) and bool(self.amortization_rates)


@dataclass
class CalculatorState:
    """Complete household input for scenario generation"""

    loan_parameters: LoanParameters = field(default_factory=LoanParameters)
    income: IncomeState = field(default_factory=IncomeState)
    expenses: ExpensesByCategory = field(default_factory=dict)
    expense_view_mode: ExpenseViewMode = "detailed"
    total_expenses: float = 0.0


@dataclass
class IncomeTotals:
    """Summed household income across all sources"""

    gross: float
    net: float


@dataclass
class LoanScenario:
    """Monthly loan cost for one interest/amortization rate pair"""

    interest_rate: float
    amortization_rate: float
    monthly_interest: float
    monthly_amortization: float
    total_monthly_payment: float


@dataclass
class LoanCostSummary:
    """Accumulated loan costs over a number of years"""

    total_interest: float
    total_amortization: float
    total_payments: float
    remaining_principal: float


@dataclass
class ValidationResult:
    is_valid: bool
    errors: List[str]


@dataclass
class CalculationResult:
    """Budget outcome for one rate combination (derived, never persisted)"""

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
    total_income: IncomeTotals


@dataclass
class HealthMetrics:
    """Financial health ratios; None means the ratio has no value (zero denominator)"""

    debt_to_income_ratio: float | None
    emergency_fund_coverage: float | None
    savings_rate: float | None
    housing_cost_ratio: float | None
    discretionary_income_ratio: float | None


@dataclass
class FinancialHealthScore:
    """Output of financial health assessment"""

    overall_score: int
    metrics: HealthMetrics
    recommendations: List[str]
    category: str


@dataclass
class CompoundInterestInputs:
    """Compound interest simulation input; yearly_return is a decimal (0.07 for 7%)"""

    start_sum: float
    monthly_savings: float
    yearly_return: float
    investment_horizon: int
    age: int | None = None
    withdrawal_year: int | None = None
    withdrawal_amount: float | None = None
    withdrawal_percentage: float | None = None
    withdrawal_type: WithdrawalType = "none"
    annual_savings_increase: float = 0.0


@dataclass
class CompoundInterestData:
    """One simulated year of a compound interest projection"""

    year: int
    start_sum: float
    accumulated_savings: float
    compound_returns: float
    total_value: float
    chart_start_sum: float
    chart_savings: float
    chart_returns: float
    is_withdrawal_phase: bool = False
    withdrawal: float | None = None
    current_monthly_savings: float | None = None
    user_age: int | None = None
    portfolio_value: float | None = None
    withdrawal_phase_value: float | None = None


@dataclass
class FinalValues:
    """Summary of a compound interest projection"""

    total_value: float
    theoretical_total_value: float
    start_sum: float
    total_savings: float
    total_returns: float
    total_withdrawn: float


@dataclass
class ForecastYear:
    """Loan balance and household cash flow for one forecast year"""

    year: int
    remaining_loan: float
    yearly_cost: float
    monthly_cost: float
    monthly_income: float
    monthly_savings: float
