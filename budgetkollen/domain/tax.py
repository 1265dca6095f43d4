"""Swedish income tax - gross to net for primary and secondary income"""

from typing import List, Sequence

from budgetkollen.domain.kommuner import DEFAULT_KOMMUN, find_kommun
from budgetkollen.domain.models import IncomeSource, TaxResult

# 2025 rules, annual amounts in kr
STATE_TAX_RATE = 0.20
STATE_TAX_THRESHOLD_ANNUAL = 643_100  # brytpunkt, ~53 592 kr/month
GRUNDAVDRAG_ANNUAL = 36_000  # basic deduction (approx, 3 000 kr/month)
JOBBSKATTEAVDRAG_ANNUAL = 37_200  # in-work tax credit (approx, 3 100 kr/month)

DEFAULT_SECONDARY_TAX_RATE = 34.0
MIN_SECONDARY_TAX_RATE = 25.0
MAX_SECONDARY_TAX_RATE = 40.0


def resolve_secondary_tax_rate(secondary_tax_rate: float | None) -> float:
    """Override rate in percent if within [25, 40], otherwise the 34% default"""
    if secondary_tax_rate is None:
        return DEFAULT_SECONDARY_TAX_RATE
    if MIN_SECONDARY_TAX_RATE <= secondary_tax_rate <= MAX_SECONDARY_TAX_RATE:
        return float(secondary_tax_rate)
    return DEFAULT_SECONDARY_TAX_RATE


def resolve_municipal_rate(kommun: str | None = None, include_church_tax: bool = False) -> float:
    """
    Municipal tax rate as a decimal for primary income.

    Unknown or missing municipality falls back to the default rates; no error.
    Church tax adds the municipality's kyrkoavgift on top of the municipal rate.
    """
    record = find_kommun(kommun) if kommun else None
    if record is None:
        record = DEFAULT_KOMMUN

    rate = record.summa_inkl_kyrka if include_church_tax else record.kommunal_skatt
    return rate / 100


def calculate_net_income(
    gross: float,
    is_secondary: bool = False,
    kommun: str | None = None,
    include_church_tax: bool = False,
    secondary_tax_rate: float | None = None,
    periods_per_year: int = 12,
) -> TaxResult:
    """
    Calculate net income from gross income for one period.

    Primary income:
    - taxable = gross - grundavdrag
    - municipal tax = taxable * municipal rate - jobbskatteavdrag (floored at 0)
    - state tax = 20% of gross above the period threshold
    Secondary income:
    - flat rate, no deductions, no state tax

    Annual thresholds and deductions are divided by periods_per_year, so the
    default of 12 treats gross as a monthly amount.

    Example:
        Secondary 10 000 kr at default 34% -> net 6 600, kommunalskatt 3 400
    """
    if gross is None or gross <= 0:
        return TaxResult(gross=0.0, net=0.0, tax=0.0, kommunalskatt=0.0, statlig_skatt=0.0)

    if is_secondary:
        rate = resolve_secondary_tax_rate(secondary_tax_rate) / 100
        kommunal_tax = gross * rate
        return TaxResult(
            gross=gross,
            net=gross - kommunal_tax,
            tax=kommunal_tax,
            kommunalskatt=kommunal_tax,
            statlig_skatt=0.0,
        )

    municipal_rate = resolve_municipal_rate(kommun, include_church_tax)
    grundavdrag = GRUNDAVDRAG_ANNUAL / periods_per_year
    jobbskatteavdrag = JOBBSKATTEAVDRAG_ANNUAL / periods_per_year
    state_threshold = STATE_TAX_THRESHOLD_ANNUAL / periods_per_year

    taxable_income = max(0.0, gross - grundavdrag)

    # Jobbskatteavdrag can only reduce municipal tax
    kommunal_tax = max(0.0, taxable_income * municipal_rate - jobbskatteavdrag)

    state_tax = (gross - state_threshold) * STATE_TAX_RATE if gross > state_threshold else 0.0

    total_tax = kommunal_tax + state_tax

    return TaxResult(
        gross=gross,
        net=gross - total_tax,
        tax=total_tax,
        kommunalskatt=kommunal_tax,
        statlig_skatt=state_tax,
    )


def calculate_multiple_incomes(incomes: Sequence[IncomeSource]) -> List[TaxResult]:
    """Batch calculate net income; one result per entry, in input order"""
    return [
        calculate_net_income(
            income.amount,
            income.is_secondary,
            income.kommun,
            income.include_church_tax,
            income.secondary_tax_rate,
        )
        for income in incomes
    ]
