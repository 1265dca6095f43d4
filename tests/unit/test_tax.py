"""Unit tests for Swedish income tax calculation"""

import pytest
from budgetkollen.domain.models import IncomeSource
from budgetkollen.domain.tax import (
    DEFAULT_SECONDARY_TAX_RATE,
    calculate_multiple_incomes,
    calculate_net_income,
    resolve_municipal_rate,
    resolve_secondary_tax_rate,
)


class TestNonPositiveIncome:
    """Zero and negative gross amounts"""

    @pytest.mark.parametrize("gross", [0, -1, -50000])
    def test_all_outputs_zero(self, gross: float):
        for is_secondary in (False, True):
            result = calculate_net_income(gross, is_secondary)
            assert result.gross == 0
            assert result.net == 0
            assert result.tax == 0
            assert result.kommunalskatt == 0
            assert result.statlig_skatt == 0


class TestPrimaryIncome:
    """Primary income with grundavdrag, jobbskatteavdrag and state tax"""

    def test_default_municipality(self):
        """30 000 kr: (30 000 - 3 000) * 31% - 3 100 = 5 270 municipal tax"""
        result = calculate_net_income(30000)

        assert result.kommunalskatt == pytest.approx(5270)
        assert result.statlig_skatt == 0
        assert result.net == pytest.approx(24730)
        assert result.tax == pytest.approx(result.kommunalskatt + result.statlig_skatt)

    def test_selected_municipality(self):
        """Stockholm 30.12%: 27 000 * 0.3012 - 3 100"""
        result = calculate_net_income(30000, kommun="Stockholm")

        assert result.kommunalskatt == pytest.approx(5032.4)
        assert result.net == pytest.approx(24967.6)

    def test_unknown_municipality_uses_default(self):
        unknown = calculate_net_income(30000, kommun="Atlantis")
        default = calculate_net_income(30000)

        assert unknown.net == pytest.approx(default.net)

    def test_municipality_lookup_is_case_sensitive(self):
        lowercase = calculate_net_income(30000, kommun="stockholm")

        assert lowercase.net == pytest.approx(calculate_net_income(30000).net)

    def test_state_tax_above_threshold(self):
        """20% of the part above 643 100 / 12 kr"""
        result = calculate_net_income(60000)

        assert result.statlig_skatt == pytest.approx((60000 - 643100 / 12) * 0.20)
        assert result.kommunalskatt == pytest.approx(57000 * 0.31 - 3100)
        assert result.net == pytest.approx(60000 - result.kommunalskatt - result.statlig_skatt)

    def test_no_state_tax_at_threshold(self):
        result = calculate_net_income(643100 / 12)
        assert result.statlig_skatt == 0

    def test_credit_floors_municipal_tax_at_zero(self):
        """Low incomes pay no municipal tax, never a negative one"""
        result = calculate_net_income(4000)

        assert result.kommunalskatt == 0
        assert result.net == 4000

    def test_church_tax_lowers_net(self):
        without = calculate_net_income(30000, kommun="Stockholm")
        with_church = calculate_net_income(30000, kommun="Stockholm", include_church_tax=True)

        assert with_church.net < without.net
        assert with_church.kommunalskatt == pytest.approx(27000 * 0.3110 - 3100)

    def test_church_tax_on_default_municipality(self):
        result = calculate_net_income(30000, include_church_tax=True)
        assert result.kommunalskatt == pytest.approx(27000 * 0.32 - 3100)

    def test_annual_amounts(self):
        """periods_per_year=1 scales thresholds and deductions to a full year"""
        annual = calculate_net_income(360000, periods_per_year=1)
        monthly = calculate_net_income(30000)

        assert annual.net == pytest.approx(monthly.net * 12)

    @pytest.mark.parametrize("gross", [10000, 25000, 40000, 50000])
    def test_primary_taxed_less_than_secondary(self, gross: float):
        primary = calculate_net_income(gross)
        secondary = calculate_net_income(gross, is_secondary=True)

        assert primary.tax / gross < secondary.tax / gross


class TestSecondaryIncome:
    """Flat-rate secondary income"""

    def test_default_rate(self):
        result = calculate_net_income(10000, is_secondary=True)

        assert result.net == pytest.approx(6600)
        assert result.kommunalskatt == pytest.approx(3400)
        assert result.statlig_skatt == 0

    def test_missing_rate_matches_explicit_default(self):
        implicit = calculate_net_income(10000, is_secondary=True)
        explicit = calculate_net_income(10000, is_secondary=True, secondary_tax_rate=34)

        assert implicit.net == pytest.approx(explicit.net, abs=0.01)

    def test_no_deductions_or_state_tax(self):
        """Secondary income is flat even above the state tax threshold"""
        result = calculate_net_income(100000, is_secondary=True, secondary_tax_rate=30)

        assert result.net == pytest.approx(70000)
        assert result.statlig_skatt == 0

    def test_higher_rate_lowers_net(self):
        nets = [calculate_net_income(20000, is_secondary=True, secondary_tax_rate=rate).net for rate in range(25, 41)]
        assert all(a > b for a, b in zip(nets, nets[1:]))

    def test_municipality_ignored(self):
        result = calculate_net_income(10000, is_secondary=True, kommun="Kiruna", include_church_tax=True)
        assert result.net == pytest.approx(6600)


class TestRateResolution:
    @pytest.mark.parametrize("rate,expected", [(None, 34.0), (25, 25.0), (40, 40.0), (30.5, 30.5), (24.9, 34.0), (41, 34.0)])
    def test_secondary_rate_bounds(self, rate, expected):
        assert resolve_secondary_tax_rate(rate) == expected

    def test_default_secondary_rate(self):
        assert DEFAULT_SECONDARY_TAX_RATE == 34.0

    def test_municipal_rate_is_decimal(self):
        assert resolve_municipal_rate("Göteborg") == pytest.approx(0.326)
        assert resolve_municipal_rate("Göteborg", include_church_tax=True) == pytest.approx(0.336)
        assert resolve_municipal_rate(None) == pytest.approx(0.31)


class TestMultipleIncomes:
    def test_order_preserved_without_interaction(self):
        incomes = [
            IncomeSource(amount=30000),
            IncomeSource(amount=10000, is_secondary=True),
            IncomeSource(amount=0),
            IncomeSource(amount=20000, is_secondary=True, secondary_tax_rate=25),
        ]

        results = calculate_multiple_incomes(incomes)

        assert len(results) == 4
        assert results[0].net == pytest.approx(calculate_net_income(30000).net)
        assert results[1].net == pytest.approx(6600)
        assert results[2].net == 0
        assert results[3].net == pytest.approx(15000)

    def test_empty_list(self):
        assert calculate_multiple_incomes([]) == []
