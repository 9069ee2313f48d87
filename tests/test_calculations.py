"""Usage, gas, payback and CO2 primitives."""

import pytest

from proposal_engine.config import DEFAULT_ASSUMPTIONS
from proposal_engine.engine.calculations import (calculate_co2_reduction, calculate_gas_analysis,
                                                 calculate_payback, calculate_usage_projections,
                                                 validate_electricity_bill)
from proposal_engine.schemas import Bill, InvalidBillError


class TestUsageProjections:
    def test_daily_monthly_yearly(self, electricity_bill):
        result = calculate_usage_projections(electricity_bill)
        assert result.daily_average_kwh == pytest.approx(20.0)
        assert result.monthly_usage_kwh == pytest.approx(600.0)
        assert result.yearly_usage_kwh == pytest.approx(7300.0)

    def test_ratios_are_exact(self):
        bill = Bill(bill_type="electricity", billing_days=87, total_amount=391.17, total_usage_kwh=1433.3)
        result = calculate_usage_projections(bill)
        assert result.monthly_usage_kwh == result.daily_average_kwh * 30
        assert result.yearly_usage_kwh == result.daily_average_kwh * 365

    def test_projected_annual_cost(self, electricity_bill):
        result = calculate_usage_projections(electricity_bill)
        assert result.daily_average_cost == pytest.approx(5.0)
        assert result.projected_annual_cost == pytest.approx(1825.0)

    def test_not_rounded(self):
        bill = Bill(bill_type="electricity", billing_days=91, total_amount=100.0, total_usage_kwh=1000.0)
        result = calculate_usage_projections(bill)
        assert result.daily_average_kwh == 1000.0 / 91

    @pytest.mark.parametrize("days", [0, None, -30])
    def test_rejects_bad_billing_days(self, electricity_bill, days):
        electricity_bill.billing_days = days
        with pytest.raises(InvalidBillError):
            calculate_usage_projections(electricity_bill)

    def test_rejects_gas_bill(self, gas_bill):
        with pytest.raises(InvalidBillError, match="electricity"):
            calculate_usage_projections(gas_bill)

    def test_rejects_missing_usage(self, electricity_bill):
        electricity_bill.total_usage_kwh = None
        with pytest.raises(InvalidBillError, match="total_usage_kwh"):
            calculate_usage_projections(electricity_bill)

    def test_rejects_mixed_usage_groups(self, electricity_bill):
        electricity_bill.gas_usage_mj = 100.0
        with pytest.raises(InvalidBillError):
            validate_electricity_bill(electricity_bill)


class TestGasAnalysis:
    def test_annual_cost(self, gas_bill):
        assert calculate_gas_analysis(gas_bill).annual_gas_cost == pytest.approx(730.0)

    def test_kwh_equivalent(self, gas_bill):
        # 4500 MJ * 0.2778
        assert calculate_gas_analysis(gas_bill).gas_kwh_equivalent == pytest.approx(1250.1)

    def test_co2_is_annualised(self, gas_bill):
        result = calculate_gas_analysis(gas_bill)
        # 4500 * 0.0512 * 365/90
        assert result.co2_emissions_kg == pytest.approx(934.4, abs=0.01)
        assert result.annual_gas_mj == pytest.approx(18250.0)

    def test_longer_period_lowers_annual_emissions(self, gas_bill):
        short = calculate_gas_analysis(gas_bill)
        gas_bill.billing_days = 180
        long = calculate_gas_analysis(gas_bill)
        assert long.co2_emissions_kg == pytest.approx(short.co2_emissions_kg / 2)

    def test_requires_gas_usage(self, gas_bill):
        gas_bill.gas_usage_mj = None
        with pytest.raises(InvalidBillError, match="gas_usage_mj"):
            calculate_gas_analysis(gas_bill)

    def test_rejects_electricity_bill(self, electricity_bill):
        with pytest.raises(InvalidBillError):
            calculate_gas_analysis(electricity_bill)


class TestPayback:
    def setup_method(self):
        self.result = calculate_payback(
            {"solar": 10000, "battery": 9000},
            {"solar": 2000, "battery": 1000},
            {"electricity": 2000, "vpp": 500},
        )

    def test_net_investment(self):
        assert self.result.total_investment == 19000
        assert self.result.total_rebates == 3000
        assert self.result.net_investment == 16000

    def test_payback_years(self):
        assert self.result.total_annual_benefit == 2500
        assert self.result.payback_years == 6.4

    def test_long_term_savings(self):
        assert self.result.ten_year_savings == 9000
        assert self.result.twenty_five_year_savings == 46500

    def test_payback_rounded_to_one_decimal(self):
        result = calculate_payback({"solar": 10000}, {}, {"electricity": 3000})
        assert result.payback_years == 3.3

    def test_missing_values_count_as_zero(self):
        result = calculate_payback({"solar": 5000, "ev_charger": None}, {"solar": None}, {"vpp": 1000})
        assert result.net_investment == 5000
        assert result.payback_years == 5.0

    def test_no_benefit_means_no_payback(self):
        result = calculate_payback({"solar": 5000}, {}, {"electricity": 0})
        assert result.payback_years is None
        assert result.ten_year_savings == -5000


class TestCo2Reduction:
    def test_current_emissions(self):
        result = calculate_co2_reduction(7300, 18250, 0, False)
        # 5.767 t electricity + 0.934 t gas
        assert result.current_co2_tonnes == pytest.approx(6.7, abs=0.05)
        assert result.projected_co2_tonnes == pytest.approx(result.current_co2_tonnes)
        assert result.reduction_percent == 0

    def test_partial_solar_keeps_gas(self):
        result = calculate_co2_reduction(7300, 18250, 3650, False)
        gas_t = 18250 * DEFAULT_ASSUMPTIONS.gas_co2_kg_per_mj / 1000
        assert result.projected_co2_tonnes == pytest.approx(3650 * 0.79 / 1000 + gas_t)
        assert 0 < result.reduction_percent < 100

    def test_full_offset_clamps_to_zero(self):
        result = calculate_co2_reduction(7300, 18250, 10000, True)
        assert result.projected_co2_tonnes == 0
        assert result.reduction_percent == 100
        assert result.reduction_tonnes == pytest.approx(result.current_co2_tonnes)

    def test_nothing_to_reduce(self):
        result = calculate_co2_reduction(0, 0, 5000, True)
        assert result.current_co2_tonnes == 0
        assert result.reduction_percent == 0
