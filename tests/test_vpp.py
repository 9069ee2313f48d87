import pytest

from proposal_engine.engine.vpp import calculate_vpp_income, compare_vpp_providers, select_vpp_provider
from proposal_engine.schemas import VppComparisonItem, VppProvider
from proposal_engine.scoring import rank_vpp_options, strategic_fit


class TestVppIncome:
    def test_credit_model(self, providers):
        engie = providers[0]
        result = calculate_vpp_income(engie)
        assert result.daily_credit_annual == pytest.approx(365.0)
        assert result.event_payments_annual == pytest.approx(100.0)
        assert result.bundle_discount == 50.0
        assert result.total_annual_value == pytest.approx(515.0)
        assert not result.is_wholesale

    def test_default_event_count(self):
        provider = VppProvider(name="Plain", event_payment=20.0)
        assert calculate_vpp_income(provider).event_payments_annual == pytest.approx(200.0)

    def test_all_zero(self):
        assert calculate_vpp_income(VppProvider(name="Empty")).total_annual_value == 0

    def test_wholesale_scales_with_battery(self, providers):
        amber = providers[2]
        small = calculate_vpp_income(amber, 10)
        large = calculate_vpp_income(amber, 15)
        # 7.2 kWh/day at 35.8c less $180 fees
        assert small.total_annual_value == pytest.approx(760.82, abs=0.01)
        assert large.total_annual_value == pytest.approx(1231.24, abs=0.01)
        assert small.is_wholesale
        assert small.daily_export_kwh == pytest.approx(7.2)

    def test_wholesale_never_negative(self):
        provider = VppProvider(name="Pricey", base_rate_cents=1.0, monthly_fee=100.0)
        assert calculate_vpp_income(provider, 5).total_annual_value == 0


class TestStrategicFit:
    @pytest.mark.parametrize("value,tier", [
        (515, "excellent"), (500, "excellent"), (300, "good"), (299.99, "moderate"), (0, "moderate"),
    ])
    def test_tiers(self, value, tier):
        assert strategic_fit(value) == tier

    def test_wholesale_is_complex(self):
        assert strategic_fit(5000, is_wholesale=True) == "complex"


class TestRanking:
    def test_highest_value_first(self):
        items = [
            VppComparisonItem("A", "", False, 200.0, "moderate"),
            VppComparisonItem("B", "", False, 600.0, "excellent"),
        ]
        assert [i.provider for i in rank_vpp_options(items)] == ["B", "A"]

    def test_gas_bundle_breaks_ties_for_gas_customers(self):
        items = [
            VppComparisonItem("A", "", False, 400.0, "good"),
            VppComparisonItem("B", "", True, 400.0, "good"),
        ]
        assert rank_vpp_options(items, customer_has_gas=True)[0].provider == "B"
        assert rank_vpp_options(items, customer_has_gas=False)[0].provider == "A"

    def test_empty(self):
        assert rank_vpp_options([]) == []


class TestCompareProviders:
    def test_filters_by_state(self, providers):
        result = compare_vpp_providers(providers, "VIC", 10)
        assert "Queensland Only" not in [i.provider for i in result]
        assert len(result) == 3

    def test_sorted_by_value(self, providers):
        result = compare_vpp_providers(providers, "VIC", 10)
        assert [i.provider for i in result] == ["Amber", "ENGIE", "AGL"]
        values = [i.estimated_annual_value for i in result]
        assert values == sorted(values, reverse=True)

    def test_fit_assigned(self, providers):
        fits = {i.provider: i.strategic_fit for i in compare_vpp_providers(providers, "VIC", 10)}
        assert fits == {"Amber": "complex", "ENGIE": "excellent", "AGL": "moderate"}

    def test_battery_below_minimum_excluded(self, providers):
        result = compare_vpp_providers(providers, "VIC", 4)
        assert "Amber" not in [i.provider for i in result]

    def test_inactive_excluded(self, providers):
        providers[0].is_active = False
        result = compare_vpp_providers(providers, "VIC", 10)
        assert "ENGIE" not in [i.provider for i in result]

    def test_no_providers_in_state(self, providers):
        assert compare_vpp_providers(providers, "TAS", 10) == []


class TestSelectProvider:
    def test_income_of_top_ranked(self, providers):
        ranked, income = select_vpp_provider(providers, "VIC", 15)
        assert ranked[0].provider == income.provider == "Amber"
        assert income.total_annual_value == pytest.approx(ranked[0].estimated_annual_value)

    def test_ignores_inactive_row_with_same_name(self, providers):
        providers.insert(0, VppProvider(name="ENGIE", available_states=["VIC"], daily_credit=9.0, is_active=False))
        ranked, income = select_vpp_provider(providers, "VIC", 4)
        assert income.provider == "ENGIE"
        assert income.total_annual_value == pytest.approx(515.0)

    def test_nothing_eligible(self, providers):
        assert select_vpp_provider(providers, "TAS", 10) == ([], None)
