import pytest

from proposal_engine.rules.au_rules import (find_rebate, has_gas_appliance, is_vpp_eligible, next_size_up,
                                            peak_sun_hours, rebate_value, snap_up)
from proposal_engine.schemas import Customer, StateRebate, VppProvider


class TestTables:
    def test_peak_sun_hours(self):
        assert peak_sun_hours("QLD") == 4.8
        assert peak_sun_hours(" vic ") == 3.6
        assert peak_sun_hours(None) == 4.0

    def test_snap_up(self):
        assert snap_up(6.1, [5, 6.6, 8]) == 6.6
        assert snap_up(6.6, [5, 6.6, 8]) == 6.6
        assert snap_up(50, [5, 6.6, 8]) == 8

    def test_next_size_up(self):
        assert next_size_up(6.6, [5, 6.6, 8]) == 8
        assert next_size_up(6.1, [5, 6.6, 8]) == 6.6
        assert next_size_up(8, [5, 6.6, 8]) == 8


class TestGasAppliances:
    def test_keywords(self):
        customer = Customer(state="VIC", gas_appliances=["Gas Hot Water System", "Wall heater", "Stovetop"])
        assert has_gas_appliance(customer, "heat_pump_hw")
        assert has_gas_appliance(customer, "rc_ac")
        assert has_gas_appliance(customer, "induction")

    @pytest.mark.parametrize("entry", ["Gas Heater", "Heater", "Ducted heating", "Hydronic Heating"])
    def test_space_heaters(self, entry):
        assert has_gas_appliance(Customer(state="VIC", gas_appliances=[entry]), "rc_ac")

    def test_hot_water_heater_is_not_space_heating(self):
        customer = Customer(state="VIC", gas_appliances=["Gas Hot Water Heater"])
        assert not has_gas_appliance(customer, "rc_ac")
        assert has_gas_appliance(customer, "heat_pump_hw")

    def test_pool_heater_is_not_space_heating(self):
        customer = Customer(state="VIC", gas_appliances=["Pool heating"])
        assert not has_gas_appliance(customer, "rc_ac")

    def test_none_listed(self):
        assert not has_gas_appliance(Customer(state="VIC"), "heat_pump_hw")


class TestEligibility:
    def test_reasons(self):
        provider = VppProvider(name="X", available_states=["NSW"], min_battery_size_kwh=10)
        assert is_vpp_eligible(provider, "NSW", 10) == (True, "")
        assert is_vpp_eligible(provider, "VIC", 10)[0] is False
        assert "10" in is_vpp_eligible(provider, "NSW", 5)[1]

    def test_battery_unknown_skips_size_check(self):
        provider = VppProvider(name="X", available_states=["NSW"], min_battery_size_kwh=10)
        assert is_vpp_eligible(provider, "NSW")[0]


class TestRebates:
    def test_find_matches_state_type_and_active(self, rebates):
        assert find_rebate(rebates, "NSW", "battery").amount == 1600
        rebates[0].is_active = False
        assert find_rebate(rebates, "VIC", "solar") is None
        assert find_rebate(rebates, "QLD", "solar") is None

    def test_fixed_amount(self):
        rebate = StateRebate(state="VIC", rebate_type="solar", amount=1400)
        assert rebate_value(rebate, 8800) == 1400

    def test_percentage_capped(self):
        rebate = StateRebate(state="VIC", rebate_type="battery", amount=30, is_percentage=True, max_amount=4000)
        assert rebate_value(rebate, 9000) == 2700
        assert rebate_value(rebate, 20000) == 4000

    def test_never_exceeds_investment(self):
        rebate = StateRebate(state="VIC", rebate_type="heat_pump_hw", amount=1000)
        assert rebate_value(rebate, 600) == 600
        assert rebate_value(rebate, 0) == 0
        assert rebate_value(None, 5000) == 0
