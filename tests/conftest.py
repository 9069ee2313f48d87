from datetime import date

import pytest

from proposal_engine.schemas import Bill, Customer, StateRebate, VppProvider


@pytest.fixture
def electricity_bill():
    # 20 kWh/day, $5/day
    return Bill(
        bill_type="electricity",
        retailer="AGL",
        billing_period_start=date(2024, 1, 1),
        billing_period_end=date(2024, 3, 31),
        billing_days=90,
        total_amount=450.0,
        daily_supply_charge_cents=120.0,
        total_usage_kwh=1800.0,
        peak_usage_kwh=1200.0,
        off_peak_usage_kwh=600.0,
        peak_rate_cents=32.5,
        off_peak_rate_cents=18.0,
        feed_in_tariff_cents=5.0,
    )


@pytest.fixture
def gas_bill():
    return Bill(
        bill_type="gas",
        retailer="AGL",
        billing_period_start=date(2024, 1, 1),
        billing_period_end=date(2024, 3, 31),
        billing_days=90,
        total_amount=180.0,
        daily_supply_charge_cents=85.0,
        gas_usage_mj=4500.0,
        gas_rate_cents_mj=3.5,
    )


@pytest.fixture
def customer():
    return Customer(
        state="VIC",
        full_name="Test Customer",
        has_gas=True,
        gas_appliances=["Hot Water", "Ducted Heating", "Cooktop"],
    )


@pytest.fixture
def providers():
    return [
        VppProvider(name="ENGIE", program_name="VPP Advantage", available_states=["VIC", "NSW", "SA"],
                    has_gas_bundle=True, daily_credit=1.0, event_payment=10.0, estimated_events_per_year=10,
                    bundle_discount=50.0),
        VppProvider(name="AGL", program_name="Night Saver", available_states=["VIC", "NSW"],
                    has_gas_bundle=True, daily_credit=0.4, event_payment=5.0, estimated_events_per_year=15,
                    bundle_discount=30.0),
        VppProvider(name="Amber", program_name="SmartShift", available_states=["VIC", "NSW", "QLD"],
                    base_rate_cents=35.8, monthly_fee=15.0, min_battery_size_kwh=5.0),
        VppProvider(name="Queensland Only", available_states=["QLD"], daily_credit=5.0),
    ]


@pytest.fixture
def rebates():
    return [
        StateRebate(state="VIC", rebate_type="solar", name="Solar Homes", amount=1400.0),
        StateRebate(state="VIC", rebate_type="battery", name="Battery rebate", amount=30.0,
                    is_percentage=True, max_amount=4000.0),
        StateRebate(state="VIC", rebate_type="heat_pump_hw", name="Hot water", amount=1000.0),
        StateRebate(state="NSW", rebate_type="battery", name="PDRS", amount=1600.0),
    ]
