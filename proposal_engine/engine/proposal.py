import logging
from dataclasses import fields
from typing import Optional

from ..config import DEFAULT_ASSUMPTIONS, EngineAssumptions
from ..rules.au_rules import (DEFAULT_POOL_HEAT_PUMP_KW, DEFAULT_STATE, HARDWARE, PRICE_LIST, find_rebate,
                              has_gas_appliance, rebate_value)
from ..schemas import Bill, Customer, ProposalCalculations, StateRebate, VppProvider
from .analytics import (calculate_25_year_projection, calculate_battery_cycle, calculate_grid_independence,
                        calculate_solar_generation_profile, calculate_tariff_analysis, estimate_daily_load_profile,
                        generate_system_specs)
from .appliances import (calculate_cooking_savings, calculate_ev_savings, calculate_heating_cooling_savings,
                         calculate_hot_water_savings, calculate_pool_heat_pump)
from .calculations import (annualise, calculate_co2_reduction, calculate_gas_analysis, calculate_payback,
                           calculate_usage_projections, validate_gas_bill)
from .sizing import calculate_battery_size, calculate_solar_size
from .vpp import select_vpp_provider

logger = logging.getLogger(__name__)

# Investment key -> StateRebate.rebate_type
REBATE_TYPE_FOR = {
    "solar": "solar",
    "battery": "battery",
    "heat_pump_hw": "heat_pump_hw",
    "rc_ac": "heat_pump_ac",
    "induction": "induction",
    "ev_charger": "ev_charger",
}


def _round_scalars(calcs: ProposalCalculations, ndigits: int = 2) -> ProposalCalculations:
    for f in fields(calcs):
        value = getattr(calcs, f.name)
        if isinstance(value, float):
            setattr(calcs, f.name, round(value, ndigits))
    return calcs


def generate_full_calculations(customer: Customer, electricity_bill: Bill, gas_bill: Optional[Bill],
                               vpp_providers: list[VppProvider], rebates: list[StateRebate],
                               assumptions: EngineAssumptions = DEFAULT_ASSUMPTIONS) -> ProposalCalculations:
    """Run every calculator for one customer and assemble the proposal numbers.

    Inputs are used as given; nothing is fetched or stored. Invalid bills raise
    InvalidBillError before any calculation is attempted.
    """
    if gas_bill is not None:
        validate_gas_bill(gas_bill)
    usage = calculate_usage_projections(electricity_bill)
    state = customer.state or DEFAULT_STATE
    rate = electricity_bill.peak_rate_cents or assumptions.default_electricity_rate_cents
    feed_in = electricity_bill.feed_in_tariff_cents
    if feed_in is None:
        feed_in = assumptions.default_feed_in_tariff_cents
    logger.debug("Usage %.1f kWh/day at %.2fc/kWh for %s customer", usage.daily_average_kwh, rate, state)

    gas = hot_water = heating = cooking = None
    if gas_bill is not None:
        gas = calculate_gas_analysis(gas_bill, assumptions)
        hot_water = calculate_hot_water_savings(gas_bill, rate, assumptions=assumptions)
        heating = calculate_heating_cooling_savings(gas_bill, rate, assumptions)
        cooking = calculate_cooking_savings(gas_bill, rate, assumptions)

    pool = None
    if customer.has_pool:
        if customer.pool_volume_litres:
            gas_rate = gas_bill.gas_rate_cents_mj if gas_bill is not None else None
            pool = calculate_pool_heat_pump(customer.pool_volume_litres, rate, gas_rate, assumptions)
        else:
            logger.warning("Customer has a pool but no volume; pool heat pump sized at %s kW",
                           DEFAULT_POOL_HEAT_PUMP_KW)

    has_ev = customer.wants_ev
    ev = calculate_ev_savings(rate, feed_in, assumptions=assumptions) if has_ev else None

    battery = calculate_battery_size(usage.daily_average_kwh, has_ev, True, assumptions)
    solar = calculate_solar_size(usage.yearly_usage_kwh, battery.recommended_kwh, has_ev, state, assumptions)
    logger.debug("Sized %s kW solar, %s kWh battery", solar.recommended_kw, battery.recommended_kwh)

    comparison, vpp = select_vpp_provider(vpp_providers, state, battery.recommended_kwh,
                                          customer.has_gas or gas_bill is not None, assumptions)

    investments = {
        "solar": solar.estimated_cost,
        "battery": battery.estimated_cost,
        "heat_pump_hw": PRICE_LIST["heat_pump_hw"] if has_gas_appliance(customer, "heat_pump_hw") else 0.0,
        "rc_ac": PRICE_LIST["rc_ac"] if has_gas_appliance(customer, "rc_ac") else 0.0,
        "induction": PRICE_LIST["induction"] if has_gas_appliance(customer, "induction") else 0.0,
        "ev_charger": PRICE_LIST["ev_charger"] if has_ev else 0.0,
        "pool_heat_pump": 0.0,
    }
    if customer.has_pool:
        pool_kw = pool.recommended_kw if pool else DEFAULT_POOL_HEAT_PUMP_KW
        investments["pool_heat_pump"] = pool_kw * PRICE_LIST["pool_heat_pump_per_kw"]

    matched = {key: find_rebate(rebates, state, rebate_type) for key, rebate_type in REBATE_TYPE_FOR.items()}
    rebate_amounts = {key: rebate_value(rebate, investments[key]) for key, rebate in matched.items()}

    grid = None
    electricity_savings = 0.0
    if usage.yearly_usage_kwh > 0:
        grid = calculate_grid_independence(usage.yearly_usage_kwh, solar.annual_generation,
                                           battery.recommended_kwh, assumptions)
        avoided_kwh = grid.solar_self_consumed_kwh + grid.battery_supplied_kwh
        electricity_savings = avoided_kwh * rate / 100.0 + grid.grid_export_kwh * feed_in / 100.0

    gas_savings = 0.0
    # A gas bill means a full switch-off: all three end uses and the connection fee
    if gas_bill is not None:
        gas_savings = (hot_water.annual_savings + heating.annual_savings + cooking.annual_savings
                       + hot_water.daily_supply_saved)

    benefits = {
        "electricity": electricity_savings,
        "gas": gas_savings,
        "vpp": vpp.total_annual_value if vpp else 0.0,
        "ev": ev.savings_with_solar if ev else 0.0,
        "pool": pool.estimated_savings_vs_gas if pool else 0.0,
    }
    payback = calculate_payback(investments, rebate_amounts, benefits)

    co2 = calculate_co2_reduction(usage.yearly_usage_kwh, gas.annual_gas_mj if gas else 0.0,
                                  solar.annual_generation, gas_bill is not None, assumptions)

    supply_cents = electricity_bill.daily_supply_charge_cents
    if supply_cents is None:
        supply_cents = assumptions.default_daily_supply_charge_cents
    annual_supply_charge = supply_cents * 365 / 100.0
    annual_solar_credit = 0.0
    if electricity_bill.solar_exports_kwh:
        annual_solar_credit = (electricity_bill.solar_exports_kwh * feed_in / 100.0
                               * annualise(electricity_bill))
    gas_supply_charge = None
    if gas_bill is not None:
        gas_supply_cents = gas_bill.daily_supply_charge_cents
        if gas_supply_cents is None:
            gas_supply_cents = assumptions.default_daily_supply_charge_cents
        gas_supply_charge = gas_supply_cents * 365 / 100.0

    current_energy_cost = usage.projected_annual_cost + (gas.annual_gas_cost if gas else 0.0)
    projection = calculate_25_year_projection(payback.total_annual_benefit, current_energy_cost,
                                              payback.net_investment, assumptions=assumptions)

    calcs = ProposalCalculations(
        daily_average_kwh=usage.daily_average_kwh,
        monthly_usage_kwh=usage.monthly_usage_kwh,
        yearly_usage_kwh=usage.yearly_usage_kwh,
        projected_annual_cost=usage.projected_annual_cost,
        recommended_battery_kwh=battery.recommended_kwh,
        total_annual_savings=payback.total_annual_benefit,
        total_investment=payback.total_investment,
        total_rebates=payback.total_rebates,
        net_investment=payback.net_investment,
        payback_years=payback.payback_years,

        bill_retailer=electricity_bill.retailer,
        bill_period_start=electricity_bill.billing_period_start,
        bill_period_end=electricity_bill.billing_period_end,
        bill_days=electricity_bill.billing_days,
        bill_total_amount=electricity_bill.total_amount,
        bill_daily_supply_charge_cents=electricity_bill.daily_supply_charge_cents,
        bill_total_usage_kwh=electricity_bill.total_usage_kwh,
        bill_peak_usage_kwh=electricity_bill.peak_usage_kwh,
        bill_off_peak_usage_kwh=electricity_bill.off_peak_usage_kwh,
        bill_shoulder_usage_kwh=electricity_bill.shoulder_usage_kwh,
        bill_solar_exports_kwh=electricity_bill.solar_exports_kwh,
        bill_peak_rate_cents=electricity_bill.peak_rate_cents,
        bill_off_peak_rate_cents=electricity_bill.off_peak_rate_cents,
        bill_shoulder_rate_cents=electricity_bill.shoulder_rate_cents,
        bill_feed_in_tariff_cents=electricity_bill.feed_in_tariff_cents,

        daily_average_cost=usage.daily_average_cost,
        annual_supply_charge=annual_supply_charge,
        annual_usage_charge=usage.projected_annual_cost - annual_supply_charge,
        annual_solar_credit=annual_solar_credit,
        gas_annual_supply_charge=gas_supply_charge,

        battery_product=HARDWARE["battery_product"],
        battery_estimated_cost=battery.estimated_cost,
        battery_reasoning=battery.reasoning,
        recommended_solar_kw=solar.recommended_kw,
        solar_panel_count=solar.panel_count,
        solar_annual_generation=solar.annual_generation,
        solar_estimated_cost=solar.estimated_cost,

        vpp_provider_comparison=comparison,

        co2_current_tonnes=co2.current_co2_tonnes,
        co2_projected_tonnes=co2.projected_co2_tonnes,
        co2_reduction_tonnes=co2.reduction_tonnes,
        co2_reduction_percent=co2.reduction_percent,

        investment_solar=investments["solar"],
        investment_battery=investments["battery"],
        investment_heat_pump_hw=investments["heat_pump_hw"],
        investment_rc_ac=investments["rc_ac"],
        investment_induction=investments["induction"],
        investment_ev_charger=investments["ev_charger"],
        investment_pool_heat_pump=investments["pool_heat_pump"],

        electricity_savings=electricity_savings,
        gas_savings=gas_savings,
        ten_year_savings=payback.ten_year_savings,
        twenty_five_year_savings=payback.twenty_five_year_savings,

        tariff_analysis=calculate_tariff_analysis(electricity_bill, assumptions),
        daily_load_profile=estimate_daily_load_profile(usage.daily_average_kwh, has_ev, customer.has_pool,
                                                       assumptions),
        solar_generation_profile=calculate_solar_generation_profile(solar.recommended_kw, usage.yearly_usage_kwh,
                                                                    state, assumptions),
        battery_cycle=calculate_battery_cycle(battery.recommended_kwh, usage.daily_average_kwh, has_ev,
                                              assumptions),
        grid_independence=grid,
        yearly_projection=projection,
        system_specs=generate_system_specs(solar.recommended_kw, solar.panel_count, battery.recommended_kwh,
                                           assumptions),
    )

    if gas_bill is not None:
        calcs.gas_bill_retailer = gas_bill.retailer
        calcs.gas_bill_period_start = gas_bill.billing_period_start
        calcs.gas_bill_period_end = gas_bill.billing_period_end
        calcs.gas_bill_days = gas_bill.billing_days
        calcs.gas_bill_total_amount = gas_bill.total_amount
        calcs.gas_bill_daily_supply_charge_cents = gas_bill.daily_supply_charge_cents
        calcs.gas_bill_usage_mj = gas_bill.gas_usage_mj
        calcs.gas_bill_rate_cents_mj = gas_bill.gas_rate_cents_mj
        calcs.gas_annual_cost = gas.annual_gas_cost
        calcs.gas_kwh_equivalent = gas.gas_kwh_equivalent
        calcs.gas_co2_emissions_kg = gas.co2_emissions_kg
        calcs.gas_daily_cost = gas.daily_gas_cost
        calcs.hot_water_savings = hot_water.annual_savings
        calcs.hot_water_current_gas_cost = hot_water.current_cost
        calcs.hot_water_heat_pump_cost = hot_water.new_appliance_annual_cost
        calcs.hot_water_daily_supply_saved = hot_water.daily_supply_saved
        calcs.heating_cooling_savings = heating.annual_savings
        calcs.heating_current_gas_cost = heating.current_cost
        calcs.heating_rc_ac_cost = heating.new_appliance_annual_cost
        calcs.cooking_savings = cooking.annual_savings
        calcs.cooking_current_gas_cost = cooking.current_cost
        calcs.cooking_induction_cost = cooking.new_appliance_annual_cost

    if pool is not None:
        calcs.pool_heat_pump_savings = pool.estimated_savings_vs_gas
        calcs.pool_recommended_kw = pool.recommended_kw
        calcs.pool_annual_operating_cost = pool.annual_operating_cost

    if vpp is not None:
        calcs.selected_vpp_provider = vpp.provider
        calcs.vpp_annual_value = vpp.total_annual_value
        calcs.vpp_daily_credit_annual = vpp.daily_credit_annual
        calcs.vpp_event_payments_annual = vpp.event_payments_annual
        calcs.vpp_bundle_discount = vpp.bundle_discount

    if ev is not None:
        calcs.ev_petrol_cost = ev.petrol_annual_cost
        calcs.ev_grid_charge_cost = ev.ev_grid_charge_cost
        calcs.ev_solar_charge_cost = ev.ev_solar_charge_cost
        calcs.ev_annual_savings = ev.savings_with_solar
        calcs.ev_km_per_year = ev.km_per_year
        calcs.ev_consumption_per_100km = assumptions.ev_consumption_kwh_per_100km
        calcs.ev_petrol_price_per_litre = assumptions.petrol_price_per_litre

    for key, rebate in matched.items():
        if rebate is not None:
            setattr(calcs, f"{REBATE_TYPE_FOR[key]}_rebate_amount", rebate_amounts[key])

    logger.info("Proposal for %s: $%.0f net, $%.0f/yr benefit, payback %s yrs",
                state, payback.net_investment, payback.total_annual_benefit, payback.payback_years)
    return _round_scalars(calcs)
