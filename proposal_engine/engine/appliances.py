from typing import Optional

from ..config import DEFAULT_ASSUMPTIONS, EngineAssumptions
from ..schemas import (Bill, CookingSavings, EvSavings, HeatingCoolingSavings, HotWaterSavings,
                       PoolHeatPumpAnalysis)
from .calculations import annualise, validate_gas_bill


def _gas_rate(bill: Bill, assumptions: EngineAssumptions) -> float:
    return bill.gas_rate_cents_mj or assumptions.default_gas_rate_cents_mj


def _end_use(bill: Bill, share: float, assumptions: EngineAssumptions):
    """Annual MJ and gas cost (AUD) of one end use on a gas bill."""
    validate_gas_bill(bill)
    annual_mj = bill.gas_usage_mj * share * annualise(bill)
    return annual_mj, annual_mj * _gas_rate(bill, assumptions) / 100.0


def calculate_hot_water_savings(gas_bill: Bill, electricity_rate_cents: Optional[float] = None,
                                cop: Optional[float] = None,
                                assumptions: EngineAssumptions = DEFAULT_ASSUMPTIONS) -> HotWaterSavings:
    rate = electricity_rate_cents or assumptions.default_electricity_rate_cents
    cop = cop or assumptions.heat_pump_cop_default
    if not assumptions.heat_pump_cop_min <= cop <= assumptions.heat_pump_cop_max:
        raise ValueError(f"Heat pump COP {cop} outside "
                         f"{assumptions.heat_pump_cop_min}-{assumptions.heat_pump_cop_max}")
    annual_mj, current = _end_use(gas_bill, assumptions.hot_water_gas_share, assumptions)
    heat_pump_kwh = annual_mj * assumptions.gas_mj_to_kwh / cop
    new_cost = heat_pump_kwh * rate / 100.0

    supply_cents = gas_bill.daily_supply_charge_cents
    if supply_cents is None:
        supply_cents = assumptions.default_daily_supply_charge_cents
    return HotWaterSavings(
        current_cost=current,
        new_appliance_annual_cost=new_cost,
        annual_savings=current - new_cost,
        # Last gas appliance gone means no connection fee at all
        daily_supply_saved=supply_cents * 365 / 100.0,
        cop=cop,
    )


def calculate_heating_cooling_savings(gas_bill: Bill, electricity_rate_cents: Optional[float] = None,
                                      assumptions: EngineAssumptions = DEFAULT_ASSUMPTIONS) -> HeatingCoolingSavings:
    rate = electricity_rate_cents or assumptions.default_electricity_rate_cents
    annual_mj, current = _end_use(gas_bill, assumptions.heating_gas_share, assumptions)
    rc_kwh = annual_mj * assumptions.gas_mj_to_kwh / assumptions.reverse_cycle_cop
    new_cost = rc_kwh * rate / 100.0
    return HeatingCoolingSavings(
        current_cost=current,
        new_appliance_annual_cost=new_cost,
        annual_savings=current - new_cost,
        additional_cooling_benefit=True,
    )


def calculate_cooking_savings(gas_bill: Bill, electricity_rate_cents: Optional[float] = None,
                              assumptions: EngineAssumptions = DEFAULT_ASSUMPTIONS) -> CookingSavings:
    rate = electricity_rate_cents or assumptions.default_electricity_rate_cents
    annual_mj, current = _end_use(gas_bill, assumptions.cooking_gas_share, assumptions)
    # Equal useful heat
    induction_kwh = (annual_mj * assumptions.gas_mj_to_kwh
                     * assumptions.gas_cooktop_efficiency / assumptions.induction_efficiency)
    new_cost = induction_kwh * rate / 100.0
    # Not clamped: induction can cost slightly more at low usage
    return CookingSavings(
        current_cost=current,
        new_appliance_annual_cost=new_cost,
        annual_savings=current - new_cost,
        induction_kwh=induction_kwh,
    )


def calculate_pool_heat_pump(pool_volume_litres: float, electricity_rate_cents: Optional[float] = None,
                             gas_rate_cents_mj: Optional[float] = None,
                             assumptions: EngineAssumptions = DEFAULT_ASSUMPTIONS) -> PoolHeatPumpAnalysis:
    if pool_volume_litres is None or pool_volume_litres < 0:
        raise ValueError(f"Pool volume must be a non-negative number of litres, got {pool_volume_litres!r}")
    rate = electricity_rate_cents or assumptions.default_electricity_rate_cents
    gas_rate = gas_rate_cents_mj or assumptions.default_gas_rate_cents_mj

    recommended_kw = pool_volume_litres / 1000.0 * assumptions.pool_kw_per_1000l
    heat_kwh = recommended_kw * assumptions.pool_heating_hours_per_day * assumptions.pool_heating_days_per_year
    energy_kwh = heat_kwh / assumptions.heat_pump_cop_default
    operating_cost = energy_kwh * rate / 100.0

    gas_mj = heat_kwh / assumptions.gas_mj_to_kwh / assumptions.gas_heater_efficiency
    gas_cost = gas_mj * gas_rate / 100.0
    return PoolHeatPumpAnalysis(
        recommended_kw=recommended_kw,
        annual_energy_kwh=energy_kwh,
        annual_operating_cost=operating_cost,
        gas_heating_cost=gas_cost,
        estimated_savings_vs_gas=gas_cost - operating_cost,
    )


def calculate_ev_savings(electricity_rate_cents: Optional[float] = None,
                         feed_in_tariff_cents: Optional[float] = None,
                         km_per_year: Optional[float] = None,
                         assumptions: EngineAssumptions = DEFAULT_ASSUMPTIONS) -> EvSavings:
    rate = electricity_rate_cents or assumptions.default_electricity_rate_cents
    feed_in = feed_in_tariff_cents if feed_in_tariff_cents is not None else assumptions.default_feed_in_tariff_cents
    km = km_per_year or assumptions.ev_km_per_year

    litres = km / 100.0 * assumptions.petrol_consumption_l_per_100km
    petrol_cost = litres * assumptions.petrol_price_per_litre
    charge_kwh = km / 100.0 * assumptions.ev_consumption_kwh_per_100km
    grid_cost = charge_kwh * rate / 100.0
    # Solar charging only costs the export credit it displaces
    solar_cost = charge_kwh * feed_in / 100.0
    return EvSavings(
        km_per_year=km,
        annual_charge_kwh=charge_kwh,
        petrol_annual_cost=petrol_cost,
        ev_grid_charge_cost=grid_cost,
        ev_solar_charge_cost=solar_cost,
        savings_vs_petrol=petrol_cost - grid_cost,
        savings_with_solar=petrol_cost - solar_cost,
    )
