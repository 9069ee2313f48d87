import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENV_PREFIX = "PROPOSAL_"


@dataclass(frozen=True)
class EngineAssumptions:
    # Conversions and emissions
    gas_mj_to_kwh: float = 0.2778
    grid_co2_kg_per_kwh: float = 0.79
    gas_co2_kg_per_mj: float = 0.0512

    # Heat pumps
    heat_pump_cop_min: float = 3.5
    heat_pump_cop_max: float = 4.5
    heat_pump_cop_default: float = 4.0
    reverse_cycle_cop: float = 4.0

    # Share of household gas going to each end use
    hot_water_gas_share: float = 0.40
    heating_gas_share: float = 0.40
    cooking_gas_share: float = 0.20
    gas_cooktop_efficiency: float = 0.40
    induction_efficiency: float = 0.90
    gas_heater_efficiency: float = 0.80

    # Pool heating
    pool_kw_per_1000l_min: float = 0.5
    pool_kw_per_1000l_max: float = 0.7
    pool_heating_hours_per_day: float = 8
    pool_heating_days_per_year: float = 200
    pool_pump_kw: float = 1.1

    # EV
    ev_km_per_year: float = 10000
    ev_consumption_kwh_per_100km: float = 15
    petrol_consumption_l_per_100km: float = 8
    petrol_price_per_litre: float = 1.80

    # Tariff defaults when a bill leaves them out
    default_electricity_rate_cents: float = 30
    default_gas_rate_cents_mj: float = 3.5
    default_feed_in_tariff_cents: float = 5
    default_daily_supply_charge_cents: float = 120

    # Solar
    solar_oversize_factor: float = 1.2
    solar_performance_ratio: float = 0.80
    panel_wattage: int = 440
    daytime_load_fraction: float = 0.45

    # Battery
    battery_evening_fraction: float = 0.55
    battery_dod: float = 0.90
    battery_efficiency: float = 0.95
    battery_ev_buffer_kwh: float = 5
    battery_vpp_minimum_kwh: float = 10
    battery_expected_life_years: int = 15

    # VPP
    vpp_default_events_per_year: int = 10
    vpp_export_fraction: float = 0.8

    # Projection
    electricity_inflation_rate: float = 0.035

    @property
    def pool_kw_per_1000l(self) -> float:
        return (self.pool_kw_per_1000l_min + self.pool_kw_per_1000l_max) / 2

    @property
    def ev_annual_kwh(self) -> float:
        return self.ev_km_per_year / 100 * self.ev_consumption_kwh_per_100km


DEFAULT_ASSUMPTIONS = EngineAssumptions()


def load_assumptions(env: Optional[dict] = None) -> EngineAssumptions:
    """Build assumptions from defaults plus PROPOSAL_* overrides.

    Reads a .env file into the process environment first. Pass ``env`` to
    read overrides from a mapping instead of ``os.environ``.
    """
    if env is None:
        load_dotenv()
        env = os.environ
    overrides = {}
    for f in fields(EngineAssumptions):
        key = ENV_PREFIX + f.name.upper()
        raw = env.get(key)
        if raw is None or raw.strip() == "":
            continue
        try:
            value = int(raw) if f.type in (int, "int") else float(raw)
        except ValueError:
            raise ValueError(f"{key} must be numeric, got {raw!r}")
        overrides[f.name] = value
    if overrides:
        logger.debug("Assumption overrides: %s", overrides)
    return replace(DEFAULT_ASSUMPTIONS, **overrides)
