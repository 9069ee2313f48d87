import math

from ..config import DEFAULT_ASSUMPTIONS, EngineAssumptions
from ..rules.au_rules import (DEFAULT_STATE, HARDWARE, PRICE_LIST, STANDARD_BATTERY_SIZES_KWH,
                              STANDARD_SOLAR_SIZES_KW, next_size_up, peak_sun_hours, snap_up)
from ..schemas import BatteryRecommendation, SolarRecommendation


def calculate_battery_size(daily_usage_kwh: float, has_ev: bool, wants_vpp: bool,
                           assumptions: EngineAssumptions = DEFAULT_ASSUMPTIONS) -> BatteryRecommendation:
    if daily_usage_kwh < 0:
        raise ValueError(f"Daily usage can't be negative ({daily_usage_kwh})")
    raw_kwh = (daily_usage_kwh * assumptions.battery_evening_fraction
               / (assumptions.battery_dod * assumptions.battery_efficiency))
    reasons = [f"Covers evening/overnight use ({assumptions.battery_evening_fraction:.0%} of daily load)"]
    if has_ev:
        raw_kwh += assumptions.battery_ev_buffer_kwh
        reasons.append("EV charging buffer")
    if wants_vpp and raw_kwh < assumptions.battery_vpp_minimum_kwh:
        raw_kwh = assumptions.battery_vpp_minimum_kwh
        reasons.append(f"VPP minimum of {assumptions.battery_vpp_minimum_kwh:g} kWh")

    recommended = snap_up(raw_kwh, STANDARD_BATTERY_SIZES_KWH)
    return BatteryRecommendation(
        recommended_kwh=recommended,
        raw_kwh=raw_kwh,
        estimated_cost=recommended * PRICE_LIST["battery_per_kwh"],
        reasoning=", ".join(reasons),
    )


def calculate_solar_size(yearly_usage_kwh: float, battery_kwh: float, has_ev: bool,
                         state: str = DEFAULT_STATE,
                         assumptions: EngineAssumptions = DEFAULT_ASSUMPTIONS) -> SolarRecommendation:
    target_kwh = yearly_usage_kwh * assumptions.solar_oversize_factor
    # Energy lost cycling the battery once a day
    if battery_kwh:
        usable = battery_kwh * assumptions.battery_dod
        target_kwh += usable * (1 / assumptions.battery_efficiency - 1) * 365

    yield_per_kw = 365 * peak_sun_hours(state) * assumptions.solar_performance_ratio
    recommended_kw = snap_up(target_kwh / yield_per_kw, STANDARD_SOLAR_SIZES_KW)
    if has_ev:
        base_kw = recommended_kw
        recommended_kw = snap_up((target_kwh + assumptions.ev_annual_kwh) / yield_per_kw, STANDARD_SOLAR_SIZES_KW)
        # EV always moves up at least one size, except at the largest size
        if recommended_kw <= base_kw:
            recommended_kw = next_size_up(base_kw, STANDARD_SOLAR_SIZES_KW)
    return SolarRecommendation(
        recommended_kw=recommended_kw,
        panel_count=math.ceil(round(recommended_kw * 1000) / assumptions.panel_wattage),
        panel_wattage=assumptions.panel_wattage,
        panel_brand=HARDWARE["panel_brand"],
        annual_generation=recommended_kw * yield_per_kw,
        estimated_cost=recommended_kw * PRICE_LIST["solar_per_kw"],
    )
