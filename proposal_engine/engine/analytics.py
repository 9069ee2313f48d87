"""Chart-ready series behind the proposal's analysis slides.

Everything here is an estimate built from the bill-level primitives: hourly
and monthly shapes are fixed typical-household curves scaled to the
customer's totals, not metered data.
"""
from ..config import DEFAULT_ASSUMPTIONS, EngineAssumptions
from ..rules.au_rules import (DEFAULT_STATE, HARDWARE, HYBRID_INVERTER_SIZES_KW, INVERTER_DC_AC_RATIO,
                              peak_sun_hours, snap_up)
from ..schemas import (BatteryCycle, BatteryCycleHour, BatterySpec, Bill, DailyLoadProfile, GridIndependence,
                       HourlyLoad, InverterSpec, InvalidBillError, MonthlyGeneration, SolarGenerationProfile,
                       SolarSpec, SystemSpecs, TariffAnalysis, YearlyProjection)
from .calculations import billing_days

# Typical residential weekday, hour 0 = midnight
BASE_LOAD_SHAPE = [
    0.025, 0.022, 0.020, 0.020, 0.021, 0.027, 0.040, 0.050,
    0.045, 0.038, 0.035, 0.034, 0.034, 0.034, 0.036, 0.042,
    0.052, 0.068, 0.078, 0.075, 0.066, 0.055, 0.042, 0.032,
]
PEAK_HOURS = range(15, 21)
OFF_PEAK_HOURS = (22, 23, 0, 1, 2, 3, 4, 5, 6)
SOLAR_HOURS = range(7, 17)
SOLAR_HOURS_LABEL = "7am - 5pm"
EV_CHARGING_HOURS = range(0, 6)
POOL_PUMP_HOURS = range(10, 15)

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
DAYS_IN_MONTH = [31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]
# Southern Hemisphere, relative to the annual daily average
MONTHLY_SOLAR_FACTORS = [1.30, 1.22, 1.05, 0.86, 0.70, 0.60, 0.64, 0.80, 0.98, 1.12, 1.24, 1.32]

BATTERY_CHARGE_HOURS = range(8, 16)
BATTERY_EV_HOURS = (11, 12, 13)
BATTERY_IDLE_HOURS = (7,)


def _pct(part: float, whole: float) -> float:
    if whole <= 0:
        return 0.0
    return min(100.0, max(0.0, part / whole * 100.0))


def _period(hour: int) -> str:
    if hour in PEAK_HOURS:
        return "peak"
    if hour in OFF_PEAK_HOURS:
        return "off_peak"
    return "shoulder"


def _hourly_base(daily_usage_kwh: float) -> list[float]:
    total = sum(BASE_LOAD_SHAPE)
    return [daily_usage_kwh * w / total for w in BASE_LOAD_SHAPE]


def calculate_tariff_analysis(bill: Bill, assumptions: EngineAssumptions = DEFAULT_ASSUMPTIONS) -> TariffAnalysis:
    if bill.bill_type != "electricity":
        raise InvalidBillError(f"Tariff analysis needs an electricity bill, got {bill.bill_type!r}")
    days = billing_days(bill)

    peak_kwh = bill.peak_usage_kwh or 0.0
    off_peak_kwh = bill.off_peak_usage_kwh or 0.0
    shoulder_kwh = bill.shoulder_usage_kwh or 0.0
    if not (peak_kwh or off_peak_kwh or shoulder_kwh):
        # Flat tariff: everything at the single usage rate
        peak_kwh = bill.total_usage_kwh or 0.0

    peak_rate = bill.peak_rate_cents or assumptions.default_electricity_rate_cents
    off_peak_rate = bill.off_peak_rate_cents or peak_rate
    shoulder_rate = bill.shoulder_rate_cents or peak_rate
    feed_in = bill.feed_in_tariff_cents
    if feed_in is None:
        feed_in = assumptions.default_feed_in_tariff_cents
    supply_cents = bill.daily_supply_charge_cents
    if supply_cents is None:
        supply_cents = assumptions.default_daily_supply_charge_cents

    peak_cost = peak_kwh * peak_rate / 100.0
    off_peak_cost = off_peak_kwh * off_peak_rate / 100.0
    shoulder_cost = shoulder_kwh * shoulder_rate / 100.0
    supply_cost = supply_cents * days / 100.0
    usage_cost = peak_cost + off_peak_cost + shoulder_cost
    total_cost = usage_cost + supply_cost
    total_kwh = peak_kwh + off_peak_kwh + shoulder_kwh

    return TariffAnalysis(
        peak_rate=peak_rate,
        off_peak_rate=off_peak_rate,
        shoulder_rate=shoulder_rate,
        feed_in_tariff=feed_in,
        daily_supply_charge=supply_cents,
        peak_usage_percent=_pct(peak_kwh, total_kwh),
        off_peak_usage_percent=_pct(off_peak_kwh, total_kwh),
        shoulder_usage_percent=_pct(shoulder_kwh, total_kwh),
        peak_cost_percent=_pct(peak_cost, total_cost),
        off_peak_cost_percent=_pct(off_peak_cost, total_cost),
        shoulder_cost_percent=_pct(shoulder_cost, total_cost),
        supply_cost_percent=_pct(supply_cost, total_cost),
        period_usage_cost=usage_cost,
        period_supply_cost=supply_cost,
    )


def estimate_daily_load_profile(daily_usage_kwh: float, has_ev: bool, has_pool: bool,
                                assumptions: EngineAssumptions = DEFAULT_ASSUMPTIONS) -> DailyLoadProfile:
    if daily_usage_kwh < 0:
        raise ValueError(f"Daily usage can't be negative ({daily_usage_kwh})")
    hourly = _hourly_base(daily_usage_kwh)
    if has_ev:
        ev_per_hour = assumptions.ev_annual_kwh / 365 / len(EV_CHARGING_HOURS)
        for hour in EV_CHARGING_HOURS:
            hourly[hour] += ev_per_hour
    if has_pool:
        for hour in POOL_PUMP_HOURS:
            hourly[hour] += assumptions.pool_pump_kw

    estimate = [HourlyLoad(hour=h, kwh=kwh, period=_period(h)) for h, kwh in enumerate(hourly)]
    by_period = {"peak": 0.0, "shoulder": 0.0, "off_peak": 0.0}
    for entry in estimate:
        by_period[entry.period] += entry.kwh
    return DailyLoadProfile(
        hourly_estimate=estimate,
        total_daily_kwh=sum(hourly),
        peak_period_kwh=by_period["peak"],
        shoulder_period_kwh=by_period["shoulder"],
        off_peak_period_kwh=by_period["off_peak"],
        solar_window_kwh=sum(hourly[h] for h in SOLAR_HOURS),
        solar_generation_hours=SOLAR_HOURS_LABEL,
    )


def calculate_solar_generation_profile(system_kw: float, annual_usage_kwh: float, state: str = DEFAULT_STATE,
                                       assumptions: EngineAssumptions = DEFAULT_ASSUMPTIONS) -> SolarGenerationProfile:
    if system_kw <= 0:
        raise ValueError(f"System size must be positive, got {system_kw}")
    annual_generation = system_kw * 365 * peak_sun_hours(state) * assumptions.solar_performance_ratio
    weights = [f * d for f, d in zip(MONTHLY_SOLAR_FACTORS, DAYS_IN_MONTH)]
    weight_total = sum(weights)

    months = []
    self_used = 0.0
    for name, weight, days in zip(MONTHS, weights, DAYS_IN_MONTH):
        generation = annual_generation * weight / weight_total
        usage = annual_usage_kwh * days / 365
        self_used += min(generation, usage * assumptions.daytime_load_fraction)
        # Negative surplus is a shortfall drawn from the grid
        months.append(MonthlyGeneration(month=name, generation_kwh=generation, usage_kwh=usage,
                                        surplus_kwh=generation - usage))

    coverage = 100.0 if annual_usage_kwh <= 0 else _pct(annual_generation, annual_usage_kwh)
    return SolarGenerationProfile(
        monthly_generation=months,
        annual_generation=annual_generation,
        coverage_percent=coverage,
        self_consumption_percent=_pct(self_used, annual_generation),
    )


def calculate_battery_cycle(battery_kwh: float, daily_usage_kwh: float, has_ev: bool,
                            assumptions: EngineAssumptions = DEFAULT_ASSUMPTIONS) -> BatteryCycle:
    """Typical sunny-day state of charge, hour by hour.

    The day is simulated twice and the second pass is reported, so midnight
    starts from the previous evening's charge rather than an empty battery.
    While the EV is plugged in at midday the battery holds its charge.
    """
    if battery_kwh <= 0:
        raise ValueError(f"Battery capacity must be positive, got {battery_kwh}")
    usable = battery_kwh * assumptions.battery_dod
    reserve = battery_kwh - usable
    charge_per_hour = usable / (len(BATTERY_CHARGE_HOURS) - len(BATTERY_EV_HOURS))
    load = _hourly_base(daily_usage_kwh)
    ev_hours = BATTERY_EV_HOURS if has_ev else ()

    soc = reserve
    cycle = []
    for _ in range(2):
        cycle = []
        for hour in range(24):
            flow = 0.0
            if hour in ev_hours:
                action = "EV Charging"
            elif hour in BATTERY_CHARGE_HOURS:
                flow = min(charge_per_hour, battery_kwh - soc)
                action = "Charging" if flow > 0 else "Full"
            elif hour in BATTERY_IDLE_HOURS:
                action = "Standby"
            else:
                flow = -min(load[hour], soc - reserve)
                action = "Discharging" if flow < 0 else "Grid Supply"
            soc += flow
            cycle.append(BatteryCycleHour(hour=hour, soc_percent=soc / battery_kwh * 100.0,
                                          action=action, energy_kwh=flow))

    return BatteryCycle(
        daily_cycle=cycle,
        usable_capacity_kwh=usable,
        daily_throughput_kwh=-sum(h.energy_kwh for h in cycle if h.energy_kwh < 0),
        cycles_per_year=365,
        depth_of_discharge=round(assumptions.battery_dod * 100),
        round_trip_efficiency=round(assumptions.battery_efficiency * 100),
        expected_life_years=assumptions.battery_expected_life_years,
    )


def calculate_grid_independence(annual_consumption_kwh: float, annual_solar_kwh: float, battery_kwh: float,
                                assumptions: EngineAssumptions = DEFAULT_ASSUMPTIONS) -> GridIndependence:
    if annual_consumption_kwh <= 0:
        raise ValueError(f"Annual consumption must be positive, got {annual_consumption_kwh}")
    solar = max(0.0, annual_solar_kwh)
    direct = min(solar, annual_consumption_kwh * assumptions.daytime_load_fraction)
    surplus = solar - direct

    # One cycle a day at most, limited by what's left to cover
    battery_capacity = max(0.0, battery_kwh) * assumptions.battery_dod * 365
    remaining = annual_consumption_kwh - direct
    charged = min(surplus, battery_capacity, remaining / assumptions.battery_efficiency)
    if solar > annual_consumption_kwh:
        # A net exporter sends at least its net excess to the grid
        charged = min(charged, surplus - (solar - annual_consumption_kwh))
    from_battery = charged * assumptions.battery_efficiency

    self_supplied = direct + from_battery
    sufficiency = _pct(self_supplied, annual_consumption_kwh)
    return GridIndependence(
        self_sufficiency_percent=sufficiency,
        current_grid_dependence=100.0,
        projected_grid_dependence=100.0 - sufficiency,
        solar_self_consumed_kwh=direct,
        battery_supplied_kwh=from_battery,
        grid_import_kwh=max(0.0, annual_consumption_kwh - self_supplied),
        grid_export_kwh=max(0.0, surplus - charged),
    )


def calculate_25_year_projection(annual_savings: float, current_annual_cost: float, net_investment: float,
                                 years: int = 25,
                                 assumptions: EngineAssumptions = DEFAULT_ASSUMPTIONS) -> list[YearlyProjection]:
    rows = []
    cumulative = -net_investment
    for year in range(1, years + 1):
        # Year 1 at today's prices
        growth = (1 + assumptions.electricity_inflation_rate) ** (year - 1)
        cost = current_annual_cost * growth
        saving = annual_savings * growth
        cumulative += saving
        rows.append(YearlyProjection(
            year=year,
            cost_without_system=cost,
            cost_with_system=max(0.0, cost - saving),
            annual_saving=saving,
            cumulative_saving=cumulative,
        ))
    return rows


def generate_system_specs(solar_kw: float, panel_count: int, battery_kwh: float,
                          assumptions: EngineAssumptions = DEFAULT_ASSUMPTIONS) -> SystemSpecs:
    return SystemSpecs(
        solar=SolarSpec(
            system_size=solar_kw,
            panel_count=panel_count,
            panel_wattage=assumptions.panel_wattage,
            panel_brand=HARDWARE["panel_brand"],
            warranty_years=25,
        ),
        battery=BatterySpec(
            capacity=battery_kwh,
            usable_capacity=round(battery_kwh * assumptions.battery_dod, 2),
            brand=HARDWARE["battery_brand"],
            product=HARDWARE["battery_product"],
            warranty_years=10,
        ),
        inverter=InverterSpec(
            brand=HARDWARE["inverter_brand"],
            capacity_kw=snap_up(solar_kw / INVERTER_DC_AC_RATIO, HYBRID_INVERTER_SIZES_KW),
            warranty_years=10,
        ),
    )
