# Australian reference tables and heuristics

from typing import Optional

from ..schemas import Customer, StateRebate, VppProvider

# Peak sun hours per day
STATE_PSH = {
    "VIC": 3.6, "NSW": 4.2, "QLD": 4.8, "SA": 4.5,
    "WA": 4.8, "TAS": 3.3, "ACT": 4.2, "NT": 5.5,
}
DEFAULT_PSH = 4.0
DEFAULT_STATE = "VIC"

STANDARD_SOLAR_SIZES_KW = [3, 4, 5, 5.5, 6, 6.6, 7, 8, 8.8, 10, 11, 13, 13.2, 15, 17, 20]
STANDARD_BATTERY_SIZES_KWH = [5, 10, 15, 20, 25, 30]
HYBRID_INVERTER_SIZES_KW = [5, 6, 8, 10, 12, 15, 20, 25, 30]
INVERTER_DC_AC_RATIO = 1.33

HARDWARE = {
    "panel_brand": "Trina Solar",
    "battery_brand": "Sigenergy",
    "battery_product": "Sigenergy SigenStor",
    "inverter_brand": "Sigenergy",
}

# AUD, installed
PRICE_LIST = {
    "solar_per_kw": 1000,
    "battery_per_kwh": 900,
    "heat_pump_hw": 3500,
    "rc_ac": 3000,
    "induction": 2500,
    "ev_charger": 1800,
    "pool_heat_pump_per_kw": 1200,
}
DEFAULT_POOL_HEAT_PUMP_KW = 10

# Matched against lower-cased Customer.gas_appliances entries
APPLIANCE_KEYWORDS = {
    "heat_pump_hw": ("hot water",),
    "rc_ac": ("heating", "heater", "ducted"),
    "induction": ("cook", "stove", "oven"),
}
# Entries that look like a keyword but belong to another appliance
APPLIANCE_EXCLUDES = {
    "rc_ac": ("hot water",),
}

REBATE_TYPES = ("solar", "battery", "heat_pump_hw", "heat_pump_ac", "ev_charger", "induction")


def peak_sun_hours(state: Optional[str]) -> float:
    return STATE_PSH.get((state or "").strip().upper(), DEFAULT_PSH)


def snap_up(value: float, sizes: list) -> float:
    """Smallest standard size >= value, or the largest size on offer."""
    for size in sizes:
        if size >= value:
            return size
    return sizes[-1]


def next_size_up(value: float, sizes: list) -> float:
    """Smallest standard size > value, or the largest size on offer."""
    for size in sizes:
        if size > value:
            return size
    return sizes[-1]


def has_gas_appliance(customer: Customer, appliance: str) -> bool:
    keywords = APPLIANCE_KEYWORDS[appliance]
    excluded = APPLIANCE_EXCLUDES.get(appliance, ())
    for entry in customer.gas_appliances or []:
        text = entry.lower()
        if "pool" in text or any(x in text for x in excluded):
            continue
        if any(k in text for k in keywords):
            return True
    return False


def is_vpp_eligible(provider: VppProvider, state: str, battery_kwh: Optional[float] = None):
    if not provider.is_active:
        return False, "Provider inactive"
    if state not in (provider.available_states or []):
        return False, f"Not available in {state}"
    if battery_kwh is not None and provider.min_battery_size_kwh and battery_kwh < provider.min_battery_size_kwh:
        return False, f"Needs at least {provider.min_battery_size_kwh} kWh"
    return True, ""


def find_rebate(rebates: list[StateRebate], state: str, rebate_type: str) -> Optional[StateRebate]:
    for rebate in rebates:
        if rebate.state == state and rebate.rebate_type == rebate_type and rebate.is_active:
            return rebate
    return None


def rebate_value(rebate: Optional[StateRebate], investment: float) -> float:
    if rebate is None or investment <= 0:
        return 0.0
    if rebate.is_percentage:
        value = investment * rebate.amount / 100.0
        if rebate.max_amount is not None:
            value = min(value, rebate.max_amount)
    else:
        value = rebate.amount
    # A rebate can't pay more than the hardware costs
    return min(max(0.0, value), investment)
