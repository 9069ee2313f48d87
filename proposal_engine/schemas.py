from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Optional


class InvalidBillError(ValueError):
    """A bill record cannot be used for the requested calculation."""


# ---------------------------------------------------------------------------
# Input records (supplied by the persistence layer, never mutated here)
# ---------------------------------------------------------------------------

@dataclass
class Bill:
    bill_type: str  # "electricity" or "gas"
    billing_days: Optional[int] = None
    total_amount: Optional[float] = None  # AUD for the billing period
    daily_supply_charge_cents: Optional[float] = None  # cents/day
    billing_period_start: Optional[date] = None
    billing_period_end: Optional[date] = None
    retailer: Optional[str] = None
    # Electricity
    total_usage_kwh: Optional[float] = None
    peak_usage_kwh: Optional[float] = None
    off_peak_usage_kwh: Optional[float] = None
    shoulder_usage_kwh: Optional[float] = None
    solar_exports_kwh: Optional[float] = None
    peak_rate_cents: Optional[float] = None  # cents/kWh
    off_peak_rate_cents: Optional[float] = None
    shoulder_rate_cents: Optional[float] = None
    feed_in_tariff_cents: Optional[float] = None
    # Gas
    gas_usage_mj: Optional[float] = None
    gas_rate_cents_mj: Optional[float] = None  # cents/MJ


@dataclass
class Customer:
    state: str  # VIC, NSW, QLD, SA, WA, TAS, ACT, NT
    full_name: Optional[str] = None
    has_gas: bool = False
    gas_appliances: list[str] = field(default_factory=list)  # free text, e.g. "Hot Water", "Cooktop"
    has_pool: bool = False
    pool_volume_litres: Optional[int] = None
    has_ev: bool = False
    ev_interest: str = "none"  # "none", "interested", "owns"
    has_existing_solar: bool = False
    existing_solar_kw: Optional[float] = None
    notes: Optional[str] = None

    @property
    def wants_ev(self) -> bool:
        return self.has_ev or self.ev_interest in ("owns", "interested")


@dataclass
class VppProvider:
    name: str
    program_name: str = ""
    available_states: list[str] = field(default_factory=list)
    has_gas_bundle: bool = False
    daily_credit: float = 0.0  # AUD/day
    event_payment: float = 0.0  # AUD per dispatch event
    estimated_events_per_year: Optional[int] = None
    bundle_discount: float = 0.0  # AUD/yr
    min_battery_size_kwh: Optional[float] = None
    # Wholesale programs pay per exported kWh instead of credits
    base_rate_cents: Optional[float] = None  # cents/kWh
    monthly_fee: Optional[float] = None  # AUD/month
    is_active: bool = True

    @property
    def is_wholesale(self) -> bool:
        return bool(self.base_rate_cents)


@dataclass
class StateRebate:
    state: str
    rebate_type: str  # solar, battery, heat_pump_hw, heat_pump_ac, ev_charger, induction
    amount: float  # AUD, or percent of the investment when is_percentage
    name: str = ""
    is_percentage: bool = False
    max_amount: Optional[float] = None  # AUD cap for percentage rebates
    is_active: bool = True


# ---------------------------------------------------------------------------
# Calculator results. Money is AUD unless the field says cents.
# ---------------------------------------------------------------------------

@dataclass
class UsageProjection:
    daily_average_kwh: float
    monthly_usage_kwh: float
    yearly_usage_kwh: float
    daily_average_cost: float
    projected_annual_cost: float


@dataclass
class GasAnalysis:
    daily_gas_cost: float
    annual_gas_cost: float
    annual_gas_mj: float
    gas_kwh_equivalent: float  # for the metered period
    co2_emissions_kg: float  # annualised


@dataclass
class ApplianceSavings:
    current_cost: float  # annual cost of the gas appliance
    new_appliance_annual_cost: float
    annual_savings: float


@dataclass
class HotWaterSavings(ApplianceSavings):
    daily_supply_saved: float  # AUD/yr, gas connection fee removed
    cop: float


@dataclass
class HeatingCoolingSavings(ApplianceSavings):
    additional_cooling_benefit: bool = True


@dataclass
class CookingSavings(ApplianceSavings):
    induction_kwh: float = 0.0  # annual


@dataclass
class PoolHeatPumpAnalysis:
    recommended_kw: float
    annual_energy_kwh: float
    annual_operating_cost: float
    gas_heating_cost: float
    estimated_savings_vs_gas: float


@dataclass
class EvSavings:
    km_per_year: float
    annual_charge_kwh: float
    petrol_annual_cost: float
    ev_grid_charge_cost: float
    ev_solar_charge_cost: float  # forgone feed-in credit
    savings_vs_petrol: float
    savings_with_solar: float


@dataclass
class VppIncome:
    provider: str
    daily_credit_annual: float
    event_payments_annual: float
    bundle_discount: float
    total_annual_value: float
    daily_export_kwh: float = 0.0
    is_wholesale: bool = False


@dataclass
class VppComparisonItem:
    provider: str
    program_name: str
    has_gas_bundle: bool
    estimated_annual_value: float
    strategic_fit: str  # excellent, good, moderate, complex


@dataclass
class BatteryRecommendation:
    recommended_kwh: float
    raw_kwh: float
    estimated_cost: float
    reasoning: str


@dataclass
class SolarRecommendation:
    recommended_kw: float
    panel_count: int
    panel_wattage: int
    panel_brand: str
    annual_generation: float  # kWh/yr
    estimated_cost: float


@dataclass
class PaybackAnalysis:
    total_investment: float
    total_rebates: float
    net_investment: float
    total_annual_benefit: float
    payback_years: Optional[float]  # None when there is no annual benefit
    ten_year_savings: float
    twenty_five_year_savings: float


@dataclass
class Co2Reduction:
    current_co2_tonnes: float
    projected_co2_tonnes: float
    reduction_tonnes: float
    reduction_percent: float


@dataclass
class TariffAnalysis:
    peak_rate: float  # cents/kWh
    off_peak_rate: float
    shoulder_rate: float
    feed_in_tariff: float
    daily_supply_charge: float  # cents/day
    peak_usage_percent: float
    off_peak_usage_percent: float
    shoulder_usage_percent: float
    peak_cost_percent: float
    off_peak_cost_percent: float
    shoulder_cost_percent: float
    supply_cost_percent: float
    period_usage_cost: float
    period_supply_cost: float


@dataclass
class HourlyLoad:
    hour: int
    kwh: float
    period: str  # peak, shoulder, off_peak


@dataclass
class DailyLoadProfile:
    hourly_estimate: list[HourlyLoad]
    total_daily_kwh: float
    peak_period_kwh: float
    shoulder_period_kwh: float
    off_peak_period_kwh: float
    solar_window_kwh: float
    solar_generation_hours: str = "7am - 5pm"


@dataclass
class MonthlyGeneration:
    month: str
    generation_kwh: float
    usage_kwh: float
    surplus_kwh: float


@dataclass
class SolarGenerationProfile:
    monthly_generation: list[MonthlyGeneration]
    annual_generation: float  # kWh/yr
    coverage_percent: float
    self_consumption_percent: float


@dataclass
class BatteryCycleHour:
    hour: int
    soc_percent: float
    action: str
    energy_kwh: float  # positive charging, negative discharging


@dataclass
class BatteryCycle:
    daily_cycle: list[BatteryCycleHour]
    usable_capacity_kwh: float
    daily_throughput_kwh: float
    cycles_per_year: int = 365
    depth_of_discharge: int = 90
    round_trip_efficiency: int = 95
    expected_life_years: int = 15


@dataclass
class GridIndependence:
    self_sufficiency_percent: float
    current_grid_dependence: float
    projected_grid_dependence: float
    solar_self_consumed_kwh: float
    battery_supplied_kwh: float
    grid_import_kwh: float
    grid_export_kwh: float


@dataclass
class YearlyProjection:
    year: int
    cost_without_system: float
    cost_with_system: float
    annual_saving: float
    cumulative_saving: float


@dataclass
class SolarSpec:
    system_size: float  # kW
    panel_count: int
    panel_wattage: int
    panel_brand: str
    warranty_years: int = 25


@dataclass
class BatterySpec:
    capacity: float  # kWh
    usable_capacity: float  # kWh
    brand: str
    product: str
    warranty_years: int = 10


@dataclass
class InverterSpec:
    brand: str
    capacity_kw: float
    warranty_years: int = 10


@dataclass
class SystemSpecs:
    solar: SolarSpec
    battery: BatterySpec
    inverter: InverterSpec


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------

@dataclass
class ProposalCalculations:
    daily_average_kwh: float
    monthly_usage_kwh: float
    yearly_usage_kwh: float
    projected_annual_cost: float
    recommended_battery_kwh: float
    total_annual_savings: float
    total_investment: float
    total_rebates: float
    net_investment: float
    payback_years: Optional[float]

    # Bill as read
    bill_retailer: Optional[str] = None
    bill_period_start: Optional[date] = None
    bill_period_end: Optional[date] = None
    bill_days: Optional[int] = None
    bill_total_amount: Optional[float] = None
    bill_daily_supply_charge_cents: Optional[float] = None
    bill_total_usage_kwh: Optional[float] = None
    bill_peak_usage_kwh: Optional[float] = None
    bill_off_peak_usage_kwh: Optional[float] = None
    bill_shoulder_usage_kwh: Optional[float] = None
    bill_solar_exports_kwh: Optional[float] = None
    bill_peak_rate_cents: Optional[float] = None
    bill_off_peak_rate_cents: Optional[float] = None
    bill_shoulder_rate_cents: Optional[float] = None
    bill_feed_in_tariff_cents: Optional[float] = None
    gas_bill_retailer: Optional[str] = None
    gas_bill_period_start: Optional[date] = None
    gas_bill_period_end: Optional[date] = None
    gas_bill_days: Optional[int] = None
    gas_bill_total_amount: Optional[float] = None
    gas_bill_daily_supply_charge_cents: Optional[float] = None
    gas_bill_usage_mj: Optional[float] = None
    gas_bill_rate_cents_mj: Optional[float] = None

    # Usage and charges, AUD/yr
    daily_average_cost: Optional[float] = None
    annual_supply_charge: Optional[float] = None
    annual_usage_charge: Optional[float] = None
    annual_solar_credit: Optional[float] = None

    # Gas
    gas_annual_cost: Optional[float] = None
    gas_kwh_equivalent: Optional[float] = None
    gas_co2_emissions_kg: Optional[float] = None
    gas_daily_cost: Optional[float] = None
    gas_annual_supply_charge: Optional[float] = None

    # Electrification, AUD/yr
    hot_water_savings: Optional[float] = None
    hot_water_current_gas_cost: Optional[float] = None
    hot_water_heat_pump_cost: Optional[float] = None
    hot_water_daily_supply_saved: Optional[float] = None
    heating_cooling_savings: Optional[float] = None
    heating_current_gas_cost: Optional[float] = None
    heating_rc_ac_cost: Optional[float] = None
    cooking_savings: Optional[float] = None
    cooking_current_gas_cost: Optional[float] = None
    cooking_induction_cost: Optional[float] = None
    pool_heat_pump_savings: Optional[float] = None
    pool_recommended_kw: Optional[float] = None
    pool_annual_operating_cost: Optional[float] = None

    # Battery and solar
    battery_product: Optional[str] = None
    battery_estimated_cost: Optional[float] = None
    battery_reasoning: Optional[str] = None
    recommended_solar_kw: Optional[float] = None
    solar_panel_count: Optional[int] = None
    solar_annual_generation: Optional[float] = None  # kWh/yr
    solar_estimated_cost: Optional[float] = None

    # VPP
    selected_vpp_provider: Optional[str] = None
    vpp_annual_value: Optional[float] = None
    vpp_daily_credit_annual: Optional[float] = None
    vpp_event_payments_annual: Optional[float] = None
    vpp_bundle_discount: Optional[float] = None
    vpp_provider_comparison: list[VppComparisonItem] = field(default_factory=list)

    # EV
    ev_petrol_cost: Optional[float] = None
    ev_grid_charge_cost: Optional[float] = None
    ev_solar_charge_cost: Optional[float] = None
    ev_annual_savings: Optional[float] = None
    ev_km_per_year: Optional[float] = None
    ev_consumption_per_100km: Optional[float] = None  # kWh
    ev_petrol_price_per_litre: Optional[float] = None

    # CO2
    co2_current_tonnes: Optional[float] = None
    co2_projected_tonnes: Optional[float] = None
    co2_reduction_tonnes: Optional[float] = None
    co2_reduction_percent: Optional[float] = None

    # Rebates and investment, AUD
    solar_rebate_amount: Optional[float] = None
    battery_rebate_amount: Optional[float] = None
    heat_pump_hw_rebate_amount: Optional[float] = None
    heat_pump_ac_rebate_amount: Optional[float] = None
    ev_charger_rebate_amount: Optional[float] = None
    induction_rebate_amount: Optional[float] = None
    investment_solar: float = 0.0
    investment_battery: float = 0.0
    investment_heat_pump_hw: float = 0.0
    investment_rc_ac: float = 0.0
    investment_induction: float = 0.0
    investment_ev_charger: float = 0.0
    investment_pool_heat_pump: float = 0.0

    # Summary, AUD
    electricity_savings: Optional[float] = None
    gas_savings: Optional[float] = None
    ten_year_savings: Optional[float] = None
    twenty_five_year_savings: Optional[float] = None

    # Chart-ready analytics
    tariff_analysis: Optional[TariffAnalysis] = None
    daily_load_profile: Optional[DailyLoadProfile] = None
    solar_generation_profile: Optional[SolarGenerationProfile] = None
    battery_cycle: Optional[BatteryCycle] = None
    grid_independence: Optional[GridIndependence] = None
    yearly_projection: list[YearlyProjection] = field(default_factory=list)
    system_specs: Optional[SystemSpecs] = None

    def to_record(self) -> dict:
        """camelCase dict for slide and document renderers."""
        return _camelize(asdict(self))


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _camelize(value):
    if isinstance(value, dict):
        return {_camel(k): _camelize(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_camelize(v) for v in value]
    if isinstance(value, date):
        return value.isoformat()
    return value
