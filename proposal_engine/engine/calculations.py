from typing import Optional

from ..config import DEFAULT_ASSUMPTIONS, EngineAssumptions
from ..schemas import Bill, Co2Reduction, GasAnalysis, InvalidBillError, PaybackAnalysis, UsageProjection

ELECTRICITY_FIELDS = ("total_usage_kwh", "peak_usage_kwh", "off_peak_usage_kwh", "shoulder_usage_kwh")
GAS_FIELDS = ("gas_usage_mj",)


def billing_days(bill: Bill) -> int:
    if not bill.billing_days or bill.billing_days <= 0:
        raise InvalidBillError(f"{bill.bill_type} bill has no positive billing day count ({bill.billing_days!r})")
    return bill.billing_days


def annualise(bill: Bill) -> float:
    """Factor that scales a billing-period quantity to a year."""
    return 365 / billing_days(bill)


def _require(bill: Bill, *names: str) -> None:
    missing = [n for n in names if getattr(bill, n) is None]
    if missing:
        raise InvalidBillError(f"{bill.bill_type} bill is missing {', '.join(missing)}")


def validate_electricity_bill(bill: Bill) -> Bill:
    if bill.bill_type != "electricity":
        raise InvalidBillError(f"Expected an electricity bill, got {bill.bill_type!r}")
    if any(getattr(bill, n) is not None for n in GAS_FIELDS):
        raise InvalidBillError("Electricity bill carries gas usage")
    billing_days(bill)
    _require(bill, "total_usage_kwh", "total_amount")
    return bill


def validate_gas_bill(bill: Bill) -> Bill:
    if bill.bill_type != "gas":
        raise InvalidBillError(f"Expected a gas bill, got {bill.bill_type!r}")
    if any(getattr(bill, n) is not None for n in ELECTRICITY_FIELDS):
        raise InvalidBillError("Gas bill carries electricity usage")
    billing_days(bill)
    _require(bill, "gas_usage_mj", "total_amount")
    return bill


def calculate_usage_projections(bill: Bill) -> UsageProjection:
    validate_electricity_bill(bill)
    days = bill.billing_days
    daily_kwh = bill.total_usage_kwh / days
    daily_cost = bill.total_amount / days
    return UsageProjection(
        daily_average_kwh=daily_kwh,
        monthly_usage_kwh=daily_kwh * 30,
        yearly_usage_kwh=daily_kwh * 365,
        daily_average_cost=daily_cost,
        projected_annual_cost=daily_cost * 365,
    )


def calculate_gas_analysis(bill: Bill, assumptions: EngineAssumptions = DEFAULT_ASSUMPTIONS) -> GasAnalysis:
    validate_gas_bill(bill)
    scale = annualise(bill)
    daily_cost = bill.total_amount / bill.billing_days
    return GasAnalysis(
        daily_gas_cost=daily_cost,
        annual_gas_cost=daily_cost * 365,
        annual_gas_mj=bill.gas_usage_mj * scale,
        gas_kwh_equivalent=bill.gas_usage_mj * assumptions.gas_mj_to_kwh,
        # Metered MJ covers the billing period only
        co2_emissions_kg=bill.gas_usage_mj * assumptions.gas_co2_kg_per_mj * scale,
    )


def calculate_payback(investments: dict, rebates: dict, annual_benefits: dict) -> PaybackAnalysis:
    total_investment = sum(v or 0.0 for v in investments.values())
    total_rebates = sum(v or 0.0 for v in rebates.values())
    net_investment = total_investment - total_rebates
    total_benefit = sum(v or 0.0 for v in annual_benefits.values())
    payback_years: Optional[float] = None
    if total_benefit > 0:
        payback_years = round(net_investment / total_benefit, 1)
    return PaybackAnalysis(
        total_investment=total_investment,
        total_rebates=total_rebates,
        net_investment=net_investment,
        total_annual_benefit=total_benefit,
        payback_years=payback_years,
        ten_year_savings=total_benefit * 10 - net_investment,
        twenty_five_year_savings=total_benefit * 25 - net_investment,
    )


def calculate_co2_reduction(electricity_kwh: float, gas_mj: float, solar_generation_kwh: float,
                            gas_eliminated: bool,
                            assumptions: EngineAssumptions = DEFAULT_ASSUMPTIONS) -> Co2Reduction:
    # kg to tonnes
    electricity_co2 = electricity_kwh * assumptions.grid_co2_kg_per_kwh / 1000.0
    gas_co2 = gas_mj * assumptions.gas_co2_kg_per_mj / 1000.0
    current = electricity_co2 + gas_co2

    grid_kwh = max(0.0, electricity_kwh - solar_generation_kwh)
    projected = grid_kwh * assumptions.grid_co2_kg_per_kwh / 1000.0
    if not gas_eliminated:
        projected += gas_co2
    projected = max(0.0, projected)

    reduction = current - projected
    percent = (reduction / current * 100.0) if current > 0 else 0.0
    return Co2Reduction(
        current_co2_tonnes=current,
        projected_co2_tonnes=projected,
        reduction_tonnes=reduction,
        reduction_percent=min(100.0, max(0.0, percent)),
    )
