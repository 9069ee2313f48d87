# DataFrame views of the analytics series, one row per chart point

import pandas as pd

from .schemas import DailyLoadProfile, SolarGenerationProfile, VppComparisonItem, YearlyProjection


def projection_frame(rows: list[YearlyProjection]) -> pd.DataFrame:
    return pd.DataFrame([{
        "Year": r.year,
        "Cost Without System ($)": round(r.cost_without_system, 2),
        "Cost With System ($)": round(r.cost_with_system, 2),
        "Annual Saving ($)": round(r.annual_saving, 2),
        "Cumulative Saving ($)": round(r.cumulative_saving, 2),
    } for r in rows])


def comparison_frame(items: list[VppComparisonItem]) -> pd.DataFrame:
    rows = []
    for rank, item in enumerate(items, 1):
        rows.append({
            "Rank": rank,
            "Provider": item.provider,
            "Program": item.program_name,
            "Gas Bundle": "Yes" if item.has_gas_bundle else "No",
            "Annual Value ($/yr)": round(item.estimated_annual_value, 2),
            "Strategic Fit": item.strategic_fit.capitalize(),
        })
    return pd.DataFrame(rows, columns=["Rank", "Provider", "Program", "Gas Bundle", "Annual Value ($/yr)",
                                       "Strategic Fit"])


def monthly_generation_frame(profile: SolarGenerationProfile) -> pd.DataFrame:
    return pd.DataFrame([{
        "Month": m.month,
        "Generation (kWh)": round(m.generation_kwh, 1),
        "Usage (kWh)": round(m.usage_kwh, 1),
        "Surplus (kWh)": round(m.surplus_kwh, 1),
    } for m in profile.monthly_generation])


def hourly_load_frame(profile: DailyLoadProfile) -> pd.DataFrame:
    df = pd.DataFrame([{"Hour": h.hour, "Load (kWh)": h.kwh, "Period": h.period}
                       for h in profile.hourly_estimate])
    df["Load (kWh)"] = df["Load (kWh)"].round(3)
    return df
