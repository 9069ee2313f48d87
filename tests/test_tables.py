from proposal_engine.engine.analytics import (calculate_25_year_projection, calculate_solar_generation_profile,
                                              estimate_daily_load_profile)
from proposal_engine.engine.vpp import compare_vpp_providers
from proposal_engine.tables import comparison_frame, hourly_load_frame, monthly_generation_frame, projection_frame


def test_projection_frame():
    df = projection_frame(calculate_25_year_projection(1000, 2000, 5000))
    assert len(df) == 25
    assert df["Year"].tolist()[:3] == [1, 2, 3]
    assert df["Cumulative Saving ($)"].iloc[0] == -4000


def test_comparison_frame(providers):
    df = comparison_frame(compare_vpp_providers(providers, "VIC", 10))
    assert df["Rank"].tolist() == [1, 2, 3]
    assert df["Provider"].iloc[0] == "Amber"
    assert df["Strategic Fit"].iloc[0] == "Complex"
    assert df["Gas Bundle"].tolist() == ["No", "Yes", "Yes"]


def test_empty_comparison_keeps_columns():
    df = comparison_frame([])
    assert df.empty
    assert "Annual Value ($/yr)" in df.columns


def test_monthly_generation_frame():
    df = monthly_generation_frame(calculate_solar_generation_profile(6.6, 7300))
    assert df["Month"].tolist()[0] == "Jan"
    assert len(df) == 12


def test_hourly_load_frame():
    df = hourly_load_frame(estimate_daily_load_profile(20, has_ev=True, has_pool=False))
    assert len(df) == 24
    assert set(df["Period"]) == {"peak", "shoulder", "off_peak"}
