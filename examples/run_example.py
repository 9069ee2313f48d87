import logging
import os
import sys

from dotenv import load_dotenv

from proposal_engine.config import load_assumptions
from proposal_engine.engine.proposal import generate_full_calculations
from proposal_engine.ingest import load_bills, load_state_rebates, load_vpp_providers, parse_customer
from proposal_engine.schemas import InvalidBillError
from proposal_engine.tables import comparison_frame, projection_frame

HERE = os.path.dirname(os.path.abspath(__file__))


def main():
    load_dotenv()
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    args = sys.argv[1:]
    bills_file = args[0] if len(args) > 0 else os.path.join(HERE, "sample_bills.csv")
    providers_file = args[1] if len(args) > 1 else os.path.join(HERE, "sample_vpp_providers.csv")
    rebates_file = args[2] if len(args) > 2 else os.path.join(HERE, "sample_rebates.csv")

    customer = parse_customer({
        "full_name": "Sample Household",
        "state": os.getenv("CUSTOMER_STATE", "VIC"),
        "has_gas": True,
        "gas_appliances": "Hot Water;Ducted Heating;Cooktop",
        "has_pool": False,
        "ev_interest": "interested",
    })

    bills = load_bills(bills_file)
    electricity = next((b for b in bills if b.bill_type == "electricity"), None)
    gas = next((b for b in bills if b.bill_type == "gas"), None)
    if electricity is None:
        print(f"No electricity bill found in {bills_file}")
        return 1
    providers = [p for p in load_vpp_providers(providers_file) if customer.state in p.available_states]
    rebates = [r for r in load_state_rebates(rebates_file) if r.state == customer.state]

    try:
        calcs = generate_full_calculations(customer, electricity, gas, providers, rebates, load_assumptions())
    except InvalidBillError as e:
        print(f"Bill can't be used: {e}")
        return 1

    print(f"\nProposal numbers for {customer.full_name} ({customer.state})")
    print(f"Usage: {calcs.daily_average_kwh} kWh/day, {calcs.yearly_usage_kwh} kWh/yr, "
          f"${calcs.projected_annual_cost}/yr")
    print(f"Recommended: {calcs.recommended_solar_kw} kW solar ({calcs.solar_panel_count} panels), "
          f"{calcs.recommended_battery_kwh} kWh battery")
    print(f"Investment: ${calcs.total_investment} less ${calcs.total_rebates} rebates = ${calcs.net_investment}")
    payback = f"{calcs.payback_years} years" if calcs.payback_years is not None else "never"
    print(f"Annual benefit: ${calcs.total_annual_savings}; payback {payback}")
    print(f"CO2: {calcs.co2_current_tonnes} t -> {calcs.co2_projected_tonnes} t "
          f"({calcs.co2_reduction_percent}% reduction)")

    print("\nVPP comparison:")
    print(comparison_frame(calcs.vpp_provider_comparison).to_string(index=False))
    print("\n25-year projection (every 5th year):")
    print(projection_frame(calcs.yearly_projection).iloc[4::5].to_string(index=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
