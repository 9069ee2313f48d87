import logging
from typing import Optional

from ..config import DEFAULT_ASSUMPTIONS, EngineAssumptions
from ..rules.au_rules import is_vpp_eligible
from ..schemas import VppComparisonItem, VppIncome, VppProvider
from ..scoring import rank_vpp_options, strategic_fit

logger = logging.getLogger(__name__)


def calculate_vpp_income(provider: VppProvider, battery_kwh: Optional[float] = None,
                         assumptions: EngineAssumptions = DEFAULT_ASSUMPTIONS) -> VppIncome:
    daily_credit_annual = (provider.daily_credit or 0.0) * 365
    events = provider.estimated_events_per_year
    if events is None:
        events = assumptions.vpp_default_events_per_year
    event_payments_annual = (provider.event_payment or 0.0) * events
    bundle_discount = provider.bundle_discount or 0.0

    if provider.is_wholesale:
        battery = battery_kwh or assumptions.battery_vpp_minimum_kwh
        daily_export = battery * assumptions.battery_dod * assumptions.vpp_export_fraction
        gross = daily_export * provider.base_rate_cents / 100.0 * 365
        fees = (provider.monthly_fee or 0.0) * 12
        return VppIncome(
            provider=provider.name,
            daily_credit_annual=0.0,
            event_payments_annual=0.0,
            bundle_discount=bundle_discount,
            total_annual_value=max(0.0, gross - fees) + bundle_discount,
            daily_export_kwh=daily_export,
            is_wholesale=True,
        )

    return VppIncome(
        provider=provider.name,
        daily_credit_annual=daily_credit_annual,
        event_payments_annual=event_payments_annual,
        bundle_discount=bundle_discount,
        total_annual_value=daily_credit_annual + event_payments_annual + bundle_discount,
    )


def select_vpp_provider(providers: list[VppProvider], state: str, battery_kwh: Optional[float] = None,
                        customer_has_gas: bool = False,
                        assumptions: EngineAssumptions = DEFAULT_ASSUMPTIONS
                        ) -> tuple[list[VppComparisonItem], Optional[VppIncome]]:
    """Ranked comparison plus the income of the top-ranked provider, if any."""
    items = []
    incomes = {}
    for provider in providers:
        eligible, reason = is_vpp_eligible(provider, state, battery_kwh)
        if not eligible:
            logger.debug("Skipping VPP %s: %s", provider.name, reason)
            continue
        income = calculate_vpp_income(provider, battery_kwh, assumptions)
        item = VppComparisonItem(
            provider=provider.name,
            program_name=provider.program_name or "",
            has_gas_bundle=bool(provider.has_gas_bundle),
            estimated_annual_value=income.total_annual_value,
            strategic_fit=strategic_fit(income.total_annual_value, income.is_wholesale),
        )
        items.append(item)
        incomes[id(item)] = income
    ranked = rank_vpp_options(items, customer_has_gas)
    return ranked, (incomes[id(ranked[0])] if ranked else None)


def compare_vpp_providers(providers: list[VppProvider], state: str, battery_kwh: Optional[float] = None,
                          customer_has_gas: bool = False,
                          assumptions: EngineAssumptions = DEFAULT_ASSUMPTIONS) -> list[VppComparisonItem]:
    return select_vpp_provider(providers, state, battery_kwh, customer_has_gas, assumptions)[0]
