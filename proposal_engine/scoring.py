import logging

from .schemas import VppComparisonItem

logger = logging.getLogger(__name__)

# AUD/yr lower bounds, best first
FIT_THRESHOLDS = [("excellent", 500.0), ("good", 300.0)]


def strategic_fit(annual_value: float, is_wholesale: bool = False) -> str:
    # Wholesale income swings with the spot market
    if is_wholesale:
        return "complex"
    for tier, floor in FIT_THRESHOLDS:
        if annual_value >= floor:
            return tier
    return "moderate"


def rank_vpp_options(items: list[VppComparisonItem], customer_has_gas: bool = False) -> list[VppComparisonItem]:
    def sort_key(item: VppComparisonItem):
        gas_first = 0 if (customer_has_gas and item.has_gas_bundle) else 1
        return (-round(item.estimated_annual_value, 2), gas_first, item.provider)

    ranked = sorted(items, key=sort_key)
    if ranked:
        logger.debug("Top VPP option: %s ($%.2f/yr)", ranked[0].provider, ranked[0].estimated_annual_value)
    return ranked
