"""Solar savings calculator.

Pure functions over a :class:`SiteSettings` record; nothing here touches a
repository.
"""

import math
from dataclasses import dataclass
from typing import Optional

from domain.entities.site_settings import SiteSettings

# Typical panel lifespan used for lifetime totals
LIFETIME_YEARS = 25
# kg of CO2 avoided per kWh generated (Indian grid average)
CO2_KG_PER_KWH = 0.85


@dataclass(frozen=True)
class SavingsResult:
    """Projected system size, cost and savings for one household."""

    current_monthly_cost: float
    recommended_system_size: int
    system_cost: float
    subsidy_amount: float
    net_cost: float
    monthly_generation: float
    monthly_savings: float
    yearly_savings: float
    savings_percentage: float
    payback_period_years: float
    lifetime_savings: float
    co2_reduction_kg: float


def compute_savings(
    monthly_input: float,
    input_is_energy: bool,
    settings: SiteSettings,
) -> Optional[SavingsResult]:
    """
    Project savings from a monthly bill or monthly consumption.

    Args:
        monthly_input: Monthly bill (currency) or consumption (kWh)
        input_is_energy: True when ``monthly_input`` is in kWh
        settings: Tariff, yield and cost assumptions

    Returns:
        SavingsResult, or None for non-positive input or assumptions that
        make the projection meaningless
    """
    if not math.isfinite(monthly_input) or monthly_input <= 0:
        return None

    tariff = settings.tariff_per_kwh
    yield_per_kw = settings.kwh_per_kw_per_month
    if not (math.isfinite(tariff) and math.isfinite(yield_per_kw)):
        return None
    if tariff <= 0 or yield_per_kw <= 0:
        return None

    if input_is_energy:
        monthly_energy = monthly_input
        monthly_cost = monthly_input * tariff
    else:
        monthly_energy = monthly_input / tariff
        monthly_cost = monthly_input

    required_kw = monthly_energy / yield_per_kw
    if not math.isfinite(required_kw):
        return None
    size = math.ceil(required_kw)

    system_cost = size * settings.system_cost_per_kw
    subsidy = system_cost * settings.subsidy_percentage / 100
    net_cost = system_cost - subsidy

    monthly_generation = size * yield_per_kw
    monthly_savings = monthly_generation * tariff
    yearly_savings = monthly_savings * 12

    savings_percentage = min(100.0, monthly_savings / monthly_cost * 100)
    payback = net_cost / yearly_savings if yearly_savings else math.inf

    maintenance_total = size * settings.maintenance_cost_per_kw_year * LIFETIME_YEARS
    lifetime_savings = yearly_savings * LIFETIME_YEARS - net_cost - maintenance_total
    co2_reduction = monthly_generation * 12 * LIFETIME_YEARS * CO2_KG_PER_KWH

    return SavingsResult(
        current_monthly_cost=monthly_cost,
        recommended_system_size=size,
        system_cost=system_cost,
        subsidy_amount=subsidy,
        net_cost=net_cost,
        monthly_generation=monthly_generation,
        monthly_savings=monthly_savings,
        yearly_savings=yearly_savings,
        savings_percentage=savings_percentage,
        payback_period_years=payback,
        lifetime_savings=lifetime_savings,
        co2_reduction_kg=co2_reduction,
    )
