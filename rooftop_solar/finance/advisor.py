"""
Caller-side helpers for exploring panel counts interactively.

These compose the projector and the matcher the way a UI does: pick a
starting panel count, keep requests inside the catalog range, turn a
missing configuration into guidance, and grade a successful projection.
"""

from __future__ import annotations

import logging
from typing import Optional

from .catalog import panel_range
from .matcher import find_nearest_configurations
from .models import Evaluation, FinancialProjection, NearestConfigurations, Recommendation, SolarPotentialData
from .projector import FinancialProjector

logger = logging.getLogger(__name__)

DEFAULT_INITIAL_PANELS = 4
DEFAULT_MONTHLY_BILL = 100.0


def initial_panel_count(catalog: SolarPotentialData, preferred: int = DEFAULT_INITIAL_PANELS) -> Optional[int]:
    bounds = panel_range(catalog.solar_panel_configs)
    if bounds is None:
        return None
    return min(preferred, bounds[1])


def clamp_panel_count(panels: int, catalog: SolarPotentialData) -> int:
    bounds = panel_range(catalog.solar_panel_configs)
    if bounds is None:
        return panels
    lo, hi = bounds
    return max(lo, min(hi, panels))


def describe_nearest(nearest: NearestConfigurations) -> str:
    if nearest.lower is None and nearest.higher is None:
        return "No valid panel configurations found."
    if nearest.lower is None:
        return f"The lowest available panel configuration is {nearest.higher} panels."
    if nearest.higher is None:
        return f"The highest available panel configuration is {nearest.lower} panels."
    return f"Nearest configurations: {nearest.lower} panels (lower) and {nearest.higher} panels (higher)."


def recommend(projection: FinancialProjection) -> Recommendation:
    if projection.lifetime_savings <= 0:
        return Recommendation(
            verdict="not_cost_effective",
            text="This solar installation is not cost-effective. "
            "Consider alternatives or wait for more favorable conditions.",
        )
    if projection.years_until_break_even > 15:
        return Recommendation(
            verdict="slow_payback",
            text="This installation is profitable in the long term, but it takes a significant time "
            "to break even. Consider if you'll stay in the property long enough to benefit.",
        )
    if projection.years_until_break_even > 10:
        return Recommendation(
            verdict="good",
            text="This installation is a good long-term investment. It will take some time to break "
            "even, but the lifetime savings are substantial.",
        )
    return Recommendation(
        verdict="excellent",
        text="This solar installation is an excellent investment! "
        "It offers quick returns and substantial lifetime savings.",
    )


def evaluate(
    projector: FinancialProjector,
    catalog: SolarPotentialData,
    panels_count: int,
    monthly_bill: float,
) -> Evaluation:
    if monthly_bill < 0:
        raise ValueError("monthly_bill must be non-negative")

    projection = projector.project(catalog, panels_count, monthly_bill)
    if projection is None:
        nearest = find_nearest_configurations(catalog.solar_panel_configs, panels_count)
        warning = describe_nearest(nearest)
        logger.info("No configuration for %d panels: %s", panels_count, warning)
        return Evaluation(panels_count=panels_count, monthly_bill=monthly_bill, warning=warning)

    return Evaluation(
        panels_count=panels_count,
        monthly_bill=monthly_bill,
        projection=projection,
        recommendation=recommend(projection),
    )
