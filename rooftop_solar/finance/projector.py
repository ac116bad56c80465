from __future__ import annotations

import logging
import math
from typing import List, Optional

import pandas as pd

from .matcher import find_configuration
from .models import FinancialProjection, RunParameters, SolarPotentialData
from .simulate import YearlySchedule, simulate_lifetime

logger = logging.getLogger(__name__)


class FinancialProjector:
    """
    Lifetime cost/savings projection for a discrete panel configuration.

    The projector is bound to one immutable RunParameters set and keeps no
    other state, so a single instance can be shared freely.
    """

    def __init__(self, params: Optional[RunParameters] = None):
        self.params = params or RunParameters()

    def installation_size_kw(self, panels_count: int) -> float:
        return panels_count * self.params.panel_capacity_watts / 1000

    def installation_cost(self, panels_count: int) -> float:
        return self.installation_size_kw(panels_count) * self.params.cost_per_kw_installed

    def yearly_kwh_consumption(self, monthly_bill: float) -> float:
        monthly_kwh = monthly_bill / self.params.energy_cost_per_kwh
        return monthly_kwh * 12

    def schedule(
        self, catalog: SolarPotentialData, panels_count: int, monthly_bill: float
    ) -> Optional[YearlySchedule]:
        config = find_configuration(catalog.solar_panel_configs, panels_count)
        if config is None:
            return None
        return simulate_lifetime(
            yearly_energy_dc_kwh=config.yearly_energy_dc_kwh,
            yearly_kwh_consumption=self.yearly_kwh_consumption(monthly_bill),
            monthly_bill=monthly_bill,
            params=self.params,
        )

    def project(
        self, catalog: SolarPotentialData, panels_count: int, monthly_bill: float
    ) -> Optional[FinancialProjection]:
        """
        Project lifetime costs for ``panels_count`` panels.

        Returns None when the catalog has no configuration with exactly that
        many panels; callers use find_nearest_configurations() to suggest one.
        """
        config = find_configuration(catalog.solar_panel_configs, panels_count)
        if config is None:
            logger.debug("No configuration with %d panels", panels_count)
            return None

        p = self.params
        installation_cost = self.installation_cost(panels_count)
        consumption = self.yearly_kwh_consumption(monthly_bill)

        sched = simulate_lifetime(
            yearly_energy_dc_kwh=config.yearly_energy_dc_kwh,
            yearly_kwh_consumption=consumption,
            monthly_bill=monthly_bill,
            params=p,
        )

        remaining_utility_bill = float(sched.bill_with_solar.sum())
        total_cost_with_solar = installation_cost + remaining_utility_bill - p.solar_incentives
        total_cost_without_solar = float(sched.cost_without_solar.sum())

        # Coverage compares year-0 DC output, not the derated AC curve used for costs.
        if consumption != 0:
            coverage = config.yearly_energy_dc_kwh / consumption * 100
        else:
            coverage = math.inf if config.yearly_energy_dc_kwh > 0 else math.nan

        return FinancialProjection(
            yearly_energy_dc_kwh=config.yearly_energy_dc_kwh,
            yearly_energy_coverage=coverage,
            total_cost_without_solar=total_cost_without_solar,
            total_cost_with_solar=total_cost_with_solar,
            installation_cost=installation_cost,
            years_until_break_even=sched.break_even_year(installation_cost),
            lifetime_savings=total_cost_without_solar - total_cost_with_solar,
        )

    def sweep(self, catalog: SolarPotentialData, monthly_bill: float) -> pd.DataFrame:
        """One projection row per catalog configuration, ordered by panel count."""
        rows: List[dict] = []
        for config in sorted(catalog.solar_panel_configs, key=lambda c: c.panels_count):
            projection = self.project(catalog, config.panels_count, monthly_bill)
            rows.append({"panels_count": config.panels_count, **projection.model_dump()})
        columns = ["panels_count", *FinancialProjection.model_fields]
        return pd.DataFrame(rows, columns=columns)


def project(
    catalog: SolarPotentialData,
    panels_count: int,
    monthly_bill: float,
    params: Optional[RunParameters] = None,
) -> Optional[FinancialProjection]:
    return FinancialProjector(params).project(catalog, panels_count, monthly_bill)
