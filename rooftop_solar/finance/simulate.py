from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd

from .models import RunParameters


@dataclass(frozen=True)
class YearlySchedule:
    production_ac_kwh: np.ndarray   # derated, degraded output per year
    bill_with_solar: np.ndarray     # discounted utility bill, clamped at 0
    cost_without_solar: np.ndarray  # discounted bill with no array

    @property
    def years(self) -> int:
        return int(len(self.production_ac_kwh))

    @property
    def yearly_savings(self) -> np.ndarray:
        return self.cost_without_solar - self.bill_with_solar

    @property
    def cumulative_savings(self) -> np.ndarray:
        return np.cumsum(self.yearly_savings)

    def break_even_year(self, installation_cost: float) -> int:
        """
        First 1-based year whose cumulative savings cover the installation.

        Falls back to the full horizon when savings never catch up, so a
        result equal to ``years`` does not by itself mean break-even happened.
        """
        reached = np.nonzero(self.cumulative_savings >= installation_cost)[0]
        if reached.size == 0:
            return self.years
        return int(reached[0]) + 1

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "year": np.arange(1, self.years + 1),
                "production_ac_kwh": self.production_ac_kwh,
                "bill_with_solar": self.bill_with_solar,
                "cost_without_solar": self.cost_without_solar,
                "yearly_savings": self.yearly_savings,
                "cumulative_savings": self.cumulative_savings,
            }
        )


def simulate_lifetime(
    *,
    yearly_energy_dc_kwh: float,
    yearly_kwh_consumption: float,
    monthly_bill: float,
    params: RunParameters,
) -> YearlySchedule:
    """
    Year-by-year production and discounted cost over the installation life.

    Rules:
    - Production starts at the derated DC figure and decays geometrically.
    - Consumption is flat; a year that produces more than it consumes costs
      nothing. Surplus is never credited or carried over.
    - Both cost streams use the same price growth and discounting.
    """
    years = np.arange(params.installation_life_span, dtype=float)

    initial_ac_kwh = float(yearly_energy_dc_kwh) * params.dc_to_ac_derate
    production = initial_ac_kwh * np.power(params.efficiency_depreciation_factor, years)

    price_growth = np.power(params.cost_increase_factor, years)
    discount = np.power(params.discount_rate, years)

    bill_energy_kwh = float(yearly_kwh_consumption) - production
    bills = np.maximum(bill_energy_kwh * params.energy_cost_per_kwh * price_growth / discount, 0.0)

    without_solar = float(monthly_bill) * 12 * price_growth / discount

    return YearlySchedule(
        production_ac_kwh=production,
        bill_with_solar=bills,
        cost_without_solar=without_solar,
    )
