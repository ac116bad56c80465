from __future__ import annotations

from typing import Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, PositiveFloat, confloat, field_validator, model_validator


class SiteConfiguration(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    panels_count: int = Field(..., ge=0, alias="panelsCount", description="Number of panels in this layout.")
    yearly_energy_dc_kwh: confloat(ge=0) = Field(
        ..., alias="yearlyEnergyDcKwh", description="Modeled annual DC output for exactly this panel count (kWh)."
    )


class SolarPotentialData(BaseModel):
    """
    Site catalog as returned by a building-insights provider.

    Only ``solar_panel_configs`` feeds the projection; the remaining fields
    describe the roof and are carried through for the caller.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    max_array_panels_count: int = Field(0, ge=0, alias="maxArrayPanelsCount")
    max_array_area_meters2: confloat(ge=0) = Field(0.0, alias="maxArrayAreaMeters2")
    max_sunshine_hours_per_year: confloat(ge=0) = Field(0.0, alias="maxSunshineHoursPerYear")
    carbon_offset_factor_kg_per_mwh: confloat(ge=0) = Field(0.0, alias="carbonOffsetFactorKgPerMwh")
    panel_capacity_watts: confloat(ge=0) = Field(
        0.0, alias="panelCapacityWatts", description="Provider's panel rating; the projection uses RunParameters instead."
    )
    panel_height_meters: confloat(ge=0) = Field(0.0, alias="panelHeightMeters")
    panel_width_meters: confloat(ge=0) = Field(0.0, alias="panelWidthMeters")
    panel_lifetime_years: int = Field(20, ge=0, alias="panelLifetimeYears")
    solar_panel_configs: Tuple[SiteConfiguration, ...] = Field(
        default_factory=tuple, alias="solarPanelConfigs", description="Discrete supported array layouts."
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data):
        # Providers send explicit nulls for unknown values; treat them as missing.
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    @field_validator("solar_panel_configs", mode="after")
    @classmethod
    def _unique_counts(cls, configs: Tuple[SiteConfiguration, ...]) -> Tuple[SiteConfiguration, ...]:
        counts = [c.panels_count for c in configs]
        if len(set(counts)) != len(counts):
            raise ValueError("solar_panel_configs must not repeat a panels_count")
        return configs


class RunParameters(BaseModel):
    """Fixed economic and physical assumptions for a deployment."""

    model_config = ConfigDict(frozen=True)

    # Basic settings
    energy_cost_per_kwh: PositiveFloat = Field(0.38, description="Grid electricity price (currency/kWh).")
    panel_capacity_watts: PositiveFloat = Field(290.0, description="Nominal panel rating used for sizing (W).")
    cost_per_kw_installed: confloat(ge=0) = Field(1557.0, description="Turnkey installed cost (currency/kW).")
    solar_incentives: float = Field(0.0, description="Flat amount subtracted from the lifetime cost with solar.")
    installation_life_span: int = Field(25, ge=1, description="Modeled service life (years).")

    # Advanced settings
    dc_to_ac_derate: confloat(gt=0, le=1) = Field(0.85, description="Fraction of DC output delivered as AC.")
    efficiency_depreciation_factor: confloat(gt=0, le=1) = Field(
        0.995, description="Year-over-year production retention factor."
    )
    cost_increase_factor: PositiveFloat = Field(1.015, description="Year-over-year electricity price growth.")
    discount_rate: PositiveFloat = Field(1.04, description="Year-over-year present-value divisor.")


class FinancialProjection(BaseModel):
    model_config = ConfigDict(frozen=True)

    yearly_energy_dc_kwh: float
    # Percent of consumption met by year-0 DC output; inf/nan when the bill is zero.
    yearly_energy_coverage: float
    total_cost_without_solar: float
    total_cost_with_solar: float
    installation_cost: float
    years_until_break_even: int
    lifetime_savings: float


class NearestConfigurations(BaseModel):
    model_config = ConfigDict(frozen=True)

    lower: Optional[int] = Field(None, description="Greatest available count strictly below the request.")
    higher: Optional[int] = Field(None, description="Smallest available count strictly above the request.")


class Recommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    verdict: Literal["not_cost_effective", "slow_payback", "good", "excellent"]
    text: str


class Evaluation(BaseModel):
    """Outcome of one interactive recalculation."""

    model_config = ConfigDict(frozen=True)

    panels_count: int
    monthly_bill: float
    projection: Optional[FinancialProjection] = None
    warning: Optional[str] = None
    recommendation: Optional[Recommendation] = None
