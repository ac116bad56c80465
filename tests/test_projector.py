import math

import numpy as np
import pytest

from rooftop_solar.finance import FinancialProjector, RunParameters, SolarPotentialData, project
from rooftop_solar.finance.simulate import simulate_lifetime


def _discounted_bill_total(monthly_bill: float, years: int = 25) -> float:
    return sum(monthly_bill * 12 * 1.015**y / 1.04**y for y in range(years))


def test_surplus_year_is_clamped_to_zero(projector, single_catalog):
    sched = projector.schedule(single_catalog, 10, 100)

    assert projector.yearly_kwh_consumption(100) == pytest.approx(3157.8947, rel=1e-6)
    assert sched.production_ac_kwh[0] == pytest.approx(3400.0)
    assert sched.bill_with_solar[0] == 0.0
    assert np.all(sched.bill_with_solar >= 0)


def test_degraded_output_eventually_leaves_a_bill(projector, single_catalog):
    sched = projector.schedule(single_catalog, 10, 100)

    # 3400 * 0.995**y drops below 3157.9 kWh from year index 15
    assert np.all(sched.bill_with_solar[:15] == 0)
    assert np.all(sched.bill_with_solar[15:] > 0)
    assert np.all(np.diff(sched.production_ac_kwh) < 0)


def test_headline_figures(projector, single_catalog):
    f = projector.project(single_catalog, 10, 100)

    assert f is not None
    assert f.installation_cost == pytest.approx(4515.30)
    assert f.yearly_energy_dc_kwh == 4000
    assert f.yearly_energy_coverage == pytest.approx(4000 / 3157.8947 * 100, rel=1e-6)
    assert f.total_cost_without_solar == pytest.approx(_discounted_bill_total(100))
    assert f.years_until_break_even == 4
    assert f.lifetime_savings > 0


def test_coverage_uses_dc_output_not_derated_ac(projector, single_catalog):
    f = projector.project(single_catalog, 10, 100)

    ac_coverage = 4000 * 0.85 / projector.yearly_kwh_consumption(100) * 100
    assert f.yearly_energy_coverage > 100
    assert f.yearly_energy_coverage != pytest.approx(ac_coverage)


def test_total_with_solar_adds_remaining_bills(projector, single_catalog):
    sched = projector.schedule(single_catalog, 10, 100)
    f = projector.project(single_catalog, 10, 100)

    assert f.total_cost_with_solar == pytest.approx(f.installation_cost + float(sched.bill_with_solar.sum()))


def test_zero_bill_never_pays_back(projector, single_catalog):
    f = projector.project(single_catalog, 10, 0)

    assert f.total_cost_without_solar == 0
    assert f.total_cost_with_solar == pytest.approx(f.installation_cost)
    assert f.lifetime_savings == pytest.approx(-f.installation_cost)
    assert f.years_until_break_even == 25
    assert math.isinf(f.yearly_energy_coverage)


def test_zero_bill_and_zero_output_coverage_is_nan(projector):
    catalog = SolarPotentialData.model_validate({"solarPanelConfigs": [{"panelsCount": 0, "yearlyEnergyDcKwh": 0}]})

    f = projector.project(catalog, 0, 0)

    assert math.isnan(f.yearly_energy_coverage)
    assert f.installation_cost == 0
    assert f.years_until_break_even == 1


def test_missing_panel_count_is_not_found(projector, single_catalog):
    assert projector.project(single_catalog, 11, 100) is None
    assert projector.schedule(single_catalog, 11, 100) is None


def test_empty_catalog_is_not_found(projector):
    assert projector.project(SolarPotentialData(), 4, 100) is None


@pytest.mark.parametrize("panels", [4, 8, 12, 20, 30])
@pytest.mark.parametrize("bill", [0, 25, 100, 400])
def test_projection_invariants(projector, site_catalog, panels, bill):
    f = projector.project(site_catalog, panels, bill)

    assert f.lifetime_savings == f.total_cost_without_solar - f.total_cost_with_solar
    assert 1 <= f.years_until_break_even <= projector.params.installation_life_span
    assert np.all(projector.schedule(site_catalog, panels, bill).bill_with_solar >= 0)


def test_projection_is_deterministic(projector, site_catalog):
    a = projector.project(site_catalog, 12, 137.5)
    b = FinancialProjector().project(site_catalog, 12, 137.5)

    assert a == b
    assert a.model_dump() == b.model_dump()


def test_incentive_reduces_cost_with_solar(single_catalog):
    base = project(single_catalog, 10, 100)
    subsidised = project(single_catalog, 10, 100, RunParameters(solar_incentives=1000))

    assert subsidised.total_cost_with_solar == pytest.approx(base.total_cost_with_solar - 1000)
    assert subsidised.lifetime_savings == pytest.approx(base.lifetime_savings + 1000)
    # break-even compares savings to the gross installation cost
    assert subsidised.years_until_break_even == base.years_until_break_even


def test_alternate_assumptions_are_injected(single_catalog):
    cheap_power = FinancialProjector(RunParameters(energy_cost_per_kwh=0.19, installation_life_span=10))

    f = cheap_power.project(single_catalog, 10, 100)
    sched = cheap_power.schedule(single_catalog, 10, 100)

    assert sched.years == 10
    assert f.yearly_energy_coverage == pytest.approx(4000 / (100 / 0.19 * 12) * 100)


def test_break_even_sentinel_is_ambiguous_at_horizon(single_catalog):
    # With a one-year horizon a cheap install breaks even in year 1, and an
    # unaffordable one falls back to the horizon: both report 1.
    cheap = FinancialProjector(RunParameters(installation_life_span=1, cost_per_kw_installed=10))
    dear = FinancialProjector(RunParameters(installation_life_span=1, cost_per_kw_installed=100000))

    assert cheap.project(single_catalog, 10, 100).years_until_break_even == 1
    assert dear.project(single_catalog, 10, 100).years_until_break_even == 1
    assert dear.project(single_catalog, 10, 100).lifetime_savings < 0


def test_schedule_frame(projector, single_catalog):
    df = projector.schedule(single_catalog, 10, 100).to_dataframe()

    assert len(df) == 25
    assert df["year"].iloc[0] == 1
    assert df["cumulative_savings"].iloc[-1] == pytest.approx(df["yearly_savings"].sum())


def test_simulate_lifetime_without_array_matches_baseline(params):
    sched = simulate_lifetime(yearly_energy_dc_kwh=0, yearly_kwh_consumption=100 / 0.38 * 12, monthly_bill=100, params=params)

    np.testing.assert_allclose(sched.bill_with_solar, sched.cost_without_solar)
    assert sched.break_even_year(1.0) == 25


def test_sweep_covers_every_configuration(projector, site_catalog):
    df = projector.sweep(site_catalog, 100)

    assert list(df["panels_count"]) == [4, 8, 12, 20, 30]
    assert "years_until_break_even" in df.columns
    assert df["installation_cost"].is_monotonic_increasing


def test_sweep_of_empty_catalog_is_empty(projector):
    df = projector.sweep(SolarPotentialData(), 100)

    assert df.empty
    assert "lifetime_savings" in df.columns
