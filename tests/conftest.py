import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from rooftop_solar.finance import FinancialProjector, RunParameters, SolarPotentialData


@pytest.fixture
def params() -> RunParameters:
    return RunParameters()


@pytest.fixture
def projector(params) -> FinancialProjector:
    return FinancialProjector(params)


@pytest.fixture
def single_catalog() -> SolarPotentialData:
    return SolarPotentialData.model_validate(
        {"solarPanelConfigs": [{"panelsCount": 10, "yearlyEnergyDcKwh": 4000}]}
    )


@pytest.fixture
def building_insights() -> dict:
    """Trimmed buildingInsights:findClosest response."""
    return {
        "name": "buildings/ChIJh0CMPQW7j4ARLrRiVvmg6Vs",
        "center": {"latitude": 48.2082, "longitude": 16.3738},
        "imageryQuality": "HIGH",
        "solarPotential": {
            "maxArrayPanelsCount": 30,
            "maxArrayAreaMeters2": 58.9,
            "maxSunshineHoursPerYear": 1480.2,
            "carbonOffsetFactorKgPerMwh": 428.9,
            "panelCapacityWatts": 400,
            "panelHeightMeters": 1.879,
            "panelWidthMeters": 1.045,
            "panelLifetimeYears": 20,
            "solarPanelConfigs": [
                {"panelsCount": 12, "yearlyEnergyDcKwh": 4480.5},
                {"panelsCount": 4, "yearlyEnergyDcKwh": 1560.2},
                {"panelsCount": 8, "yearlyEnergyDcKwh": 3050.7},
                {"panelsCount": 30, "yearlyEnergyDcKwh": 10210.0},
                {"panelsCount": 20, "yearlyEnergyDcKwh": 7180.3},
            ],
        },
    }


@pytest.fixture
def site_catalog(building_insights) -> SolarPotentialData:
    return SolarPotentialData.model_validate(building_insights["solarPotential"])
