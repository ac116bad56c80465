"""
Financial projection toolchain.

Matches a requested panel count to the site catalog, simulates discounted
utility bills with and without solar over the installation life, and
reports installation cost, lifetime savings and the break-even year.
"""

from .catalog import CatalogError, load_catalog, normalize_payload, panel_range
from .matcher import find_nearest_configurations
from .models import FinancialProjection, RunParameters, SiteConfiguration, SolarPotentialData
from .projector import FinancialProjector, project

__all__ = [
    "CatalogError",
    "FinancialProjection",
    "FinancialProjector",
    "RunParameters",
    "SiteConfiguration",
    "SolarPotentialData",
    "find_nearest_configurations",
    "load_catalog",
    "normalize_payload",
    "panel_range",
    "project",
]
