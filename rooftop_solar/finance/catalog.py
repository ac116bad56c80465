from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from .models import SiteConfiguration, SolarPotentialData

logger = logging.getLogger(__name__)


class CatalogError(ValueError):
    """Raised when a provider payload carries no usable solar potential."""


def normalize_payload(payload: Dict[str, Any]) -> SolarPotentialData:
    """
    Build a catalog from either a bare solar potential mapping or a full
    building-insights response (which nests it under ``solarPotential``).

    Missing or null fields fall back to the model defaults: 0 for the roof
    figures, 20 years of panel lifetime, and no configurations.
    """
    if not isinstance(payload, dict):
        raise CatalogError(f"Catalog payload must be a JSON object, got {type(payload).__name__}")

    # buildingInsights responses always carry "name" and "center" next to "solarPotential"
    if "solarPotential" in payload or ("name" in payload and "center" in payload):
        potential = payload.get("solarPotential")
        if not potential:
            raise CatalogError("No solar potential data found in the response")
    else:
        potential = payload

    catalog = SolarPotentialData.model_validate(potential)
    logger.debug("Normalized catalog with %d configurations", len(catalog.solar_panel_configs))
    return catalog


def load_catalog(path: Union[str, Path]) -> SolarPotentialData:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Catalog JSON not found: {path}")
    catalog = normalize_payload(json.loads(p.read_text()))
    logger.info("Loaded %d panel configurations from %s", len(catalog.solar_panel_configs), p)
    return catalog


def panel_range(configs: Iterable[SiteConfiguration]) -> Optional[Tuple[int, int]]:
    """(min, max) available panel counts, or None for an empty catalog."""
    counts = [c.panels_count for c in configs]
    if not counts:
        return None
    return min(counts), max(counts)
