from __future__ import annotations

from typing import Iterable, Optional

from .models import NearestConfigurations, SiteConfiguration


def find_configuration(configs: Iterable[SiteConfiguration], panels_count: int) -> Optional[SiteConfiguration]:
    for config in configs:
        if config.panels_count == panels_count:
            return config
    return None


def find_nearest_configurations(configs: Iterable[SiteConfiguration], panels: int) -> NearestConfigurations:
    """
    Nearest available panel counts around a request that has no exact match.

    Call this only after an exact lookup failed: a configuration equal to
    ``panels`` is skipped, so it is reported as neither lower nor higher.
    ``lower`` is the greatest count below the request, ``higher`` the first
    count above it.
    """
    lower: Optional[int] = None
    higher: Optional[int] = None

    for config in sorted(configs, key=lambda c: c.panels_count):
        if config.panels_count < panels:
            lower = config.panels_count
        elif config.panels_count > panels:
            higher = config.panels_count
            break

    return NearestConfigurations(lower=lower, higher=higher)
