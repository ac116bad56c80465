"""
Rooftop Solar Financial Projection
==================================

Estimates what a rooftop solar array would cost and save over its service
life, given a site's catalog of discrete panel layouts and a household's
monthly electricity bill.

Architecture:
- finance/: projection engine, configuration matcher, catalog contract, CLI
"""

__version__ = "1.0.0"
