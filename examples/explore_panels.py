"""
Sweep every available layout of the sample roof against one monthly bill.

Prints the projection table, then shows the guidance a user gets when
asking for a panel count the roof does not offer.
"""

import sys
from pathlib import Path

# Ensure repo root is on sys.path when running from /examples
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from rooftop_solar.finance import FinancialProjector, load_catalog
from rooftop_solar.finance.advisor import evaluate


def main(monthly_bill: float = 100.0) -> None:
    catalog = load_catalog(Path(__file__).parent / "building_insights.json")
    projector = FinancialProjector()

    print(f"=== Projections at {monthly_bill:.2f} per month ===")
    print(projector.sweep(catalog, monthly_bill).round(2).to_string(index=False))

    print("\n=== Unavailable layout ===")
    print(evaluate(projector, catalog, 14, monthly_bill).warning)


if __name__ == "__main__":
    main()
