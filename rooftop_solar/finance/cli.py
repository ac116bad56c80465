from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict

from pydantic import ValidationError

from .advisor import DEFAULT_MONTHLY_BILL, evaluate, initial_panel_count
from .catalog import CatalogError, load_catalog
from .models import RunParameters
from .projector import FinancialProjector

logger = logging.getLogger(__name__)


def _prompt_float(prompt: str, *, min_v: float | None = None, max_v: float | None = None) -> float:
    while True:
        raw = input(prompt).strip()
        try:
            v = float(raw)
        except ValueError:
            print("Please enter a number.", file=sys.stderr)
            continue
        if min_v is not None and v < min_v:
            print(f"Must be >= {min_v}.", file=sys.stderr)
            continue
        if max_v is not None and v > max_v:
            print(f"Must be <= {max_v}.", file=sys.stderr)
            continue
        return v


def load_params(path: str | None) -> RunParameters:
    data: Dict[str, Any] = {}
    if path:
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"Parameters JSON not found: {path}")
        data = json.loads(p.read_text())
    return RunParameters.model_validate(data)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Rooftop solar lifetime cost, savings and break-even projection."
    )
    parser.add_argument(
        "--catalog",
        "-c",
        required=True,
        help="Path to a building-insights response or bare solar potential JSON.",
    )
    parser.add_argument("--panels", "-n", type=int, help="Panel count. Defaults to min(4, largest layout).")
    parser.add_argument(
        "--monthly-bill",
        "-b",
        type=float,
        help=f"Average monthly energy bill. Defaults to {DEFAULT_MONTHLY_BILL:g}.",
    )
    parser.add_argument("--params", "-p", help="Optional JSON overriding run parameters.")
    parser.add_argument(
        "--output",
        "-o",
        help="Path to write the evaluation JSON.",
    )
    parser.add_argument(
        "--schedule-csv",
        help="Path to write the year-by-year schedule as CSV.",
    )
    parser.add_argument(
        "--sweep-csv",
        help="Path to write projections for every available panel count as CSV.",
    )
    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Prompt for the monthly bill when it is not given.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log progress to stderr.")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        catalog = load_catalog(args.catalog)
        params = load_params(args.params)
    except (FileNotFoundError, json.JSONDecodeError, CatalogError) as e:
        print(f"Input error: {e}", file=sys.stderr)
        return 2
    except ValidationError as e:
        print("Input validation error:", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    monthly_bill = args.monthly_bill
    if monthly_bill is None:
        if args.interactive:
            monthly_bill = _prompt_float("Monthly average energy bill: ", min_v=0.0)
        else:
            monthly_bill = DEFAULT_MONTHLY_BILL
    if monthly_bill < 0:
        print("Input error: monthly bill must be >= 0.", file=sys.stderr)
        return 2

    panels = args.panels
    if panels is None:
        panels = initial_panel_count(catalog)
        if panels is None:
            print("No valid panel configurations found.", file=sys.stderr)
            return 1

    projector = FinancialProjector(params)
    logger.info("Projecting %d panels at %.2f per month", panels, monthly_bill)
    result = evaluate(projector, catalog, panels, monthly_bill)

    if args.output:
        Path(args.output).write_text(result.model_dump_json(indent=2))
    if args.sweep_csv:
        projector.sweep(catalog, monthly_bill).to_csv(args.sweep_csv, index=False)

    if result.projection is None:
        print(result.warning, file=sys.stderr)
        return 1

    if args.schedule_csv:
        projector.schedule(catalog, panels, monthly_bill).to_dataframe().to_csv(args.schedule_csv, index=False)

    # Minimal console summary
    f = result.projection
    print(f"Panels: {panels} ({projector.installation_size_kw(panels):.2f} kW)")
    print(f"Yearly energy (DC): {f.yearly_energy_dc_kwh:.0f} kWh, coverage {f.yearly_energy_coverage:.1f}%")
    print(f"Installation cost: {f.installation_cost:.2f}")
    print(f"Total cost without solar: {f.total_cost_without_solar:.2f}")
    print(f"Total cost with solar: {f.total_cost_with_solar:.2f}")
    print(f"Lifetime savings: {f.lifetime_savings:.2f}")
    print(f"Years until break-even: {f.years_until_break_even}")
    print(f"\n{result.recommendation.text}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
