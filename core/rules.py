# core/rules.py
# Правила ціноутворення: ставки, зони, податок, межі вводу. Єдине місце для цих чисел.

from __future__ import annotations

import math
from decimal import Decimal
from typing import Iterable, NamedTuple

from .models import CostInputs, ProjectType, Zone


class Rates(NamedTuple):
    base_rate_per_hour: Decimal
    material_cost_per_sqft: Decimal


RATES: dict[ProjectType, Rates] = {
    "maintenance": Rates(Decimal("45"), Decimal("2")),
    "installation": Rates(Decimal("60"), Decimal("5")),
    "repair": Rates(Decimal("75"), Decimal("8")),
}

ZONE_MULTIPLIER: dict[Zone, Decimal] = {
    "residential": Decimal("1.0"),
    "commercial": Decimal("1.3"),
}

TAX_RATE = Decimal("0.086")  # Phoenix 8.6%
VISIT_FEE = Decimal("50.00")  # кожен візит після першого

QUOTE_LOW_MULTIPLIER = Decimal("0.85")
QUOTE_HIGH_MULTIPLIER = Decimal("1.15")

INVOICE_DUE_DAYS = 30

HOURS_MIN, HOURS_MAX = 0, 200
SQFT_MIN, SQFT_MAX = 0, 100_000
VISITS_MIN, VISITS_MAX = 1, 50

ALL_PROJECT_TYPES: tuple[ProjectType, ...] = ("maintenance", "installation", "repair")


def _within(value: float, lo: float, hi: float) -> bool:
    # NaN/inf теж вважаємо порушенням
    return math.isfinite(value) and lo <= value <= hi


def validate_inputs(
    inputs: CostInputs,
    allowed_project_types: Iterable[ProjectType] | None = None,
) -> list[str]:
    """Returns every violated rule; empty list means the inputs are valid."""
    errors: list[str] = []
    if not _within(inputs.hours, HOURS_MIN, HOURS_MAX):
        errors.append(f"Hours must be between {HOURS_MIN} and {HOURS_MAX}")
    if not _within(inputs.sqft, SQFT_MIN, SQFT_MAX):
        errors.append(f"Square feet must be between {SQFT_MIN} and {SQFT_MAX}")
    if not VISITS_MIN <= inputs.visits <= VISITS_MAX:
        errors.append(f"Visits must be between {VISITS_MIN} and {VISITS_MAX}")
    if allowed_project_types is not None and inputs.project_type not in set(allowed_project_types):
        errors.append(f"Project type '{inputs.project_type}' is not offered for this service")
    return errors


def estimate_hours(sqft: float) -> float:
    """Hours assumed for the public quote form: 1.5h per 1000 sqft, at least 2."""
    if sqft > 0:
        return max(2.0, sqft / 1000 * 1.5)
    return 2.0
