from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable

from .errors import PricingValidationError
from .models import (
    BreakdownSnapshot,
    CalculationResult,
    CostBreakdown,
    CostInputs,
    InvoiceLineItem,
    ProjectType,
    QuoteRange,
)
from .money import money, to_cents, to_decimal
from .rules import (
    QUOTE_HIGH_MULTIPLIER,
    QUOTE_LOW_MULTIPLIER,
    RATES,
    TAX_RATE,
    VISIT_FEE,
    ZONE_MULTIPLIER,
    validate_inputs,
)

logger = logging.getLogger(__name__)


def _check(inputs: CostInputs, allowed_project_types: Iterable[ProjectType] | None) -> None:
    errors = validate_inputs(inputs, allowed_project_types)
    if errors:
        raise PricingValidationError(errors)


def _pre_tax(inputs: CostInputs) -> BreakdownSnapshot:
    rates = RATES[inputs.project_type]
    mult = ZONE_MULTIPLIER[inputs.zone]

    labor = money(to_decimal(inputs.hours) * rates.base_rate_per_hour * mult)
    materials = money(to_decimal(inputs.sqft) * rates.material_cost_per_sqft * mult)
    visit_fees = max(0, inputs.visits - 1) * VISIT_FEE  # без множника зони

    snapshot = BreakdownSnapshot(
        labor=labor,
        materials=materials,
        visit_fees=visit_fees,
        subtotal=labor + materials + visit_fees,
        base_rate_per_hour=rates.base_rate_per_hour,
        material_cost_per_sqft=rates.material_cost_per_sqft,
        zone_multiplier=mult,
    )
    logger.debug("pre-tax breakdown for %s: %s", inputs.model_dump(), snapshot.model_dump())
    return snapshot


def build_line_items(inputs: CostInputs, snap: BreakdownSnapshot) -> list[InvoiceLineItem]:
    """Line items for an invoice; their totals always add up to the subtotal."""
    items: list[InvoiceLineItem] = []
    mult = snap.zone_multiplier

    if inputs.hours > 0:
        items.append(InvoiceLineItem(
            id="labor",
            description=f"Labor ({inputs.project_type}, {inputs.zone})",
            quantity=to_decimal(inputs.hours),
            unit_price=money(snap.base_rate_per_hour * mult),
            total=snap.labor,
        ))
    if inputs.sqft > 0:
        items.append(InvoiceLineItem(
            id="materials",
            description=f"Materials ({inputs.project_type}, {inputs.zone})",
            quantity=to_decimal(inputs.sqft),
            unit_price=money(snap.material_cost_per_sqft * mult),
            total=snap.materials,
        ))
    if inputs.visits > 1:
        items.append(InvoiceLineItem(
            id="visits",
            description="Additional site visits",
            quantity=Decimal(inputs.visits - 1),
            unit_price=VISIT_FEE,
            total=snap.visit_fees,
        ))

    if not items:
        items.append(InvoiceLineItem(
            id="base",
            description="Base job",
            quantity=Decimal(1),
            unit_price=snap.subtotal,
            total=snap.subtotal,
        ))
    return items


def calculate(
    inputs: CostInputs,
    allowed_project_types: Iterable[ProjectType] | None = None,
) -> CalculationResult:
    """
    Full job cost: labor + materials + visit fees, plus 8.6% tax.
    Raises PricingValidationError with all violations when inputs are out of bounds.
    """
    _check(inputs, allowed_project_types)

    snap = _pre_tax(inputs)
    tax = money(snap.subtotal * TAX_RATE)
    total = money(snap.subtotal + tax)

    breakdown = CostBreakdown(
        labor=snap.labor,
        materials=snap.materials,
        visit_fees=snap.visit_fees,
        subtotal=snap.subtotal,
        tax=tax,
        total=total,
    )
    logger.debug("breakdown: %s", breakdown.model_dump())

    return CalculationResult(
        inputs=inputs,
        breakdown=breakdown,
        line_items=build_line_items(inputs, snap),
    )


def calculate_quote_range(
    inputs: CostInputs,
    allowed_project_types: Iterable[ProjectType] | None = None,
) -> QuoteRange:
    """Public estimate: subtotal x 0.85 .. subtotal x 1.15, no tax."""
    _check(inputs, allowed_project_types)

    snap = _pre_tax(inputs)
    min_total = money(snap.subtotal * QUOTE_LOW_MULTIPLIER)
    max_total = money(snap.subtotal * QUOTE_HIGH_MULTIPLIER)

    return QuoteRange(
        min_total=min_total,
        max_total=max_total,
        min_cents=to_cents(min_total),
        max_cents=to_cents(max_total),
        breakdown=snap,
    )
