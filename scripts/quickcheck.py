"""Quick runtime checks for the pricing engine.
Run: python scripts/quickcheck.py
Exits with code 0 on success, non-zero on failure.
"""
from decimal import Decimal

from core.calculator import calculate, calculate_quote_range
from core.models import CostInputs


def main():
    inputs = CostInputs(hours=2, sqft=1500, visits=1, zone="residential", project_type="maintenance")

    b = calculate(inputs).breakdown

    assert b.labor == Decimal("90.00")
    assert b.materials == Decimal("3000.00")
    assert b.visit_fees == Decimal("0.00")
    assert b.subtotal == Decimal("3090.00")
    assert b.tax == Decimal("265.74")
    assert b.total == Decimal("3355.74")

    r = calculate_quote_range(inputs)
    assert (r.min_cents, r.max_cents) == (262650, 355350)

    print("Quickcheck OK")


if __name__ == '__main__':
    main()
