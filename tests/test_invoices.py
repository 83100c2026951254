from datetime import date
from decimal import Decimal

import pytest

from core.calculator import calculate
from core.errors import NotFoundError
from core.invoices import create_invoice
from core.models import CostInputs
from core.repository import InMemoryInvoiceRepository


def test_invoice_copies_breakdown_and_is_due_in_30_days():
    result = calculate(CostInputs(hours=4, sqft=250, visits=2, zone="commercial", project_type="installation"))
    inv = create_invoice(result, issued_on=date(2026, 1, 15), job_id="job-7", client_name="Desert Oasis HOA")

    assert inv.due_date == date(2026, 2, 14)
    assert inv.line_items == result.line_items
    assert (inv.subtotal, inv.tax, inv.total) == (
        result.breakdown.subtotal, result.breakdown.tax, result.breakdown.total,
    )
    # 4*60*1.3 + 250*5*1.3 + 50
    assert inv.subtotal == Decimal("1987.00")
    assert inv.job_id == "job-7"
    assert inv.id is None


def test_repository_assigns_ids():
    repo = InMemoryInvoiceRepository()
    result = calculate(CostInputs(hours=1))
    a = repo.add(create_invoice(result, issued_on=date(2026, 1, 1)))
    b = repo.add(create_invoice(result, issued_on=date(2026, 1, 1)))

    assert a.id.startswith("inv-")
    assert a.id != b.id
    assert repo.get(a.id) == a
    assert len(repo.list()) == 2

    with pytest.raises(NotFoundError):
        repo.get("inv-missing")
