from __future__ import annotations

from datetime import date, timedelta

from .models import CalculationResult, Invoice
from .rules import INVOICE_DUE_DAYS


def create_invoice(
    result: CalculationResult,
    *,
    issued_on: date,
    job_id: str | None = None,
    client_name: str | None = None,
) -> Invoice:
    """Invoice is a frozen copy of the calculation; due in 30 days."""
    b = result.breakdown
    return Invoice(
        job_id=job_id,
        client_name=client_name,
        line_items=[li.model_copy() for li in result.line_items],
        subtotal=b.subtotal,
        tax=b.tax,
        total=b.total,
        issued_on=issued_on,
        due_date=issued_on + timedelta(days=INVOICE_DUE_DAYS),
    )
