from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Literal

from pydantic import BaseModel, Field, PlainSerializer, field_validator

ProjectType = Literal["maintenance", "installation", "repair"]
Zone = Literal["residential", "commercial"]
QuoteStatus = Literal["new", "reviewed", "sent"]

# в JSON гроші йдуть числом (3355.74), всередині лишаються Decimal
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CostInputs(BaseModel):
    # межі (hours 0..200 і т.д.) перевіряє калькулятор, щоб віддати всі помилки разом
    hours: float = 0
    sqft: float = 0
    visits: int = 1
    zone: Zone = "residential"
    project_type: ProjectType = "maintenance"
    extras: str | None = None


class CostBreakdown(BaseModel):
    labor: Money
    materials: Money
    visit_fees: Money
    subtotal: Money
    tax: Money
    total: Money


class InvoiceLineItem(BaseModel):
    id: str
    description: str
    quantity: Money
    unit_price: Money
    total: Money


class CalculationResult(BaseModel):
    inputs: CostInputs
    breakdown: CostBreakdown
    line_items: list[InvoiceLineItem]


class BreakdownSnapshot(BaseModel):
    """Internal pricing snapshot stored with a quote request (admin eyes only)."""

    version: Literal[1] = 1
    labor: Money
    materials: Money
    visit_fees: Money
    subtotal: Money
    base_rate_per_hour: Money
    material_cost_per_sqft: Money
    zone_multiplier: Money


class QuoteRange(BaseModel):
    min_total: Money
    max_total: Money
    min_cents: int
    max_cents: int
    breakdown: BreakdownSnapshot


class ContactInfo(BaseModel):
    client_name: str
    client_email: str
    client_phone: str | None = None

    @field_validator("client_name", "client_email")
    @classmethod
    def _required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("client_phone")
    @classmethod
    def _blank_phone_is_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class QuoteSubmission(BaseModel):
    """Public "request a quote" form. hours/visits may be omitted (derived from sqft)."""

    contact: ContactInfo
    service_id: str
    sqft: float = 0
    hours: float | None = None
    visits: int = 1
    zone: Zone = "residential"
    project_type: ProjectType = "maintenance"
    extras: str | None = None


class QuoteReview(BaseModel):
    # поле не передали -> не чіпаємо; передали None -> скидаємо override
    message_to_client: str | None = None
    approved_min_cents: int | None = Field(default=None, ge=0)
    approved_max_cents: int | None = Field(default=None, ge=0)


class QuoteRequest(BaseModel):
    id: str
    client_name: str
    client_email: str
    client_phone: str | None = None
    service_id: str | None = None
    service_name: str
    inputs: CostInputs
    min_cents: int
    max_cents: int
    breakdown_metadata: BreakdownSnapshot
    status: QuoteStatus = "new"
    message_to_client: str | None = None
    approved_min_cents: int | None = None
    approved_max_cents: int | None = None
    created_at: datetime
    updated_at: datetime
    sent_at: datetime | None = None
    version: int = 0


class Invoice(BaseModel):
    id: str | None = None
    job_id: str | None = None
    client_name: str | None = None
    line_items: list[InvoiceLineItem]
    subtotal: Money
    tax: Money
    total: Money
    issued_on: date
    due_date: date


class Service(BaseModel):
    id: str
    name: str
    project_types: list[ProjectType]
