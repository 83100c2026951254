from __future__ import annotations

import logging
from datetime import date
from typing import Any

from fastapi import Body, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.calculator import calculate, calculate_quote_range
from core.catalog import ServiceCatalog, format_allowed_types
from core.config import Settings, get_settings
from core.errors import ConcurrentUpdateError, InvalidTransitionError, NotFoundError, PricingValidationError
from core.invoices import create_invoice
from core.models import (
    CalculationResult,
    CostInputs,
    Invoice,
    QuoteRange,
    QuoteRequest,
    QuoteReview,
    QuoteSubmission,
    Service,
)
from core.presets import PRESETS
from core.quotes import QuoteService, effective_range
from core.repository import InMemoryInvoiceRepository

logger = logging.getLogger(__name__)


def create_app(
    service: QuoteService | None = None,
    invoices: InMemoryInvoiceRepository | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    settings = settings or get_settings()

    if service is None:
        catalog = (
            ServiceCatalog.from_json(settings.service_catalog_path)
            if settings.service_catalog_path
            else ServiceCatalog()
        )
        service = QuoteService(catalog=catalog, admin_phone=settings.admin_phone)
    invoices = invoices if invoices is not None else InMemoryInvoiceRepository()

    app = FastAPI(title=settings.app_name, version="1.0.0")
    app.state.quotes = service
    app.state.invoices = invoices

    # UI може жити на іншому порту/домені, тому CORS з налаштувань
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(PricingValidationError)
    def _validation(_: Request, exc: PricingValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": exc.errors})

    @app.exception_handler(NotFoundError)
    def _not_found(_: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(InvalidTransitionError)
    def _transition(_: Request, exc: InvalidTransitionError) -> JSONResponse:
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    @app.exception_handler(ConcurrentUpdateError)
    def _conflict(_: Request, exc: ConcurrentUpdateError) -> JSONResponse:
        logger.warning("Gave up on contended update: %s", exc)
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    # ---- калькулятор ----

    @app.post("/calculate", response_model=CalculationResult)
    def calculate_cost(inputs: CostInputs = Body(...), service_id: str | None = None) -> CalculationResult:
        allowed = service.catalog.get_allowed_project_types(service_id) if service_id else None
        return calculate(inputs, allowed)

    @app.post("/quote-range", response_model=QuoteRange)
    def quote_range(inputs: CostInputs = Body(...), service_id: str | None = None) -> QuoteRange:
        allowed = service.catalog.get_allowed_project_types(service_id) if service_id else None
        return calculate_quote_range(inputs, allowed)

    @app.get("/presets")
    def presets() -> dict[str, dict[str, Any]]:
        return PRESETS

    @app.get("/services", response_model=list[Service])
    def services() -> list[Service]:
        return service.catalog.list_services()

    @app.get("/services/{service_id}/project-types")
    def project_types(service_id: str) -> dict[str, Any]:
        types = service.catalog.get_allowed_project_types(service_id)
        return {"service_id": service_id, "project_types": types, "label": format_allowed_types(types)}

    # ---- запити на квоту ----

    @app.post("/quotes", response_model=QuoteRequest, status_code=201)
    def submit_quote(sub: QuoteSubmission = Body(...)) -> QuoteRequest:
        return service.submit(sub)

    @app.get("/quotes", response_model=list[QuoteRequest])
    def list_quotes() -> list[QuoteRequest]:
        return service.list()

    @app.get("/quotes/{quote_id}")
    def get_quote(quote_id: str) -> dict[str, Any]:
        quote = service.get(quote_id)
        lo, hi = effective_range(quote)
        return {
            "quote": quote.model_dump(mode="json"),
            "effective_min_cents": lo,
            "effective_max_cents": hi,
        }

    @app.patch("/quotes/{quote_id}/review", response_model=QuoteRequest)
    def review_quote(quote_id: str, patch: QuoteReview = Body(...)) -> QuoteRequest:
        return service.review(quote_id, patch)

    @app.post("/quotes/{quote_id}/send", response_model=QuoteRequest)
    def send_quote(quote_id: str) -> QuoteRequest:
        return service.send(quote_id)

    # ---- інвойси ----

    @app.post("/invoices", response_model=Invoice, status_code=201)
    def generate_invoice(
        inputs: CostInputs = Body(...),
        job_id: str | None = None,
        client_name: str | None = None,
        service_id: str | None = None,
    ) -> Invoice:
        allowed = service.catalog.get_allowed_project_types(service_id) if service_id else None
        result = calculate(inputs, allowed)
        invoice = invoices.add(create_invoice(result, issued_on=date.today(), job_id=job_id, client_name=client_name))
        logger.info("Invoice %s created for job %s: %s", invoice.id, job_id, invoice.total)
        return invoice

    @app.get("/invoices/{invoice_id}", response_model=Invoice)
    def get_invoice(invoice_id: str) -> Invoice:
        return invoices.get(invoice_id)

    return app


app = create_app()
