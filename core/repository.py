# core/repository.py
# In-memory сховище. Явно створюється і передається в сервіси (без глобального стану).

from __future__ import annotations

import threading
import uuid
from typing import Any, Protocol

from .errors import ConcurrentUpdateError, NotFoundError
from .models import Invoice, QuoteRequest


class QuoteRepository(Protocol):
    def create(self, record: QuoteRequest) -> QuoteRequest: ...

    def get(self, quote_id: str) -> QuoteRequest: ...

    def list(self) -> list[QuoteRequest]: ...

    def update(self, quote_id: str, changes: dict[str, Any], expected_version: int) -> QuoteRequest: ...


class InMemoryQuoteRepository:
    def __init__(self) -> None:
        self._rows: dict[str, QuoteRequest] = {}
        self._lock = threading.Lock()

    def create(self, record: QuoteRequest) -> QuoteRequest:
        with self._lock:
            if record.id in self._rows:
                raise ValueError(f"Quote request {record.id} already exists")
            self._rows[record.id] = record.model_copy(deep=True)
        return record.model_copy(deep=True)

    def get(self, quote_id: str) -> QuoteRequest:
        with self._lock:
            row = self._rows.get(quote_id)
            if row is None:
                raise NotFoundError("Quote request", quote_id)
            return row.model_copy(deep=True)

    def list(self) -> list[QuoteRequest]:
        with self._lock:
            rows = [r.model_copy(deep=True) for r in self._rows.values()]
        return sorted(rows, key=lambda r: r.created_at, reverse=True)

    def update(self, quote_id: str, changes: dict[str, Any], expected_version: int) -> QuoteRequest:
        """Compare-and-swap on `version`: the write only lands if nobody wrote in between."""
        with self._lock:
            row = self._rows.get(quote_id)
            if row is None:
                raise NotFoundError("Quote request", quote_id)
            if row.version != expected_version:
                raise ConcurrentUpdateError(quote_id, expected_version, row.version)
            updated = row.model_copy(update={**changes, "version": row.version + 1}, deep=True)
            self._rows[quote_id] = updated
            return updated.model_copy(deep=True)


class InMemoryInvoiceRepository:
    def __init__(self) -> None:
        self._rows: dict[str, Invoice] = {}
        self._lock = threading.Lock()

    def add(self, invoice: Invoice) -> Invoice:
        stored = invoice.model_copy(update={"id": f"inv-{uuid.uuid4().hex[:12]}"}, deep=True)
        with self._lock:
            self._rows[stored.id] = stored
        return stored.model_copy(deep=True)

    def get(self, invoice_id: str) -> Invoice:
        with self._lock:
            row = self._rows.get(invoice_id)
            if row is None:
                raise NotFoundError("Invoice", invoice_id)
            return row.model_copy(deep=True)

    def list(self) -> list[Invoice]:
        with self._lock:
            return [r.model_copy(deep=True) for r in self._rows.values()]
