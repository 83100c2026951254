# core/quotes.py
# Життєвий цикл запиту на квоту: new -> reviewed -> sent.
# Після "sent" запис заблоковано: review/send відхиляються тут, а не в UI.

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Callable

from .calculator import calculate_quote_range
from .catalog import ServiceCatalog
from .errors import ConcurrentUpdateError, InvalidTransitionError, PricingValidationError
from .models import CostInputs, QuoteRequest, QuoteReview, QuoteStatus, QuoteSubmission
from .notifications import LoggingNotifier, Notifier, admin_new_quote_message, client_estimate_message
from .repository import InMemoryQuoteRepository, QuoteRepository
from .rules import estimate_hours

logger = logging.getLogger(__name__)

OPEN_STATUSES: frozenset[QuoteStatus] = frozenset({"new", "reviewed"})

# скільки разів перечитуємо запис при конфлікті версій
MAX_CAS_ATTEMPTS = 5


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def effective_range(quote: QuoteRequest) -> tuple[int, int]:
    """Admin override wins over the original computed estimate."""
    lo = quote.approved_min_cents if quote.approved_min_cents is not None else quote.min_cents
    hi = quote.approved_max_cents if quote.approved_max_cents is not None else quote.max_cents
    return lo, hi


def submission_inputs(sub: QuoteSubmission) -> CostInputs:
    hours = sub.hours if sub.hours is not None else estimate_hours(sub.sqft)
    return CostInputs(
        hours=hours,
        sqft=sub.sqft,
        visits=sub.visits,
        zone=sub.zone,
        project_type=sub.project_type,
        extras=(sub.extras or "").strip() or None,
    )


class QuoteService:
    def __init__(
        self,
        repository: QuoteRepository | None = None,
        notifier: Notifier | None = None,
        catalog: ServiceCatalog | None = None,
        admin_phone: str | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.repository = repository if repository is not None else InMemoryQuoteRepository()
        self.notifier = notifier if notifier is not None else LoggingNotifier()
        self.catalog = catalog if catalog is not None else ServiceCatalog()
        self.admin_phone = admin_phone
        self._clock = clock

    # ---------- читання ----------

    def get(self, quote_id: str) -> QuoteRequest:
        return self.repository.get(quote_id)

    def list(self) -> list[QuoteRequest]:
        return self.repository.list()

    # ---------- переходи ----------

    def submit(self, sub: QuoteSubmission) -> QuoteRequest:
        """Prices the request and stores it as `new`. Nothing is stored if validation fails."""
        service = self.catalog.get_service(sub.service_id)
        inputs = submission_inputs(sub)
        quote_range = calculate_quote_range(inputs, service.project_types)

        now = self._clock()
        record = QuoteRequest(
            id=str(uuid.uuid4()),
            client_name=sub.contact.client_name,
            client_email=sub.contact.client_email,
            client_phone=sub.contact.client_phone,
            service_id=service.id,
            service_name=service.name,
            inputs=inputs,
            min_cents=quote_range.min_cents,
            max_cents=quote_range.max_cents,
            breakdown_metadata=quote_range.breakdown,
            status="new",
            created_at=now,
            updated_at=now,
        )
        stored = self.repository.create(record)
        logger.info("Quote request %s created for %s (%s)", stored.id, stored.client_name, stored.service_name)

        notice = admin_new_quote_message(stored)
        if self.admin_phone:
            self.notifier.send_sms(self.admin_phone, notice)
        else:
            logger.info("Admin notice (no ADMIN_PHONE set): %s", notice)
        return stored

    def review(self, quote_id: str, patch: QuoteReview) -> QuoteRequest:
        fields = patch.model_fields_set & {"message_to_client", "approved_min_cents", "approved_max_cents"}

        def changes(current: QuoteRequest) -> dict[str, Any]:
            update: dict[str, Any] = {name: getattr(patch, name) for name in fields}
            update["status"] = "reviewed"
            update["updated_at"] = self._clock()

            lo, hi = effective_range(current.model_copy(update=update))
            if lo > hi:
                raise PricingValidationError(["Approved minimum must not exceed approved maximum"])
            return update

        return self._transition(quote_id, "review", changes)

    def send(self, quote_id: str) -> QuoteRequest:
        def changes(current: QuoteRequest) -> dict[str, Any]:
            lo, hi = effective_range(current)
            now = self._clock()
            return {
                "status": "sent",
                "sent_at": now,
                "updated_at": now,
                "approved_min_cents": lo,
                "approved_max_cents": hi,
            }

        sent = self._transition(quote_id, "send", changes)

        if sent.client_phone:
            lo, hi = effective_range(sent)
            self.notifier.send_sms(sent.client_phone, client_estimate_message(sent, lo, hi))
        return sent

    def _transition(
        self,
        quote_id: str,
        action: str,
        changes: Callable[[QuoteRequest], dict[str, Any]],
    ) -> QuoteRequest:
        for _ in range(MAX_CAS_ATTEMPTS):
            current = self.repository.get(quote_id)
            if current.status not in OPEN_STATUSES:
                logger.warning("Rejected %s on quote request %s: status is %s", action, quote_id, current.status)
                raise InvalidTransitionError(quote_id, current.status, action)
            try:
                updated = self.repository.update(quote_id, changes(current), expected_version=current.version)
            except ConcurrentUpdateError:
                logger.info("Version conflict on quote request %s during %s, retrying", quote_id, action)
                continue
            logger.info("Quote request %s: %s -> %s", quote_id, current.status, updated.status)
            return updated
        raise ConcurrentUpdateError(quote_id, current.version, self.repository.get(quote_id).version)
