from __future__ import annotations

import logging
from collections import deque
from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol

from .models import QuoteRequest
from .money import from_cents

logger = logging.getLogger(__name__)

# скільки останніх SMS тримаємо в пам'яті
MAX_KEPT = 100


class Notifier(Protocol):
    def send_sms(self, to: str, body: str) -> None: ...


class LoggingNotifier:
    """Default delivery: writes the message to the log instead of an SMS gateway."""

    def __init__(self) -> None:
        self.sent: deque[tuple[str, str]] = deque(maxlen=MAX_KEPT)

    def send_sms(self, to: str, body: str) -> None:
        self.sent.append((to, body))
        logger.info("SMS to %s: %s", to, body)


def dollars(cents: int) -> str:
    whole = from_cents(cents).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"${whole}"


def admin_new_quote_message(quote: QuoteRequest) -> str:
    return (
        f"New quote request: {quote.service_name} from {quote.client_name}. "
        f"Estimate: {dollars(quote.min_cents)}-{dollars(quote.max_cents)}. Check admin quotes."
    )


def client_estimate_message(quote: QuoteRequest, min_cents: int, max_cents: int) -> str:
    if quote.message_to_client:
        return quote.message_to_client
    return f"Your estimate: {dollars(min_cents)} - {dollars(max_cents)} for {quote.service_name}."
