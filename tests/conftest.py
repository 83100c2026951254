# tests/conftest.py
from datetime import datetime, timezone

import pytest

from core.catalog import ServiceCatalog
from core.notifications import LoggingNotifier
from core.quotes import QuoteService
from core.repository import InMemoryQuoteRepository

NOW = datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def notifier():
    return LoggingNotifier()


@pytest.fixture
def repo():
    return InMemoryQuoteRepository()


@pytest.fixture
def quotes(repo, notifier):
    return QuoteService(
        repository=repo,
        notifier=notifier,
        catalog=ServiceCatalog(),
        admin_phone="+15550001111",
        clock=lambda: NOW,
    )


@pytest.fixture
def now():
    return NOW
