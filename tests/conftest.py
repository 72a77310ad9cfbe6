"""
Pytest configuration and shared fixtures.
"""
from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient, ASGITransport

from tradejournal.api.main import app, get_service
from tradejournal.core.config import InstrumentConfig
from tradejournal.core.entities.trade import Direction, Trade
from tradejournal.core.services import JournalService
from tradejournal.infrastructure.persistence.memory_repo import InMemoryTradeSource

T0 = datetime(2024, 1, 15, 9, 0, tzinfo=timezone.utc)


def make_trade(result: float, n: int = 0, direction: Direction = Direction.BUY, created_at=None) -> Trade:
    """A closed trade whose only interesting field is its USD result."""
    return Trade(
        id=f"t{n}",
        user="trader-1",
        direction=direction,
        entry_price=2000.0,
        exit_price=2000.0,
        lot_size=0.01,
        result_usd=result,
        created_at=created_at or T0 + timedelta(hours=n),
    )


def make_history(*results: float):
    """Trades oldest-first, one hour apart."""
    return [make_trade(r, n=i) for i, r in enumerate(results)]


@pytest.fixture
def service():
    return JournalService(InMemoryTradeSource(), InstrumentConfig())


@pytest.fixture
async def client(service):
    """Async HTTP client for testing FastAPI endpoints, backed by a fresh in-memory journal."""
    app.dependency_overrides[get_service] = lambda: service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
