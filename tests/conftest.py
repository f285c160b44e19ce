"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Callable, Generator
from datetime import UTC, datetime

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

import src.application.services as services_module
from src.application.repository import LedgerRepository
from src.application.services import Ledgers, build_ledgers, reset_services
from src.config import reset_settings
from src.core.entities import LedgerState
from src.core.services import seed_state
from src.infrastructure.storage.memory import InMemoryStateStore

FIXED_NOW = datetime(2024, 6, 3, 12, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def reset_singletons() -> Generator[None, None, None]:
    """Start every test with fresh settings and no cached repository."""
    reset_settings()
    reset_services()
    yield
    reset_settings()
    reset_services()


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def clock(now: datetime) -> Callable[[], datetime]:
    """Frozen clock so generated ids and dates are predictable."""
    return lambda: now


@pytest.fixture
def state(now: datetime) -> LedgerState:
    """The demo shop, dated around the frozen clock."""
    return seed_state(now)


@pytest.fixture
def ledgers(state: LedgerState, clock) -> Ledgers:
    return build_ledgers(state, clock=clock)


@pytest.fixture
def empty_ledgers(clock) -> Ledgers:
    return build_ledgers(LedgerState(), clock=clock)


@pytest.fixture
def memory_store() -> InMemoryStateStore:
    return InMemoryStateStore()


@pytest.fixture
def repository(memory_store: InMemoryStateStore, clock) -> LedgerRepository:
    """Seeded repository over an in-memory store."""
    return LedgerRepository(memory_store, key_prefix="test_", clock=clock)


@pytest_asyncio.fixture
async def async_client(repository: LedgerRepository) -> AsyncGenerator[AsyncClient, None]:
    """
    API client wired to the in-memory repository.

    The ASGI transport does not run the app lifespan, so no database is
    touched.
    """
    from src.api.main import app

    services_module._ledger_repository = repository
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
