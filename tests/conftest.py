import os
import typing

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.app import app, get_issuer, get_registry
from src.issuer import TicketIssuer
from src.models import table_register
from src.notifications import InMemoryNotificationSink
from src.registry import EventRegistry
from tests.util_constant import ADMIN, MAX_SUPPLY, METADATA_BASE


class FakeOwnershipOracle:
    """Ownership oracle backed by a plain dict of token id to owner."""

    def __init__(self, owners: dict[int, str] | None = None):
        self.owners = dict(owners or {})
        self.lookups: list[int] = []

    async def owner_of(self, token_id: int) -> str:
        self.lookups.append(token_id)
        if token_id not in self.owners:
            raise LookupError(f'token {token_id} does not exist')
        return self.owners[token_id]


@pytest.fixture(scope='session')
def database_url(tmp_path_factory) -> typing.Generator[str, None, None]:
    if os.environ.get('TEST_POSTGRES') == '1':
        from testcontainers.postgres import PostgresContainer

        with PostgresContainer('postgres:16', driver='asyncpg') as postgres:
            yield postgres.get_connection_url()
    else:
        db_file = tmp_path_factory.mktemp('db') / 'test.sqlite3'
        yield f'sqlite+aiosqlite:///{db_file}'


@pytest.fixture
async def session_factory(
    database_url: str,
) -> typing.AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    async_engine = create_async_engine(database_url, pool_pre_ping=True)

    async with async_engine.begin() as conn:
        await conn.run_sync(table_register.metadata.drop_all)
        await conn.run_sync(table_register.metadata.create_all)

    yield async_sessionmaker(
        autoflush=False,
        bind=async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    await async_engine.dispose()


@pytest.fixture
def notifications() -> InMemoryNotificationSink:
    return InMemoryNotificationSink()


@pytest.fixture
def oracle() -> FakeOwnershipOracle:
    return FakeOwnershipOracle()


@pytest.fixture
async def issuer(
    session_factory: async_sessionmaker[AsyncSession],
    notifications: InMemoryNotificationSink,
) -> TicketIssuer:
    ticket_issuer = TicketIssuer(session_factory, ADMIN, notifications)
    await ticket_issuer.initialize(
        name='Event Ticket',
        symbol='ETK',
        max_supply=MAX_SUPPLY,
        metadata_base=METADATA_BASE,
    )
    return ticket_issuer


@pytest.fixture
async def registry(
    session_factory: async_sessionmaker[AsyncSession],
    oracle: FakeOwnershipOracle,
    notifications: InMemoryNotificationSink,
) -> EventRegistry:
    event_registry = EventRegistry(session_factory, oracle, ADMIN, notifications)
    await event_registry.initialize()
    return event_registry


@pytest.fixture
async def async_client(
    session_factory: async_sessionmaker[AsyncSession],
    issuer: TicketIssuer,
    notifications: InMemoryNotificationSink,
) -> typing.AsyncGenerator[AsyncClient, None]:
    gated_registry = EventRegistry(session_factory, issuer, ADMIN, notifications)
    await gated_registry.initialize()

    app.dependency_overrides[get_issuer] = lambda: issuer
    app.dependency_overrides[get_registry] = lambda: gated_registry
    _transport = ASGITransport(app=app)

    async with AsyncClient(
        transport=_transport, base_url='http://test', follow_redirects=True
    ) as client:
        yield client

    app.dependency_overrides.clear()
