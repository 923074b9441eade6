from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain  # noqa: F401
from config import ApplicationConfig
from src.depends import get_session
from src.domain.product import Product

TEST_API_KEY = "test-api-key"


@pytest_asyncio.fixture(scope="function")
async def db_path(tmp_path):
    return tmp_path / "shop_test.db"


@pytest_asyncio.fixture(scope="function")
async def engine(db_path):
    """Create a throwaway SQLite database with all tables"""
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", echo=False, future=True)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    """Create a new database session for each test"""
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def seed_products(db_session):
    """Insert catalog products and return them keyed by id"""

    async def _seed(*products: Product):
        for product in products:
            db_session.add(product)
        await db_session.commit()
        return {p.id: p for p in products}

    return _seed


@pytest_asyncio.fixture
async def make_product():
    """Factory for catalog products (10.00 net, 20% VAT)"""

    def _make(**overrides) -> Product:
        fields = dict(
            id="vertuo",
            name="Vertuo 2024",
            brand="Bullpadel",
            image_url="https://cdn.example.com/vertuo.png",
            price=Decimal("10.00"),
            vat_rate=Decimal("0.20"),
            currency="BGN",
            discounted=False,
            created_at=datetime(2024, 1, 1),
            updated_at=datetime(2024, 1, 1),
        )
        fields.update(overrides)
        return Product(**fields)

    return _make


@pytest_asyncio.fixture
async def email_service():
    """Recording e-mail service"""
    service = MagicMock()
    service.send_invoice = AsyncMock()
    service.send_order_confirmation = AsyncMock()
    return service


@pytest_asyncio.fixture
async def address_service():
    service = MagicMock()
    service.search_sites = AsyncMock(return_value=[{"id": 68134, "name": "SOFIA"}])
    service.search_streets = AsyncMock(return_value=[{"id": 1, "name": "VITOSHA"}])
    return service


@pytest_asyncio.fixture
async def app(db_path, db_session, email_service, address_service):
    from src.api.app import create_app

    class TestConfig(ApplicationConfig):
        DB_URI = f"sqlite+aiosqlite:///{db_path}"
        DB_AUTO_CREATE = False
        API_KEY = TEST_API_KEY
        AUTH_DISABLED = False
        ENABLE_LOGGING_MIDDLEWARE = False
        EMAIL_BACKEND = "logging"

    app = create_app(TestConfig)
    app.state.email_service = email_service
    app.state.address_service = address_service

    # Override the session dependency to use test session
    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session
    yield app
    await app.state.engine.dispose()


@pytest_asyncio.fixture
async def client(app):
    """Create test client with database session override"""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
