"""
Shared fixtures
"""

import httpx
import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker

from bundle_builder.api.dependencies import get_shopify_client
from bundle_builder.core.database import (
    create_all_tables,
    create_engine,
    get_db_session,
    get_transaction_context,
)
from bundle_builder.main import app
from tests.fakes import FakeShopifyClient, product_node


@pytest.fixture
def fake_client():
    """Shop with two resolvable products"""
    return FakeShopifyClient().add_products(
        product_node("101", "Shampoo"),
        product_node(
            "102",
            "Towel",
            options=[
                {"id": "gid://shopify/ProductOption/1", "name": "Color", "values": ["Blue", "Red"]},
                {"id": "gid://shopify/ProductOption/2", "name": "Size", "values": ["S", "M", "L"]},
            ],
        ),
    )


@pytest.fixture
def selected_products():
    return [
        {"id": "101", "title": "Shampoo", "imageSrc": "", "price": "10.00"},
        {"id": "gid://shopify/Product/102", "title": "Towel", "imageSrc": "https://cdn/x.png", "price": "5.5"},
    ]


@pytest.fixture
async def db_engine():
    engine = create_engine("sqlite+aiosqlite:///:memory:")
    await create_all_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(bind=db_engine, expire_on_commit=False)


@pytest.fixture
async def http_client(fake_client, session_factory):
    """ASGI client with Shopify and the database swapped for test doubles"""

    async def override_shopify_client():
        yield fake_client

    async def override_db_session():
        async with get_transaction_context(session_factory) as session:
            yield session

    app.dependency_overrides[get_shopify_client] = override_shopify_client
    app.dependency_overrides[get_db_session] = override_db_session

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
