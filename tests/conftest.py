"""
Shared fixtures: a throwaway SQLite database per test and an HTTP client
bound to the app in-process
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_storefront.db")
os.environ.setdefault("ADMIN_EMAILS", '["admin@example.com"]')

from decimal import Decimal

import httpx
import pytest

from storefront.core.database import build_engine, build_session_factory, get_db, init_db
from storefront.main import app
from storefront.models import Product

@pytest.fixture
async def engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    await init_db(bind=engine)
    yield engine
    await engine.dispose()

@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)

@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()

@pytest.fixture
async def products(session_factory):
    """Three products keyed by a short name; the mug tracks stock"""
    rows = {
        "shirt": Product(
            name="Linen Shirt",
            description="Breathable summer shirt",
            price=Decimal("29.99"),
            category="apparel",
            is_featured=True,
            images=[{"url": "https://img.example.com/shirt.png", "alt": "Linen Shirt"}]
        ),
        "mug": Product(
            name="Stoneware Mug",
            description="Holds 350ml",
            price=Decimal("12.50"),
            category="kitchen",
            stock_quantity=3,
            images=[]
        ),
        "lamp": Product(
            name="Desk Lamp",
            price=Decimal("45.00"),
            category="home",
            images=[]
        ),
    }
    async with session_factory() as session:
        session.add_all(rows.values())
        await session.commit()
    return {key: str(product.id) for key, product in rows.items()}

async def _register(client, name, email, password="secret123"):
    response = await client.post(
        "/api/v1/auth/register",
        json={"name": name, "email": email, "password": password}
    )
    assert response.status_code == 201, response.text
    return response.json()["tokens"]["access_token"]

@pytest.fixture
async def customer_token(client):
    return await _register(client, "Jane Doe", "jane@example.com")

@pytest.fixture
def auth_headers(customer_token):
    return {"Authorization": f"Bearer {customer_token}"}

@pytest.fixture
async def admin_headers(client):
    token = await _register(client, "Store Admin", "admin@example.com")
    return {"Authorization": f"Bearer {token}"}
