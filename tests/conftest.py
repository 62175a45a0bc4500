import pytest
from fastapi.testclient import TestClient

from shopcart.config import Settings
from shopcart.main import create_app

MUG_ITEM = {
    "name": "Mug",
    "price": 9.99,
    "quantity": 2,
    "image": "mug.png",
    "description": "Ceramic mug",
}


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "shop.db"


@pytest.fixture
def settings(db_path):
    # bcrypt rounds kept at passlib's minimum so the auth tests stay fast
    return Settings(database_url=f"sqlite+aiosqlite:///{db_path}", bcrypt_rounds=4, log_level="WARNING")


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def cart_client(client):
    r = client.get("/create-cart-table")
    assert r.status_code == 200
    return client


@pytest.fixture
def add_items(cart_client):
    def _add(*items):
        r = cart_client.post("/api/cart", json=list(items))
        assert r.status_code == 201, r.text
        return cart_client.get("/api/cart").json()

    return _add


@pytest.fixture
def mug():
    return dict(MUG_ITEM)
