import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from storefront.api import account_router, basket_router, category_router, install_error_handlers, product_router
from storefront.domain import storefront
from storefront.payments.gateway import set_gateway
from storefront.payments.gateway.fake_adapter import FakeGateway


@pytest.fixture()
def client():
    app = FastAPI()

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        with storefront.domain_context():
            return await call_next(request)

    app.include_router(product_router)
    app.include_router(category_router)
    app.include_router(account_router)
    app.include_router(basket_router)
    install_error_handlers(app)
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture()
def gateway():
    fake = FakeGateway()
    set_gateway(fake)
    return fake


@pytest.fixture()
def auth(client):
    """Register a user over HTTP and return its bearer headers."""
    response = client.post(
        "/users",
        json={"username": "jdoe", "email": "jdoe@example.com", "password": "correct-horse"},
    )
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture()
def create_product(client, auth):
    def _create(**overrides):
        body = {
            "name": "Ceramic Pour-Over Set",
            "description": "Hand-glazed dripper with a matching carafe.",
            "image_url": "https://cdn.example.com/img/pour-over.jpg",
            "price": 48.0,
            "stock": 10,
        }
        body.update(overrides)
        response = client.post("/products", json=body, headers=auth)
        assert response.status_code == 201
        return response.json()["product_id"]

    return _create
