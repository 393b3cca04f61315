"""Shared BDD fixtures and step definitions for storefront scenarios."""

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from pytest_bdd import given, parsers, then

from storefront.catalogue.browsing import get_product
from storefront.catalogue.creation import CreateProduct
from storefront.errors import StorefrontError
from storefront.gate import Identity, dispatch
from storefront.identity.authentication import register_user
from storefront.payments.gateway import set_gateway
from storefront.payments.gateway.fake_adapter import FakeGateway


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def outcome():
    """Container for the failure code of the last step, if any."""
    return {"code": None}


@pytest.fixture()
def attempt(outcome):
    """Run a callable and record its failure code instead of raising."""

    def _run(fn):
        try:
            return fn()
        except StorefrontError as exc:
            outcome["code"] = exc.code
        except ObjectNotFoundError:
            outcome["code"] = "NOT_FOUND"
        except ValidationError:
            outcome["code"] = "INVALID_ARGUMENT"
        return None

    return _run


@pytest.fixture()
def gateway():
    fake = FakeGateway()
    set_gateway(fake)
    return fake


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a signed-in shopper", target_fixture="shopper")
def signed_in_shopper():
    user = register_user("shopper", "shopper@example.com", "correct-horse").user
    return Identity(user_id=str(user.id), username=user.username, email=user.email)


def _create_product(shopper, name, price, stock):
    command = CreateProduct(
        name=name,
        description=f"{name} for scenarios.",
        image_url="https://cdn.example.com/img/item.jpg",
        price=price,
        stock=stock,
    )
    return dispatch(command, shopper)


@given(
    parsers.cfparse("a product priced at {price:f} with {stock:d} units in stock"),
    target_fixture="product_id",
)
def product_in_stock(shopper, price, stock):
    return _create_product(shopper, "Stoneware Mug", price, stock)


@given(parsers.cfparse("a second product priced at {price:f}"), target_fixture="second_product_id")
def second_product(shopper, price):
    return _create_product(shopper, "Tea Towel", price, 10)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the request fails with {code}"))
def request_fails_with(outcome, code):
    assert outcome["code"] == code


@then(parsers.cfparse("the product has {stock:d} units in stock"))
def product_has_stock(product_id, stock):
    assert get_product(product_id).stock == stock
