import os
from pathlib import Path

import pytest

# Cheap bcrypt rounds for the suite; read once when settings are first built
os.environ.setdefault("STOREFRONT_PASSWORD_HASH_ROUNDS", "4")


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the config overlay before any test module builds the domain."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def _storefront_domain():
    """Initialize the storefront domain once per session."""
    from storefront.domain import storefront

    storefront.init()
    return storefront


@pytest.fixture(scope="session", autouse=True)
def setup_db(_storefront_domain):
    from storefront.utils.db import drop_db, setup_db

    setup_db(_storefront_domain)

    yield

    drop_db(_storefront_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_storefront_domain):
    """Push domain context before each test, cleanup after."""
    from storefront.payments.gateway import reset_gateway
    from storefront.utils.db import reset_data

    ctx = _storefront_domain.domain_context()
    ctx.push()

    yield

    reset_data(_storefront_domain)
    reset_gateway()
    ctx.pop()


# ---------------------------------------------------------------------------
# Shared builders
# ---------------------------------------------------------------------------
@pytest.fixture()
def identity():
    """A registered user's verified identity."""
    from storefront.gate import Identity
    from storefront.identity.authentication import register_user

    result = register_user("jdoe", "jdoe@example.com", "correct-horse")
    user = result.user
    return Identity(user_id=str(user.id), username=user.username, email=user.email)


@pytest.fixture()
def other_identity():
    from storefront.gate import Identity
    from storefront.identity.authentication import register_user

    result = register_user("asmith", "asmith@example.com", "battery-staple")
    user = result.user
    return Identity(user_id=str(user.id), username=user.username, email=user.email)


@pytest.fixture()
def make_product(identity):
    """Create a product through the gate and return its id."""
    from storefront.catalogue.creation import CreateProduct
    from storefront.gate import dispatch

    def _make(**overrides):
        defaults = {
            "name": "Ceramic Pour-Over Set",
            "description": "Hand-glazed dripper with a matching carafe.",
            "image_url": "https://cdn.example.com/img/pour-over.jpg",
            "price": 48.0,
            "stock": 10,
        }
        defaults.update(overrides)
        return dispatch(CreateProduct(**defaults), identity)

    return _make
