import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Selects the config overlay before any domain is initialized. Each
    context's conftest activates its own domain through a DomainFixture.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture()
def catalogue():
    """A seeded in-memory catalogue installed as the active lookup."""
    from shared.catalogue import reset_catalogue, set_catalogue
    from shared.catalogue.memory_adapter import InMemoryCatalogue

    lookup = InMemoryCatalogue()
    lookup.add_product("momo", "Chicken Momo", price=100, image="/img/momo.jpg")
    lookup.add_product("chowmein", "Veg Chowmein", price=50, image="/img/chowmein.jpg")
    lookup.add_product("lassi", "Sweet Lassi", price=45)
    lookup.add_product("retired", "Retired Dish", price=80, is_active=False)

    set_catalogue(lookup)
    yield lookup
    reset_catalogue()


@pytest.fixture()
def identity_gate():
    """A fake identity gate with one operator and two customers."""
    from shared.auth import reset_identity_gate, set_identity_gate
    from shared.auth.fake_adapter import FakeIdentityGate
    from shared.auth.port import Role

    gate = FakeIdentityGate()
    gate.register("customer-token", "cust-001", Role.CUSTOMER, name="Asha Rai")
    gate.register("other-token", "cust-002", Role.CUSTOMER, name="Bikash Thapa")
    gate.register("operator-token", "op-001", Role.OPERATOR, name="Kitchen Desk")

    set_identity_gate(gate)
    yield gate
    reset_identity_gate()


@pytest.fixture()
def auth():
    """Authorization headers keyed by who is calling."""
    return {
        "customer": {"Authorization": "Bearer customer-token"},
        "other": {"Authorization": "Bearer other-token"},
        "operator": {"Authorization": "Bearer operator-token"},
    }
