import os
import tempfile
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

    Select the domain.toml overlay, point it at a throwaway database and load
    the domain before any test module imports it. ``FOODIE_TEST_DATABASE_URL``
    overrides the temporary SQLite file, e.g. to run against PostgreSQL.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    if not os.environ.get("FOODIE_TEST_DATABASE_URL"):
        db_dir = tempfile.mkdtemp(prefix="foodie-tests-")
        os.environ["FOODIE_TEST_DATABASE_URL"] = f"sqlite:///{Path(db_dir) / 'foodie.db'}"

    from foodie.domain import foodie

    foodie.init()


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


@pytest.fixture(scope="session", autouse=True)
def setup_db():
    from foodie.domain import foodie
    from foodie.utils.db import drop_db, setup_db

    setup_db(foodie)

    yield

    drop_db(foodie)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Push the domain context before each test, cleanup after."""
    from foodie.domain import foodie

    ctx = foodie.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


@pytest.fixture()
def menu():
    """The default catalog, keyed by dish name."""
    from foodie.menu.seed import seed_menu

    return {item.name: item for item in seed_menu()}


@pytest.fixture()
def client():
    from fastapi import FastAPI
    from fastapi.testclient import TestClient
    from protean.integrations.fastapi import DomainContextMiddleware

    from foodie.api import menu_router, order_router
    from foodie.api.errors import register_exception_handlers
    from foodie.domain import foodie

    app = FastAPI()
    app.add_middleware(DomainContextMiddleware, route_domain_map={"/api": foodie})
    app.include_router(menu_router)
    app.include_router(order_router)
    register_exception_handlers(app)
    return TestClient(app)
