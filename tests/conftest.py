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

    Sets PROTEAN_ENV so that domain modules imported during collection pick up
    the test configuration overlay and the quiet test log level.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ.pop("STRIPE_SECRET_KEY", None)
    os.environ.pop("REDIS_URL", None)


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


@pytest.fixture(autouse=True)
def _reset_adapters():
    """Put process-wide gateway, storage and catalogue reader back to defaults."""
    yield

    from ordering.cart.catalog import reset_catalog_reader
    from ordering.storage import reset_store
    from payments.gateway import reset_gateway

    reset_gateway()
    reset_store()
    reset_catalog_reader()
