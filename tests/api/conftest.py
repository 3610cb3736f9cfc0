"""
API Test Fixtures

One InvoiceApiClient is shared by every test in a module: initialized
once in setup and disposed once in teardown.
"""
from typing import Dict, Generator, Optional

import pytest

from config.env_config import settings
from services.invoice_api import InvoiceApiClient


def api_configured() -> bool:
    return bool(settings.API_AUTH)


@pytest.fixture(scope="module")
def api_client() -> Generator[InvoiceApiClient, None, None]:
    """Initialized API client shared across the module."""
    client = InvoiceApiClient(settings)
    client.init()

    yield client

    client.dispose()


@pytest.fixture(scope="module")
def invoice_state() -> Dict[str, Optional[str]]:
    """Mutable state shared by serially dependent tests (e.g. created id)."""
    return {"invoice_id": None}


@pytest.fixture
def invoice_id(invoice_state) -> str:
    """Id of the invoice created earlier in the module, or skip."""
    if not invoice_state["invoice_id"]:
        pytest.skip("Invoice ID missing from create response")
    return invoice_state["invoice_id"]


def pytest_collection_modifyitems(config, items):
    """Mark API tests."""
    for item in items:
        if "/api/" in item.nodeid.replace("\\", "/"):
            item.add_marker(pytest.mark.api)
