from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from assign_app.core.admin_console import AdminConsole
from assign_app.core.services.api_client import AdminApiClient
from tests.fake_backend import FakeStore, create_app, seeded_store

BASE_URL = "http://testserver"


@pytest.fixture
def store() -> FakeStore:
    return seeded_store()


@pytest.fixture
def api(store: FakeStore):
    client = AdminApiClient(BASE_URL, token="secret-token", client=TestClient(create_app(store)))
    yield client
    client.close()


@pytest.fixture
def console(api: AdminApiClient) -> AdminConsole:
    return AdminConsole(api)
