import pytest
from fastapi.testclient import TestClient

from crudpanel.api.main import create_app
from crudpanel.core.fields import CrudPanel
from crudpanel.core.observability.metrics import reset_metrics
from crudpanel.core.settings import Settings


@pytest.fixture(autouse=True)
def _reset_metrics():
    reset_metrics()
    yield
    reset_metrics()


@pytest.fixture()
def panel():
    return CrudPanel(operation="create")


@pytest.fixture()
def app():
    # fresh app per test so panels never leak between tests
    return create_app(Settings(operations=("create", "update")))


@pytest.fixture()
def client(app):
    return TestClient(app)
