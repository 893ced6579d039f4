import pytest
from fastapi.testclient import TestClient

from tests.fixtures.app_settings import ALLOWED_ORIGIN
from tests.fixtures.mock_clients import FakeCompletionGateway, OpenAIClientBuilder


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def openai_client_builder():
    return OpenAIClientBuilder()


@pytest.fixture
def fake_gateway():
    """Gateway answering every question with a fixed text."""
    return FakeCompletionGateway(answer="MDD involves...")


@pytest.fixture
def valid_payload():
    """Minimal valid chat request body."""
    return {"question": "Explain the core symptoms of Major Depressive Disorder."}


@pytest.fixture
def app_factory(tmp_path):
    """Builds apps that log into a temporary directory."""
    from main import create_app

    def build(**kwargs):
        kwargs.setdefault("log_dir", str(tmp_path))
        kwargs.setdefault("allowed_origins", [ALLOWED_ORIGIN])
        return create_app(**kwargs)

    return build


@pytest.fixture
def configured_app(app_factory, fake_gateway):
    """Pre-configured app with a stubbed completion gateway."""
    with TestClient(app_factory(completion_gateway=fake_gateway)) as client:
        yield client
