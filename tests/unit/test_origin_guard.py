import pytest
from starlette.applications import Starlette
from starlette.responses import PlainTextResponse
from starlette.testclient import TestClient

from utils.constants import CORS_REJECTED_BODY
from utils.origin_guard import OriginGuardMiddleware

ALLOWED = "http://localhost:3000"


@pytest.fixture
def handled():
    return []


@pytest.fixture
def guarded_client(handled):
    async def root(request):
        handled.append(request.url.path)
        return PlainTextResponse("API Running")

    app = Starlette()
    app.add_middleware(OriginGuardMiddleware, allowed_origins=[ALLOWED])
    app.add_route("/", root, methods=["GET", "POST"])
    return TestClient(app)


def test_origin_guard_passes_requests_without_origin(guarded_client, handled):
    """Given no Origin header, when a request arrives, then it reaches the handler."""
    response = guarded_client.get("/")
    assert response.status_code == 200
    assert response.text == "API Running"
    assert handled == ["/"]


def test_origin_guard_passes_listed_origin(guarded_client, handled):
    """Given an allow-listed Origin, when a request arrives, then it reaches the handler."""
    response = guarded_client.post("/", headers={"Origin": ALLOWED})
    assert response.status_code == 200
    assert handled == ["/"]


def test_origin_guard_rejects_unlisted_origin(guarded_client, handled):
    """Given an unlisted Origin, when a request arrives, then 403 is returned and the handler never runs."""
    response = guarded_client.post("/", headers={"Origin": "https://evil.example"})
    assert response.status_code == 403
    assert response.json() == CORS_REJECTED_BODY
    assert handled == []


def test_origin_guard_logs_blocked_origin(guarded_client, mocker):
    """Given an unlisted Origin, when a request is rejected, then a warning names the origin."""
    warning = mocker.patch("utils.origin_guard.app_logger.warning")
    guarded_client.get("/", headers={"Origin": "https://evil.example"})

    warning.assert_called_once()
    assert warning.call_args.args[0] == "CORS blocked request from origin: https://evil.example"
    assert warning.call_args.kwargs["extra"]["origin"] == "https://evil.example"
