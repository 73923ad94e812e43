import sys
from pathlib import Path

import httpx
import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from adapters.http_client import build_client
from core.config import AppSettings
from core.domain.models import BuildContext


class Recorder:
    """MockTransport handler: records requests, answers per host.

    `routes` maps a host to a callable taking the request and returning an
    `httpx.Response` (or raising). Unknown hosts get `200 ok`.
    """

    def __init__(self, routes=None):
        self.routes = routes or {}
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        handler = self.routes.get(request.url.host)
        if handler is None:
            return httpx.Response(200, text="ok")
        return handler(request)

    @property
    def hosts(self):
        return [request.url.host for request in self.requests]


def build_context_data():
    return {
        "system": {"version": "0.4.0", "link_url": "https://ci.example.com"},
        "repo": {"owner": "octocat", "name": "hello-world", "full_name": "octocat/hello-world"},
        "build": {
            "number": 42,
            "status": "success",
            "branch": "main",
            "commit": "9fceb02",
            "started_at": 1700000000,
            "finished_at": 1700000090,
            "custom_field": {"nested": [1, 2, 3]},
        },
    }


@pytest.fixture
def context():
    return BuildContext.model_validate(build_context_data())


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def client(recorder):
    with build_client(AppSettings(), transport=httpx.MockTransport(recorder)) as c:
        yield c
