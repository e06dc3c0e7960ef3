import io

import pytest
import requests
from requests.structures import CaseInsensitiveDict
from urllib3.response import HTTPResponse


def make_upstream(status=200, body=b"", headers=None):
    """Build a real `requests.Response` whose raw body streams from memory."""
    raw = HTTPResponse(
        body=io.BytesIO(body),
        headers=headers or {},
        status=status,
        preload_content=False,
        decode_content=False,
    )
    resp = requests.Response()
    resp.status_code = status
    resp.raw = raw
    resp.headers = CaseInsensitiveDict(raw.headers)
    return resp


class FakeSession:
    """Stands in for `requests.Session`; records what would be sent."""

    def __init__(self, responses=None, error=None):
        self.responses = list(responses or [])
        self.error = error
        self.sent = []
        self.bodies = []

    def send(self, prepared, **kwargs):
        body = prepared.body
        if body is not None and not isinstance(body, (bytes, str)):
            body = b"".join(body)
        self.sent.append((prepared, kwargs))
        self.bodies.append(body)
        if self.error is not None:
            raise self.error
        return self.responses.pop(0)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # setenv first so monkeypatch restores whatever a test (or dotenv) leaves behind
    for name in ("NORTHFLANK_SERVICE_URL", "EDGE_PROXY_HOST", "EDGE_PROXY_PORT", "LOG_LEVEL"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
