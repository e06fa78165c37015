# tests/conftest.py
import json

import pytest

from core.config import GleanConfig
from core.glean_client import HttpResponse


class FakeGleanClient:
    """Stands in for GleanClient: records every POST and replays a canned reply."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, endpoint, payload):
        self.calls.append((endpoint, payload))
        if self.error is not None:
            raise self.error
        return self.response


def json_response(body, status=200):
    return HttpResponse(status=status, body=json.dumps(body).encode("utf-8"))


@pytest.fixture
def config():
    return GleanConfig(api_key="test-token", domain="acme")


@pytest.fixture
def fake_client():
    return FakeGleanClient()
