from types import SimpleNamespace
from urllib.parse import urlsplit

import pytest
from fastapi.testclient import TestClient

from report_replay.main import app
from report_replay.sender import CollectorClient

class FakeSession:
    """Answers every post with the given status; records what was sent."""

    def __init__(self, status_code=200, text="", error=None):
        self.status_code = status_code
        self.text = text
        self.error = error
        self.calls = []

    def post(self, url, data=None, headers=None, timeout=None):
        self.calls.append({"url": url, "data": data, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return SimpleNamespace(status_code=self.status_code, text=self.text)

class CollectorSession:
    """Routes CollectorClient posts into the stub collector app."""

    def __init__(self, client: TestClient):
        self.client = client
        self.calls = 0

    def post(self, url, data=None, headers=None, timeout=None):
        self.calls += 1
        return self.client.post(urlsplit(url).path, content=data, headers=headers)

@pytest.fixture
def fake_session():
    return FakeSession()

@pytest.fixture
def client(fake_session):
    return CollectorClient(url="http://collector.test/report", tenant_id="16",
                           tenant_header="dx_tenant_id", timeout=30, session=fake_session)

@pytest.fixture
def collector():
    return TestClient(app)

@pytest.fixture
def stub_client(collector):
    return CollectorClient(url="http://testserver/report", tenant_id="16",
                           tenant_header="dx_tenant_id", session=CollectorSession(collector))

@pytest.fixture
def no_sleep():
    pauses = []
    return pauses, pauses.append
