import pytest
import requests
from fastapi.testclient import TestClient

import server
from config import Config


class FakeUpstream:
    def __init__(self, content=b"", status_code=200, headers=None):
        self.content = content
        self.status_code = status_code
        self.headers = headers or {}

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} upstream error")


@pytest.fixture
def client():
    return TestClient(server.app)


def test_proxy_forwards_document_verbatim(client, monkeypatch):
    seen = {}
    body = "<html><body><p>Tesla&nbsp;10-Q</p></body></html>".encode("utf-8")

    def fake_get(url, headers, timeout):
        seen["url"], seen["headers"] = url, headers
        return FakeUpstream(content=body, headers={"Content-Type": "text/html; charset=utf-8"})

    monkeypatch.setattr(requests, "get", fake_get)

    response = client.get("/sec-link1")

    assert response.status_code == 200
    assert response.content == body
    assert seen["url"] == Config.UPSTREAM_URL
    assert seen["headers"] == {"User-Agent": Config.USER_AGENT}


def test_proxy_upstream_http_error(client, monkeypatch):
    monkeypatch.setattr(requests, "get", lambda url, headers, timeout: FakeUpstream(status_code=403))

    response = client.get("/sec-link1")

    assert response.status_code == 500
    assert response.json() == {"message": "Error Occured"}


def test_proxy_upstream_connection_error(client, monkeypatch):
    def fake_get(url, headers, timeout):
        raise requests.ConnectionError("unreachable")

    monkeypatch.setattr(requests, "get", fake_get)

    response = client.get("/sec-link1")

    assert response.status_code == 500
    assert response.json() == {"message": "Error Occured"}
