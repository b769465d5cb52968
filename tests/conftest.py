import json

import pytest
import requests


class FakeResponse:
    def __init__(self, status_code=200, body=None, content=None):
        self.status_code = status_code
        if content is not None:
            self.content = content
            self.text = content.decode("utf-8", errors="replace")
        else:
            self.text = body if isinstance(body, str) else json.dumps(body if body is not None else {})
            self.content = self.text.encode("utf-8")


class FakeTransport:
    """Stands in for requests.request and records every call."""

    def __init__(self):
        self.calls = []
        self.response = FakeResponse()
        self.error = None

    def reply(self, status_code=200, body=None, content=None):
        self.response = FakeResponse(status_code, body, content)

    def fail(self, error):
        self.error = error

    def __call__(self, method, url, **kwargs):
        call = {"method": method, "url": url, **kwargs}
        files = kwargs.get("files") or {}
        call["file_names"] = {k: getattr(v, "name", None) for k, v in files.items()}
        call["file_closed_during_call"] = {k: v.closed for k, v in files.items()}
        self.calls.append(call)
        if self.error is not None:
            raise self.error
        return self.response

    @property
    def last(self):
        return self.calls[-1]

    def last_json(self):
        return json.loads(self.last["data"])


@pytest.fixture
def transport(monkeypatch):
    fake = FakeTransport()
    monkeypatch.setattr(requests, "request", fake)
    return fake
