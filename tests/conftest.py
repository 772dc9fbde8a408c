"""Pytest session bootstrap for this repository.

Responsibilities:
- Ensure the `cloud_agent` package is importable
- Isolate every test from the developer's CLOUD_AGENT_* environment
- Provide fake `requests` sessions so no test reaches the network
"""

import os
import sys

import pytest

HERE = os.path.dirname(__file__)
ROOT = os.path.abspath(os.path.join(HERE, '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from cloud_agent.application import call_gate as gate_module  # noqa: E402
from cloud_agent.infrastructure.config import settings as settings_module  # noqa: E402
from cloud_agent.infrastructure.http import transport as transport_module  # noqa: E402


class FakeResp:
    def __init__(self, url, status_code=200, chunks=(b'{}',), on_chunk=None):
        self.url = url
        self.status_code = status_code
        self.headers = {'Content-Type': 'application/json'}
        self._chunks = list(chunks)
        self._on_chunk = on_chunk
        self.chunks_pulled = 0
        self.closed = False

    def iter_content(self, chunk_size=8192):
        for chunk in self._chunks:
            self.chunks_pulled += 1
            if self._on_chunk:
                self._on_chunk(self.chunks_pulled)
            yield chunk

    def close(self):
        self.closed = True


class FakeSession:
    def __init__(self, net):
        self.net = net

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False

    def request(self, method, url, headers, data, timeout, stream, allow_redirects):
        self.net.calls.append({
            'method': method,
            'url': url,
            'headers': dict(headers),
            'data': data,
            'timeout': timeout,
            'stream': stream,
            'allow_redirects': allow_redirects,
        })
        if self.net.error is not None:
            raise self.net.error
        self.net.response = FakeResp(url, self.net.status, self.net.chunks, self.net.on_chunk)
        return self.net.response


class FakeNet:
    """Stands in for the `requests` module inside the transport."""

    def __init__(self):
        self.calls = []
        self.sessions_opened = 0
        self.status = 200
        self.chunks = [b'{}']
        self.on_chunk = None
        self.error = None
        self.response = None

    def Session(self):
        self.sessions_opened += 1
        return FakeSession(self)

    def respond(self, status=200, body=b'{}', chunks=None):
        self.status = status
        if chunks is not None:
            self.chunks = list(chunks)
        else:
            self.chunks = [body if isinstance(body, bytes) else body.encode('utf-8')]


@pytest.fixture(autouse=True)
def _env_isolation(monkeypatch):
    for key in list(os.environ):
        if key.startswith('CLOUD_AGENT_'):
            monkeypatch.delenv(key, raising=False)
    # Never read a developer .env during tests
    monkeypatch.setitem(settings_module.CloudAgentSettings.model_config, 'env_file', None)
    settings_module.reload_settings()
    gate_module.reset_call_gate()
    yield
    for key in list(os.environ):
        if key.startswith('CLOUD_AGENT_'):
            monkeypatch.delenv(key, raising=False)
    settings_module.reload_settings()
    gate_module.reset_call_gate()


@pytest.fixture
def fake_net(monkeypatch):
    net = FakeNet()
    monkeypatch.setattr(transport_module, 'requests', net)
    return net


@pytest.fixture
def configure(monkeypatch):
    """Set CLOUD_AGENT_* variables and rebuild settings and the shared call gate."""
    def _configure(api_key=None, url=None):
        if api_key is not None:
            monkeypatch.setenv('CLOUD_AGENT_API_KEY', api_key)
        if url is not None:
            monkeypatch.setenv('CLOUD_AGENT_URL', url)
        settings = settings_module.reload_settings()
        gate_module.reset_call_gate()
        return settings
    return _configure
