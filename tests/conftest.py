from __future__ import annotations

import os

import httpx
import pytest

from backchat.services.http_network_service import HTTPNetworkService

BASE_URL = "https://api.example.com/v1"


@pytest.fixture(autouse=True)
def _clean_backchat_env(monkeypatch):
    """Tests never pick up BACKCHAT_* values from the developer's shell."""
    for key in list(os.environ):
        if key.startswith("BACKCHAT_"):
            monkeypatch.delenv(key)


@pytest.fixture
def make_service():
    """Build an HTTPNetworkService whose client answers through *handler*."""

    def _make(handler, base_url: str = BASE_URL, **kwargs) -> HTTPNetworkService:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return HTTPNetworkService(base_url, client=client, **kwargs)

    return _make
