"""Shared fixtures: a mock transport that records requests."""

from __future__ import annotations

import logging
from typing import Callable

import httpx
import pytest

from adapters.rest_client import RestClientBase

BASE_URI = "http://host/v1/"


class RecordingTransport:
    """Mock transport handler that records requests and replies via `responder`."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.responder: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(200, json={})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def recorder() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def http_client(recorder: RecordingTransport) -> httpx.AsyncClient:
    # MockTransport holds no connections, nothing to close.
    return httpx.AsyncClient(transport=httpx.MockTransport(recorder))


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("tests.rest_client")


@pytest.fixture
def engine(http_client: httpx.AsyncClient, logger: logging.Logger) -> RestClientBase:
    return RestClientBase(http_client, BASE_URI, logger)
