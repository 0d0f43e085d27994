"""httpx client construction and registration.

Why a wrapper:
- Standardizes timeouts and default headers (JSON Accept, User-Agent) for
  every named client.
- Eases testing: a client can be registered with a mock transport.
"""

from __future__ import annotations

from typing import Any

import httpx

from core.config import ClientSettings
from core.errors import InvalidArgumentError


def build_async_client(
    settings: ClientSettings | None = None,
    *,
    client_name: str | None = None,
    version: str | None = None,
    extra_headers: dict[str, str] | None = None,
    **client_kwargs: Any,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with the JSON API defaults.

    Headers:
    - `Accept: application/json`
    - `User-Agent: <client_name>/<version>`
    """

    settings = settings or ClientSettings()
    name = client_name or settings.client_name
    headers: dict[str, str] = {
        "Accept": "application/json",
        "User-Agent": f"{name}/{version or settings.client_version}",
    }
    if extra_headers:
        headers.update(extra_headers)
    client_kwargs.setdefault("timeout", httpx.Timeout(settings.http_timeout_seconds))
    return httpx.AsyncClient(headers=headers, **client_kwargs)


class HttpClientFactory:
    """Registry of named HTTP clients.

    Clients are built lazily on first use and cached per name, so repeated
    calls share one connection pool. The factory owns every client it built;
    close it with `aclose()` or use it as an async context manager.
    """

    def __init__(self, settings: ClientSettings | None = None) -> None:
        self._settings = settings or ClientSettings()
        self._registrations: dict[str, dict[str, Any]] = {}
        self._clients: dict[str, httpx.AsyncClient] = {}

    def register_client(
        self,
        client_name: str,
        version: str,
        **client_kwargs: Any,
    ) -> None:
        """Register a named client with JSON Accept and a `name/version` User-Agent.

        Extra keyword arguments (e.g. `transport=`) are passed to `httpx.AsyncClient`.
        """

        if not client_name:
            raise InvalidArgumentError("client_name")
        if not version:
            raise InvalidArgumentError("version")
        self._registrations[client_name] = {"version": version, **client_kwargs}

    def is_registered(self, client_name: str) -> bool:
        return client_name in self._registrations

    def create_client(self, client_name: str) -> httpx.AsyncClient:
        client = self._clients.get(client_name)
        if client is not None and not client.is_closed:
            return client

        try:
            registration = dict(self._registrations[client_name])
        except KeyError:
            raise KeyError(f"No HTTP client registered under '{client_name}'.") from None

        version = registration.pop("version")
        client = build_async_client(
            self._settings,
            client_name=client_name,
            version=version,
            **registration,
        )
        self._clients[client_name] = client
        return client

    async def aclose(self) -> None:
        clients = list(self._clients.values())
        self._clients.clear()
        for client in clients:
            await client.aclose()

    async def __aenter__(self) -> HttpClientFactory:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


class FactoryClientSource:
    """Pulls a named client from an `HttpClientFactory` for every call."""

    def __init__(self, factory: HttpClientFactory, client_name: str) -> None:
        if factory is None:
            raise InvalidArgumentError("factory")
        if not client_name:
            raise InvalidArgumentError("client_name")
        self._factory = factory
        self.client_name = client_name

    def get_client(self) -> httpx.AsyncClient:
        return self._factory.create_client(self.client_name)


class FixedClientSource:
    """Always hands out the same pre-built client."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        if client is None:
            raise InvalidArgumentError("client")
        self._client = client

    def get_client(self) -> httpx.AsyncClient:
        return self._client
