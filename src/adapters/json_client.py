"""Generic JSON client.

Returns `Results[Any]` for any path: the payload is whatever JSON the server
sent under `data`. Used by the CLI to exercise the request engine against
arbitrary APIs.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from adapters.http_client import HttpClientFactory
from adapters.rest_client import RestClientBase
from core.config import ClientSettings
from core.domain.results import Results
from core.interfaces.client_source import ClientSource

SUPPORTED_METHODS = ("GET", "POST", "PUT", "DELETE")


class JsonClient(RestClientBase):
    def __init__(
        self,
        source: HttpClientFactory | httpx.AsyncClient | ClientSource,
        settings: ClientSettings | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._settings = settings or ClientSettings()
        self.client_name = self._settings.client_name
        super().__init__(
            source,
            self._settings.base_uri,
            logger or logging.getLogger(__name__),
        )
        self.auth_token = self._settings.auth_token

    async def fetch(self, method: str, path: str, body: Any = None) -> Results[Any]:
        verb = method.upper()
        if verb == "GET":
            return await self.get(path, Results[Any])
        if verb == "POST":
            return await self.post(path, body, Results[Any])
        if verb == "PUT":
            return await self.put(path, body, Results[Any])
        if verb == "DELETE":
            return await self.delete(path, Results[Any])
        raise ValueError(f"Unsupported method '{method}'. Expected one of {', '.join(SUPPORTED_METHODS)}.")
