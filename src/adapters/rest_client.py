"""Request engine shared by every typed REST client.

Flow of one call (no retries, terminal on the first response or error):
acquire client -> compose URI -> build request -> add Authorization ->
send -> classify by status -> parse body or synthesize envelope.

Callers never need try/except around a call: transport errors and
unparseable bodies come back as an envelope with status 444.
"""

from __future__ import annotations

import logging
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, TypeVar

import httpx
from pydantic import ValidationError
from pydantic_core import PydanticSerializationError, to_json

from adapters.http_client import FactoryClientSource, FixedClientSource, HttpClientFactory
from core.domain.results import ResultEnvelope
from core.errors import InvalidArgumentError
from core.interfaces.client_source import ClientSource

R = TypeVar("R", bound=ResultEnvelope)

EXCEPTION_STATUS = 444
EXCEPTION_TITLE = "Exception"
JSON_CONTENT_TYPE = "application/json; charset=utf-8"

# Errors turned into a 444 envelope instead of propagating.
CAPTURED_ERRORS: tuple[type[BaseException], ...] = (
    httpx.HTTPError,
    httpx.InvalidURL,
    ValidationError,
    PydanticSerializationError,
)


class BodyPolicy(str, Enum):
    """What to do with a response body for a given status."""

    PARSE = "parse"
    TEXT = "text"


# 200/400/404 carry an application payload; anything else may be an HTML
# error page or plain text and is never fed to the JSON parser.
STATUS_POLICY: Mapping[int, BodyPolicy] = MappingProxyType(
    {
        httpx.codes.OK: BodyPolicy.PARSE,
        httpx.codes.BAD_REQUEST: BodyPolicy.PARSE,
        httpx.codes.NOT_FOUND: BodyPolicy.PARSE,
    }
)

_NO_BODY = object()


def is_well_formed_absolute_uri(uri: str) -> bool:
    if any(ch.isspace() for ch in uri):
        return False
    try:
        url = httpx.URL(uri)
    except httpx.InvalidURL:
        return False
    return url.is_absolute_url and bool(url.host)


class RestClientBase:
    """Base class for typed REST API clients.

    Subclasses expose resource methods and delegate to `get`, `post`, `put`
    and `delete`, passing the envelope type to deserialize into::

        class DevicesClient(RestClientBase):
            client_name = "devices"

            async def get_device(self, device_id: int) -> Results[Device]:
                return await self.get(f"devices/{device_id}", Results[Device])
    """

    #: Name looked up in an `HttpClientFactory` when built in factory mode.
    client_name: str = "rest-client"

    status_policy: Mapping[int, BodyPolicy] = STATUS_POLICY
    default_policy: BodyPolicy = BodyPolicy.TEXT

    def __init__(
        self,
        source: HttpClientFactory | httpx.AsyncClient | ClientSource,
        base_uri: str,
        logger: logging.Logger | logging.LoggerAdapter,
    ) -> None:
        if base_uri is None:
            raise InvalidArgumentError("base_uri")
        if not is_well_formed_absolute_uri(base_uri):
            raise InvalidArgumentError("base_uri", "Invalid Uri format")
        if source is None:
            raise InvalidArgumentError("source")
        if logger is None:
            raise InvalidArgumentError("logger")

        self._base_uri = base_uri
        self._base_url = httpx.URL(base_uri)
        self._source = self._resolve_source(source)
        self.logger = logger
        self._auth_token: str | None = None

    def _resolve_source(self, source: Any) -> ClientSource:
        if isinstance(source, HttpClientFactory):
            return FactoryClientSource(source, self.client_name)
        if isinstance(source, httpx.AsyncClient):
            return FixedClientSource(source)
        if isinstance(source, ClientSource):
            return source
        raise InvalidArgumentError("source", f"Unsupported transport source: {type(source).__name__}")

    @property
    def base_uri(self) -> str:
        return self._base_uri

    @property
    def auth_token(self) -> str | None:
        """Bearer token sent with every request."""

        return self._auth_token

    @auth_token.setter
    def auth_token(self, value: str | None) -> None:
        self._auth_token = value

    def get_client(self) -> httpx.AsyncClient:
        """Borrow the HTTP client for one call. The engine never closes it."""

        return self._source.get_client()

    def prepare_path(self, path: str) -> httpx.URL:
        """Resolve `path` against the base URI.

        A leading `/` replaces the base path, anything else is appended to it
        (`http://host/v1/` + `x` -> `http://host/v1/x`). A `?query` suffix
        becomes the query string.
        """

        if path is None:
            raise InvalidArgumentError("path")

        path, sep, query = path.partition("?")
        if path.startswith("/"):
            new_path = path
        else:
            new_path = self._base_url.path + path

        url = self._base_url.copy_with(path=new_path)
        if sep:
            url = url.copy_with(params=query)
        return url

    def add_authorization_header(self, request: httpx.Request) -> None:
        """Set `Authorization: Bearer <token>` on the request, even without a token."""

        if request is None:
            raise InvalidArgumentError("request")
        token = self.auth_token or ""
        request.headers["Authorization"] = f"Bearer {token}" if token else "Bearer"

    async def deserialize_if_supported_code(
        self,
        response: httpx.Response,
        result_type: type[R],
    ) -> R:
        """Turn a response into an envelope according to `status_policy`."""

        if response is None:
            raise InvalidArgumentError("response")

        policy = self.status_policy.get(response.status_code, self.default_policy)
        if policy is BodyPolicy.PARSE:
            return await self._parse_body(response, result_type)
        return await self._synthesize_from_text(response, result_type)

    async def _parse_body(self, response: httpx.Response, result_type: type[R]) -> R:
        body = await response.aread()
        if body.strip():
            result = result_type.model_validate_json(body)
        else:
            result = result_type()
        # The HTTP status is authoritative over whatever the body claims.
        result.success = response.status_code == httpx.codes.OK
        if result.status is None:
            result.status = response.status_code
        return result

    async def _synthesize_from_text(self, response: httpx.Response, result_type: type[R]) -> R:
        result = result_type()
        result.success = False
        result.status = response.status_code
        await response.aread()
        if _declared_length(response) > 0:
            result.title = response.text
        return result

    async def get(self, url: str, result_type: type[R]) -> R:
        return await self._send("GET", url, result_type)

    async def post(self, url: str, obj: Any, result_type: type[R]) -> R:
        """POST `obj` serialized as UTF-8 JSON."""

        return await self._send("POST", url, result_type, payload=obj)

    async def put(self, url: str, obj: Any, result_type: type[R]) -> R:
        """PUT `obj` serialized as UTF-8 JSON."""

        return await self._send("PUT", url, result_type, payload=obj)

    async def delete(self, url: str, result_type: type[R]) -> R:
        return await self._send("DELETE", url, result_type)

    async def _send(
        self,
        method: str,
        url: str,
        result_type: type[R],
        *,
        payload: Any = _NO_BODY,
    ) -> R:
        client = self.get_client()
        try:
            request = self._build_request(client, method, self.prepare_path(url), payload)
            self.add_authorization_header(request)
            if self.logger.isEnabledFor(logging.DEBUG):
                self.logger.debug("RequestUri: %s", request.url)
                self.logger.debug("AuthHeader: %s", request.headers.get("Authorization"))

            response = await client.send(request, stream=True)
            try:
                return await self.deserialize_if_supported_code(response, result_type)
            finally:
                await response.aclose()
        except CAPTURED_ERRORS as exc:
            return self._exception_result(result_type, exc)

    @staticmethod
    def _build_request(
        client: httpx.AsyncClient,
        method: str,
        url: httpx.URL,
        payload: Any,
    ) -> httpx.Request:
        if payload is _NO_BODY:
            return client.build_request(method, url)
        return client.build_request(
            method,
            url,
            content=to_json(payload),
            headers={"Content-Type": JSON_CONTENT_TYPE},
        )

    @staticmethod
    def _exception_result(result_type: type[R], exc: BaseException) -> R:
        result = result_type()
        result.status = EXCEPTION_STATUS
        result.title = EXCEPTION_TITLE
        result.success = False
        result.exception = exc
        return result


def _declared_length(response: httpx.Response) -> int:
    # Chunked or otherwise undeclared bodies count as empty.
    try:
        return int(response.headers.get("Content-Length", "0"))
    except ValueError:
        return 0
