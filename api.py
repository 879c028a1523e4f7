import asyncio
import logging
from typing import Any

import aiohttp

import config
from exceptions.api import (
    AuthRequiredException,
    GENERIC_SERVER_MESSAGE,
    MalformedResponseException,
    ServerRejectionException,
)

logger = logging.getLogger(__name__)


class ApiClient:
    """
    Thin aiohttp client for the marketplace REST API.

    Every endpoint answers with an envelope
        {"statusCode": 200, "data": ..., "message": "...", "success": true}
    request() returns the "data" part. Error responses are mapped to
    exceptions here so repositories never see HTTP details:
    - 401 → AuthRequiredException
    - other 4xx/5xx → ServerRejectionException with the server's "message"
    - connection errors and timeouts → ServerRejectionException(status_code=None)

    Nothing is retried; a failed request is terminal for the user action.
    """

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout_seconds: float | None = None,
        session: aiohttp.ClientSession | None = None,
    ):
        self.base_url = (base_url or config.API_BASE_URL).rstrip("/")
        self.token = token if token is not None else config.API_TOKEN
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds or config.API_TIMEOUT_SECONDS)
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> 'ApiClient':
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    def set_token(self, token: str | None):
        self.token = token

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
            self._owns_session = True
        return self._session

    async def close(self):
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def request(self, method: str, path: str, *, json: dict | None = None, params: dict | None = None) -> Any:
        url = f"{self.base_url}{path}"
        session = self._get_session()
        logger.debug(f"{method} {path}")
        try:
            async with session.request(method, url, json=json, params=params, headers=self._headers()) as response:
                body = await self._read_body(response, path)
                if response.status == 401:
                    logger.info(f"{method} {path} → 401")
                    raise AuthRequiredException(self._server_message(body), path=path)
                if response.status >= 400:
                    message = self._server_message(body)
                    logger.warning(f"{method} {path} → {response.status}: {message or '(no message)'}")
                    raise ServerRejectionException(response.status, message, path=path)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"{method} {path} failed: {type(e).__name__}: {e}")
            raise ServerRejectionException(None, GENERIC_SERVER_MESSAGE, path=path) from e

        if isinstance(body, dict) and "data" in body:
            return body["data"]
        return body

    @staticmethod
    async def _read_body(response: aiohttp.ClientResponse, path: str) -> Any:
        if response.status == 204:
            return None
        text = await response.text()
        if not text:
            return None
        try:
            return await response.json(content_type=None)
        except ValueError:
            if response.status >= 400:
                # HTML error pages from proxies carry no usable message
                return None
            raise MalformedResponseException(path, "body is not JSON")

    @staticmethod
    def _server_message(body: Any) -> str | None:
        if isinstance(body, dict):
            message = body.get("message")
            if isinstance(message, str) and message.strip():
                return message
        return None

    async def get(self, path: str, params: dict | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: dict | None = None) -> Any:
        return await self.request("POST", path, json=json)

    async def patch(self, path: str, json: dict | None = None) -> Any:
        return await self.request("PATCH", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)
