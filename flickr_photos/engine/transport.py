from __future__ import annotations

import logging
from collections.abc import Mapping
from types import TracebackType
from typing import Protocol, runtime_checkable

import httpx

from flickr_photos.core.config import Settings, get_settings
from flickr_photos.core.errors import TransportError

logger = logging.getLogger(__name__)

RESPONSE_FORMAT = {"format": "json", "nojsoncallback": "1"}


@runtime_checkable
class RequestExecutor(Protocol):
    """Sends one request to the REST endpoint and returns the raw body.

    Signing and credentials belong to the executor.
    """

    def get(self, endpoint: str, params: Mapping[str, str]) -> str: ...

    def post(self, endpoint: str, params: Mapping[str, str]) -> str: ...


class HttpxExecutor:
    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.Client | None = None,
        auth: httpx.Auth | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=httpx.Timeout(self._settings.http_timeout_seconds),
            headers={"User-Agent": self._settings.user_agent},
            follow_redirects=True,
        )
        self._auth = auth

    def get(self, endpoint: str, params: Mapping[str, str]) -> str:
        return self._send("GET", endpoint, params)

    def post(self, endpoint: str, params: Mapping[str, str]) -> str:
        return self._send("POST", endpoint, params)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> HttpxExecutor:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def _send(self, verb: str, endpoint: str, params: Mapping[str, str]) -> str:
        wire_params = self._wire_params(params)
        auth = self._auth if self._auth is not None else httpx.USE_CLIENT_DEFAULT
        try:
            if verb == "GET":
                response = self._client.get(endpoint, params=wire_params, auth=auth)
            else:
                response = self._client.post(endpoint, data=wire_params, auth=auth)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", verb, params.get("method"), exc)
            raise TransportError(f"{verb} {endpoint} failed: {exc}") from exc

        if not response.is_success:
            logger.warning(
                "%s %s returned HTTP %s", verb, params.get("method"), response.status_code
            )
            raise TransportError(
                f"{verb} {endpoint} returned HTTP {response.status_code}",
                status_code=response.status_code,
            )
        return response.text

    def _wire_params(self, params: Mapping[str, str]) -> dict[str, str]:
        wire_params = dict(params)
        wire_params.update(RESPONSE_FORMAT)
        if self._settings.api_key:
            wire_params["api_key"] = self._settings.api_key
        return wire_params
