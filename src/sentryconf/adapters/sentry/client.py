"""HTTP client for the Sentry organization integration API."""

from __future__ import annotations

import asyncio
from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING, Self
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from sentryconf.adapters.http_resilience import ResilientClient
from sentryconf.domain.errors import RemoteError
from sentryconf.domain.types import IntegrationPage

from .schema import OrganizationIntegrationPayload, SentryErrorPayload
from .translator import parse_integration

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine
    from types import TracebackType

    from sentryconf.config.http_resilience import ResilienceConfig
    from sentryconf.config.sentry import SentryConfig
    from sentryconf.domain.types import ConfigDocument, RemoteIntegration

log = getLogger(__name__)

RATE_LIMIT_REMAINING_HEADER = "X-Sentry-Rate-Limit-Remaining"
RATE_LIMIT_RESET_HEADER = "X-Sentry-Rate-Limit-Reset"
RATE_LIMIT_WARN_BELOW = 5


class SentryAPIError(RemoteError):
    """Raised when the Sentry API fails or returns an unexpected response."""


class SentryClient:
    """Blocking client for listing integrations and updating their configuration.

    Requests share one event loop and one connection pool for the lifetime of
    the client; use it as a context manager or call :meth:`close`.
    """

    def __init__(
        self,
        *,
        config: SentryConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._resilience = replace(
            config.resilience,
            response_hooks=(*config.resilience.response_hooks, _watch_rate_limit),
        )
        self._client_factory = client_factory or ResilientClient
        self._runner: asyncio.Runner | None = None
        self._http: ResilientClient | None = None

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._runner is None:
            return
        try:
            if self._http is not None:
                self._runner.run(self._http.aclose())
        finally:
            self._http = None
            self._runner.close()
            self._runner = None

    def list_integrations(
        self,
        organization: str,
        provider_key: str,
        cursor: str = "",
    ) -> IntegrationPage:
        return self._run(
            self._list_integrations_async(
                organization=organization,
                provider_key=provider_key,
                cursor=cursor,
            )
        )

    def update_config(
        self,
        organization: str,
        integration_id: str,
        document: ConfigDocument,
    ) -> RemoteIntegration | None:
        return self._run(
            self._update_config_async(
                organization=organization,
                integration_id=integration_id,
                document=document,
            )
        )

    def _run[T](self, coro: Coroutine[object, object, T]) -> T:
        if self._runner is None:
            self._runner = asyncio.Runner()
        return self._runner.run(coro)

    def _http_client(self) -> ResilientClient:
        if self._http is None:
            self._http = self._client_factory(self._resilience)
        return self._http

    async def _list_integrations_async(
        self,
        *,
        organization: str,
        provider_key: str,
        cursor: str,
    ) -> IntegrationPage:
        params: dict[str, str] = {"provider_key": provider_key}
        if cursor:
            params["cursor"] = cursor

        response = await self._perform_request(
            "GET",
            _integrations_path(organization),
            params=params,
        )
        payload = _json_payload(response)
        if not isinstance(payload, list):
            raise SentryAPIError("Unexpected Sentry response payload: expected a list")

        try:
            items = [
                parse_integration(OrganizationIntegrationPayload.model_validate(entry))
                for entry in payload  # pyright: ignore[reportUnknownVariableType]
            ]
        except ValidationError as exc:
            raise SentryAPIError(f"Unexpected Sentry integration payload: {exc}") from exc

        next_cursor = _next_cursor(response)
        log.debug(
            "Fetched %s integrations for %s (cursor=%r, next=%r)",
            len(items),
            organization,
            cursor,
            next_cursor,
        )
        return IntegrationPage(items=items, next_cursor=next_cursor)

    async def _update_config_async(
        self,
        *,
        organization: str,
        integration_id: str,
        document: ConfigDocument,
    ) -> RemoteIntegration | None:
        response = await self._perform_request(
            "POST",
            f"{_integrations_path(organization)}{quote(integration_id, safe='')}/",
            json=dict(document),
        )
        payload = _json_payload(response)
        if not isinstance(payload, dict) or "id" not in payload:
            return None
        try:
            return parse_integration(OrganizationIntegrationPayload.model_validate(payload))
        except ValidationError as exc:
            log.warning(
                "Sentry accepted the update of integration %s but its response could not "
                "be parsed: %s",
                integration_id,
                exc,
            )
            return None

    async def _perform_request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: object = None,
    ) -> httpx.Response:
        client = self._http_client()
        try:
            if method == "GET":
                response = await client.get(path, params=params)
            else:
                response = await client.post(path, json=json)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            detail = _error_detail(exc.response)
            log.error(
                "Sentry API error %s on %s %s: %s",
                exc.response.status_code,
                method,
                path,
                detail,
            )
            raise SentryAPIError(
                f"Sentry API returned {exc.response.status_code}: {detail}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise SentryAPIError(f"Sentry API request failed: {exc}") from exc
        return response


def _integrations_path(organization: str) -> str:
    return f"0/organizations/{quote(organization, safe='')}/integrations/"


def _json_payload(response: httpx.Response) -> object:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as exc:
        raise SentryAPIError("Sentry API returned a non-JSON response") from exc


def _next_cursor(response: httpx.Response) -> str:
    """Return the next-page cursor advertised in the ``Link`` header.

    Sentry always sends a ``rel="next"`` link and flags whether it has results.
    """

    link = response.links.get("next")
    if not link or link.get("results") != "true":
        return ""
    return link.get("cursor", "")


async def _watch_rate_limit(response: httpx.Response) -> None:
    remaining = response.headers.get(RATE_LIMIT_REMAINING_HEADER, "")
    if remaining.isdigit() and int(remaining) < RATE_LIMIT_WARN_BELOW:
        log.warning(
            "Sentry rate limit nearly exhausted: %s requests left until %s",
            remaining,
            response.headers.get(RATE_LIMIT_RESET_HEADER, "unknown"),
        )


def _error_detail(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(payload, dict):
        try:
            message = SentryErrorPayload.model_validate(payload).message()
        except ValidationError:
            message = None
        if message:
            return message
    return str(payload)  # pyright: ignore[reportUnknownArgumentType]
