"""CMMS Gateway HTTP Client.

Low-level HTTP client for calls through the API gateway.
Handles authentication headers, correlation headers, optional retries and
error handling. Domain namespaces in gateway.apis are built on ``request``.
"""

from typing import Any, Dict, Mapping, Optional
import asyncio
import json
import time

import aiohttp
from pydantic import BaseModel

from core.models import CMMSBaseModel
from core.observability.logging import get_correlation_context, get_logger, with_correlation
from core.observability.metrics import get_metrics
from gateway.auth import SessionProvider
from gateway.config import GatewayConfig
from gateway.errors import RequestFailed

logger = get_logger(__name__)


def build_query_params(params: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    """Convert filter values to query-string values.

    None values are dropped; booleans become "true"/"false"; everything else
    is stringified.
    """
    if not params:
        return {}
    query = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            query[key] = "true" if value else "false"
        else:
            query[key] = str(value)
    return query


def serialize_body(body: Any) -> Any:
    """Turn a model into a JSON-ready dict; plain JSON values pass through."""
    if isinstance(body, CMMSBaseModel):
        return body.to_payload()
    if isinstance(body, BaseModel):
        return body.model_dump(exclude_none=True, mode="json")
    return body


class GatewayClient:
    """HTTP client for the CMMS API gateway.

    Provides:
    - One authenticated call primitive (``request``)
    - Bearer / organization / correlation headers
    - Configurable retries with exponential backoff (off by default)
    - Uniform ``RequestFailed`` errors

    Usage:
        async with GatewayClient(config, session_provider) as client:
            assets = await client.get("/api/assets", resource="asset",
                                      error_message="Failed to fetch assets")
    """

    def __init__(
        self,
        config: GatewayConfig,
        session_provider: Optional[SessionProvider] = None,
        http_session: Optional[aiohttp.ClientSession] = None,
    ):
        """Initialize gateway client.

        Args:
            config: Gateway configuration
            session_provider: Supplies the bearer token and active organization;
                None sends unauthenticated requests
            http_session: Externally owned aiohttp session (not closed by disconnect)
        """
        self.config = config
        self.session_provider = session_provider
        self._session = http_session
        self._owns_session = http_session is None

    @property
    def is_connected(self) -> bool:
        return self._session is not None and not self._session.closed

    async def connect(self) -> None:
        """Initialize HTTP session."""
        if self.is_connected:
            return
        self._session = aiohttp.ClientSession()
        self._owns_session = True

    async def disconnect(self) -> None:
        """Close HTTP session."""
        if self._session and self._owns_session:
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> "GatewayClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.disconnect()

    async def _get_headers(self) -> Dict[str, str]:
        """Get headers for a gateway request."""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

        session = await self.session_provider.get_session() if self.session_provider else None
        if session and session.access_token:
            headers["Authorization"] = session.authorization_header
            if self.config.send_organization_header and session.organization_id:
                headers["x-organization-id"] = session.organization_id

        ctx = get_correlation_context()
        if self.config.send_correlation_header and ctx.correlation_id:
            headers["x-correlation-id"] = ctx.correlation_id

        return headers

    def _retry_delay(self, attempt: int, status_code: Optional[int], retry_after: Optional[str]) -> float:
        retry_config = self.config.retry_config
        if status_code == 429 and retry_after:
            try:
                return min(float(retry_after), retry_config.max_delay)
            except ValueError:
                pass  # HTTP-date form; fall back to backoff
        return retry_config.get_delay(attempt)

    async def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        *,
        resource: Optional[str] = None,
        error_message: Optional[str] = None,
    ) -> Any:
        """Make an authenticated gateway request.

        Args:
            method: HTTP method
            path: Path suffix under the gateway (e.g. "/api/assets")
            body: JSON body (dict, list or model); omitted when None
            params: Query parameters
            resource: Resource name for errors, logs and metrics
            error_message: Fixed message for RequestFailed

        Returns:
            Decoded JSON body ({} for empty responses)

        Raises:
            RequestFailed: Non-2xx response, undecodable 2xx body, transport
                failure or timeout
        """
        if not self.is_connected:
            raise RuntimeError("Not connected. Call connect() first.")

        method = method.upper()
        resource = resource or "gateway"
        error_message = error_message or f"Request failed: {method} {path}"
        url = self.config.build_url(path)
        query = build_query_params(params)
        payload = serialize_body(body)
        retry_config = self.config.retry_config
        timeout = aiohttp.ClientTimeout(total=self.config.timeout_seconds)
        metrics = get_metrics()

        def failed(status_code: Optional[int], response_text: str = "") -> RequestFailed:
            return RequestFailed(
                error_message,
                resource=resource,
                status_code=status_code,
                response_body=response_text,
                method=method,
                path=path,
            )

        with with_correlation(resource=resource, method=method, path=path):
            metrics.record_request_started(resource)
            started = time.monotonic()
            attempt = 0

            while True:
                headers = await self._get_headers()

                try:
                    async with self._session.request(
                        method,
                        url,
                        headers=headers,
                        params=query or None,
                        json=payload,
                        timeout=timeout,
                    ) as response:
                        status = response.status
                        response_text = await response.text()
                        retry_after = response.headers.get("Retry-After")

                except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                    if retry_config.should_retry(method, attempt):
                        delay = retry_config.get_delay(attempt)
                        logger.warning(
                            f"{method} {path} failed with {type(e).__name__}: {e}, "
                            f"retrying in {delay:.1f}s (attempt {attempt + 1}/{retry_config.max_retries})"
                        )
                        metrics.record_request_retry(resource, attempt + 1)
                        await asyncio.sleep(delay)
                        attempt += 1
                        continue

                    duration_ms = (time.monotonic() - started) * 1000
                    metrics.record_request_failed(resource, None, duration_ms)
                    logger.warning(
                        f"{method} {path} failed: {type(e).__name__}: {e}",
                        extra_fields={"duration_ms": round(duration_ms, 1)},
                    )
                    raise failed(None) from e

                duration_ms = (time.monotonic() - started) * 1000

                # Success
                if 200 <= status < 300:
                    if status == 204 or not response_text:
                        data: Any = {}
                    else:
                        try:
                            data = json.loads(response_text)
                        except ValueError as e:
                            metrics.record_request_failed(resource, status, duration_ms)
                            logger.warning(f"{method} {path} -> {status} with a non-JSON body")
                            raise failed(status, response_text) from e

                    metrics.record_request_succeeded(resource, status, duration_ms)
                    logger.debug(
                        f"{method} {path} -> {status}",
                        extra_fields={"status": status, "duration_ms": round(duration_ms, 1)},
                    )
                    return data

                if retry_config.should_retry(method, attempt, status):
                    delay = self._retry_delay(attempt, status, retry_after)
                    logger.warning(
                        f"{method} {path} failed with {status}, "
                        f"retrying in {delay:.1f}s (attempt {attempt + 1}/{retry_config.max_retries})"
                    )
                    metrics.record_request_retry(resource, attempt + 1)
                    await asyncio.sleep(delay)
                    attempt += 1
                    continue

                # Non-retryable error
                metrics.record_request_failed(resource, status, duration_ms)
                logger.warning(
                    f"{method} {path} -> {status}: {error_message}",
                    extra_fields={"status": status, "duration_ms": round(duration_ms, 1)},
                )
                raise failed(status, response_text)

    async def get(self, path: str, params: Optional[Mapping[str, Any]] = None, **kwargs) -> Any:
        """GET request."""
        return await self.request("GET", path, params=params, **kwargs)

    async def post(self, path: str, body: Any = None, **kwargs) -> Any:
        """POST request."""
        return await self.request("POST", path, body=body, **kwargs)

    async def put(self, path: str, body: Any = None, **kwargs) -> Any:
        """PUT request."""
        return await self.request("PUT", path, body=body, **kwargs)

    async def patch(self, path: str, body: Any = None, **kwargs) -> Any:
        """PATCH request."""
        return await self.request("PATCH", path, body=body, **kwargs)

    async def delete(self, path: str, **kwargs) -> Any:
        """DELETE request."""
        return await self.request("DELETE", path, **kwargs)

    async def health_check(self) -> Dict[str, Any]:
        """Check gateway and downstream service health."""
        return await self.get(
            "/api/health",
            resource="gateway",
            error_message="Gateway health check failed",
        )
