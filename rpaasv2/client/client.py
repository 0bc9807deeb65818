"""
HTTP Client for the RPaaS API.

Provides the async httpx client used by every command. Two targets are
supported:

- DirectClient talks to the RPaaS API at its own URL (optional basic auth)
- TsuruProxyClient goes through the Tsuru service proxy, authenticated with
  a Tsuru token, as done when the CLI runs as a Tsuru plugin

Both share request logging, error decoding and the autoscale/log operations;
they only differ in how a resource path becomes a URL.
"""

from typing import Any, TextIO

import httpx

from rpaasv2 import __version__
from rpaasv2.client.types import Autoscale, LogArgs
from rpaasv2.core.exceptions import ApiError, ConfigurationError, ValidationError
from rpaasv2.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 30.0


def _error_message(body: Any) -> str | None:
    """Extract the human message from an API error body."""
    if isinstance(body, dict):
        for key in ("msg", "Msg", "message", "Message", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    if isinstance(body, str) and body.strip():
        return body.strip()
    return None


class RpaasClient:
    """
    Base HTTP client for RPaaS API communication.

    Features:
    - Lazily created httpx.AsyncClient, closed with ``close()`` or ``async with``
    - Structured logging of requests/responses
    - Error statuses raised as ApiError ("404 Not Found")

    Subclasses implement ``_resolve`` to turn an instance resource path into
    the request path and query parameters.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
        auth: httpx.Auth | tuple[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        user_agent: str | None = None,
    ) -> None:
        """
        Initialize the API client.

        Args:
            base_url: API base URL
            timeout: Request timeout in seconds
            headers: Extra headers sent with every request
            auth: httpx authentication
            transport: Custom httpx transport (used by tests)
            user_agent: User-Agent header value
        """
        if not base_url:
            raise ConfigurationError("API base URL must not be empty")
        if "://" not in base_url:
            base_url = f"http://{base_url}"

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout if timeout is not None else DEFAULT_TIMEOUT
        self.headers = {"User-Agent": user_agent or f"rpaasv2/{__version__}", **(headers or {})}
        self._auth = auth
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "RpaasClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self.headers,
                auth=self._auth,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    def _resolve(self, instance: str, resource: str) -> tuple[str, dict[str, str]]:
        """Return (path, query params) for ``resource`` of ``instance``."""
        raise NotImplementedError

    def _build_request(
        self,
        method: str,
        instance: str,
        resource: str,
        params: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> httpx.Request:
        if not instance:
            raise ValidationError("instance is required", details={"flag": "instance"})

        path, query = self._resolve(instance, resource)
        query.update(params or {})
        return self._get_client().build_request(method, path, params=query, **kwargs)

    async def _send(self, request: httpx.Request, stream: bool = False) -> httpx.Response:
        """
        Send a request and raise ApiError on error statuses.

        Raises:
            ApiError: On a 4xx/5xx response
            httpx.HTTPError: On transport failure
        """
        logger.debug("API request", method=request.method, url=str(request.url))

        try:
            response = await self._get_client().send(request, stream=stream)
        except httpx.HTTPError as e:
            logger.error(
                "API request failed",
                method=request.method,
                url=str(request.url),
                error=str(e),
            )
            raise

        logger.debug(
            "API response",
            method=request.method,
            url=str(request.url),
            status_code=response.status_code,
        )

        if response.is_error:
            if stream:
                await response.aread()
                await response.aclose()
            raise self._api_error(response)

        return response

    @staticmethod
    def _api_error(response: httpx.Response) -> ApiError:
        try:
            body: Any = response.json()
        except ValueError:
            body = response.text

        error = ApiError(
            status_code=response.status_code,
            reason=response.reason_phrase,
            body_message=_error_message(body),
            body=body,
        )
        logger.debug(
            "API error",
            status_code=error.status_code,
            reason=error.reason,
            detail=error.body_message,
        )
        return error

    # -------------------------------------------------------------------------
    # Autoscale
    # -------------------------------------------------------------------------

    async def get_autoscale(self, instance: str) -> Autoscale:
        """Fetch the autoscale policy of an instance."""
        request = self._build_request("GET", instance, "autoscale")
        response = await self._send(request)
        return Autoscale.model_validate(response.json())

    async def update_autoscale(self, instance: str, autoscale: Autoscale) -> None:
        """Create or update the autoscale policy; only set fields are sent."""
        request = self._build_request("PATCH", instance, "autoscale", json=autoscale.to_payload())
        await self._send(request)

    async def remove_autoscale(self, instance: str) -> None:
        """Remove the autoscale policy of an instance."""
        request = self._build_request("DELETE", instance, "autoscale")
        await self._send(request)

    # -------------------------------------------------------------------------
    # Logs
    # -------------------------------------------------------------------------

    async def log(self, args: LogArgs, out: TextIO) -> None:
        """
        Stream the instance logs into ``out``.

        With ``args.follow`` the call returns only when the server closes the
        stream or the task is cancelled.
        """
        # a followed stream may stay idle for long periods
        extra: dict[str, Any] = {}
        if args.follow:
            extra["timeout"] = httpx.Timeout(self.timeout, read=None)

        request = self._build_request("GET", args.instance, "log", params=args.to_query(), **extra)
        response = await self._send(request, stream=True)
        try:
            async for chunk in response.aiter_text():
                out.write(chunk)
                out.flush()
        finally:
            await response.aclose()


class DirectClient(RpaasClient):
    """Client for the RPaaS API reached at its own URL."""

    def __init__(
        self,
        url: str,
        user: str | None = None,
        password: str | None = None,
        **kwargs: Any,
    ) -> None:
        auth = (user, password or "") if user else None
        super().__init__(url, auth=auth, **kwargs)

    def _resolve(self, instance: str, resource: str) -> tuple[str, dict[str, str]]:
        return f"/resources/{instance}/{resource}", {}


class TsuruProxyClient(RpaasClient):
    """Client for the RPaaS API reached through the Tsuru service proxy."""

    def __init__(self, target: str, token: str, service: str, **kwargs: Any) -> None:
        if not service:
            raise ValidationError(
                "service is required when using the Tsuru target",
                details={"flag": "service"},
            )
        headers = {"Authorization": f"Bearer {token}"}
        super().__init__(target, headers=headers, **kwargs)
        self.service = service

    def _resolve(self, instance: str, resource: str) -> tuple[str, dict[str, str]]:
        path = f"/services/{self.service}/proxy/{instance}"
        return path, {"callback": f"/resources/{instance}/{resource}"}


def new_client(
    service: str | None = None,
    rpaas_url: str | None = None,
    rpaas_user: str | None = None,
    rpaas_password: str | None = None,
    tsuru_target: str | None = None,
    tsuru_token: str | None = None,
    **kwargs: Any,
) -> RpaasClient:
    """
    Build the client for the configured target.

    The direct RPaaS URL wins over the Tsuru target when both are set.

    Raises:
        ConfigurationError: If no target is configured
    """
    if rpaas_url:
        return DirectClient(rpaas_url, user=rpaas_user, password=rpaas_password, **kwargs)

    if tsuru_target and tsuru_token:
        return TsuruProxyClient(tsuru_target, tsuru_token, service or "", **kwargs)

    raise ConfigurationError(
        "no RPaaS target configured: set --rpaas-url (RPAAS_URL) "
        "or --tsuru-target and --tsuru-token (TSURU_TARGET, TSURU_TOKEN)"
    )
