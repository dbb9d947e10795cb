"""HTTP client factory for repository access.

Builds httpx clients with the RequestPolicy applied:
- Fixed socket timeout
- Immediate retries of idempotent requests on transport failures
- Redirect following
- Optional proxy and HTTP Basic credentials

Clients are built per operation and closed by the caller; nothing is pooled
across calls.
"""

import logging
from base64 import b64encode
from typing import Callable, Optional
from urllib.parse import urlsplit

import httpx

from ..models import RepositoryConfig
from .base import DEFAULT_POLICY, ConfigurationError, RequestPolicy

logger = logging.getLogger(__name__)


def parse_proxy(proxy: str) -> str:
    """Turn a ``host:port`` proxy specification into a proxy URL.

    An ``http://`` or ``https://`` prefix is accepted as well.

    Raises:
        ConfigurationError: If the specification is not a usable proxy
    """
    spec = proxy.strip()
    if "://" not in spec:
        spec = f"http://{spec}"

    try:
        parts = urlsplit(spec)
        port = parts.port
    except ValueError as e:
        raise ConfigurationError(f"Malformed proxy {proxy!r}: {e}") from e

    if parts.scheme not in ("http", "https"):
        raise ConfigurationError(f"Unsupported proxy scheme in {proxy!r}")
    if not parts.hostname:
        raise ConfigurationError(f"Malformed proxy {proxy!r}: missing host")
    if port is None:
        raise ConfigurationError(f"Malformed proxy {proxy!r}: expected host:port")
    if parts.path not in ("", "/") or parts.query or parts.fragment:
        raise ConfigurationError(f"Malformed proxy {proxy!r}: unexpected path")

    return f"{parts.scheme}://{parts.netloc}"


def basic_auth_hook(username: str, password: str) -> Callable[[httpx.Request], None]:
    """Build a request hook adding HTTP Basic credentials.

    Request hooks run for every redirect hop as well, so the credentials
    reach any host the repository sends us to.
    """
    token = b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    header = f"Basic {token}"

    def _add_authorization(request: httpx.Request) -> None:
        request.headers["Authorization"] = header

    return _add_authorization


class RetryTransport(httpx.BaseTransport):
    """Transport wrapper replaying idempotent requests on transport errors.

    Status codes are never retried; only exceptions raised by the wrapped
    transport (connect failures, resets, timeouts) are.
    """

    def __init__(self, transport: httpx.BaseTransport, policy: RequestPolicy = DEFAULT_POLICY):
        self._transport = transport
        self.policy = policy

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        attempts = self.policy.max_attempts if self.policy.is_retryable(request.method) else 1
        attempt = 1
        while True:
            try:
                return self._transport.handle_request(request)
            except httpx.TransportError as e:
                if attempt >= attempts:
                    raise
                logger.debug(
                    f"{request.method} {request.url} failed on attempt "
                    f"{attempt}/{attempts}: {type(e).__name__}: {e}, retrying"
                )
                attempt += 1

    def close(self) -> None:
        self._transport.close()


def create_http_client(
    config: RepositoryConfig,
    policy: RequestPolicy = DEFAULT_POLICY,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    """Create a new HTTP client for the repository configuration.

    Args:
        config: Repository configuration (proxy, credentials)
        policy: Request policy (timeout, retries, redirects)
        transport: Pre-built transport to use instead of the network one

    Returns:
        Configured httpx.Client; use it as a context manager

    Raises:
        ConfigurationError: If the proxy specification is malformed
    """
    proxy_url = parse_proxy(config.proxy) if config.proxy else None

    if transport is None:
        transport = httpx.HTTPTransport(proxy=proxy_url)

    event_hooks = {}
    if config.username is not None:
        event_hooks["request"] = [basic_auth_hook(config.username, config.password or "")]

    return httpx.Client(
        timeout=httpx.Timeout(policy.socket_timeout),
        follow_redirects=policy.follow_redirects,
        event_hooks=event_hooks,
        transport=RetryTransport(transport, policy),
    )
