"""Core connector abstractions: request policy and error hierarchy.

Defines the foundation shared by the repository connector:
- RequestPolicy: timeouts, retries, accepted headers
- ConnectorError hierarchy: typed exceptions callers can branch on

Everything here is pure data; no network calls happen in this module.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional

# =============================================================================
# Request Policy
# =============================================================================


@dataclass(frozen=True)
class RequestPolicy:
    """Policy for repository requests: timeouts, retries, headers.

    Used by http_client to build every client the same way.
    """

    # Timeouts
    socket_timeout: float = 10.0  # seconds

    # Retries (transport failures only, never on status codes)
    max_attempts: int = 3
    idempotent_methods: FrozenSet[str] = field(
        default_factory=lambda: frozenset({"GET", "HEAD", "OPTIONS"})
    )

    # Redirects
    follow_redirects: bool = True

    # Headers
    metadata_accept: str = "application/xml"
    check_accept: str = "*/*"

    def is_retryable(self, method: str) -> bool:
        """Check if requests with this method may be replayed."""
        return method.upper() in self.idempotent_methods


DEFAULT_POLICY = RequestPolicy()

METADATA_FILE = "maven-metadata.xml"


# =============================================================================
# Connector Error Hierarchy
# =============================================================================


class ConnectorError(Exception):
    """Base exception for connector errors."""

    def __init__(
        self,
        message: str,
        connector_name: str = "",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.connector_name = connector_name
        self.details = details or {}
        super().__init__(message)


class UrlConstructionError(ConnectorError):
    """Base URL could not be parsed or the path could not be resolved."""

    def __init__(self, base_url: Any, cause: str, connector_name: str = ""):
        super().__init__(
            f"Invalid repository URL {base_url!r}: {cause}",
            connector_name,
            {"base_url": base_url, "cause": cause},
        )
        self.base_url = base_url
        self.cause = cause


class ConfigurationError(ConnectorError):
    """Malformed proxy specification or other invalid configuration."""

    pass


class RemoteRequestError(ConnectorError):
    """The repository answered, but not with HTTP 200."""

    def __init__(
        self,
        status_code: int,
        reason: str = "",
        url: str = "",
        connector_name: str = "",
    ):
        super().__init__(
            f"HTTP {status_code}, {reason}",
            connector_name,
            {"status_code": status_code, "reason": reason, "url": url},
        )
        self.status_code = status_code
        self.reason = reason
        self.url = url


class ConnectivityError(ConnectorError):
    """Transport-level failure (DNS, refused connection, timeout, ...)."""

    def __init__(self, url: str, cause: BaseException, connector_name: str = ""):
        super().__init__(
            f"Exception while connecting to {url}\n{type(cause).__name__}: {cause}",
            connector_name,
            {"url": url, "cause": str(cause)},
        )
        self.url = url
        self.cause = cause
