"""Connector layer for Maven repositories.

Key components:
- RequestPolicy: timeouts, retries, headers
- ConnectorError hierarchy: UrlConstructionError, ConfigurationError,
  RemoteRequestError, ConnectivityError
- build_url: repository URL construction
- create_http_client: httpx client factory with the policy applied
- RepositoryConnector: metadata requests and the connectivity check
"""

from .base import (
    DEFAULT_POLICY,
    METADATA_FILE,
    ConfigurationError,
    ConnectivityError,
    # Error hierarchy
    ConnectorError,
    RemoteRequestError,
    # Request policy
    RequestPolicy,
    UrlConstructionError,
)
from .http_client import RetryTransport, create_http_client, parse_proxy
from .repository import RepositoryConnector
from .urls import build_relative_path, build_url, filter_slash, validate_base_url

__all__ = [
    # Policy
    "RequestPolicy",
    "DEFAULT_POLICY",
    "METADATA_FILE",
    # Errors
    "ConnectorError",
    "UrlConstructionError",
    "ConfigurationError",
    "RemoteRequestError",
    "ConnectivityError",
    # URLs
    "build_url",
    "build_relative_path",
    "filter_slash",
    "validate_base_url",
    # HTTP client
    "create_http_client",
    "parse_proxy",
    "RetryTransport",
    # Connector
    "RepositoryConnector",
]
