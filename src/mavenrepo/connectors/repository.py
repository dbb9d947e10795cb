"""Maven repository connector.

Fetches ``maven-metadata.xml`` documents and checks repository
reachability. Every operation builds its own client and releases its
connections before returning, whichever way it returns.
"""

import logging
from contextlib import ExitStack
from typing import Optional

import httpx

from ..models import PackageCoordinate, RepositoryConfig, RepositoryResponse
from .base import (
    DEFAULT_POLICY,
    METADATA_FILE,
    ConnectivityError,
    RemoteRequestError,
    RequestPolicy,
)
from .http_client import create_http_client
from .urls import build_url

# Errors raised by httpx for a request that never produced a response
_TRANSPORT_ERRORS = (httpx.HTTPError, httpx.InvalidURL)


class RepositoryConnector:
    """Connector for one Maven repository.

    Args:
        config: Repository configuration (URL, proxy, credentials)
        policy: Request policy; defaults to DEFAULT_POLICY
        transport: httpx transport to use instead of the network (tests)
        logger: Logger receiving diagnostics; defaults to the module logger
    """

    _name = "maven"

    def __init__(
        self,
        config: RepositoryConfig,
        policy: Optional[RequestPolicy] = None,
        transport: Optional[httpx.BaseTransport] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.config = config
        self.policy = policy or DEFAULT_POLICY
        self.transport = transport
        self.logger = logger or logging.getLogger(__name__)

    @property
    def name(self) -> str:
        """Connector name."""
        return self._name

    def create_http_client(self) -> httpx.Client:
        """Return a new HTTP client for the repository configuration."""
        return create_http_client(self.config, self.policy, self.transport)

    # =========================================================================
    # Requests
    # =========================================================================

    def do_http_request(self, url: str) -> RepositoryResponse:
        """Execute a ``GET`` on the URL and return the response body.

        The connection is released after the operation.

        Raises:
            RemoteRequestError: If the status is not 200
            ConnectivityError: On any transport-level failure
        """
        headers = {"Accept": self.policy.metadata_accept}
        try:
            with self.create_http_client() as client:
                with client.stream("GET", url, headers=headers) as response:
                    if response.status_code != 200:
                        error = RemoteRequestError(
                            response.status_code,
                            response.reason_phrase,
                            url,
                            connector_name=self._name,
                        )
                        self.logger.error(f"Request to {url} failed: {error}")
                        raise error
                    response.read()
                    return RepositoryResponse(response.text)
        except _TRANSPORT_ERRORS as e:
            error = ConnectivityError(url, e, connector_name=self._name)
            self.logger.error(str(error))
            raise error from e

    def test_connection(self) -> bool:
        """Check that the repository base URL answers with HTTP 200.

        Tries ``HEAD`` first and falls back to ``GET`` once, since some
        servers and proxies reject ``HEAD``.

        Returns:
            True if either request got HTTP 200, False otherwise

        Raises:
            ConnectivityError: On any transport-level failure
        """
        url = self.config.repo_url
        headers = {"Accept": self.policy.check_accept}
        try:
            with self.create_http_client() as client, ExitStack() as responses:
                response = responses.enter_context(client.stream("HEAD", url, headers=headers))
                if response.status_code == 200:
                    return True

                self.logger.warning(
                    f"http HEAD failed for repository '{url}' will proceed with GET request"
                )
                response = responses.enter_context(client.stream("GET", url, headers=headers))
                if response.status_code == 200:
                    return True

                entity = self._drain_body(response)
                if entity:
                    self.logger.error(
                        f"expected HTTP status 200 but got {response.status_code} "
                        f"on check of url '{url}', with entity: {entity}"
                    )
                else:
                    self.logger.error(
                        f"expected HTTP status 200 but got {response.status_code} "
                        f"on check of url '{url}'"
                    )
                return False
        except _TRANSPORT_ERRORS as e:
            error = ConnectivityError(url, e, connector_name=self._name)
            self.logger.error(str(error))
            raise error from e

    @staticmethod
    def _drain_body(response: httpx.Response) -> str:
        """Read a failure body as UTF-8, line by line; empty if undecodable."""
        try:
            raw = response.read()
            return "".join(raw.decode("utf-8").splitlines())
        except (httpx.DecodingError, UnicodeDecodeError):
            return ""

    # =========================================================================
    # Composed requests
    # =========================================================================

    def get_snapshot_version_request(
        self, coordinate: PackageCoordinate, version: str
    ) -> RepositoryResponse:
        """Fetch the ``maven-metadata.xml`` of a snapshot version directory."""
        url = (
            build_url(self.config.repo_url, coordinate.group_id, coordinate.artifact_id, version)
            + METADATA_FILE
        )
        self.logger.info(f"Getting version for SNAPSHOT {url}")
        return self.do_http_request(url)

    def get_all_versions_request(self, coordinate: PackageCoordinate) -> RepositoryResponse:
        """Fetch the artifact-level ``maven-metadata.xml`` listing all versions."""
        url = build_url(self.config.repo_url, coordinate.group_id, coordinate.artifact_id, None)
        self.logger.info(f"Getting versions from {url}")
        return self.do_http_request(url)

    def get_files_url(self, coordinate: PackageCoordinate, revision: str) -> str:
        """Return the directory URL of a revision."""
        return build_url(
            self.config.repo_url, coordinate.group_id, coordinate.artifact_id, revision
        )

    def get_files_url_with_basic_auth(self, coordinate: PackageCoordinate, revision: str) -> str:
        """Return the directory URL of a revision with credentials in the URL."""
        return build_url(
            self.config.repo_url_with_basic_auth,
            coordinate.group_id,
            coordinate.artifact_id,
            revision,
        )
