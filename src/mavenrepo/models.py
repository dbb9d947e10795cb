"""Data models for repository access."""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote, urlsplit, urlunsplit

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class RepositoryConfig(BaseModel):
    """Connection settings for one Maven repository.

    Immutable; the connector only reads it.
    """

    model_config = ConfigDict(frozen=True)

    repo_url: str
    proxy: Optional[str] = None  # "host:port"
    username: Optional[str] = None
    password: Optional[str] = None

    @field_validator("repo_url")
    @classmethod
    def check_repo_url(cls, value: str) -> str:
        from .connectors.urls import UrlConstructionError, validate_base_url

        # pydantic only collects ValueError and AssertionError
        try:
            return validate_base_url(value)
        except UrlConstructionError as e:
            raise ValueError(str(e)) from e

    @model_validator(mode="after")
    def check_credentials(self) -> "RepositoryConfig":
        if self.password is not None and self.username is None:
            raise ValueError("password is set but username is not")
        return self

    @property
    def repo_url_with_basic_auth(self) -> str:
        """Repository URL with ``username:password@`` in the authority.

        Returns the plain URL when no username is configured.
        """
        if self.username is None:
            return self.repo_url

        parts = urlsplit(self.repo_url)
        userinfo = quote(self.username, safe="")
        if self.password is not None:
            userinfo += ":" + quote(self.password, safe="")

        host_port = parts.netloc.rpartition("@")[2]
        return urlunsplit(parts._replace(netloc=f"{userinfo}@{host_port}"))


class PackageCoordinate(BaseModel):
    """Identifies a package within a repository."""

    model_config = ConfigDict(frozen=True)

    group_id: str  # "com.example"
    artifact_id: str

    def __str__(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"


@dataclass(frozen=True)
class RepositoryResponse:
    """Body of a successful (HTTP 200) repository response."""

    body: str
