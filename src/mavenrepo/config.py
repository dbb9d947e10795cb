"""Configuration and environment handling for the Maven connector."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import ValidationError as PydanticValidationError

from .connectors.base import ConfigurationError
from .models import PackageCoordinate, RepositoryConfig


def _load_env(env_file: Optional[Path] = None) -> None:
    """Load a .env file. Existing variables win.

    The default cwd/.env is optional; an explicit env_file must exist.
    """
    if env_file is not None:
        if not Path(env_file).is_file():
            raise ConfigurationError(f"Environment file not found: {env_file}")
        load_dotenv(env_file)
        return

    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(env_path)


def _getenv(name: str) -> Optional[str]:
    """Read an environment variable; empty values count as unset."""
    value = os.getenv(name, "").strip()
    return value or None


def load_repository_config(env_file: Optional[Path] = None) -> RepositoryConfig:
    """Build a RepositoryConfig from MAVEN_REPO_* variables.

    Variables:
        MAVEN_REPO_URL: Repository base URL (required)
        MAVEN_REPO_PROXY: Proxy as host:port
        MAVEN_REPO_USERNAME / MAVEN_REPO_PASSWORD: Basic credentials

    Raises:
        ConfigurationError: If the URL is missing or the values are invalid
    """
    _load_env(env_file)

    repo_url = _getenv("MAVEN_REPO_URL")
    if repo_url is None:
        raise ConfigurationError("MAVEN_REPO_URL is not set")

    try:
        return RepositoryConfig(
            repo_url=repo_url,
            proxy=_getenv("MAVEN_REPO_PROXY"),
            username=_getenv("MAVEN_REPO_USERNAME"),
            password=_getenv("MAVEN_REPO_PASSWORD"),
        )
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid repository configuration: {e}") from e


def load_package_coordinate(env_file: Optional[Path] = None) -> PackageCoordinate:
    """Build a PackageCoordinate from MAVEN_GROUP_ID and MAVEN_ARTIFACT_ID."""
    _load_env(env_file)

    group_id = _getenv("MAVEN_GROUP_ID")
    artifact_id = _getenv("MAVEN_ARTIFACT_ID")
    if group_id is None or artifact_id is None:
        raise ConfigurationError("MAVEN_GROUP_ID and MAVEN_ARTIFACT_ID must both be set")

    return PackageCoordinate(group_id=group_id, artifact_id=artifact_id)
