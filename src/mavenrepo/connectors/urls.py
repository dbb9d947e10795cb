"""Repository URL construction.

Repository layout: ``<base>/<group as path>/<artifact>/[<version>/]``, with
``maven-metadata.xml`` at the artifact level. Paths are resolved against the
base URL with relative-reference semantics, so a base without a trailing
slash loses its last path segment exactly like a browser link would.
"""

from typing import Optional
from urllib.parse import urljoin, urlsplit

from .base import METADATA_FILE, UrlConstructionError


def filter_slash(value: str) -> str:
    """Remove every ``/`` so coordinate parts cannot add path segments."""
    return value.replace("/", "")


def validate_base_url(base_url: str) -> str:
    """Ensure the base URL is absolute (scheme and host) and parseable.

    Raises:
        UrlConstructionError: If the URL cannot be used as a resolution base
    """
    if not isinstance(base_url, str) or not base_url.strip():
        raise UrlConstructionError(base_url, "URL is empty")

    try:
        parts = urlsplit(base_url)
        # Accessing the port validates it
        parts.port
    except ValueError as e:
        raise UrlConstructionError(base_url, str(e)) from e

    if not parts.scheme:
        raise UrlConstructionError(base_url, "no scheme")
    if not parts.hostname:
        raise UrlConstructionError(base_url, "no host")
    return base_url


def build_relative_path(group_id: str, artifact_id: str, version: Optional[str]) -> str:
    """Build the repository-relative path for a coordinate.

    Args:
        group_id: Dot-separated group id (``com.example``)
        artifact_id: Artifact id
        version: ``None`` for the metadata file, ``""`` for the artifact
            directory, anything else for the version directory

    Dots in the group id become segment separators after slash filtering,
    so leading dots yield a network-path reference (``..evil`` gives
    ``//evil``) that replaces the authority on resolution.

    Returns:
        Relative path, e.g. ``com/example/foo/1.0/``
    """
    group_path = filter_slash(group_id).replace(".", "/")
    path = f"{group_path}/{filter_slash(artifact_id)}/"

    if version is None:
        return path + METADATA_FILE
    if version == "":
        return path
    return f"{path}{filter_slash(version)}/"


def build_url(
    base_url: str,
    group_id: str,
    artifact_id: str,
    version: Optional[str] = None,
) -> str:
    """Resolve a coordinate against the repository base URL.

    Example: ``("https://repo.example/", "com.example", "foo", "1.0")``
    resolves to ``https://repo.example/com/example/foo/1.0/``.

    Raises:
        UrlConstructionError: If the base URL is not absolute or resolution fails
    """
    validate_base_url(base_url)
    relative = build_relative_path(group_id, artifact_id, version)
    try:
        return urljoin(base_url, relative)
    except ValueError as e:
        raise UrlConstructionError(base_url, str(e)) from e
