"""Detect the Gerrit project from the git remote of the current checkout."""

import logging
import re
import subprocess
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)

# ssh://host/project, ssh://host:29418/project
SSH_URL_RE = re.compile(r"^ssh://[^/]+(?::\d+)?/(.+?)(?:\.git)?$")
# https://host/a/project, https://host/project
HTTP_URL_RE = re.compile(r"^https?://[^/]+/(?:a/)?(.+?)(?:\.git)?$")
# user@host:project, host:project
SCP_URL_RE = re.compile(r":(.+?)(?:\.git)?$")


class DetectionError(Exception):
    """Raised when the project cannot be determined from the git remote."""


class NotARepositoryError(DetectionError):
    """Raised when the working directory is not inside a git checkout."""

    def __init__(self) -> None:
        super().__init__("Not in a git repository")


class NoOriginRemoteError(DetectionError):
    """Raised when the checkout has no "origin" remote."""

    def __init__(self) -> None:
        super().__init__('No git remote "origin" configured')


class UrlParseError(DetectionError):
    """Raised when the remote URL has no recognizable project path."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Could not parse project name from remote URL: {url}")


def get_origin_url(cwd: Path | None = None) -> str:
    """Return the URL of the "origin" remote."""
    result = subprocess.run(
        ["git", "remote", "get-url", "origin"],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


def parse_project_name(url: str) -> str:
    """Extract the project name from a remote URL.

    Args:
        url: Remote URL in ssh://, http(s):// or scp-like syntax

    Returns:
        Project name, possibly containing "/"

    Raises:
        UrlParseError: If no supported syntax matches
    """
    url = url.strip()

    if url.startswith("ssh://"):
        match = SSH_URL_RE.match(url)
    elif url.startswith(("https://", "http://")):
        match = HTTP_URL_RE.match(url)
    elif ":" in url:
        match = SCP_URL_RE.search(url)
    else:
        match = None

    if not match or not match.group(1):
        raise UrlParseError(url)
    return match.group(1)


def _error_detail(error: Exception) -> str:
    if isinstance(error, subprocess.CalledProcessError):
        return (error.stderr or "").strip() or str(error)
    return str(error)


def detect_project(get_url: Callable[[], str] = get_origin_url) -> str:
    """Detect the current project name from the origin remote.

    Args:
        get_url: Callable returning the origin remote URL

    Returns:
        Project name

    Raises:
        NotARepositoryError: If not inside a git checkout
        NoOriginRemoteError: If there is no origin remote
        UrlParseError: If the remote URL cannot be parsed
        DetectionError: For any other failure reading the remote
    """
    try:
        url = get_url()
    except Exception as e:
        detail = _error_detail(e)
        if "not a git repository" in detail:
            raise NotARepositoryError() from e
        if "No such remote" in detail:
            raise NoOriginRemoteError() from e
        raise DetectionError(f"Failed to detect project from git remote: {detail}") from e

    project = parse_project_name(url)
    logger.debug(f"Detected project {project!r} from remote {url.strip()!r}")
    return project
