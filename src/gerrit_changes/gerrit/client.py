"""Gerrit REST API client for change queries."""

import logging
from typing import TYPE_CHECKING, Any

import requests
from pygerrit2 import GerritRestAPI, HTTPBasicAuthFromNetrc
from requests.auth import AuthBase, HTTPBasicAuth

from gerrit_changes.models.change import Change

if TYPE_CHECKING:
    from gerrit_changes.config import Config

logger = logging.getLogger(__name__)

# https://gerrit-review.googlesource.com/Documentation/rest-api-changes.html#query-options
CHANGE_OPTIONS = ["DETAILED_LABELS", "DETAILED_ACCOUNTS"]


class ApiError(Exception):
    """Raised when a Gerrit request fails or returns an unusable payload."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GerritClient:
    """Read-only client for the Gerrit changes API."""

    def __init__(
        self,
        url: str,
        auth: AuthBase | None = None,
        timeout: int = 30,
        verify: bool = True,
    ) -> None:
        """Initialize the Gerrit client.

        Args:
            url: Base URL of the Gerrit server
            auth: Optional requests auth; authenticated requests use the /a/ prefix
            timeout: Request timeout in seconds
            verify: Whether to verify TLS certificates
        """
        self.url = url
        self.timeout = timeout
        self._rest = GerritRestAPI(url=url, auth=auth, verify=verify)

    @classmethod
    def from_config(cls, config: "Config") -> "GerritClient":
        """Create a client from configuration.

        Explicit credentials win, then ~/.netrc, then anonymous access.
        """
        gerrit = config.gerrit
        auth: AuthBase | None = None
        if gerrit.username and gerrit.password:
            auth = HTTPBasicAuth(gerrit.username, gerrit.password)
        else:
            try:
                auth = HTTPBasicAuthFromNetrc(url=gerrit.url)
            except ValueError:
                logger.debug(f"No netrc credentials for {gerrit.url}, using anonymous access")
        return cls(
            gerrit.url,
            auth=auth,
            timeout=gerrit.timeout_seconds,
            verify=gerrit.verify_ssl,
        )

    def _get(self, endpoint: str, **kwargs: Any) -> Any:
        try:
            return self._rest.get(endpoint, timeout=self.timeout, **kwargs)
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            if status in (401, 403):
                raise ApiError(
                    f"Authentication failed for {self.url} (HTTP {status})", status_code=status
                ) from e
            raise ApiError(f"Gerrit request failed: {e}", status_code=status) from e
        except requests.RequestException as e:
            raise ApiError(f"Could not reach Gerrit at {self.url}: {e}") from e
        except ValueError as e:
            raise ApiError(f"Malformed response from Gerrit: {e}") from e

    def list_changes(self, query: str) -> list[Change]:
        """Query changes.

        Args:
            query: Gerrit query string, e.g. "project:foo status:open limit:20"

        Returns:
            Changes in server order

        Raises:
            ApiError: On transport, authentication or response errors
        """
        logger.debug(f"Querying changes: {query}")
        data = self._get("/changes/", params={"q": query, "o": CHANGE_OPTIONS})
        if not isinstance(data, list):
            raise ApiError(f"Unexpected response from Gerrit: expected a list, got {type(data).__name__}")

        try:
            return [Change.from_rest(raw) for raw in data]
        except (KeyError, TypeError, AttributeError) as e:
            raise ApiError(f"Malformed change in Gerrit response: {e}") from e
