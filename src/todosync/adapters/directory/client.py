"""
Mattermost API Client - Low-level HTTP client for the users REST API.

This handles the raw HTTP communication with the chat server.
The MattermostUserDirectory uses this to implement the UserDirectoryPort.
"""

import logging
from typing import Any

import requests

from ...core.exceptions import DirectoryError, NotFoundError, UnauthorizedError


class MattermostApiClient:
    """
    Low-level Mattermost REST API client.

    Handles authentication, request/response, and error handling.
    """

    API_VERSION = "4"

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = 10.0,
    ):
        """
        Initialize the client.

        Args:
            base_url: Server URL (e.g., https://chat.example.com)
            token: Personal access or bot token
            timeout: Per-request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.api_url = f"{self.base_url}/api/v{self.API_VERSION}"
        self.timeout = timeout
        self.logger = logging.getLogger("MattermostApiClient")

        self.headers = {
            "Accept": "application/json",
            "Authorization": f"Bearer {token}",
        }

        self._session = requests.Session()
        self._session.headers.update(self.headers)

    # -------------------------------------------------------------------------
    # Core Request Methods
    # -------------------------------------------------------------------------

    def request(
        self,
        method: str,
        endpoint: str,
        **kwargs
    ) -> dict[str, Any]:
        """
        Make an authenticated request to the API.

        Args:
            method: HTTP method
            endpoint: API endpoint (e.g., 'users/abc123')
            **kwargs: Additional arguments for requests

        Returns:
            JSON response as dict

        Raises:
            DirectoryError: On API errors
        """
        url = f"{self.api_url}/{endpoint}"
        kwargs.setdefault("timeout", self.timeout)

        try:
            response = self._session.request(method, url, **kwargs)
            return self._handle_response(response, endpoint)
        except requests.exceptions.ConnectionError as e:
            raise DirectoryError(f"Connection failed: {e}", cause=e)
        except requests.exceptions.Timeout as e:
            raise DirectoryError(f"Request timed out: {e}", cause=e)

    def get(self, endpoint: str, **kwargs) -> dict[str, Any]:
        """GET request."""
        return self.request("GET", endpoint, **kwargs)

    # -------------------------------------------------------------------------
    # Response Handling
    # -------------------------------------------------------------------------

    def _handle_response(
        self,
        response: requests.Response,
        endpoint: str
    ) -> dict[str, Any]:
        """Handle API response and errors."""
        if response.ok:
            if response.text:
                return response.json()
            return {}

        status = response.status_code
        error_body = response.text[:500] if response.text else ""

        if status in (401, 403):
            raise UnauthorizedError(f"Access denied for {endpoint}")

        if status == 404:
            raise NotFoundError(f"Not found: {endpoint}")

        raise DirectoryError(f"API error {status}: {error_body}")

    # -------------------------------------------------------------------------
    # Convenience Methods
    # -------------------------------------------------------------------------

    def get_user(self, user_id: str) -> dict[str, Any]:
        return self.get(f"users/{user_id}")

    def get_user_by_username(self, username: str) -> dict[str, Any]:
        return self.get(f"users/username/{username}")

    def test_connection(self) -> bool:
        """Test if connection is valid."""
        try:
            self.get("users/me")
            return True
        except (DirectoryError, UnauthorizedError, NotFoundError):
            return False
