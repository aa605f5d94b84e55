"""
Admin API transport client.

Performs signed GET/POST/DELETE requests against the organization
administration API and returns decoded JSON. Pagination and record decoding
live in openai_admin.services; this module only moves bytes and reports
failures as TransportError.
"""

import json
import logging
from typing import Any, Dict, Optional

import requests

from ..core.config import DEFAULT_BASE_URL
from ..core.exceptions import TransportError


logger = logging.getLogger(__name__)


class AdminClient:
    """
    Organization administration API client.

    Authentication is handled via the admin API key passed to the constructor.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        organization: Optional[str] = None,
        timeout: int = 30
    ):
        """
        Initialize the admin client.

        Args:
            api_key: Admin API key used as the bearer token
            base_url: API base URL (e.g., https://api.openai.com/v1)
            organization: Optional organization ID sent as OpenAI-Organization
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip('/')
        self.organization = organization
        self.timeout = timeout
        self._api_key = api_key

        # Redact key in logs - show only first 8 characters
        redacted_key = f"{api_key[:8]}..." if len(api_key) > 8 else "***"
        logger.debug(f"Initialized AdminClient for {self.base_url} (key: {redacted_key})")

    def _get_headers(self) -> Dict[str, str]:
        """
        Get request headers with the bearer key.

        Returns:
            Dictionary of HTTP headers
        """
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Accept": "application/json",
        }
        if self.organization:
            headers["OpenAI-Organization"] = self.organization
        return headers

    def _make_request(
        self,
        method: str,
        endpoint: str,
        body: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Make HTTP request to the admin API.

        Args:
            method: HTTP method (GET, POST, DELETE)
            endpoint: API endpoint path, already path-escaped
            body: JSON request body
            params: Query parameters

        Returns:
            Decoded JSON response

        Raises:
            TransportError: If the request fails or the body is not JSON
        """
        url = f"{self.base_url}{endpoint}"

        logger.debug(f"{method} {url} params={params}")

        try:
            response = requests.request(
                method=method,
                url=url,
                headers=self._get_headers(),
                json=body,
                params=params,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            raise TransportError(f"{method} {endpoint} failed: {e}") from e

        if not response.ok:
            raise TransportError(
                f"{method} {endpoint} returned HTTP {response.status_code}: "
                f"{_error_message(response)}",
                status_code=response.status_code
            )

        try:
            return response.json()
        except ValueError as e:
            logger.debug(f"Raw response text: {response.text}")
            raise TransportError(
                f"{method} {endpoint} returned a non-JSON body",
                status_code=response.status_code
            ) from e

    def get(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        return self._make_request(method="GET", endpoint=path, params=params)

    def post(
        self,
        path: str,
        body: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        return self._make_request(method="POST", endpoint=path, body=body)

    def delete(self, path: str) -> Dict[str, Any]:
        return self._make_request(method="DELETE", endpoint=path)


def _error_message(response: requests.Response) -> str:
    """Extract the server's error message, falling back to the raw body."""
    try:
        payload = response.json()
    except ValueError:
        return response.text.strip() or response.reason or "no response body"

    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
        if isinstance(error, str) and error:
            return error
    return json.dumps(payload, default=str)
