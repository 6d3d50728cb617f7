"""
GitHub API client for making authenticated requests.
Authenticates with a personal access token.
"""

import logging
from typing import Optional, Dict, Any

import httpx

from application.services.github.api.errors import GitHubAPIError, GitHubTransportError
from common.config.config import (
    GH_DEFAULT_OWNER,
    GH_DEFAULT_REPOSITORY,
    GITHUB_API_TIMEOUT,
    GITHUB_API_URL,
    GITHUB_TOKEN,
)
from common.constants import GITHUB_API_VERSION, GITHUB_CONNECT_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


class GitHubAPIClient:
    """Base client for GitHub API interactions scoped to one repository."""

    def __init__(
        self,
        token: Optional[str] = None,
        owner: Optional[str] = None,
        repository_name: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize GitHub API client.

        Args:
            token: GitHub API token (defaults to config)
            owner: Repository owner (defaults to config)
            repository_name: Repository name (defaults to config)
            base_url: API root URL (defaults to config)
            timeout: Per-request timeout in seconds (defaults to config)
        """
        self.token = token or GITHUB_TOKEN
        self.owner = owner or GH_DEFAULT_OWNER
        self.repository_name = repository_name or GH_DEFAULT_REPOSITORY
        self.base_url = (base_url or GITHUB_API_URL).rstrip("/")
        self.timeout = timeout or GITHUB_API_TIMEOUT

        if not self.token:
            logger.warning("GitHub API client initialized without token - authentication may fail")

    @property
    def repo_path(self) -> str:
        """API path prefix for the configured repository."""
        return f"repos/{self.owner}/{self.repository_name}"

    def _get_headers(self) -> Dict[str, str]:
        """Get headers for GitHub API requests."""
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
            "Content-Type": "application/json",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def request(
        self,
        method: str,
        path: str,
        data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> Dict[str, Any]:
        """Make a GitHub API request.

        Args:
            method: HTTP method (GET, POST, PATCH)
            path: API path (without base URL)
            data: Request body data
            params: Query parameters
            timeout: Request timeout in seconds

        Returns:
            Response data (empty dict for bodiless responses)

        Raises:
            GitHubAPIError: If the response status indicates failure
            GitHubTransportError: If no response was received
        """
        url = f"{self.base_url}/{path}"
        headers = self._get_headers()

        try:
            timeout_config = httpx.Timeout(
                timeout or self.timeout, connect=GITHUB_CONNECT_TIMEOUT_SECONDS
            )
            response = await self._execute_http_request(
                method, url, headers, data, params, timeout_config
            )
        except httpx.RequestError as e:
            error_msg = f"GitHub API request error: {e!r}"
            logger.error(error_msg)
            raise GitHubTransportError(error_msg) from e

        return self._process_response(response, method, url)

    async def _execute_http_request(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        data: Optional[Dict[str, Any]],
        params: Optional[Dict[str, Any]],
        timeout_config: httpx.Timeout,
    ) -> httpx.Response:
        """Execute HTTP request with method routing.

        Raises:
            ValueError: If HTTP method is unsupported
        """
        method_upper = method.upper()

        async with httpx.AsyncClient(timeout=timeout_config, trust_env=False) as client:
            if method_upper == "GET":
                return await client.get(url, headers=headers, params=params)
            elif method_upper == "POST":
                return await client.post(url, json=data, headers=headers, params=params)
            elif method_upper == "PATCH":
                return await client.patch(url, json=data, headers=headers, params=params)
            else:
                raise ValueError(f"Unsupported HTTP method: {method}")

    def _process_response(
        self, response: httpx.Response, method: str, url: str
    ) -> Dict[str, Any]:
        """Process HTTP response and extract data.

        Raises:
            GitHubAPIError: If response status indicates failure
        """
        if response.status_code in (200, 201, 204):
            logger.debug(
                f"GitHub API {method} request to {url} "
                f"successful (status: {response.status_code})"
            )
            if response.content:
                try:
                    return response.json()
                except ValueError:
                    return {}
            return {}

        message = self._extract_error_message(response)
        logger.warning(
            f"GitHub API {method} request to {url} failed "
            f"(status {response.status_code}): {message}"
        )
        raise GitHubAPIError(response.status_code, message, url=url)

    @staticmethod
    def _extract_error_message(response: httpx.Response) -> str:
        """Pull the ``message`` field out of a GitHub error body when present."""
        try:
            body = response.json()
        except ValueError:
            return response.text
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return response.text

    async def get(
        self, path: str, params: Optional[Dict[str, Any]] = None, timeout: Optional[float] = None
    ) -> Dict[str, Any]:
        """Make a GET request."""
        return await self.request("GET", path, params=params, timeout=timeout)

    async def post(
        self, path: str, data: Optional[Dict[str, Any]] = None, timeout: Optional[float] = None
    ) -> Dict[str, Any]:
        """Make a POST request."""
        return await self.request("POST", path, data=data, timeout=timeout)

    async def patch(
        self, path: str, data: Optional[Dict[str, Any]] = None, timeout: Optional[float] = None
    ) -> Dict[str, Any]:
        """Make a PATCH request."""
        return await self.request("PATCH", path, data=data, timeout=timeout)
