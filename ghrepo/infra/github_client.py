"""
GitHub API client infrastructure for ghrepo.

Provides a thin layer over the GitHub REST API:
- Basic-style Authorization header built from a Credential
- Single-page GETs returning the JSON body and parsed Link header
- Identity lookup (GET /user)
- Rate limit tracking from response headers
"""

import base64
import time
import logging
from dataclasses import dataclass
from typing import Optional, Dict, Any, Tuple
from urllib.parse import urljoin

import requests

from ..domain import Credential, Identity

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"


class GitHubAPIError(Exception):
    """Raised when the GitHub API answers with a non-success status."""

    def __init__(self, status_code: int, message: str, url: Optional[str] = None):
        super().__init__(f"GitHub API error {status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.url = url


@dataclass
class RateLimitStatus:
    """GitHub API rate limit status."""
    remaining: int
    limit: int
    reset_time: int  # Unix timestamp
    used: int

    @property
    def minutes_until_reset(self) -> int:
        """Minutes until rate limit resets."""
        now = int(time.time())
        return max(0, (self.reset_time - now) // 60)

    @property
    def is_low(self) -> bool:
        """Check if rate limit is getting low (< 100 remaining)."""
        return self.remaining < 100


def encode_basic_auth(credential: Credential) -> Optional[str]:
    """
    Build the Authorization header value for a credential.

    Returns:
        "Basic <base64 of '{username-or-organization}/token:{token}'>",
        or None when the credential holds no token
    """
    if credential is None or not credential.token:
        return None
    raw = f"{credential.identifier or ''}/token:{credential.token}"
    return "Basic " + base64.b64encode(raw.encode('utf-8')).decode('ascii')


class GitHubClient:
    """
    GitHub REST API client.

    Example:
        client = GitHubClient(Credential(username="alice", token="..."))
        identity = client.current_user()
        repos, links = client.get_page("users/alice/repos?per_page=100")
    """

    def __init__(
        self,
        credential: Optional[Credential] = None,
        api_url: str = DEFAULT_API_URL,
        timeout: Optional[float] = 30,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize GitHubClient.

        Args:
            credential: Credential used for the Authorization header (None = anonymous)
            api_url: Base URL for relative endpoints
            timeout: Per-request timeout in seconds
            session: requests session to reuse (creates one if None)
        """
        self.credential = credential
        self.api_url = api_url.rstrip('/') + '/'
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            'Accept': 'application/vnd.github.v3+json',
            'User-Agent': 'ghrepo'
        })
        self._rate_limit_status: Optional[RateLimitStatus] = None

    def url_for(self, endpoint: str) -> str:
        """Resolve an endpoint against the API base URL; absolute URLs pass through."""
        return urljoin(self.api_url, endpoint.lstrip('/'))

    def _headers(self) -> Dict[str, str]:
        headers = {}
        authorization = encode_basic_auth(self.credential)
        if authorization:
            headers['Authorization'] = authorization
        return headers

    def _update_rate_limit_from_headers(self, headers) -> None:
        """Update rate limit status from response headers."""
        try:
            remaining = int(headers.get('X-RateLimit-Remaining', -1))
            limit = int(headers.get('X-RateLimit-Limit', -1))
            reset_time = int(headers.get('X-RateLimit-Reset', 0))
            used = int(headers.get('X-RateLimit-Used', 0))

            if remaining >= 0 and limit >= 0:
                self._rate_limit_status = RateLimitStatus(
                    remaining=remaining,
                    limit=limit,
                    reset_time=reset_time,
                    used=used
                )

                if self._rate_limit_status.is_low:
                    logger.warning(
                        f"GitHub API rate limit low: {remaining}/{limit} remaining, "
                        f"resets in {self._rate_limit_status.minutes_until_reset} minutes"
                    )
        except (ValueError, TypeError, AttributeError):
            pass  # Ignore parsing errors

    @property
    def rate_limit_status(self) -> Optional[RateLimitStatus]:
        """Rate limit status from the last response, if it carried one."""
        return self._rate_limit_status

    def get(self, endpoint: str) -> requests.Response:
        """
        GET an endpoint and check the status.

        Raises:
            GitHubAPIError: On any status other than 200
            requests.RequestException: On transport failures
        """
        url = self.url_for(endpoint)
        logger.debug(f"GET {url}")
        response = self.session.get(url, headers=self._headers(), timeout=self.timeout)

        self._update_rate_limit_from_headers(response.headers)

        if response.status_code != 200:
            raise GitHubAPIError(response.status_code, _error_message(response), url)
        return response

    def get_page(self, endpoint: str) -> Tuple[Any, Dict[str, Dict[str, str]]]:
        """
        GET one page of a paginated listing.

        Returns:
            Tuple of (decoded JSON body, links parsed from the Link header)

        Raises:
            GitHubAPIError: On any status other than 200
            ValueError: If the body is not valid JSON
            requests.RequestException: On transport failures
        """
        response = self.get(endpoint)
        return response.json(), (response.links or {})

    def current_user(self) -> Optional[Identity]:
        """
        Ask the API who the credential belongs to.

        Returns:
            Identity, or None when the status is not 200 or there is no login
        """
        try:
            response = self.get('user')
            return Identity.from_api_response(response.json())
        except GitHubAPIError as e:
            logger.debug(f"Identity lookup rejected: {e}")
        except ValueError as e:
            logger.warning(f"GitHub returned invalid JSON for /user: {e}")
        except requests.RequestException as e:
            logger.warning(f"GitHub API request failed: {e}")
        return None


def _error_message(response: requests.Response) -> str:
    """Pull the "message" out of a GitHub error body, falling back to raw text."""
    try:
        body = response.json()
        if isinstance(body, dict) and body.get('message'):
            return str(body['message'])
    except ValueError:
        pass
    return (response.text or '').strip() or (response.reason or 'unknown error')
