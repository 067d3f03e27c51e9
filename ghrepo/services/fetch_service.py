"""
Paginated repository fetching for ghrepo.

Walks GitHub's Link-header pagination one page at a time, accumulating
RepositoryRecords until the listing is exhausted or the limit is reached.
A failing page ends the walk; whatever was collected before it is kept.
"""

import math
import logging
from typing import List, Optional, Dict, Any
from urllib.parse import urlparse, parse_qs, quote

import requests

from ..domain import Credential, QueryOptions, RepositoryRecord, Visibility
from ..infra import GitHubClient, GitHubAPIError
from ..progress import NullProgress

logger = logging.getLogger(__name__)

# GitHub's maximum page size for repository listings
DEFAULT_PAGE_SIZE = 100


def last_page_number(links: Dict[str, Dict[str, str]]) -> Optional[int]:
    """Page number from the rel="last" link, if present and numeric."""
    last = links.get('last') or {}
    url = last.get('url')
    if not url:
        return None
    values = parse_qs(urlparse(url).query).get('page')
    if not values:
        return None
    try:
        return int(values[0])
    except ValueError:
        return None


def _same_login(username: str, login: Optional[str]) -> bool:
    # GitHub logins are case-insensitive
    return bool(login) and username.lower() == login.lower()


def parse_page(data: Any) -> List[RepositoryRecord]:
    """
    Convert one page body into records.

    Raises:
        ValueError: If the body is not a JSON array of repository objects
    """
    if not isinstance(data, list):
        message = data.get('message') if isinstance(data, dict) else data
        raise ValueError(f"Invalid response from API: {message}")
    return [RepositoryRecord.from_api_response(item) for item in data]


class RepositoryFetcher:
    """
    Fetches a repository listing across pages.

    Example:
        fetcher = RepositoryFetcher(GitHubClient(credential))
        repos = fetcher.fetch(QueryOptions(username="alice"), credential)
    """

    def __init__(self, client: GitHubClient, progress=None, per_page: int = DEFAULT_PAGE_SIZE):
        """
        Initialize RepositoryFetcher.

        Args:
            client: API client carrying the resolved credential
            progress: Progress indicator with start/advance (NullProgress if None)
            per_page: Page size requested from the API
        """
        self.client = client
        self.progress = progress or NullProgress()
        self.per_page = per_page

    def initial_url(
        self,
        options: QueryOptions,
        credential: Optional[Credential] = None,
        login: Optional[str] = None
    ) -> str:
        """
        Endpoint for the first page.

        - organization selected: orgs/{org}/repos
        - username selected: users/{name}/repos, unless the name is the
          authenticated `login` and private repos are wanted
        - no selector, or the token owner asking for private/all:
          user/repos (the only listing that includes private repos)
        """
        username = options.username
        organization = options.organization
        if not username and not organization and credential is not None:
            username = credential.username
            organization = credential.organization

        if organization:
            return f"orgs/{quote(organization)}/repos?per_page={self.per_page}"
        if username and (options.visibility is Visibility.PUBLIC or not _same_login(username, login)):
            return f"users/{quote(username)}/repos?per_page={self.per_page}"
        return f"user/repos?visibility={options.visibility.value}&per_page={self.per_page}"

    def fetch(
        self,
        options: QueryOptions,
        credential: Optional[Credential] = None,
        login: Optional[str] = None
    ) -> List[RepositoryRecord]:
        """
        Fetch repositories page by page.

        Stops when there is no rel="next" link or once at least
        `options.limit` records have been collected (the last page is kept
        whole, so the result may exceed the limit by less than a page).

        Returns:
            Records accumulated so far; a failed page ends the walk early
        """
        repos: List[RepositoryRecord] = []
        limit = options.limit if options.limit is not None else math.inf
        url: Optional[str] = self.initial_url(options, credential, login)
        first_page = True

        while url and len(repos) < limit:
            try:
                data, links = self.client.get_page(url)
                page = parse_page(data)
            except GitHubAPIError as e:
                logger.error(f"Stopping pagination: {e}")
                break
            except requests.RequestException as e:
                logger.error(f"Stopping pagination, request failed: {e}")
                break
            except ValueError as e:
                logger.error(f"Stopping pagination: {e}")
                break

            repos.extend(page)

            if len(repos) >= limit:
                break

            if first_page:
                total_pages = last_page_number(links)
                if total_pages:
                    self.progress.start(total_pages, 1)
                first_page = False

            next_link = links.get('next') or {}
            url = next_link.get('url')
            if url:
                self.progress.advance()

        logger.debug(f"Fetched {len(repos)} repositories")
        return repos
