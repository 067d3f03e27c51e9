"""
Repository listing service for ghrepo.

Orchestrates one run: validate options, resolve a credential, fetch
pages, then filter/sort/limit for display.
"""

from typing import Any, Dict, List, Optional, Tuple
import logging

from ..config import get_default_config
from ..domain import Credential, Identity, QueryOptions, RepositoryRecord, Visibility
from ..exit_codes import ValidationError
from ..infra import CredentialStore, DeviceFlowClient, GitHubClient
from ..listing import prepare_listing
from ..progress import NullProgress
from .auth_service import AuthResolver, IdentityVerifier
from .fetch_service import RepositoryFetcher, DEFAULT_PAGE_SIZE

logger = logging.getLogger(__name__)


class ListService:
    """
    High-level entry point for listing repositories.

    Example:
        service = ListService(config=load_config())
        repos = service.list_repos(QueryOptions(username="alice"))
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        store: Optional[CredentialStore] = None,
        device_flow: Optional[DeviceFlowClient] = None,
        progress=None
    ):
        """
        Initialize ListService.

        Args:
            config: Configuration dict (defaults if None)
            store: Credential store (built from config if None)
            device_flow: Device flow client (built from config if None)
            progress: Progress indicator for page fetches
        """
        self.config = config or get_default_config()
        github = self.config.get('github', {})
        self.api_url = github.get('api_url', 'https://api.github.com')
        self.timeout = github.get('timeout_seconds', 30)
        self.per_page = int(github.get('per_page', DEFAULT_PAGE_SIZE))

        self.store = store or CredentialStore(self.config.get('credentials', {}).get('path'))
        self.device_flow = device_flow or DeviceFlowClient(
            client_id=github.get('client_id'),
            scopes=github.get('scopes', ['repo']),
            oauth_url=github.get('oauth_url', 'https://github.com'),
            timeout=self.timeout
        )
        self.progress = progress or NullProgress()

    def make_client(self, credential: Optional[Credential]) -> GitHubClient:
        return GitHubClient(credential, api_url=self.api_url, timeout=self.timeout)

    def resolve_credential(self, options: QueryOptions) -> Tuple[Credential, Optional[Identity]]:
        """Cached credential if it still works, else a fresh device-flow login."""
        resolver = AuthResolver(
            store=self.store,
            verifier=IdentityVerifier(self.make_client),
            device_flow=self.device_flow,
            username=options.username,
            organization=options.organization
        )
        return resolver.authenticate()

    def authenticated_login(self, credential: Credential, identity: Optional[Identity] = None) -> Optional[str]:
        """Login the credential belongs to; asks the API when not already known."""
        if identity is None:
            identity = self.make_client(credential).current_user()
        return identity.login if identity else None

    def list_repos(
        self,
        options: QueryOptions,
        token: Optional[str] = None,
        anonymous: bool = False
    ) -> List[RepositoryRecord]:
        """
        Run the whole pipeline except rendering.

        Args:
            options: What to list
            token: Explicit token; skips the credential store and device flow
            anonymous: Skip authentication entirely (public data only)

        Returns:
            Records filtered, sorted and truncated for display

        Raises:
            ValidationError: Before any request, on invalid options
            AuthenticationError: If no credential could be obtained
        """
        options.validate()

        if anonymous and options.visibility is not Visibility.PUBLIC:
            raise ValidationError("A token is required to access private repos!")

        identity = None
        if token:
            credential = Credential(
                username=options.username,
                organization=options.organization,
                token=token
            )
        elif anonymous:
            credential = Credential(username=options.username, organization=options.organization)
        else:
            credential, identity = self.resolve_credential(options)

        if credential.is_anonymous and options.visibility is not Visibility.PUBLIC:
            raise ValidationError("A token is required to access private repos!")

        # Only the token owner's own listing includes private repos
        login = None
        if options.username and options.visibility is not Visibility.PUBLIC:
            login = self.authenticated_login(credential, identity)
            if login is None or login.lower() != options.username.lower():
                logger.warning(
                    f"Token does not belong to {options.username}; "
                    f"only their public repositories are visible"
                )

        fetcher = RepositoryFetcher(self.make_client(credential), self.progress, self.per_page)
        try:
            repos = fetcher.fetch(options, credential, login)
        finally:
            self.progress.stop()

        return prepare_listing(repos, options)
