"""
Authentication service for ghrepo.

Turns "load the cached credential, check it, else log in again" into a
single decision. The cached path is tried once; if it is not usable the
device flow runs once. Neither step is retried.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Tuple, Union
import logging

from ..domain import Credential, Identity
from ..exit_codes import AuthenticationError
from ..infra import (
    CredentialStore,
    CredentialStoreError,
    DeviceFlowClient,
    DeviceFlowError,
    GitHubClient,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Valid:
    """The cached credential was accepted by the API."""
    credential: Credential
    identity: Identity


@dataclass(frozen=True)
class NeedsLogin:
    """No usable cached credential; an interactive login is required."""
    reason: str


CachedLogin = Union[Valid, NeedsLogin]


class IdentityVerifier:
    """
    Confirms a credential works by asking the API who it belongs to.

    An unusable credential gives None, never an exception.
    """

    def __init__(self, client_factory: Optional[Callable[[Credential], GitHubClient]] = None):
        self.client_factory = client_factory or (lambda credential: GitHubClient(credential))

    def verify(self, credential: Credential) -> Optional[Identity]:
        return self.client_factory(credential).current_user()


class AuthResolver:
    """
    Resolves the credential for a run.

    Example:
        resolver = AuthResolver(store, verifier, device_flow, username="alice")
        credential = resolver.resolve()
    """

    def __init__(
        self,
        store: CredentialStore,
        verifier: IdentityVerifier,
        device_flow: DeviceFlowClient,
        username: Optional[str] = None,
        organization: Optional[str] = None
    ):
        """
        Initialize AuthResolver.

        Args:
            store: Where the cached credential lives
            verifier: Identity check for the cached credential
            device_flow: Interactive login used when the cache is unusable
            username: Identity selector recorded with a freshly obtained token
            organization: Identity selector recorded with a freshly obtained token
        """
        self.store = store
        self.verifier = verifier
        self.device_flow = device_flow
        self.username = username
        self.organization = organization

    def check_cached(self) -> CachedLogin:
        """Load and verify the cached credential."""
        logger.info(f"Trying to load cached token from {self.store.path}...")
        try:
            credential = self.store.load()
        except CredentialStoreError as e:
            logger.debug(str(e))
            return NeedsLogin(reason=str(e))

        identity = self.verifier.verify(credential)
        if identity is None:
            return NeedsLogin(reason="Failed to login using saved token!")

        logger.info(f"Authenticated successfully as {identity.login}")
        return Valid(credential=credential, identity=identity)

    def login(self) -> Credential:
        """
        Run the device flow and cache the new credential.

        Raises:
            AuthenticationError: If the device flow fails
        """
        logger.info("Attempting new login to GitHub to get token...")
        try:
            credential = self.device_flow.login(
                username=self.username,
                organization=self.organization
            )
        except DeviceFlowError as e:
            logger.debug(f"Device flow failed: {e}")
            raise AuthenticationError(f"Failed to obtain credential from GitHub: {e}") from e

        try:
            self.store.save(credential)
        except (CredentialStoreError, OSError) as e:
            logger.warning(f"Could not save credential, you will be asked to log in again: {e}")

        return credential

    def authenticate(self) -> Tuple[Credential, Optional[Identity]]:
        """
        Get a usable credential and, when already known, who it belongs to.

        The identity is only known for a cached credential that was
        verified; a fresh device-flow login returns None for it.

        Raises:
            AuthenticationError: If the cache is unusable and the device flow fails
        """
        result = self.check_cached()
        if isinstance(result, Valid):
            return result.credential, result.identity

        logger.info(result.reason)
        return self.login(), None

    def resolve(self) -> Credential:
        """
        Get a usable credential.

        Raises:
            AuthenticationError: If the cache is unusable and the device flow fails
        """
        credential, _ = self.authenticate()
        return credential
