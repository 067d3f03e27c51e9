"""
Service layer for ghrepo.

Contains the logic that orchestrates domain objects and infrastructure:
- AuthResolver / IdentityVerifier: cached credential vs. device-flow login
- RepositoryFetcher: paginated repository listing
- ListService: one complete listing run

Services are the primary API for the CLI to use.
"""

from .auth_service import AuthResolver, IdentityVerifier, Valid, NeedsLogin
from .fetch_service import RepositoryFetcher, DEFAULT_PAGE_SIZE
from .list_service import ListService

__all__ = [
    'AuthResolver',
    'IdentityVerifier',
    'Valid',
    'NeedsLogin',
    'RepositoryFetcher',
    'DEFAULT_PAGE_SIZE',
    'ListService',
]
