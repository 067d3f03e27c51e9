"""
ghrepo - List GitHub repositories of a user or organization.

Authenticates with a cached token (or the OAuth device flow when the
cached token no longer works), walks the paginated repository listing,
then filters, sorts and renders the result as a table.

Quick Start:
    from ghrepo import ListService, QueryOptions, SortDescriptor

    service = ListService()
    options = QueryOptions(username="octocat", sort=SortDescriptor.parse("stars:desc"))
    for repo in service.list_repos(options):
        print(repo.full_name, repo.stars)

Domain Objects:
    Credential - username/organization plus optional token
    RepositoryRecord - one listed repository
    QueryOptions - identity selector, filters, sort, limit

Services:
    AuthResolver - cached credential, else device-flow login
    RepositoryFetcher - Link-header pagination with a limit
    ListService - one complete run
"""

__version__ = "1.0.0"

from .domain import (
    Credential,
    Identity,
    RepositoryRecord,
    QueryOptions,
    SortDescriptor,
    SortDirection,
    SortField,
    Visibility,
)

from .services import (
    AuthResolver,
    IdentityVerifier,
    RepositoryFetcher,
    ListService,
)

from .config import load_config

__all__ = [
    "__version__",
    "Credential",
    "Identity",
    "RepositoryRecord",
    "QueryOptions",
    "SortDescriptor",
    "SortDirection",
    "SortField",
    "Visibility",
    "AuthResolver",
    "IdentityVerifier",
    "RepositoryFetcher",
    "ListService",
    "load_config",
]
