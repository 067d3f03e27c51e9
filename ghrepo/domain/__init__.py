"""
Domain layer for ghrepo.

Contains pure domain objects with no I/O or side effects:
- Credential / Identity: who a run authenticates as
- RepositoryRecord: a listed repository
- QueryOptions: what the caller asked for (selector, filters, sort, limit)
"""

from .credential import Credential, Identity
from .repository import RepositoryRecord, parse_timestamp
from .query import (
    QueryOptions,
    SortDescriptor,
    SortDirection,
    SortField,
    Visibility,
)

__all__ = [
    'Credential',
    'Identity',
    'RepositoryRecord',
    'parse_timestamp',
    'QueryOptions',
    'SortDescriptor',
    'SortDirection',
    'SortField',
    'Visibility',
]
