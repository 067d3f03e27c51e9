"""
Query options for a repository listing run.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..exit_codes import ValidationError


class Visibility(Enum):
    """Which repositories to list."""
    PUBLIC = "public"
    PRIVATE = "private"
    ALL = "all"


class SortField(Enum):
    """Sortable repository fields, keyed by their command-line name."""
    ID = "id"
    NAME = "name"
    FULL_NAME = "full_name"
    OWNER = "owner"
    CREATED = "created"
    UPDATED = "updated"
    PUSHED = "pushed"
    STARS = "stars"
    WATCHERS = "watchers"
    FORKS = "forks"
    OPEN_ISSUES = "open_issues"
    FORK = "fork"
    PRIVATE = "private"
    ARCHIVED = "archived"
    ALLOW_FORKING = "allow_forking"
    IS_TEMPLATE = "is_template"

    @property
    def attribute(self) -> str:
        """Name of the RepositoryRecord attribute this field sorts on."""
        return _TIMESTAMP_ATTRIBUTES.get(self.value, self.value)

    @property
    def is_timestamp(self) -> bool:
        return self.value in _TIMESTAMP_ATTRIBUTES


_TIMESTAMP_ATTRIBUTES = {
    "created": "created_at",
    "updated": "updated_at",
    "pushed": "pushed_at",
}


class SortDirection(Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"


_DIRECTION_ALIASES = {
    "asc": SortDirection.ASCENDING,
    "ascending": SortDirection.ASCENDING,
    "desc": SortDirection.DESCENDING,
    "descending": SortDirection.DESCENDING,
}


@dataclass(frozen=True)
class SortDescriptor:
    """A sort field plus direction, e.g. ``pushed:desc``."""
    field: SortField = SortField.PUSHED
    direction: SortDirection = SortDirection.ASCENDING

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESCENDING

    @classmethod
    def parse(cls, descriptor: Optional[str]) -> 'SortDescriptor':
        """
        Parse ``FIELD`` or ``FIELD:DIRECTION``.

        Raises:
            ValidationError: On an unknown field or direction
        """
        if not descriptor:
            return cls()

        key, _, direction = descriptor.strip().partition(':')
        try:
            sort_field = SortField(key.strip().lower())
        except ValueError:
            valid = ', '.join(f.value for f in SortField)
            raise ValidationError(f"Unknown sort field '{key}' (valid fields: {valid})")

        if not direction:
            return cls(field=sort_field)

        sort_direction = _DIRECTION_ALIASES.get(direction.strip().lower())
        if sort_direction is None:
            raise ValidationError(f"Unknown sort direction '{direction}' (use asc or desc)")
        return cls(field=sort_field, direction=sort_direction)

    def __str__(self) -> str:
        return f"{self.field.value}:{self.direction.value}"


@dataclass(frozen=True)
class QueryOptions:
    """Everything the caller asked for in one listing run."""
    username: Optional[str] = None
    organization: Optional[str] = None
    visibility: Visibility = Visibility.PUBLIC
    name: Optional[str] = None
    owner: Optional[str] = None
    limit: Optional[int] = None
    sort: SortDescriptor = field(default_factory=SortDescriptor)

    def validate(self) -> 'QueryOptions':
        """
        Check the options before any network call is made.

        Raises:
            ValidationError: If both or neither identity selectors are set,
                or the limit is negative
        """
        if self.username and self.organization:
            raise ValidationError("User and organization cannot both be supplied!")
        if not self.username and not self.organization:
            raise ValidationError("Either user or organization must be supplied!")
        if self.limit is not None and self.limit < 0:
            raise ValidationError(f"Limit must not be negative (got {self.limit})")
        return self
