"""
Repository domain object for ghrepo.

RepositoryRecord holds the subset of GitHub repository metadata needed
for display and sorting. Everything else in the API payload is dropped
at the boundary.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Dict, Any


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a GitHub ISO 8601 timestamp ("2024-01-31T12:00:00Z").

    A timestamp without an offset is taken as UTC, so every parsed value
    can be compared with every other.
    """
    if not value:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value)
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class RepositoryRecord:
    """A repository as listed by the GitHub API."""
    id: int
    name: str
    full_name: str
    owner: Optional[str] = None
    private: bool = False
    fork: bool = False
    visibility: str = "public"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    pushed_at: Optional[datetime] = None
    stars: int = 0
    watchers: int = 0
    forks: int = 0
    open_issues: int = 0
    archived: bool = False
    allow_forking: bool = True
    is_template: bool = False
    default_branch: str = "main"

    @classmethod
    def from_api_response(cls, data: Any) -> 'RepositoryRecord':
        """
        Create from a single entry of a GitHub repository listing.

        Raises:
            ValueError: If data is not a JSON object or a timestamp is malformed
        """
        if not isinstance(data, dict):
            raise ValueError(f"Invalid repository entry: {data!r}")

        owner = data.get('owner') or {}
        private = bool(data.get('private', False))

        return cls(
            id=data.get('id', 0),
            name=data.get('name', ''),
            full_name=data.get('full_name', ''),
            owner=owner.get('login') if isinstance(owner, dict) else str(owner),
            private=private,
            fork=bool(data.get('fork', False)),
            visibility=data.get('visibility') or ('private' if private else 'public'),
            created_at=parse_timestamp(data.get('created_at')),
            updated_at=parse_timestamp(data.get('updated_at')),
            pushed_at=parse_timestamp(data.get('pushed_at')),
            stars=data.get('stargazers_count', 0),
            watchers=data.get('watchers_count', 0),
            forks=data.get('forks_count', 0),
            open_issues=data.get('open_issues_count') or 0,
            archived=bool(data.get('archived', False)),
            allow_forking=bool(data.get('allow_forking', True)),
            is_template=bool(data.get('is_template', False)),
            default_branch=data.get('default_branch') or 'main',
        )

    def to_dict(self) -> Dict[str, Any]:
        def _iso(value: Optional[datetime]) -> Optional[str]:
            return value.isoformat() if value else None

        return {
            'id': self.id,
            'name': self.name,
            'full_name': self.full_name,
            'owner': self.owner,
            'private': self.private,
            'fork': self.fork,
            'visibility': self.visibility,
            'created_at': _iso(self.created_at),
            'updated_at': _iso(self.updated_at),
            'pushed_at': _iso(self.pushed_at),
            'stars': self.stars,
            'watchers': self.watchers,
            'forks': self.forks,
            'open_issues': self.open_issues,
            'archived': self.archived,
            'allow_forking': self.allow_forking,
            'is_template': self.is_template,
            'default_branch': self.default_branch,
        }
