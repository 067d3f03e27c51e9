"""
Credential and identity domain objects for ghrepo.

A Credential is the only piece of state that outlives a single run: it is
loaded from and saved to the credential store as a whole.
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any


@dataclass(frozen=True)
class Credential:
    """Who we act as, and the token (if any) to act with."""
    username: Optional[str] = None
    organization: Optional[str] = None
    token: Optional[str] = None

    @property
    def identifier(self) -> Optional[str]:
        """The username, or the organization when no username is set."""
        return self.username or self.organization

    @property
    def is_anonymous(self) -> bool:
        return not self.token

    @classmethod
    def from_dict(cls, data: Any) -> 'Credential':
        """
        Create from a persisted mapping.

        Raises:
            ValueError: If data is not a mapping
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected a mapping, got {type(data).__name__}")

        def _text(key: str) -> Optional[str]:
            value = data.get(key)
            return str(value) if value not in (None, '') else None

        return cls(
            username=_text('username'),
            organization=_text('organization'),
            token=_text('token'),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, leaving out unset fields."""
        data = {
            'username': self.username,
            'organization': self.organization,
            'token': self.token,
        }
        return {k: v for k, v in data.items() if v is not None}

    def __repr__(self) -> str:
        token = '***' if self.token else None
        return (
            f"Credential(username={self.username!r}, "
            f"organization={self.organization!r}, token={token!r})"
        )


@dataclass(frozen=True)
class Identity:
    """The account a credential authenticates as."""
    login: str
    name: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def from_api_response(cls, data: Any) -> Optional['Identity']:
        """Create from a GET /user payload, or None when there is no login."""
        if not isinstance(data, dict):
            return None
        login = data.get('login')
        if not login:
            return None
        return cls(login=login, name=data.get('name'), email=data.get('email'))
