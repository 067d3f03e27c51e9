"""
Infrastructure layer for ghrepo.

Contains abstractions for external systems:
- GitHubClient: GitHub REST API access
- DeviceFlowClient: OAuth device authorization flow
- CredentialStore: YAML credential persistence

These provide clean interfaces that can be mocked for testing.
"""

from .github_client import GitHubClient, GitHubAPIError, RateLimitStatus, encode_basic_auth
from .device_flow import DeviceFlowClient, DeviceFlowError, DeviceCode
from .credential_store import CredentialStore, CredentialStoreError

__all__ = [
    'GitHubClient',
    'GitHubAPIError',
    'RateLimitStatus',
    'encode_basic_auth',
    'DeviceFlowClient',
    'DeviceFlowError',
    'DeviceCode',
    'CredentialStore',
    'CredentialStoreError',
]
