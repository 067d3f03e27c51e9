"""
Credential store infrastructure for ghrepo.

Persists a single Credential as a YAML document:

    data:
      username: alice
      token: gho_...

Writes are atomic (write to temp, then rename) and the file is only
readable by its owner.
"""

import os
import tempfile
from pathlib import Path
from typing import Union
import logging

import yaml

from ..domain import Credential

logger = logging.getLogger(__name__)

DEFAULT_CREDENTIALS_PATH = Path.home() / '.ghreporc.yml'

# Top-level key wrapping the credential fields
ROOT_KEY = 'data'


class CredentialStoreError(Exception):
    """Raised when the stored credential cannot be read or written."""


class CredentialStore:
    """
    YAML file persistence for the cached credential.

    Example:
        store = CredentialStore()
        store.save(Credential(username="alice", token="gho_..."))
        credential = store.load()
    """

    def __init__(self, path: Union[str, Path, None] = None):
        """
        Initialize CredentialStore.

        Args:
            path: Path to the YAML file (defaults to ~/.ghreporc.yml)
        """
        self.path = Path(path or DEFAULT_CREDENTIALS_PATH).expanduser()

    def load(self) -> Credential:
        """
        Load the stored credential.

        Raises:
            CredentialStoreError: If the file is missing, unreadable or malformed
        """
        try:
            with open(self.path, 'r') as f:
                document = yaml.safe_load(f)
        except FileNotFoundError:
            raise CredentialStoreError(f"No stored credential at {self.path}")
        except (OSError, yaml.YAMLError) as e:
            raise CredentialStoreError(f"Error reading {self.path}: {e}") from e

        if not isinstance(document, dict) or ROOT_KEY not in document:
            raise CredentialStoreError(f"Malformed credential file {self.path}")

        try:
            return Credential.from_dict(document[ROOT_KEY])
        except ValueError as e:
            raise CredentialStoreError(f"Malformed credential file {self.path}: {e}") from e

    def save(self, credential: Credential) -> None:
        """
        Replace the stored credential.

        Raises:
            CredentialStoreError: If the file cannot be written
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._write_atomic({ROOT_KEY: credential.to_dict()})
        except OSError as e:
            raise CredentialStoreError(f"Error writing {self.path}: {e}") from e

        logger.debug(f"Saved credential to {self.path}")

    def clear(self) -> bool:
        """Remove the stored credential. Returns True if a file was removed."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise CredentialStoreError(f"Error removing {self.path}: {e}") from e
        return True

    def _write_atomic(self, document: dict) -> None:
        """Write data atomically using temp file and rename."""
        fd, temp_path = tempfile.mkstemp(
            dir=self.path.parent,
            prefix=f".{self.path.name}.",
            suffix=".tmp"
        )

        try:
            os.chmod(temp_path, 0o600)
            with os.fdopen(fd, 'w') as f:
                yaml.safe_dump(document, f, default_flow_style=False)

            os.replace(temp_path, self.path)

        except Exception:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise
