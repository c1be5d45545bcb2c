"""Persistent credential store scoped per Google application.

Stores credentials in ``~/.local/share/gapispec/credentials/<app>.json``
(XDG) or the platform-equivalent directory. Files are written atomically
with ``0o600`` permissions so that tokens are never world-readable, even
momentarily.

Each application name maps to exactly one JSON file holding one serialised
:class:`Credential`. Saving replaces the file wholesale; there is no merge
and no refresh.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from gapispec.config import _atomic_write, get_data_dir


class Credential(BaseModel):
    """A bearer token together with the application it was issued to.

    Attributes:
        access_token: The bearer token sent with every request.
        token_type: Token type reported by the token endpoint.
        scopes: Scopes the user consented to.
        client_id: Client id of the application that requested the token.
        expires_at: UTC expiry reported by the token endpoint, if any.
            Informational only: expired tokens are still sent.
        obtained_at: UTC time the token was issued.
    """

    access_token: str
    token_type: str = "Bearer"
    scopes: list[str] = Field(default_factory=list)
    client_id: Optional[str] = None
    expires_at: Optional[datetime] = None
    obtained_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def is_expired(self) -> bool:
        """Return True if an expiry is known and has passed."""
        if self.expires_at is None:
            return False
        expires = self.expires_at
        if expires.tzinfo is None:
            expires = expires.replace(tzinfo=timezone.utc)
        return datetime.now(timezone.utc) >= expires


def _credentials_dir() -> Path:
    """Return the credentials directory, creating it if needed."""
    path = get_data_dir() / "credentials"
    path.mkdir(parents=True, exist_ok=True)
    return path


class CredentialStore:
    """Read/write the credential of a single application.

    Args:
        name: Application name used to derive the file name.

    Example::

        store = CredentialStore("default")
        store.save(Credential(access_token="ya29.a0..."))
        assert store.load().access_token == "ya29.a0..."
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._path = _credentials_dir() / f"{name}.json"

    @property
    def path(self) -> Path:
        """The filesystem path to this application's credential file."""
        return self._path

    def save(self, credential: Credential) -> None:
        """Persist *credential* atomically with ``0o600`` permissions.

        Raises:
            OSError: If the file cannot be written.
        """
        text = json.dumps(credential.model_dump(mode="json"), indent=2) + "\n"
        _atomic_write(self._path, text, mode=0o600)

    def load(self) -> Optional[Credential]:
        """Load the stored credential.

        Returns:
            The :class:`Credential`, or ``None`` if the file does not exist
            or cannot be parsed.
        """
        if not self._path.is_file():
            return None
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            return Credential.model_validate(data)
        except (json.JSONDecodeError, ValueError, OSError):
            return None

    def clear(self) -> None:
        """Delete the stored credential file if it exists."""
        if self._path.is_file():
            self._path.unlink()
