"""Built-in credential providers.

:class:`SharedCredential` holds the credential produced by the interactive
consent flow and hands its token to every service it was injected into.
:class:`StaticTokenProvider` reads a token that was obtained elsewhere
(``env:GAPISPEC_TOKEN``, ``file:~/.token``) and never changes it.

Neither provider refreshes tokens. An expired token is still sent, and the
remote service rejects it with 401, which surfaces as
:class:`~gapispec.exceptions.AuthError`.
"""

from __future__ import annotations

from typing import Optional

from gapispec.auth.base import CredentialProvider
from gapispec.auth.credential_store import Credential, CredentialStore
from gapispec.config import resolve_credential


class SharedCredential(CredentialProvider):
    """A replaceable credential, optionally mirrored to a :class:`CredentialStore`.

    The credential is absent until :meth:`replace` is called (normally by
    :class:`~gapispec.auth.flow.Authorizer`). Each :meth:`replace` swaps the
    whole credential; requests already in flight keep the headers they were
    built with.

    Args:
        credential: Initial credential, if one is already known.
        store: If given, the stored credential is loaded lazily on first use
            and every :meth:`replace` is persisted to it.
    """

    def __init__(
        self,
        credential: Optional[Credential] = None,
        store: Optional[CredentialStore] = None,
    ) -> None:
        self._credential = credential
        self._store = store
        self._loaded = credential is not None

    @property
    def credential(self) -> Optional[Credential]:
        """The current credential, or ``None`` before authorization."""
        if not self._loaded and self._store is not None:
            self._credential = self._store.load()
        self._loaded = True
        return self._credential

    def current_token(self) -> Optional[str]:
        credential = self.credential
        return credential.access_token if credential is not None else None

    def replace(self, credential: Credential) -> None:
        """Swap in a new credential wholesale and persist it if a store is set."""
        self._credential = credential
        self._loaded = True
        if self._store is not None:
            self._store.save(credential)

    def clear(self) -> None:
        """Forget the current credential and delete the stored copy, if any."""
        self._credential = None
        self._loaded = True
        if self._store is not None:
            self._store.clear()


class StaticTokenProvider(CredentialProvider):
    """A fixed bearer token resolved from a credential source.

    The source is resolved on first use and cached for the lifetime of the
    provider.

    Args:
        source: Credential source descriptor, see
            :func:`~gapispec.config.resolve_credential`.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._token: Optional[str] = None

    def current_token(self) -> Optional[str]:
        if self._token is None:
            self._token = resolve_credential(self._source)
        return self._token
