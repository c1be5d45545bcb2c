"""Abstract base class for credential providers.

A :class:`CredentialProvider` answers one question per request: which bearer
token, if any, should be attached right now. The HTTP client polls it before
every request, so replacing the token behind a provider takes effect on the
next call without rebuilding any service.

To implement a new provider, subclass :class:`CredentialProvider` and
implement :meth:`~CredentialProvider.current_token`.

See Also:
    :mod:`gapispec.auth.providers` for the built-in providers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class CredentialProvider(ABC):
    """Source of the bearer token attached to outgoing requests."""

    @abstractmethod
    def current_token(self) -> Optional[str]:
        """Return the access token to send, or ``None`` if there is none yet.

        Returning ``None`` does not stop the request: it is sent without an
        ``Authorization`` header and the remote service decides.
        """
        ...

    def auth_headers(self) -> dict[str, str]:
        """Return the headers that carry the current token.

        Returns:
            ``{"Authorization": "Bearer <token>"}``, or an empty dict when
            :meth:`current_token` returns ``None``.
        """
        token = self.current_token()
        if token is None:
            return {}
        return {"Authorization": f"Bearer {token}"}
