"""Credentials and authorization for gapispec.

Every request a service issues carries the bearer token of one
:class:`Credential`. Services do not hold that token themselves: they poll a
:class:`CredentialProvider` injected at construction, once per request.

- :class:`SharedCredential` -- the usual provider. One instance shared by
  every service gives the single-token-for-everything behaviour; one
  instance per service gives per-service tokens.
- :class:`StaticTokenProvider` -- a token read from an ``env:``/``file:``
  source, for scripts and CI.
- :class:`Authorizer` -- runs Google's interactive consent flow and replaces
  a :class:`SharedCredential` wholesale with the result.
- :class:`CredentialStore` -- persistent, per-application credential file.

Typical usage::

    from gapispec.auth import Authorizer, SharedCredential

    credentials = SharedCredential()
    app = await Authorizer(app_config, credentials).authorize()
"""

from gapispec.auth.base import CredentialProvider
from gapispec.auth.credential_store import Credential, CredentialStore
from gapispec.auth.flow import Authorizer, OAuth2Flow, generate_pkce_pair
from gapispec.auth.providers import SharedCredential, StaticTokenProvider

__all__ = [
    "Authorizer",
    "Credential",
    "CredentialProvider",
    "CredentialStore",
    "OAuth2Flow",
    "SharedCredential",
    "StaticTokenProvider",
    "generate_pkce_pair",
]
