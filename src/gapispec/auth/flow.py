"""Google OAuth2 consent flow (authorization code with PKCE).

:class:`OAuth2Flow` performs one interactive authorization against Google's
OAuth2 endpoints (:rfc:`7636` PKCE, loopback redirect):

1. Opens the consent page in the user's browser.
2. Listens on a temporary ``127.0.0.1`` HTTP server for the redirect.
3. Exchanges the authorization code for an access token.

:class:`Authorizer` is the async entry point applications call. It runs the
blocking flow off the event loop, then replaces a
:class:`~gapispec.auth.providers.SharedCredential` wholesale with the new
token. Tokens are never refreshed; authorizing again is the only way to get
a new one.
"""

from __future__ import annotations

import asyncio
import base64
import hashlib
import secrets
import socket
import sys
import threading
import webbrowser
from datetime import datetime, timedelta, timezone
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Any, Optional
from urllib.parse import parse_qs, urlencode, urlparse

import httpx

from gapispec.auth.credential_store import Credential
from gapispec.auth.providers import SharedCredential
from gapispec.config import resolve_credential
from gapispec.exceptions import AuthError
from gapispec.models import AppConfig
from gapispec.output import debug

CALLBACK_TIMEOUT = 120


def generate_pkce_pair() -> tuple[str, str]:
    """Generate a PKCE code_verifier and code_challenge (S256).

    Returns:
        A tuple of ``(code_verifier, code_challenge)``.
    """
    # RFC 7636: 43-128 characters from the unreserved character set
    code_verifier = secrets.token_urlsafe(64)[:128]
    digest = hashlib.sha256(code_verifier.encode("ascii")).digest()
    code_challenge = base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")
    return code_verifier, code_challenge


def _find_free_port() -> int:
    """Find a free TCP port on localhost."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


class OAuth2Flow:
    """One interactive authorization-code grant against Google.

    The flow is stateless: every :meth:`run` starts from scratch and returns
    a brand-new :class:`~gapispec.auth.credential_store.Credential`.
    """

    def run(self, app: AppConfig) -> Credential:
        """Ask the user for consent and return the resulting credential.

        Args:
            app: The application requesting consent (client id and scopes).

        Returns:
            The new credential.

        Raises:
            AuthError: If stdin is not a TTY, the user declines, no code
                arrives before the timeout, or the token exchange fails.
        """
        if not sys.stdin.isatty():
            raise AuthError(
                "Google authorization requires an interactive terminal "
                "(stdin must be a TTY)"
            )

        code_verifier, code_challenge = generate_pkce_pair()
        port = _find_free_port()
        redirect_uri = f"http://127.0.0.1:{port}/callback"

        auth_url = self.authorization_url(app, redirect_uri, code_challenge)
        code = self._wait_for_callback(port, auth_url)
        token_data = self._exchange_code(app, code, code_verifier, redirect_uri)
        return self.credential_from_token(app, token_data)

    def authorization_url(
        self,
        app: AppConfig,
        redirect_uri: str,
        code_challenge: str,
    ) -> str:
        """Build the consent-page URL for *app*."""
        params: dict[str, str] = {
            "client_id": app.client_id,
            "response_type": "code",
            "redirect_uri": redirect_uri,
            "code_challenge": code_challenge,
            "code_challenge_method": "S256",
        }
        if app.scopes:
            params["scope"] = " ".join(app.scopes)
        return f"{app.authorization_url}?{urlencode(params)}"

    @staticmethod
    def credential_from_token(app: AppConfig, token_data: dict[str, Any]) -> Credential:
        """Turn a token-endpoint response into a :class:`Credential`."""
        now = datetime.now(timezone.utc)
        expires_in = token_data.get("expires_in")
        scope = token_data.get("scope")
        return Credential(
            access_token=token_data["access_token"],
            token_type=token_data.get("token_type", "Bearer"),
            scopes=scope.split() if scope else list(app.scopes),
            client_id=app.client_id,
            expires_at=now + timedelta(seconds=float(expires_in)) if expires_in is not None else None,
            obtained_at=now,
        )

    def _wait_for_callback(self, port: int, auth_url: str) -> str:
        """Start a local HTTP server, open the browser, and wait for the redirect.

        Returns:
            The authorization code from the callback query string.

        Raises:
            AuthError: If Google reports an error (e.g. ``access_denied``)
                or no code is received within :data:`CALLBACK_TIMEOUT`.
        """
        result: dict[str, Optional[str]] = {"code": None, "error": None}

        class CallbackHandler(BaseHTTPRequestHandler):
            def do_GET(self) -> None:
                params = parse_qs(urlparse(self.path).query)

                if "error" in params:
                    result["error"] = params["error"][0]
                    body = f"Authorization failed: {result['error']}"
                elif "code" in params:
                    result["code"] = params["code"][0]
                    body = (
                        "Authorization successful! You can close this window "
                        "and return to the terminal."
                    )
                else:
                    result["error"] = "no_code"
                    body = "No authorization code received."

                self.send_response(200)
                self.send_header("Content-Type", "text/html; charset=utf-8")
                self.end_headers()
                self.wfile.write(f"<html><body><h2>{body}</h2></body></html>".encode("utf-8"))

            def log_message(self, format: str, *args: Any) -> None:
                pass

        server = HTTPServer(("127.0.0.1", port), CallbackHandler)
        server.timeout = CALLBACK_TIMEOUT

        threading.Thread(target=webbrowser.open, args=(auth_url,), daemon=True).start()

        server.handle_request()
        server.server_close()

        if result["error"]:
            raise AuthError(f"Google authorization failed: {result['error']}")
        if not result["code"]:
            raise AuthError("No authorization code received from callback")
        return result["code"]

    def _exchange_code(
        self,
        app: AppConfig,
        code: str,
        code_verifier: str,
        redirect_uri: str,
    ) -> dict[str, Any]:
        """Exchange the authorization code for an access token.

        Raises:
            AuthError: On HTTP errors or if ``access_token`` is missing.
        """
        data: dict[str, str] = {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": redirect_uri,
            "code_verifier": code_verifier,
            "client_id": app.client_id,
        }
        if app.client_secret_source:
            data["client_secret"] = resolve_credential(app.client_secret_source)

        try:
            response = httpx.post(
                app.token_url,
                data=data,
                headers={"Accept": "application/json"},
                timeout=30.0,
            )
            response.raise_for_status()
            token_data: dict[str, Any] = response.json()
        except httpx.HTTPStatusError as exc:
            raise AuthError(
                f"Token exchange failed with status {exc.response.status_code}: "
                f"{exc.response.text}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise AuthError(f"Token exchange failed: {exc}") from exc

        if "access_token" not in token_data:
            raise AuthError("Token response missing 'access_token' field")
        return token_data


class Authorizer:
    """Async entry point for Google's interactive consent flow.

    Args:
        app: The application to authorize.
        credentials: The provider whose credential is replaced on success.
        flow: The flow implementation; defaults to :class:`OAuth2Flow`.

    Example::

        credentials = SharedCredential()
        authorizer = Authorizer(AppConfig(client_id="..."), credentials)
        app = await authorizer.authorize()
    """

    def __init__(
        self,
        app: AppConfig,
        credentials: SharedCredential,
        flow: Optional[OAuth2Flow] = None,
    ) -> None:
        self._app = app
        self._credentials = credentials
        self._flow = flow or OAuth2Flow()

    async def authorize(self) -> AppConfig:
        """Run the consent flow once and install the resulting credential.

        Returns:
            The :class:`~gapispec.models.AppConfig` that was authorized.

        Raises:
            AuthError: If the user declines or the flow fails. The previous
                credential, if any, is left untouched.
        """
        credential = await asyncio.to_thread(self._flow.run, self._app)
        self._credentials.replace(credential)
        debug(f"Authorized {self._app.client_id} for scopes: {' '.join(credential.scopes)}")
        return self._app
