"""Shared test fixtures for gapispec.

Provides an isolated config environment, output-state management, a
recording :class:`httpx.MockTransport`, and ready-made clients. These
fixtures are automatically discovered by pytest and available to all test
modules without explicit imports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Optional

import httpx
import pytest

from gapispec.auth import Credential, SharedCredential
from gapispec.client import AsyncClient
from gapispec.models import RequestConfig
from gapispec.output import OutputFormat, OutputManager, reset_output, set_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale.
    Resetting forces a fresh manager to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Network boundary
# ---------------------------------------------------------------------------


class Recorder:
    """Mock transport handler that records requests and replays responses.

    Responses queued with :meth:`reply` are returned in order; once the
    queue is empty every request gets ``200 {"ok": true}``.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._queue: list[Callable[[httpx.Request], httpx.Response]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._queue:
            return self._queue.pop(0)(request)
        return httpx.Response(200, json={"ok": True})

    def reply(
        self,
        status_code: int = 200,
        json_body: Any = None,
        text: Optional[str] = None,
    ) -> None:
        if text is not None:
            self._queue.append(lambda r: httpx.Response(status_code, text=text))
        elif json_body is not None:
            self._queue.append(lambda r: httpx.Response(status_code, json=json_body))
        else:
            self._queue.append(lambda r: httpx.Response(status_code))

    def fail(self, exc: Exception) -> None:
        def _raise(request: httpx.Request) -> httpx.Response:
            raise exc

        self._queue.append(_raise)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def credentials() -> SharedCredential:
    """A shared credential holding the token ``ya29.test``."""
    return SharedCredential(Credential(access_token="ya29.test"))


@pytest.fixture
def client(recorder: Recorder, credentials: SharedCredential) -> AsyncClient:
    """An authenticated AsyncClient whose requests go to *recorder*."""
    return AsyncClient(
        credentials=credentials,
        config=RequestConfig(),
        transport=httpx.MockTransport(recorder),
    )


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_CONFIG_HOME and XDG_DATA_HOME to subdirectories of tmp_path
    so that tests never touch real user config, and clears all GAPISPEC_*
    environment variables.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setattr("gapispec.config._is_xdg_platform", lambda: True)

    for var in ["GAPISPEC_SERVER", "GAPISPEC_CLIENT_ID", "GAPISPEC_TOKEN"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
