from __future__ import annotations

from collections.abc import Mapping

import pytest

from ci_id import TransportError

# A real (expired) compact JWS issued for the "sigstore" audience.
TOKEN = (
    "eyJhbGciOiJSUzI1NiIsImtpZCI6IjMxNjA2OGMzM2ZhMjg2OTZhZmI5YzM5YWI2OTMxMjY1ZDk0Y2I3NTUifQ"
    ".eyJpc3MiOiJodHRwczovL29hdXRoMi5zaWdzdG9yZS5kZXYvYXV0aCIsImF1ZCI6InNpZ3N0b3JlIn0"
    ".s27uZ3vpIzRS4eWdC3pM0FSsYkHNvScQoii_TcSRVZhtrcPAbA4D95Pw_R_UB-qRquMK1BHepKmeN1b1"
)

# Every variable the probe looks at; cleared before tests that use os.environ.
SIGNATURE_VARS = ("GITHUB_ACTIONS", "GITLAB_CI", "CIRCLECI", "BUILDKITE")

GITHUB_REQUEST_URL = (
    "https://pipelines.actions.githubusercontent.com/abc/idtoken?api-version=2.0"
)


class RecordingTransport:
    """Transport double: records every request, replies with a canned body."""

    def __init__(
        self, body: bytes = b"", error: TransportError | None = None
    ) -> None:
        self.body = body
        self.error = error
        self.requests: list[tuple[str, dict[str, str]]] = []

    def get(self, url: str, headers: Mapping[str, str]) -> bytes:
        self.requests.append((url, dict(headers)))
        if self.error is not None:
            raise self.error
        return self.body


@pytest.fixture()
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture()
def clean_environ(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove CI signature variables from the real process environment."""
    for name in SIGNATURE_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture()
def github_env() -> dict[str, str]:
    return {
        "GITHUB_ACTIONS": "true",
        "ACTIONS_ID_TOKEN_REQUEST_TOKEN": "request-token",
        "ACTIONS_ID_TOKEN_REQUEST_URL": GITHUB_REQUEST_URL,
    }


@pytest.fixture()
def buildkite_env() -> dict[str, str]:
    return {
        "BUILDKITE": "true",
        "BUILDKITE_AGENT_ACCESS_TOKEN": "agent-token",
        "BUILDKITE_JOB_ID": "0190f4e0-aaaa-bbbb-cccc-000000000001",
    }
