from __future__ import annotations

import logging
from collections.abc import Mapping
from urllib.parse import quote

from pydantic import BaseModel, StrictStr

from ci_id._schema import CIEnvironment, ErrorKind
from ci_id._transport import Transport, TransportError, with_query_param
from ci_id.providers._base import Fetcher

logger = logging.getLogger(__name__)

_DEFAULT_AGENT_ENDPOINT = "https://agent.buildkite.com/v3"


class _BuildkiteTokenPayload(BaseModel):
    token: StrictStr


def _token_url(endpoint: str, job_id: str, audience: str | None) -> str:
    """Build the agent API URL for a job's OIDC token.

    Examples:
        ("https://agent.buildkite.com/v3", "j-1", None)
            -> "https://agent.buildkite.com/v3/jobs/j-1/oidc/tokens"
        ("https://agent.buildkite.com/v3/", "j-1", "sigstore")
            -> "https://agent.buildkite.com/v3/jobs/j-1/oidc/tokens?audience=sigstore"
    """
    url = f"{endpoint.rstrip('/')}/jobs/{quote(job_id, safe='')}/oidc/tokens"
    return with_query_param(url, "audience", audience)


class BuildkiteFetcher(Fetcher):
    """Request a token for the running job from the Buildkite agent API."""

    environment = CIEnvironment.BUILDKITE

    def fetch(
        self, audience: str | None, env: Mapping[str, str], transport: Transport
    ) -> str:
        access_token = env.get("BUILDKITE_AGENT_ACCESS_TOKEN")
        if not access_token:
            raise self._error(
                ErrorKind.MISSING_PERMISSION,
                "BUILDKITE_AGENT_ACCESS_TOKEN is not set: "
                "is this step running inside a Buildkite agent?",
            )
        job_id = env.get("BUILDKITE_JOB_ID")
        if not job_id:
            raise self._error(
                ErrorKind.MISSING_PERMISSION, "BUILDKITE_JOB_ID is not set"
            )

        endpoint = env.get("BUILDKITE_AGENT_ENDPOINT") or _DEFAULT_AGENT_ENDPOINT
        url = _token_url(endpoint, job_id, audience)
        logger.debug("%s: requesting token from %s", self.name(), endpoint)
        try:
            body = transport.get(url, {"Authorization": f"Bearer {access_token}"})
        except TransportError as exc:
            raise self._error(
                ErrorKind.NETWORK_ERROR, f"token request failed: {exc}"
            ) from exc

        return self._parse_payload(body, _BuildkiteTokenPayload).token
