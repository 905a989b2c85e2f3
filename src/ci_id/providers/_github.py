from __future__ import annotations

import logging
from collections.abc import Mapping

from pydantic import BaseModel, StrictStr

from ci_id._schema import CIEnvironment, ErrorKind
from ci_id._transport import Transport, TransportError, with_query_param
from ci_id.providers._base import Fetcher

logger = logging.getLogger(__name__)


class _GitHubTokenPayload(BaseModel):
    value: StrictStr


class GitHubFetcher(Fetcher):
    """Request a token from the GitHub Actions OIDC endpoint.

    The runner only injects ``ACTIONS_ID_TOKEN_REQUEST_URL`` and
    ``ACTIONS_ID_TOKEN_REQUEST_TOKEN`` when the workflow (or job) has been
    granted ``permissions: id-token: write``.
    """

    environment = CIEnvironment.GITHUB_ACTIONS

    def fetch(
        self, audience: str | None, env: Mapping[str, str], transport: Transport
    ) -> str:
        req_token = env.get("ACTIONS_ID_TOKEN_REQUEST_TOKEN")
        if not req_token:
            raise self._error(
                ErrorKind.MISSING_PERMISSION,
                "ACTIONS_ID_TOKEN_REQUEST_TOKEN is not set: "
                "is the id-token workflow permission set?",
            )
        req_url = env.get("ACTIONS_ID_TOKEN_REQUEST_URL")
        if not req_url:
            raise self._error(
                ErrorKind.MISSING_PERMISSION,
                "ACTIONS_ID_TOKEN_REQUEST_URL is not set: "
                "is the id-token workflow permission set?",
            )

        url = with_query_param(req_url, "audience", audience)
        logger.debug("%s: requesting token", self.name())
        try:
            body = transport.get(url, {"Authorization": f"bearer {req_token}"})
        except TransportError as exc:
            raise self._error(
                ErrorKind.NETWORK_ERROR, f"token request failed: {exc}"
            ) from exc

        return self._parse_payload(body, _GitHubTokenPayload).value
