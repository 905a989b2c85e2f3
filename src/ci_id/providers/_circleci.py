from __future__ import annotations

import logging
from collections.abc import Mapping

from ci_id._schema import CIEnvironment, ErrorKind
from ci_id._transport import Transport
from ci_id.providers._base import Fetcher

logger = logging.getLogger(__name__)

# Newest first.
_TOKEN_VARIABLES = ("CIRCLE_OIDC_TOKEN_V2", "CIRCLE_OIDC_TOKEN")


class CircleCIFetcher(Fetcher):
    """Read the job token CircleCI injects when OIDC is enabled for a context."""

    environment = CIEnvironment.CIRCLECI

    def fetch(
        self, audience: str | None, env: Mapping[str, str], transport: Transport
    ) -> str:
        if audience is not None:
            # The injected token's audience is fixed to the organization ID.
            logger.debug(
                "%s: injected tokens carry the organization audience; "
                "requested audience %r is not applied",
                self.name(),
                audience,
            )

        for var_name in _TOKEN_VARIABLES:
            token = env.get(var_name)
            if token:
                logger.debug("%s: token found in %s", self.name(), var_name)
                return token

        raise self._error(
            ErrorKind.NOT_CONFIGURED,
            f"none of {', '.join(_TOKEN_VARIABLES)} is set: "
            "is OIDC enabled for this job's context?",
        )
