from __future__ import annotations

import logging
from collections.abc import Mapping

from ci_id._audience import GITLAB_DEFAULT_VARIABLE
from ci_id._schema import CIEnvironment, ErrorKind
from ci_id._transport import Transport
from ci_id.providers._base import Fetcher

logger = logging.getLogger(__name__)


class GitLabFetcher(Fetcher):
    """Read a token injected by a GitLab ``id_tokens`` block.

    GitLab can put tokens in any variable, so a naming convention is
    required: ``ID_TOKEN`` for the default audience and
    ``<AUDIENCE>_ID_TOKEN`` otherwise. ``audience`` here is already that
    variable name.
    """

    environment = CIEnvironment.GITLAB_CI

    def fetch(
        self, audience: str | None, env: Mapping[str, str], transport: Transport
    ) -> str:
        var_name = audience or GITLAB_DEFAULT_VARIABLE
        logger.debug("%s: looking for token in %s", self.name(), var_name)
        token = env.get(var_name)
        if not token:
            raise self._error(
                ErrorKind.TOKEN_VARIABLE_NOT_SET,
                f"{var_name} is not set: add it to the job's id_tokens block",
            )
        return token
