from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from ci_id._schema import CIEnvironment

logger = logging.getLogger(__name__)

# Ordered signature checks; the first provider whose variables are all set wins.
_SIGNATURES: list[tuple[CIEnvironment, tuple[str, ...]]] = [
    (CIEnvironment.GITHUB_ACTIONS, ("GITHUB_ACTIONS",)),
    (CIEnvironment.GITLAB_CI, ("GITLAB_CI",)),
    (CIEnvironment.CIRCLECI, ("CIRCLECI",)),
    (CIEnvironment.BUILDKITE, ("BUILDKITE",)),
]


def detect_environment(env: Mapping[str, str] | None = None) -> CIEnvironment | None:
    """Detect the active CI provider from env vars.

    Returns None outside of any recognized CI environment. When signature
    variables of several providers are present (nested runners), the
    provider listed first in ``_SIGNATURES`` is returned.
    """
    if env is None:
        env = os.environ

    for environment, names in _SIGNATURES:
        if all(env.get(name) for name in names):
            logger.debug("%s: environment detected", environment.display_name)
            return environment
        logger.debug("%s: environment not detected", environment.display_name)

    return None
