from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from ci_id._audience import normalize_audience
from ci_id._probe import detect_environment
from ci_id._schema import (
    Detected,
    DetectionOutcome,
    ErrorKind,
    Failed,
    NotDetected,
)
from ci_id._transport import Transport, UrllibTransport
from ci_id.providers import FetchError, get_fetcher

logger = logging.getLogger(__name__)


def _looks_like_jws(token: str) -> bool:
    """Very shallow check: could this be a compact JWS (header.payload.signature)?"""
    parts = token.split(".")
    return len(parts) == 3 and all(parts)


def detect_credentials(
    audience: str | None = None,
    *,
    env: Mapping[str, str] | None = None,
    transport: Transport | None = None,
) -> DetectionOutcome:
    """Detect the CI environment and retrieve an ambient OIDC token from it.

    Returns NotDetected outside of CI. Once a provider has been detected its
    result is final: a failure is returned as Failed tagged with that
    provider, other providers are never tried.
    """
    if env is None:
        env = os.environ
    if transport is None:
        transport = UrllibTransport()

    environment = detect_environment(env)
    if environment is None:
        logger.debug("No CI environment detected")
        return NotDetected()

    fetcher = get_fetcher(environment)
    try:
        token = fetcher.fetch(
            normalize_audience(audience, environment), env, transport
        )
    except FetchError as exc:
        logger.debug("%s: token retrieval failed (%s)", fetcher.name(), exc.kind.value)
        return Failed(environment=environment, error=exc.kind, message=exc.message)

    if not _looks_like_jws(token):
        return Failed(
            environment=environment,
            error=ErrorKind.MALFORMED_TOKEN,
            message=f"{fetcher.name()}: token is not a well-formed JWT",
        )

    logger.debug("%s: token found", fetcher.name())
    return Detected(environment=environment, token=token)
