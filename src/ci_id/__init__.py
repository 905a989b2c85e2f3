"""Ambient OIDC identity tokens from CI environments.

Example:
    outcome = detect_credentials("sigstore")
    if isinstance(outcome, Detected):
        use(outcome.token)
"""
from __future__ import annotations

__version__ = "0.1.0"

from ci_id._audience import gitlab_token_variable, normalize_audience, sanitize_audience
from ci_id._dispatch import detect_credentials
from ci_id._probe import detect_environment
from ci_id._schema import (
    CIEnvironment,
    Detected,
    DetectionOutcome,
    ErrorKind,
    Failed,
    NotDetected,
)
from ci_id._transport import Transport, TransportError, UrllibTransport
from ci_id.providers import Fetcher, FetchError, get_fetcher

__all__ = [
    "CIEnvironment",
    "Detected",
    "DetectionOutcome",
    "ErrorKind",
    "FetchError",
    "Failed",
    "Fetcher",
    "NotDetected",
    "Transport",
    "TransportError",
    "UrllibTransport",
    "detect_credentials",
    "detect_environment",
    "get_fetcher",
    "gitlab_token_variable",
    "normalize_audience",
    "sanitize_audience",
]
