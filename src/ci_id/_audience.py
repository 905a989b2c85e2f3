from __future__ import annotations

import re

from ci_id._schema import CIEnvironment

GITLAB_DEFAULT_VARIABLE = "ID_TOKEN"

# Anything that is not an ASCII letter or digit, plus a leading digit.
_UNSAFE_CHARS = re.compile(r"[^A-Z0-9_]|^[^A-Z_]")


def sanitize_audience(audience: str) -> str:
    """Turn an audience into an environment variable name fragment.

    Examples:
        "sigstore"       -> "SIGSTORE"
        "my-audience"    -> "MY_AUDIENCE"
        "https://a.b/c"  -> "HTTPS___A_B_C"
        "1password"      -> "_PASSWORD"
    """
    return _UNSAFE_CHARS.sub("_", audience.upper())


def gitlab_token_variable(audience: str | None) -> str:
    """Name of the variable a GitLab ``id_tokens`` block must define."""
    if not audience:
        return GITLAB_DEFAULT_VARIABLE
    return f"{sanitize_audience(audience)}_{GITLAB_DEFAULT_VARIABLE}"


def normalize_audience(audience: str | None, environment: CIEnvironment) -> str | None:
    """Convert a caller-supplied audience into the form a provider expects.

    An empty audience means "provider default", same as None. GitLab gets the
    name of the variable holding the token; every other provider takes the
    audience as-is.
    """
    if not audience:
        audience = None

    if environment is CIEnvironment.GITLAB_CI:
        return gitlab_token_variable(audience)
    return audience
