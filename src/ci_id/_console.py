from __future__ import annotations

import sys
from typing import TextIO

from rich.console import Console
from rich.text import Text

from ci_id._schema import Detected, DetectionOutcome, ErrorKind, Failed

NOT_DETECTED_MESSAGE = "No ambient OIDC tokens found"

_ERROR_HINTS: dict[ErrorKind, str] = {
    ErrorKind.MISSING_PERMISSION: "check the job's OIDC permissions",
    ErrorKind.NOT_CONFIGURED: "enable OIDC for this project or context",
    ErrorKind.TOKEN_VARIABLE_NOT_SET: "check the pipeline's id_tokens block",
    ErrorKind.MALFORMED_RESPONSE: "unexpected response from the token endpoint",
    ErrorKind.MALFORMED_TOKEN: "the token does not look like a JWT",
    ErrorKind.NETWORK_ERROR: "transient failure, retrying may help",
}


def _make_failure_text(outcome: Failed) -> Text:
    text = Text()
    text.append("Error: ", style="red bold")
    text.append(outcome.message)
    hint = _ERROR_HINTS.get(outcome.error)
    if hint:
        text.append(f" ({hint})", style="dim")
    return text


def print_outcome(outcome: DetectionOutcome, stdout: TextIO | None = None) -> None:
    """Write the token to stdout, or a rich-formatted diagnostic to stderr."""
    if isinstance(outcome, Detected):
        # Raw write: no newline and no markup processing around the token.
        out = stdout if stdout is not None else sys.stdout
        out.write(outcome.token)
        out.flush()
        return

    console = Console(stderr=True)
    if isinstance(outcome, Failed):
        console.print(_make_failure_text(outcome))
    else:
        console.print(Text(NOT_DETECTED_MESSAGE, style="yellow"))
