from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import ClassVar, TypeVar

from pydantic import BaseModel, ValidationError

from ci_id._schema import CIEnvironment, ErrorKind
from ci_id._transport import Transport

_PayloadT = TypeVar("_PayloadT", bound=BaseModel)


class FetchError(Exception):
    """A detected provider could not produce a token."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


class Fetcher(ABC):
    """Abstract base class for per-provider OIDC token retrieval."""

    environment: ClassVar[CIEnvironment]

    def name(self) -> str:
        """Human-readable name for this provider."""
        return self.environment.display_name

    @abstractmethod
    def fetch(
        self, audience: str | None, env: Mapping[str, str], transport: Transport
    ) -> str:
        """Return a token for the normalized ``audience`` or raise FetchError."""

    def _error(self, kind: ErrorKind, detail: str) -> FetchError:
        return FetchError(kind, f"{self.name()}: {detail}")

    def _parse_payload(self, body: bytes, model: type[_PayloadT]) -> _PayloadT:
        """Validate a JSON token response against ``model``."""
        try:
            return model.model_validate_json(body)
        except ValidationError as exc:
            raise self._error(
                ErrorKind.MALFORMED_RESPONSE,
                f"malformed or incomplete JSON in token response ({_summarize(exc)})",
            ) from exc


def _summarize(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "invalid payload"
    first = errors[0]
    loc = ".".join(str(part) for part in first["loc"])
    return f"{loc}: {first['msg']}" if loc else first["msg"]
