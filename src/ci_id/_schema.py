from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class CIEnvironment(str, Enum):
    GITHUB_ACTIONS = "github_actions"
    GITLAB_CI = "gitlab_ci"
    CIRCLECI = "circleci"
    BUILDKITE = "buildkite"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES: dict[CIEnvironment, str] = {
    CIEnvironment.GITHUB_ACTIONS: "GitHub Actions",
    CIEnvironment.GITLAB_CI: "GitLab CI/CD",
    CIEnvironment.CIRCLECI: "CircleCI",
    CIEnvironment.BUILDKITE: "Buildkite",
}


class ErrorKind(str, Enum):
    MISSING_PERMISSION = "missing_permission"
    NOT_CONFIGURED = "not_configured"
    TOKEN_VARIABLE_NOT_SET = "token_variable_not_set"
    MALFORMED_RESPONSE = "malformed_response"
    MALFORMED_TOKEN = "malformed_token"
    NETWORK_ERROR = "network_error"


class Detected(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["detected"] = "detected"
    environment: CIEnvironment
    token: str = Field(repr=False)


class NotDetected(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["not_detected"] = "not_detected"


class Failed(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["failed"] = "failed"
    environment: CIEnvironment
    error: ErrorKind
    message: str


DetectionOutcome = Annotated[
    Union[Detected, NotDetected, Failed], Field(discriminator="kind")
]
