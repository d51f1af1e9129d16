from __future__ import annotations

from collections.abc import MutableMapping
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

HTTP_STATUS_ENV_KEY = "HTTP_STATUS_ACTION"
SUCCESS_STATUS_CODES = frozenset({200, 302})


class NotificationRequest(BaseModel):
    """A single POST target, built fresh for every invocation."""

    model_config = ConfigDict(frozen=True)

    target_url: str = Field(..., min_length=1)

    @field_validator("target_url")
    @classmethod
    def strip_target_url(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("target_url must not be blank")
        return v


class TransportFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["timeout", "connection", "invalid_url", "protocol"]
    message: str = Field(..., min_length=1)


class EnvironmentContribution(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: Literal["HTTP_STATUS_ACTION"] = HTTP_STATUS_ENV_KEY
    value: str

    def apply(self, env: MutableMapping[str, str]) -> None:
        env[self.key] = self.value


class NotificationResult(BaseModel):
    """Outcome of one notify call: a status code, or a transport failure."""

    target_url: str
    status_code: int | None = None
    succeeded: bool = False
    log_lines: list[str] = Field(default_factory=list)
    error_message: str | None = None
    failure: TransportFailure | None = None

    def environment_contribution(self) -> EnvironmentContribution | None:
        if self.status_code is None:
            return None
        return EnvironmentContribution(value=str(self.status_code))
