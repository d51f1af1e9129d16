from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

from .utils.env import parse_bool, parse_positive_float

logger = logging.getLogger(__name__)

URL_PUBLISHER_URL_VAR = "URL_PUBLISHER_URL"
URL_PUBLISHER_TIMEOUT_VAR = "URL_PUBLISHER_TIMEOUT_SECONDS"
URL_PUBLISHER_ENABLED_VAR = "URL_PUBLISHER_ENABLED"
DEFAULT_TIMEOUT_SECONDS = 10.0


class ConfigError(ValueError):
    def __init__(self, *, name: str, value: str, message: str):
        super().__init__(message)
        self.name = name
        self.value = value


class NotifySettings(BaseModel):
    """Process-level defaults for the notify step."""

    model_config = ConfigDict(frozen=True)

    publish_url: str | None = None
    timeout_seconds: float = Field(DEFAULT_TIMEOUT_SECONDS, gt=0)
    enabled: bool = True

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        strict: bool = True,
    ) -> NotifySettings:
        """
        Read settings from the environment.

        With ``strict=False`` an unparseable timeout is logged and replaced
        by the default instead of raising ConfigError.
        """
        env = os.environ if environ is None else environ

        raw_timeout = env.get(URL_PUBLISHER_TIMEOUT_VAR)
        try:
            timeout_seconds = parse_positive_float(raw_timeout, DEFAULT_TIMEOUT_SECONDS)
        except ValueError as exc:
            if strict:
                raise ConfigError(
                    name=URL_PUBLISHER_TIMEOUT_VAR,
                    value=raw_timeout or "",
                    message=f"{URL_PUBLISHER_TIMEOUT_VAR} must be a positive number: {exc}",
                ) from exc
            logger.warning(
                f"Ignoring invalid {URL_PUBLISHER_TIMEOUT_VAR}={raw_timeout!r}, "
                f"using {DEFAULT_TIMEOUT_SECONDS}s"
            )
            timeout_seconds = DEFAULT_TIMEOUT_SECONDS

        publish_url = (env.get(URL_PUBLISHER_URL_VAR) or "").strip() or None

        return cls(
            publish_url=publish_url,
            timeout_seconds=timeout_seconds,
            enabled=parse_bool(env.get(URL_PUBLISHER_ENABLED_VAR), True),
        )
