from __future__ import annotations

import logging
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .build import BuildContext
from .config import DEFAULT_TIMEOUT_SECONDS
from .steps.notify_url import NotificationResult, notify, record_on_build

logger = logging.getLogger(__name__)

DISPLAY_NAME = "My URL Publisher"
ALLOWED_SCHEMES = {"http", "https"}


class UrlPublisherConfig(BaseModel):
    """Saved job configuration for the publisher."""

    model_config = ConfigDict(frozen=True)

    publish_url: str = Field(..., description="URL to POST to once the build finishes")
    timeout_seconds: float = Field(DEFAULT_TIMEOUT_SECONDS, gt=0)

    @field_validator("publish_url")
    @classmethod
    def validate_publish_url(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("publish_url is required")
        parsed = urlparse(v)
        if parsed.scheme.lower() not in ALLOWED_SCHEMES or not parsed.netloc:
            raise ValueError("publish_url must be an absolute http(s) URL")
        return v


def is_applicable(project_type: type | None = None) -> bool:
    """The publisher can be attached to any kind of project."""
    return True


class UrlPublisher:
    """
    Post-build notifier.

    Runs after the main build phase, POSTs to ``config.publish_url`` and
    exports the response status as ``HTTP_STATUS_ACTION``. Never fails the
    build: ``perform`` returns True whatever the HTTP outcome.
    """

    display_name = DISPLAY_NAME

    def __init__(self, config: UrlPublisherConfig, opener=None) -> None:
        self.config = config
        self._opener = opener

    @property
    def publish_url(self) -> str:
        return self.config.publish_url

    def perform(self, build: BuildContext) -> bool:
        logger.debug(f"Notifying {self.publish_url} for {build.name} ({build.result})")
        result: NotificationResult = notify(
            self.publish_url,
            timeout=self.config.timeout_seconds,
            opener=self._opener,
        )
        record_on_build(result, build)
        return True
