"""Post-build URL notifier that exports the HTTP status as HTTP_STATUS_ACTION."""

from .build import BuildContext, EnvVarAction
from .publisher import UrlPublisher, UrlPublisherConfig
from .steps.notify_url import NotificationResult, notify

__version__ = "1.0.0"

__all__ = [
    "notify",
    "NotificationResult",
    "UrlPublisher",
    "UrlPublisherConfig",
    "BuildContext",
    "EnvVarAction",
]
