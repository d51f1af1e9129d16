from .model import (
    HTTP_STATUS_ENV_KEY,
    EnvironmentContribution,
    NotificationRequest,
    NotificationResult,
    TransportFailure,
)
from .step import build_opener, notify, record_on_build, run

__all__ = [
    "notify",
    "run",
    "record_on_build",
    "build_opener",
    "HTTP_STATUS_ENV_KEY",
    "NotificationRequest",
    "NotificationResult",
    "EnvironmentContribution",
    "TransportFailure",
]
