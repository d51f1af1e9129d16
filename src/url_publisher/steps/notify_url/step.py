from __future__ import annotations

import http.client
import logging
import urllib.error
import urllib.request
from typing import Any, Protocol

from ...build import BuildContext, EnvVarAction
from ...config import NotifySettings
from ...utils.env import parse_positive_float
from .model import (
    SUCCESS_STATUS_CODES,
    NotificationRequest,
    NotificationResult,
    TransportFailure,
)

logger = logging.getLogger(__name__)


class Opener(Protocol):
    def open(self, fullurl: Any, data: Any = None, timeout: float = ...) -> Any: ...


class _NoRedirectHandler(urllib.request.HTTPRedirectHandler):
    """Report 3xx responses as-is instead of following them."""

    def redirect_request(self, req, fp, code, msg, headers, newurl):
        return None


def build_opener() -> urllib.request.OpenerDirector:
    return urllib.request.build_opener(_NoRedirectHandler)


def notify(
    target_url: str,
    *,
    timeout: float | None = None,
    opener: Opener | None = None,
) -> NotificationResult:
    """
    POST once to ``target_url`` and classify the outcome.

    Transport failures never propagate: they come back as a result with
    ``status_code=None`` and a populated ``failure``. 4xx/5xx responses are
    ordinary results with ``succeeded=False``.

    Args:
        target_url: URL to POST to (no body, no custom headers)
        timeout: Seconds to wait for the round trip (default from
            URL_PUBLISHER_TIMEOUT_SECONDS, else 10)
        opener: Object exposing ``open(request, timeout=...)``; a
            non-redirecting urllib opener by default

    Returns:
        NotificationResult
    """
    request = NotificationRequest(target_url=target_url)
    url = request.target_url
    timeout = _resolve_timeout(timeout)
    opener = opener or build_opener()

    try:
        req = urllib.request.Request(url, data=None, method="POST")
    except ValueError as e:
        return _failure_result(url, TransportFailure(kind="invalid_url", message=_describe(e)))

    try:
        with opener.open(req, timeout=timeout) as response:
            status = response.status
    except urllib.error.HTTPError as e:
        # Non-2xx responses arrive as HTTPError; the response still owns a socket.
        status = e.code
        e.close()
    except (OSError, ValueError, http.client.HTTPException) as e:
        return _failure_result(url, _classify_failure(e))

    succeeded = status in SUCCESS_STATUS_CODES
    outcome = "Successfully!" if succeeded else "But Not Successfully!"
    lines = [
        f"Triggered URL {url} {outcome}",
        f"Status Code for URL {url} is {status}",
    ]
    for line in lines:
        logger.info(line)

    return NotificationResult(
        target_url=url,
        status_code=status,
        succeeded=succeeded,
        log_lines=lines,
    )


def _resolve_timeout(timeout: float | None) -> float:
    if timeout is not None:
        if timeout > 0:
            return float(timeout)
        logger.warning(f"Ignoring non-positive timeout {timeout!r}")
    return NotifySettings.from_env(strict=False).timeout_seconds


def _failure_result(url: str, failure: TransportFailure) -> NotificationResult:
    line = f"Failed to trigger the suggested URL -> {url}: {failure.message}"
    logger.error(line)
    return NotificationResult(
        target_url=url,
        log_lines=[line],
        error_message=failure.message,
        failure=failure,
    )


def _describe(exc: BaseException | object) -> str:
    message = str(exc).strip()
    return message or type(exc).__name__


def _classify_failure(exc: BaseException) -> TransportFailure:
    reason: object = exc
    if isinstance(exc, urllib.error.URLError) and exc.reason is not None:
        reason = exc.reason

    if isinstance(reason, TimeoutError):
        kind = "timeout"
    elif isinstance(reason, http.client.InvalidURL):
        kind = "invalid_url"
    elif isinstance(reason, http.client.HTTPException):
        kind = "protocol"
    else:
        kind = "connection"
    return TransportFailure(kind=kind, message=_describe(reason))


def run(
    step: dict[str, Any],
    build: BuildContext,
    settings: NotifySettings | None = None,
) -> NotificationResult | None:
    """
    UrlPublisher step entrypoint.
    Notifies the configured URL after the build and exports HTTP_STATUS_ACTION.

    Args:
        step: Pipeline step configuration (``publish_url``, ``timeout_seconds``)
        build: Build whose log and environment receive the outcome
        settings: Environment-derived defaults (read from os.environ if omitted)

    Returns:
        NotificationResult, or None when the step was skipped
    """
    settings = settings or NotifySettings.from_env(strict=False)

    if not settings.enabled:
        logger.info("URL notification disabled, skipping")
        return None

    publish_url = (step.get("publish_url") or settings.publish_url or "").strip()
    if not publish_url:
        logger.warning("No publish_url configured, skipping URL notification")
        return None

    timeout = settings.timeout_seconds
    raw_timeout = step.get("timeout_seconds")
    if raw_timeout is not None:
        try:
            timeout = parse_positive_float(str(raw_timeout), settings.timeout_seconds)
        except ValueError:
            logger.warning(
                f"Invalid timeout_seconds {raw_timeout!r} in step config, using {timeout}s"
            )

    # Notifies regardless of build.result.
    result = notify(publish_url, timeout=timeout)
    record_on_build(result, build)
    return result


def record_on_build(result: NotificationResult, build: BuildContext) -> None:
    """Write the log lines to the build and export the status, if any."""
    build.write_log(result.log_lines)
    contribution = result.environment_contribution()
    if contribution is not None:
        build.add_action(EnvVarAction(contribution.key, contribution.value))
