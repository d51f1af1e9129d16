from __future__ import annotations

import argparse
import logging

from .config import ConfigError, NotifySettings
from .steps.notify_url import notify


def cli_main(argv: list[str] | None = None) -> int:
    """
    CLI for notifying a URL from a shell build step.

    Prints the log lines, then ``HTTP_STATUS_ACTION=<code>`` when a status
    was obtained so the output can be appended to a dotenv file. Exits 0
    for every notification outcome.
    """
    parser = argparse.ArgumentParser(
        prog="url-publisher",
        description="POST to a URL after a build and report its HTTP status",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    notify_parser = subparsers.add_parser("notify", help="POST once to a URL")
    notify_parser.add_argument(
        "--url", help="Target URL (default: $URL_PUBLISHER_URL)"
    )
    notify_parser.add_argument(
        "--timeout",
        type=float,
        help="Timeout in seconds (default: $URL_PUBLISHER_TIMEOUT_SECONDS or 10)",
    )
    notify_parser.add_argument("-v", "--verbose", action="store_true")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        settings = NotifySettings.from_env()
    except ConfigError as exc:
        parser.error(str(exc))

    url = (args.url or settings.publish_url or "").strip()
    if not url:
        parser.error("--url is required when URL_PUBLISHER_URL is not set")
    if args.timeout is not None and args.timeout <= 0:
        parser.error("--timeout must be positive")

    if args.command == "notify":
        result = notify(url, timeout=args.timeout or settings.timeout_seconds)
        for line in result.log_lines:
            print(line)
        contribution = result.environment_contribution()
        if contribution is not None:
            print(f"{contribution.key}={contribution.value}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(cli_main())
