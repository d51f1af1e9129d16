from .notify_url import run as run_notify_url

# Register step for orchestrator
STEP_REGISTRY = {
    "UrlPublisher": run_notify_url,
}
