import os


def http_timeout() -> float | None:
    """Outbound timeout in seconds; unset means wait indefinitely."""
    value = os.environ.get("PAPER_ASSISTANT_HTTP_TIMEOUT")
    return float(value) if value else None
