"""Logging setup for the editrag package."""

import logging

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_configured = False


def setup_logging(level: str = "INFO") -> None:
    """Attach a stream handler to the ``editrag`` logger. Safe to call twice."""
    global _configured
    if _configured:
        return

    log_level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger("editrag")
    root.setLevel(log_level)
    root.handlers.clear()

    handler = logging.StreamHandler()
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    root.addHandler(handler)

    # Request logs from the embedding client are noise at INFO
    for name in ("httpx", "httpcore", "openai"):
        logging.getLogger(name).setLevel(logging.WARNING)

    _configured = True
