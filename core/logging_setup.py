from __future__ import annotations
import logging

# Chatty client libraries that would otherwise log every connection at DEBUG.
QUIET_LOGGERS = ("urllib3", "httpcore", "httpx")


def setup_console_logging(level: int = logging.DEBUG) -> None:
    """
    Call once at app or CLI start. Prints viewer, CMS and model-provider logs
    to the console.
    """
    root = logging.getLogger()
    if root.handlers:
        # already configured (uvicorn or a second import)
        root.setLevel(level)
        return

    root.setLevel(level)
    h = logging.StreamHandler()
    fmt = logging.Formatter(
        "[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    h.setFormatter(fmt)
    root.addHandler(h)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
