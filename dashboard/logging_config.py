import logging
import os

_CONFIGURED = False


def configure_logging(level_name=None):
    global _CONFIGURED
    if _CONFIGURED:
        return
    level_name = (level_name or os.getenv("DASHBOARD_LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    for noisy in ("urllib3", "requests", "watchdog"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
    _CONFIGURED = True
