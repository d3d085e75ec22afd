import logging
import sys
from typing import Any, Dict

from sqldao.config import AppSettings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(settings: AppSettings) -> None:
    """Configure the root logger from application settings."""
    logging.basicConfig(
        level=settings.log_level_value,
        format=LOG_FORMAT,
        stream=sys.stdout,
    )


# Deterministic key=value strings keep log lines greppable and easy to assert
# against in unit-tests.
def fmt_ctx(ctx: Dict[str, Any]) -> str:
    """Return a deterministic key=value string used in log messages."""
    return " ".join(f"{k}={v}" for k, v in ctx.items() if v is not None)
