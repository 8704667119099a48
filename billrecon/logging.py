import logging
import sys

from billrecon.settings import settings

TEXT_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging() -> None:
    """Configure the root logger based on settings.

    Call once at startup, before the CLI builds its services. Grouping
    warnings about bill data are emitted at WARNING and stay visible at the
    default level; unresolved links and export writes are DEBUG.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)

    if settings.log_json:
        from pythonjsonlogger.json import JsonFormatter

        handler.setFormatter(
            JsonFormatter(
                fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
                rename_fields={"asctime": "timestamp", "levelname": "level"},
            )
        )
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)
