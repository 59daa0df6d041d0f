import logging
import sys

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(debug: bool = False, level: str | int | None = None) -> logging.Logger:
    """
    Send sigil logs to stderr. Safe to call more than once;
    only the level changes after the first call.
    """
    log = logging.getLogger("sigil")
    if level is None:
        level = logging.DEBUG if debug else logging.INFO
    elif isinstance(level, str) and not level.isdigit():
        level = level.upper()
    else:
        level = int(level)
    log.setLevel(level)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(handler)
    return log
