"""Logging for the picker process: a rotating log file, console output on request."""

import logging
import logging.handlers
from pathlib import Path
from typing import Any

from refkit.settings import get_setting

_HANDLER_PREFIX = "refkit."
_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(project_root: Path, settings: dict[str, Any]) -> Path:
    """Attach refkit's handlers to the root logger and return the log file path.

    Handlers installed by an earlier call are replaced; handlers owned by
    anyone else are left alone. Console output goes to stderr and is off by
    default so it does not interleave with the interactive prompt.
    """
    level_name = str(get_setting(settings, "logging.level", "INFO")).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO

    log_path = project_root / get_setting(settings, "logging.file", "logs/refkit.log")
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handlers: list[logging.Handler] = [
        logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=int(get_setting(settings, "logging.max_bytes", 1024 * 1024)),
            backupCount=int(get_setting(settings, "logging.backup_count", 3)),
            encoding="utf-8",
        )
    ]
    handlers[0].set_name(_HANDLER_PREFIX + "file")
    if get_setting(settings, "logging.log_to_console", False):
        console = logging.StreamHandler()
        console.set_name(_HANDLER_PREFIX + "console")
        handlers.append(console)

    root = logging.getLogger()
    for old in [h for h in root.handlers if (h.get_name() or "").startswith(_HANDLER_PREFIX)]:
        root.removeHandler(old)
        old.close()
    formatter = logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)
    return log_path
