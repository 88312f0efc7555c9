from __future__ import annotations
import json
import logging
from logging.handlers import RotatingFileHandler
from .settings import Settings

# every module logger lives below this name, launcher.log is attached here
LAUNCHER_LOGGER = "cs2.launcher"
LAUNCHER_LOG = "launcher.log"

class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)

def _formatter(settings: Settings) -> logging.Formatter:
    if settings.log_json:
        return _JsonFormatter()
    return logging.Formatter(fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                             datefmt="%Y-%m-%d %H:%M:%S")

def _file_handler(settings: Settings, fmt: logging.Formatter):
    """launcher.log next to the server run logs, None if the log dir is not writable."""
    try:
        settings.log_dir.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(settings.log_dir / LAUNCHER_LOG, maxBytes=5_000_000, backupCount=3)
    except OSError as e:
        logging.getLogger(LAUNCHER_LOGGER).warning(
            "Could not open %s in %s (%s), continuing with console logging only.", LAUNCHER_LOG, settings.log_dir, e)
        return None
    fh.setFormatter(fmt)
    fh.setLevel(settings.log_level.upper())
    return fh

def setup_logging(settings: Settings) -> None:
    fmt = _formatter(settings)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(settings.log_level.upper())
    console = logging.StreamHandler()
    console.setFormatter(fmt)
    root.addHandler(console)

    launcher = logging.getLogger(LAUNCHER_LOGGER)
    for h in [h for h in launcher.handlers if isinstance(h, RotatingFileHandler)]:
        launcher.removeHandler(h)
        h.close()
    fh = _file_handler(settings, fmt)
    if fh is not None:
        launcher.addHandler(fh)
    launcher.propagate = True

def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
