from __future__ import annotations
from pathlib import Path

from .errors import PortInUseError
from .models import ServerConfig
from .ports import PortLookup, find_process_by_port
from .logging_setup import get_logger

log = get_logger("cs2.launcher.checks")


def check_login_token(cfg: ServerConfig) -> bool:
    """Advisory only: without a GSLT the server stays off public matchmaking lists."""
    if cfg.gslt:
        return True
    log.debug("Launching CS2 with no Game Server Login Token (GSLT) specified ...")
    return False


def check_port(cfg: ServerConfig, conf_path: Path, lookup: PortLookup = find_process_by_port) -> None:
    pid = lookup("udp", cfg.port)
    if pid is not None:
        raise PortInUseError(cfg.port, pid, conf_path)
    log.debug("Port %s/udp is free", cfg.port)
