from __future__ import annotations
from typing import Callable, Optional

import psutil

from .logging_setup import get_logger

log = get_logger("cs2.launcher.ports")

# (proto, port) -> pid of the owning process, or None
PortLookup = Callable[[str, int], Optional[int]]


def find_process_by_port(proto: str, port: int) -> Optional[int]:
    """
    Return the pid of the process bound to a local `proto` ("udp"/"tcp") port.

    Sockets owned by other users only report a pid when running with enough
    privileges; those without one are ignored.
    """
    try:
        conns = psutil.net_connections(kind=proto)
    except psutil.AccessDenied:
        log.warning("Not permitted to read the %s socket table; assuming port %s is free", proto, port)
        return None

    for c in conns:
        if not c.laddr or c.laddr.port != port or c.pid is None:
            continue
        if proto.startswith("tcp") and c.status != psutil.CONN_LISTEN:
            continue
        return c.pid
    return None
