"""
Lifecycle actions against a running instance.

Nothing is tracked between calls: the server process is looked up through
the owner of its UDP port every time.
"""

from __future__ import annotations
from pathlib import Path
from typing import Optional

import psutil

from .console import TmuxConsole
from .ports import PortLookup, find_process_by_port
from .script_emitter import read_exit_code
from .logging_setup import get_logger

log = get_logger("cs2.launcher.lifecycle")

UPDATE_ANNOUNCEMENT = "This server is shutting down for an update soon. See you later!"


class LifecycleController:
    def __init__(self, console: TmuxConsole, port: int, exit_code_file: Optional[Path] = None,
                 lookup: PortLookup = find_process_by_port):
        self.console = console
        self.port = port
        self.exit_code_file = exit_code_file
        self.lookup = lookup

    def server_pid(self) -> Optional[int]:
        return self.lookup("udp", self.port)

    def announce_update(self) -> None:
        self.console.send(f'say "{UPDATE_ANNOUNCEMENT}"')

    def shutdown_server(self) -> None:
        self.console.send("quit")

    def kill_server(self) -> Optional[int]:
        # CS2 survives a hangup of its terminal, so signal the socket owner directly
        pid = self.server_pid()
        if pid is None:
            log.debug("No process bound to port %s/udp, nothing to kill", self.port)
            return None
        log.debug("Killing server with pid = %s ...", pid)
        try:
            psutil.Process(pid).terminate()
        except psutil.NoSuchProcess:
            log.info("Server process %s already exited", pid)
        return pid

    def start_session(self, script: Path) -> bool:
        return self.console.start(script)

    def status(self) -> dict:
        pid = self.server_pid()
        last = read_exit_code(self.exit_code_file) if self.exit_code_file else None
        return {"port": self.port, "pid": pid, "running": pid is not None, "last_exit_code": last}
