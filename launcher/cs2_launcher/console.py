from __future__ import annotations
import subprocess
from pathlib import Path
from typing import List
from .logging_setup import get_logger

log = get_logger("cs2.launcher.console")

class TmuxConsole:
    """Admin console of a server running inside a tmux window."""

    def __init__(self, target: str, tmux: str = "tmux"):
        self.target = target
        self.tmux = tmux

    @property
    def window(self) -> str:
        return f":{self.target}"

    def _run(self, args: List[str]) -> bool:
        cmd = [self.tmux] + args
        log.debug("tmux: %s", " ".join(cmd))
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True)
        except FileNotFoundError:
            log.warning("tmux not found, cannot reach console %s", self.window)
            return False
        if proc.returncode != 0:
            log.warning("tmux failed (rc=%s): %s", proc.returncode, (proc.stderr or "").strip())
            return False
        return True

    def send(self, line: str) -> bool:
        """Type one console line and press Enter. Best-effort, never raises."""
        log.info("Console %s <- %s", self.window, line)
        if not self._run(["send-keys", "-t", self.window, "-l", line]):
            return False
        return self._run(["send-keys", "-t", self.window, "Enter"])

    def start(self, script: Path) -> bool:
        """Run the start script detached in a new session named after the target."""
        return self._run(["new-session", "-d", "-s", self.target, "-n", self.target, "bash", str(script)])
