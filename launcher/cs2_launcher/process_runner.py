from __future__ import annotations
import subprocess
from pathlib import Path
from typing import List, Optional
from .logging_setup import get_logger

log = get_logger("cs2.launcher.proc")

class ProcessRunner:
    """
    Runs the start script in the foreground, for hosts without tmux
    (e.g. containers where the container runtime is the supervisor).
    """

    def __init__(self, stop_timeout: float = 10.0):
        self.stop_timeout = stop_timeout
        self.proc: Optional[subprocess.Popen] = None

    def run(self, name: str, cmd: List[str], *, cwd: Optional[Path] = None) -> int:
        log.info("Starting %s: %s", name, " ".join(cmd))
        self.proc = subprocess.Popen(cmd, cwd=str(cwd) if cwd else None)
        try:
            rc = self.proc.wait()
        except KeyboardInterrupt:
            log.info("Interrupted, stopping %s (pid=%s)", name, self.proc.pid)
            rc = self.stop()
        log.info("%s exited with rc=%s", name, rc)
        return int(rc if rc is not None else 0)

    def stop(self) -> Optional[int]:
        if self.proc is None or self.proc.poll() is not None:
            return self.proc.returncode if self.proc else None
        self.proc.terminate()
        try:
            return self.proc.wait(timeout=self.stop_timeout)
        except subprocess.TimeoutExpired:
            log.warning("Start script did not stop within %ss, killing pid=%s", self.stop_timeout, self.proc.pid)
            self.proc.kill()
            return self.proc.wait()
