"""
script_emitter.py — supervised start script for the server process
-------------------------------------------------------------------
The external supervisor (tmux session) runs the generated bash script. The
script points the stable `server.log` symlink at a fresh timestamped log,
tees the combined server output into it and leaves the exit status in
`server.exit-code` for the supervisor to pick up.
"""

from __future__ import annotations
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .logging_setup import get_logger

log = get_logger("cs2.launcher.script")

TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"


@dataclass(frozen=True)
class StartScript:
    launch_dir: Path
    log_dir: Path
    exit_code_file: Path
    command: str
    cpu_affinity: Optional[str] = None

    @property
    def log_link(self) -> Path:
        return self.log_dir / "server.log"


def render_start_script(script: StartScript) -> str:
    q = shlex.quote
    lines = [
        "#! /bin/bash",
        f"timestamp () {{ date +{TIMESTAMP_FORMAT}; }}",
        f"cd {q(str(script.launch_dir))} || {{ echo 1 > {q(str(script.exit_code_file))}; exit 1; }}",
        f'SERVER_LOGFILE={q(str(script.log_dir))}/"${{LAUNCH_TIMESTAMP:-$(timestamp)}}-server.log"',
        f"LOG_LINK={q(str(script.log_link))}",
        'rm -f "$LOG_LINK"',
        'ln -s "$SERVER_LOGFILE" "$LOG_LINK"',
        "",
    ]
    if script.cpu_affinity:
        lines += [
            "# CPU affinity",
            f'echo "[$(timestamp)] Starting CS2 server with CPU affinity: "{q(script.cpu_affinity)}'
            ' | tee -a "$SERVER_LOGFILE"',
            'echo "[$(timestamp)] Available CPUs: $(nproc --all)" | tee -a "$SERVER_LOGFILE"',
            "",
        ]
    lines += [
        f'stdbuf -o0 -e0 {script.command} 2>&1 | tee -a "$SERVER_LOGFILE"',
        "",
        "exit_code=${PIPESTATUS[0]}",
        'echo "[$(timestamp)] Server exited with code: $exit_code" | tee -a "$SERVER_LOGFILE"',
        f'echo "$exit_code" > {q(str(script.exit_code_file))}',
        'exit "$exit_code"',
    ]
    return "\n".join(lines) + "\n"


def write_start_script(script: StartScript, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_start_script(script), encoding="utf-8")
    path.chmod(0o755)
    log.info("Generated start script: %s", path)
    return path


def read_exit_code(path: Path) -> Optional[int]:
    """Exit status recorded by the last run of the start script, if any."""
    try:
        text = path.read_text(encoding="utf-8").strip()
    except FileNotFoundError:
        return None
    try:
        return int(text)
    except ValueError:
        log.warning("Unreadable exit code in %s: %r", path, text)
        return None
