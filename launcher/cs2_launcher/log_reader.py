from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

RUN_LOG_GLOB = "*-server.log"

@dataclass
class LogChunk:
    path: str
    entries: List[str]
    truncated: bool

def list_run_logs(log_dir: Path) -> list[dict]:
    """Per-run server logs, newest first (timestamps sort lexically)."""
    if not log_dir.is_dir():
        return []
    out = []
    for p in sorted(log_dir.glob(RUN_LOG_GLOB), reverse=True):
        st = p.stat()
        out.append({
            "name": p.name,
            "size_bytes": st.st_size,
            "modified": int(st.st_mtime),
        })
    return out

def latest_log(log_link: Path) -> Optional[Path]:
    if not log_link.is_symlink():
        return None
    target = log_link.resolve()
    return target if target.is_file() else None

def read_tail(path: Path, tail_lines: int = 200, max_bytes: int = 256_000) -> LogChunk:
    size = path.stat().st_size
    with path.open("rb") as f:
        f.seek(max(0, size - max_bytes))
        data = f.read()
    lines = data.decode("utf-8", errors="replace").splitlines()
    chunk = lines[-tail_lines:] if tail_lines > 0 else lines
    return LogChunk(path=str(path), entries=chunk, truncated=len(lines) > len(chunk))
