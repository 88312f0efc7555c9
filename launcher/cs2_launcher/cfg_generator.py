from __future__ import annotations
from pathlib import Path
from typing import List
from .models import ServerConfig
from .logging_setup import get_logger

log = get_logger("cs2.launcher.cfg")

def _cvar(name: str, value) -> str:
    text = str(value).replace('"', "'")
    return f'{name} "{text}"'

def render_autoexec(cfg: ServerConfig) -> str:
    lines: List[str] = [
        "// generated by cs2-launcher, changes are overwritten on every launch",
        _cvar("hostname", cfg.display_title),
        _cvar("sv_tags", cfg.tag_string),
        _cvar("sv_password", cfg.password or ""),
    ]
    if cfg.rcon_password:
        lines.append(_cvar("rcon_password", cfg.rcon_password))
    if cfg.tv_enable:
        lines.append(_cvar("tv_name", cfg.gotv_title))
        lines.append(_cvar("tv_title", cfg.gotv_title))
        lines.append(_cvar("tv_password", cfg.tv_password or ""))
        if cfg.tv_delay is not None:
            lines.append(_cvar("tv_delay", cfg.tv_delay))
    return "\n".join(lines) + "\n"

def generate_autoexec(cfg: ServerConfig, out_path: Path) -> None:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(render_autoexec(cfg), encoding="utf-8")
    log.info("Generated autoexec cfg: %s", out_path)
