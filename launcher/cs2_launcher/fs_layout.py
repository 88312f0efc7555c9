from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from .settings import Settings

@dataclass(frozen=True)
class Layout:
    inst_config: Path
    server_conf: Path
    gotv_conf: Path
    inst_presets: Path
    app_presets: Path
    launch_dir: Path
    game_cfg_dir: Path
    autoexec_cfg: Path
    tmp_dir: Path
    start_script: Path
    exit_code_file: Path
    log_dir: Path
    log_link: Path

def build_layout(settings: Settings) -> Layout:
    inst = settings.instance_dir
    cfg = settings.cfg_dir
    tmp = settings.tmp_dir
    game_cfg = inst / "game" / "csgo" / "cfg"
    return Layout(
        inst_config=cfg,
        server_conf=cfg / "server.conf",
        gotv_conf=cfg / "gotv.conf",
        inst_presets=cfg / "presets",
        app_presets=settings.app_dir / "presets",
        launch_dir=inst / "game" / "bin" / "linuxsteamrt64",
        game_cfg_dir=game_cfg,
        autoexec_cfg=game_cfg / "autoexec.cfg",
        tmp_dir=tmp,
        start_script=tmp / "server-start.sh",
        exit_code_file=tmp / "server.exit-code",
        log_dir=settings.log_dir,
        log_link=settings.log_dir / "server.log",
    )

def ensure_dirs(layout: Layout) -> None:
    for p in [layout.tmp_dir, layout.log_dir, layout.game_cfg_dir]:
        p.mkdir(parents=True, exist_ok=True)
