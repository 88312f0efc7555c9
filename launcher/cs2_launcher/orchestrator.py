from __future__ import annotations
import shutil
from typing import Callable, List, Optional

from .settings import Settings
from .logging_setup import get_logger
from .fs_layout import build_layout, ensure_dirs
from .config import ConfigMerger
from .models import ServerConfig
from .affinity import validate_cpu_affinity
from .preconditions import check_login_token, check_port
from .ports import PortLookup, find_process_by_port
from .launch_args import build_launch_args, map_source, redact, shell_command
from .cfg_generator import generate_autoexec
from .script_emitter import StartScript, write_start_script
from .console import TmuxConsole
from .lifecycle import LifecycleController
from .process_runner import ProcessRunner
from .planner import LaunchPlan

log = get_logger("cs2.launcher.orch")

class Orchestrator:
    def __init__(self, settings: Settings, *, preset: Optional[str] = None,
                 port_lookup: PortLookup = find_process_by_port,
                 core_count: Optional[int] = None,
                 which: Callable[[str], Optional[str]] = shutil.which,
                 console: Optional[TmuxConsole] = None):
        self.settings = settings
        self.layout = build_layout(settings)
        self.merger = ConfigMerger(self.layout, default_preset=settings.default_preset)
        self.preset = preset
        self.port_lookup = port_lookup
        self.core_count = core_count
        self.which = which
        self.console = console or TmuxConsole(settings.console_target)
        self.runner = ProcessRunner()
        self._cfg: Optional[ServerConfig] = None

    @property
    def cfg(self) -> ServerConfig:
        if self._cfg is None:
            self._cfg = self.merger.load(preset_override=self.preset)
        return self._cfg

    def check(self, cfg: ServerConfig) -> List[str]:
        """Run all launch preconditions. Raises on fatal ones, returns advisory notes."""
        notes: List[str] = []
        if not check_login_token(cfg):
            notes.append("No GSLT configured: the server will not be listed for public matchmaking.")

        affinity = validate_cpu_affinity(cfg.cpu_affinity, core_count=self.core_count, which=self.which)
        if affinity is not None:
            notes.extend(affinity.warnings)

        check_port(cfg, self.layout.server_conf, self.port_lookup)
        return notes

    def _binary(self) -> str:
        return f"./{self.settings.server_binary}"

    def plan(self) -> LaunchPlan:
        cfg = self.cfg
        notes = self.check(cfg)
        argv = build_launch_args(cfg)
        return LaunchPlan(
            ok=True,
            preset=cfg.preset or "",
            argv=redact(argv),
            command=shell_command(self._binary(), redact(argv), cfg.cpu_affinity),
            map_source=map_source(cfg),
            cpu_affinity=cfg.cpu_affinity,
            script_path=str(self.layout.start_script),
            autoexec_path=str(self.layout.autoexec_cfg),
            notes=notes,
        )

    def prepare(self) -> LaunchPlan:
        """Validate, then write autoexec.cfg and the start script."""
        plan = self.plan()
        cfg = self.cfg
        ensure_dirs(self.layout)
        generate_autoexec(cfg, self.layout.autoexec_cfg)

        command = shell_command(self._binary(), build_launch_args(cfg), cfg.cpu_affinity)
        if cfg.cpu_affinity:
            log.info("CPU affinity configured: cores %s", cfg.cpu_affinity)
        script = StartScript(
            launch_dir=self.layout.launch_dir,
            log_dir=self.layout.log_dir,
            exit_code_file=self.layout.exit_code_file,
            command=command,
            cpu_affinity=cfg.cpu_affinity,
        )
        write_start_script(script, self.layout.start_script)
        log.info("Launch command: %s", plan.command)
        return plan

    def run(self) -> int:
        """Prepare and run the start script in the foreground."""
        self.prepare()
        return self.runner.run("server", ["bash", str(self.layout.start_script)])

    def start(self) -> bool:
        """Prepare and hand the start script to a detached tmux session."""
        self.prepare()
        return self.lifecycle().start_session(self.layout.start_script)

    def lifecycle(self) -> LifecycleController:
        return LifecycleController(self.console, self.cfg.port,
                                   exit_code_file=self.layout.exit_code_file,
                                   lookup=self.port_lookup)

