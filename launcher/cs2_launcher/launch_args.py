"""
launch_args.py — command line of the CS2 dedicated server
---------------------------------------------------------
Turns an effective ServerConfig into the argument vector for `./cs2`.
The order is fixed: several `+command` tokens only work when their value
directly follows them, and the map source must come after game type/mode.
"""

from __future__ import annotations
import shlex
from typing import List, Optional

from .models import ServerConfig
from .logging_setup import get_logger

log = get_logger("cs2.launcher.args")

# workshop content is loaded on top of a stock map
BOOTSTRAP_MAP = "de_mirage"
AUTOEXEC = "autoexec.cfg"


class MapSource:
    COLLECTION = "workshop_collection"
    WORKSHOP_MAP = "workshop_map"
    MAPGROUP = "mapgroup"


def map_source(cfg: ServerConfig) -> str:
    if cfg.workshop_collection_id:
        return MapSource.COLLECTION
    if cfg.workshop_map_id:
        return MapSource.WORKSHOP_MAP
    return MapSource.MAPGROUP


def _map_args(cfg: ServerConfig) -> List[str]:
    source = map_source(cfg)
    if source == MapSource.COLLECTION:
        return ["+map", BOOTSTRAP_MAP, "+host_workshop_collection", cfg.workshop_collection_id]
    if source == MapSource.WORKSHOP_MAP:
        return ["+map", BOOTSTRAP_MAP, "+host_workshop_map", cfg.workshop_map_id]

    args: List[str] = []
    if cfg.mapgroup:
        args += ["+mapgroup", cfg.mapgroup]
    m = cfg.resolved_map()
    if m:
        args += ["+map", m]
    else:
        log.warning("Neither MAP nor MAPS configured, server starts without a map")
    return args


def _gotv_args(cfg: ServerConfig) -> List[str]:
    if not cfg.tv_enable:
        return []
    args = ["+tv_enable", "1"]
    if cfg.tv_port is not None:
        args += ["+tv_port", str(cfg.tv_port)]
    if cfg.tv_maxclients is not None:
        args += ["+tv_maxclients", str(cfg.tv_maxclients)]
    if cfg.tv_relay:
        args += ["+tv_relay", cfg.tv_relay, "+tv_relaypassword", cfg.tv_relaypass or ""]
    return args


def build_launch_args(cfg: ServerConfig) -> List[str]:
    """Build the argument vector (without the binary itself)."""
    args: List[str] = ["-dedicated", "-console"]

    if cfg.use_rcon:
        args.append("-usercon")
    if cfg.tickrate is not None:
        # likely has no effect on the tickless CS2 engine
        args += ["-tickrate", str(cfg.tickrate)]
    if cfg.maxplayers is not None:
        args += ["-maxplayers", str(cfg.maxplayers)]
    if cfg.wan_ip:
        args += ["+net_public_adr", cfg.wan_ip]
    if cfg.apikey:
        args += ["-authkey", cfg.apikey]
    if cfg.gslt:
        args += ["+sv_setsteamaccount", cfg.gslt]

    args += ["-ip", cfg.ip, "-port", str(cfg.port)]
    args += ["+game_type", str(cfg.gametype), "+game_mode", str(cfg.gamemode)]
    args += _map_args(cfg)
    args += _gotv_args(cfg)
    args += ["+exec", AUTOEXEC]
    return args


def shell_command(binary: str, args: List[str], cpu_affinity: Optional[str] = None) -> str:
    """
    Join binary and arguments into one shell-safe command string,
    prefixed with `taskset -c <cores>` when core pinning is configured.
    """
    cmd = shlex.join([binary] + list(args))
    if cpu_affinity:
        cmd = f"taskset -c {shlex.quote(cpu_affinity)} {cmd}"
    return cmd


def redact(args: List[str]) -> List[str]:
    """Copy of the vector with credentials masked, for logs and plans."""
    secret_after = {"-authkey", "+sv_setsteamaccount", "+tv_relaypassword"}
    out: List[str] = []
    hide = False
    for a in args:
        out.append("***" if hide and a else a)
        hide = a in secret_after
    return out
