"""
Layered configuration for a server instance.

Layers, in order of precedence:

1. the instance `server.conf` (required)
2. the preset `presets/<name>.conf`, instance-local before application-wide
3. the built-in defaults

A later layer only fills keys an earlier layer did not mention. An empty
assignment counts as "mentioned" and stays empty. `gotv.conf` is applied
last as an overlay and replaces whatever the layers produced for its keys.
"""

from __future__ import annotations
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from pydantic import ValidationError

from .conf_file import ConfValue, load_conf, load_optional_conf
from ..errors import ConfigNotFoundError, ConfigParseError, PresetNotFoundError
from ..fs_layout import Layout
from ..models import ServerConfig
from ..logging_setup import get_logger

log = get_logger("cs2.launcher.config.merger")

DEFAULTS: Dict[str, ConfValue] = {
    "IP": "0.0.0.0",
    "PORT": "27015",
    "GAMETYPE": "0",
    "GAMEMODE": "1",
    "MAPGROUP": "mg_active",
    "MAPS": ["de_dust2"],
    "TITLE": "Counter-Strike 2 Server",
    "TV_ENABLE": "0",
    "TV_PORT": "27020",
    "TV_MAXCLIENTS": "10",
    "TV_DELAY": "90",
}


def fold_layers(layers: Iterable[Mapping[str, ConfValue]]) -> Dict[str, ConfValue]:
    """Fold partial mappings, earlier layers win (set-if-unset)."""
    result: Dict[str, ConfValue] = {}
    for layer in layers:
        for key, value in layer.items():
            if key not in result:
                result[key] = value
    return result


class ConfigMerger:
    """
    Builds the effective `ServerConfig` of an instance.

    Strategy:
    - server.conf is the base and is never overwritten
    - the preset only fills what the base left out
    - defaults fill the rest
    - gotv.conf overrides its own keys
    """

    def __init__(self, layout: Layout, default_preset: str = "",
                 defaults: Optional[Mapping[str, ConfValue]] = None):
        self.layout = layout
        self.default_preset = default_preset
        self.defaults = dict(DEFAULTS if defaults is None else defaults)

    def resolve_preset_name(self, base: Mapping[str, ConfValue], override: Optional[str] = None) -> str:
        if override is not None:
            return override
        if "PRESET" in base:
            value = base["PRESET"]
            return value if isinstance(value, str) else " ".join(value)
        return self.default_preset

    def preset_candidates(self, name: str) -> List[Path]:
        return [
            self.layout.inst_presets / f"{name}.conf",
            self.layout.app_presets / f"{name}.conf",
        ]

    def load_preset(self, name: str) -> Tuple[Path, Dict[str, ConfValue]]:
        candidates = self.preset_candidates(name)
        for path in candidates:
            if path.is_file():
                log.info("Loading preset '%s' from %s", name, path)
                return path, load_conf(path)
        raise PresetNotFoundError(name, candidates)

    def load_base(self) -> Dict[str, ConfValue]:
        path = self.layout.server_conf
        if not path.is_file():
            raise ConfigNotFoundError(f"Instance configuration {path} not found.")
        return load_conf(path)

    def merge(self, base: Mapping[str, ConfValue], preset: Optional[Mapping[str, ConfValue]] = None,
              gotv: Optional[Mapping[str, ConfValue]] = None, preset_name: str = "") -> ServerConfig:
        """
        Merge already loaded layers into a validated config.

        Args:
            base: server.conf values
            preset: preset values, None when no preset is active
            gotv: gotv.conf values, None when the file is absent
            preset_name: name recorded as PRESET in the result
        """
        merged = fold_layers([base, preset or {}, self.defaults])
        if gotv:
            merged.update(gotv)
        merged["PRESET"] = preset_name
        try:
            return ServerConfig.model_validate(merged)
        except ValidationError as e:
            raise ConfigParseError(f"Invalid instance configuration ({self.layout.server_conf}): {e}")

    def load(self, preset_override: Optional[str] = None) -> ServerConfig:
        base = self.load_base()
        name = self.resolve_preset_name(base, preset_override)
        preset = None
        if name:
            _, preset = self.load_preset(name)
        else:
            log.debug("No preset configured")

        gotv = load_optional_conf(self.layout.gotv_conf)
        if gotv is not None:
            log.debug("Applying GOTV settings from %s", self.layout.gotv_conf)

        cfg = self.merge(base, preset, gotv, preset_name=name)
        log.info("Effective config: preset=%s port=%s maps=%d", name or "-", cfg.port, len(cfg.maps))
        return cfg
