"""
Launch failures. Each one aborts the launch before anything is spawned.
Non-fatal conditions (missing login token, affinity core out of range) are
only logged and never raised.
"""

from __future__ import annotations


class LaunchError(RuntimeError):
    """Base class for conditions that abort the launch sequence."""


class ConfigNotFoundError(LaunchError):
    pass


class ConfigParseError(LaunchError):
    pass


class PresetNotFoundError(LaunchError):
    def __init__(self, preset: str, searched):
        self.preset = preset
        self.searched = list(searched)
        paths = ", ".join(str(p) for p in self.searched)
        super().__init__(f"Preset '{preset}' not found! Searched: {paths}")


class ToolMissingError(LaunchError):
    def __init__(self, tool: str, package: str, setting: str):
        self.tool = tool
        self.package = package
        super().__init__(
            f"{tool} command not found! CPU affinity cannot be set. "
            f"Install the '{package}' package or remove the {setting} setting."
        )


class InvalidAffinityFormatError(LaunchError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(
            f"Invalid CPU_AFFINITY format: {value!r}. "
            'Valid examples: "0-3" (cores 0 through 3), "0,1,2,3" (cores 0, 1, 2 and 3), '
            '"4-7" (cores 4 through 7)'
        )


class PortInUseError(LaunchError):
    def __init__(self, port: int, pid: int, conf_path):
        self.port = port
        self.pid = pid
        self.conf_path = conf_path
        super().__init__(
            f"Port {port} is already in use (pid={pid}). "
            f"Please specify a different PORT in {conf_path}."
        )
