"""
CPU affinity (core pinning) checks for the server process.

The affinity string is handed verbatim to `taskset -c`, so only the subset
of its list syntax we can reason about is accepted: core indices joined by
`,` or `-`.
"""

from __future__ import annotations
import re
import shutil
from dataclasses import dataclass, field
from typing import Callable, List, Optional

import psutil

from .errors import InvalidAffinityFormatError, ToolMissingError
from .logging_setup import get_logger

log = get_logger("cs2.launcher.affinity")

AFFINITY_TOOL = "taskset"
AFFINITY_TOOL_PACKAGE = "util-linux"

_AFFINITY_RE = re.compile(r"[0-9]+(?:[,-][0-9]+)*")


@dataclass
class AffinityCheck:
    spec: str
    core_count: int
    highest_core: int
    warnings: List[str] = field(default_factory=list)

    @property
    def max_cpu(self) -> int:
        return self.core_count - 1


def host_core_count() -> int:
    return psutil.cpu_count(logical=True) or 1


def is_valid_affinity(spec: str) -> bool:
    return _AFFINITY_RE.fullmatch(spec) is not None


def validate_cpu_affinity(
    spec: Optional[str],
    *,
    core_count: Optional[int] = None,
    which: Callable[[str], Optional[str]] = shutil.which,
) -> Optional[AffinityCheck]:
    """
    Validate CPU_AFFINITY against the host.

    Returns None when no affinity is configured. Raises ToolMissingError or
    InvalidAffinityFormatError for unusable settings. Cores beyond the host's
    range only produce a warning, the launch still goes ahead.
    """
    if not spec:
        return None

    if which(AFFINITY_TOOL) is None:
        raise ToolMissingError(AFFINITY_TOOL, AFFINITY_TOOL_PACKAGE, "CPU_AFFINITY")

    if not is_valid_affinity(spec):
        raise InvalidAffinityFormatError(spec)

    cores = core_count if core_count is not None else host_core_count()
    highest = max(int(n) for n in re.findall(r"[0-9]+", spec))
    check = AffinityCheck(spec=spec, core_count=cores, highest_core=highest)

    if highest > check.max_cpu:
        msg = (f"CPU_AFFINITY specifies core {highest}, but system only has cores 0-{check.max_cpu}. "
               "This may cause the server to fail to start.")
        log.warning(msg)
        check.warnings.append(msg)

    log.debug("CPU affinity validation passed: %s (system has %d cores)", spec, cores)
    return check
