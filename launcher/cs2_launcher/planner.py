from __future__ import annotations
from dataclasses import dataclass, asdict, field
from typing import Any, Dict, List, Optional

@dataclass
class LaunchPlan:
    ok: bool
    preset: str
    argv: List[str]
    command: str
    map_source: str
    cpu_affinity: Optional[str] = None
    script_path: Optional[str] = None
    autoexec_path: Optional[str] = None
    notes: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
