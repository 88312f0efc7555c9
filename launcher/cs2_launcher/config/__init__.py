"""
Instance configuration: `.conf` reader and layer merging.
"""

from .conf_file import parse_conf, load_conf
from .merger import ConfigMerger, DEFAULTS, fold_layers

__all__ = [
    "parse_conf",
    "load_conf",
    "ConfigMerger",
    "DEFAULTS",
    "fold_layers",
]
