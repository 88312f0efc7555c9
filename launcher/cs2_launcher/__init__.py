"""
cs2_launcher package
--------------------
Launcher for Counter-Strike 2 dedicated server instances on Linux.
Contains modules for layered instance configuration, launch precondition
checks, command line synthesis, start script generation and lifecycle
control of a running server through its tmux console.
"""

__version__ = "0.3.0"
