#!/usr/bin/env python3
"""
CS2 Dedicated Server Launcher
"""

import sys
from cs2_launcher.cli import main

if __name__ == "__main__":
    sys.exit(main())
