#!/usr/bin/env python3
"""
xkbconv main entry point for running as a module: python3 -m xkbconv
"""

import sys
from xkbconv.cli import main

if __name__ == '__main__':
    sys.exit(main())
