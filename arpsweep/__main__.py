#!/usr/bin/env python3
"""
ArpSweep - Entry point for `python -m arpsweep`
Copyright (C) 2025  Dorin Badea
GPLv3 License
"""

from arpsweep.cli import main

if __name__ == "__main__":
    main()
