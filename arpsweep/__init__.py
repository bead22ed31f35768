#!/usr/bin/env python3
"""
ArpSweep - ARP Host Discovery
Copyright (C) 2025  Dorin Badea

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

ArpSweep package initialization.
"""

from arpsweep.core.scan_engine import ScanEngine, ScanState, scan_network
from arpsweep.core.subnet import Subnet, parse_cidr
from arpsweep.core.vendor_registry import VendorRegistry, load_vendor_registry
from arpsweep.utils.constants import VERSION

__all__ = [
    "ScanEngine",
    "ScanState",
    "Subnet",
    "VendorRegistry",
    "VERSION",
    "__version__",
    "load_vendor_registry",
    "parse_cidr",
    "scan_network",
]
__version__ = VERSION
