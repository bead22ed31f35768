#!/usr/bin/env python3
"""
ArpSweep - Constants and Configuration
Copyright (C) 2025  Dorin Badea
GPLv3 License
"""

# Version
VERSION = "1.0.0"

# Default language
DEFAULT_LANG = "en"

# Input limits
MAX_CIDR_LENGTH = 50  # Maximum length for CIDR input
MAX_UNPROBED_DISPLAY = 20  # Unprobed addresses listed in the summary

# Listening window after all requests are sent (seconds)
DEFAULT_LISTEN_WINDOW = 5.0
MIN_LISTEN_WINDOW = 0.5
MAX_LISTEN_WINDOW = 120.0

# Bounded-blocking receive per poll attempt (seconds)
DEFAULT_POLL_INTERVAL = 0.2

# Vendor registry
OUI_FILENAME = "oui.txt"
UNKNOWN_VENDOR = "Unknown"
OUI_HEX_MARKER = "(hex)"
OUI_BASE16_MARKER = "base 16"

# Ethernet / ARP wire constants
ETHERTYPE_ARP = 0x0806
ETHERTYPE_IPV4 = 0x0800
ARP_HWTYPE_ETHERNET = 1
ARP_OP_REQUEST = 1
ARP_OP_REPLY = 2
MAC_LEN = 6
IPV4_LEN = 4
ETHERNET_HEADER_LEN = 14
ARP_PAYLOAD_LEN = 28
ARP_FRAME_LEN = ETHERNET_HEADER_LEN + ARP_PAYLOAD_LEN

# Scan outcome error kinds
ERROR_INPUT = "input"
ERROR_REGISTRY_MISSING = "registry_missing"
ERROR_NO_INTERFACE = "no_interface"
ERROR_CHANNEL_OPEN = "channel_open"

# Environment variables
ENV_OUI_PATH = "ARPSWEEP_OUI_PATH"
ENV_LISTEN_WINDOW = "ARPSWEEP_LISTEN_WINDOW"

# File permissions
SECURE_FILE_MODE = 0o600
