#!/usr/bin/env python3
"""
ArpSweep - Error Types
Copyright (C) 2025  Dorin Badea
GPLv3 License
"""


class ArpSweepError(Exception):
    """Base class for ArpSweep errors."""


class CidrError(ArpSweepError, ValueError):
    """Malformed CIDR input. `kind` is one of BAD_FORMAT, BAD_ADDRESS, BAD_PREFIX."""

    BAD_FORMAT = "bad_format"
    BAD_ADDRESS = "bad_address"
    BAD_PREFIX = "bad_prefix"

    def __init__(self, kind: str, message: str):
        super().__init__(message)
        self.kind = kind


class FrameBuildError(ArpSweepError):
    """Frame could not be written into the destination buffer."""


class RegistryMissingError(ArpSweepError):
    """Vendor registry file is absent at scan time."""


class NoInterfaceError(ArpSweepError):
    """No usable link-layer interface. `requested` is the name asked for, if any."""

    def __init__(self, message: str, requested=None):
        super().__init__(message)
        self.requested = requested


class ChannelOpenError(ArpSweepError):
    """Raw send/receive channel could not be opened (usually missing privileges)."""
