#!/usr/bin/env python3
"""
ArpSweep - Subnet Expansion Module
Copyright (C) 2025  Dorin Badea
GPLv3 License

Parses `A.B.C.D/N` strings and enumerates the scannable host addresses
(network and broadcast addresses excluded).
"""

from __future__ import annotations

import ipaddress
import re
from dataclasses import dataclass
from typing import Iterator

from arpsweep.core.errors import CidrError

_PREFIX_RE = re.compile(r"^[0-9]+$")
_FULL_MASK = 0xFFFFFFFF


@dataclass(frozen=True)
class Subnet:
    """IPv4 base address plus prefix length (0-32)."""

    base: ipaddress.IPv4Address
    prefix_len: int

    def __post_init__(self):
        if not 0 <= self.prefix_len <= 32:
            raise ValueError("prefix length must be between 0 and 32")

    @property
    def host_count(self) -> int:
        return 1 << (32 - self.prefix_len)

    @property
    def mask(self) -> int:
        return ~(_FULL_MASK >> self.prefix_len) & _FULL_MASK

    @property
    def network_address(self) -> ipaddress.IPv4Address:
        return ipaddress.IPv4Address(int(self.base) & self.mask)

    @property
    def scan_size(self) -> int:
        # /31 and /32 have no scannable hosts
        return max(0, self.host_count - 2)

    def __iter__(self) -> Iterator[ipaddress.IPv4Address]:
        network = int(self.network_address)
        for offset in range(1, self.scan_size + 1):
            yield ipaddress.IPv4Address(network + offset)

    def __len__(self) -> int:
        return self.scan_size

    def __str__(self) -> str:
        return f"{self.base}/{self.prefix_len}"


def parse_cidr(text: str) -> Subnet:
    """
    Parse a CIDR string of the exact shape `A.B.C.D/N`.

    Args:
        text: CIDR string (surrounding whitespace is ignored)

    Returns:
        Subnet

    Raises:
        CidrError: bad_format, bad_address or bad_prefix
    """
    parts = (text or "").strip().split("/")
    if len(parts) != 2:
        raise CidrError(CidrError.BAD_FORMAT, "Invalid CIDR format. Use: x.x.x.x/n")

    address_text, prefix_text = parts
    try:
        base = ipaddress.IPv4Address(address_text)
    except ValueError as exc:
        raise CidrError(CidrError.BAD_ADDRESS, f"Invalid IP address: {exc}") from exc

    if not _PREFIX_RE.match(prefix_text):
        raise CidrError(CidrError.BAD_PREFIX, f"Invalid subnet mask: {prefix_text!r}")
    prefix_len = int(prefix_text)
    if prefix_len > 32:
        raise CidrError(CidrError.BAD_PREFIX, "Subnet mask must be between 0 and 32")

    return Subnet(base=base, prefix_len=prefix_len)
