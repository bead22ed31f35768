"""
ArpSweep - Core Data Models
Copyright (C) 2025 Dorin Badea
GPLv3 License

This module defines the canonical data structures used throughout the application:
hardware addresses, local interfaces, the per-scan result mapping and the final
outcome handed to the report layer.
"""

from __future__ import annotations

import ipaddress
import logging
import re
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple, Union

from arpsweep.utils.constants import MAC_LEN

logger = logging.getLogger(__name__)

_MAC_SEPARATORS = re.compile(r"[:\-.]")

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


@dataclass(frozen=True)
class MacAddress:
    """6-byte link-layer address. Equality is an exact byte match."""

    octets: bytes

    def __post_init__(self):
        if not isinstance(self.octets, (bytes, bytearray)) or len(self.octets) != MAC_LEN:
            raise ValueError(f"MAC address must be {MAC_LEN} bytes")
        object.__setattr__(self, "octets", bytes(self.octets))

    @classmethod
    def parse(cls, text: str) -> "MacAddress":
        """
        Parse a MAC address in aa:bb:cc:dd:ee:ff, AA-BB-CC-DD-EE-FF,
        aabb.ccdd.eeff or bare 12-hex-digit form.
        """
        clean = _MAC_SEPARATORS.sub("", (text or "").strip())
        if len(clean) != MAC_LEN * 2:
            raise ValueError(f"Invalid MAC address: {text!r}")
        try:
            return cls(bytes.fromhex(clean))
        except ValueError as exc:
            raise ValueError(f"Invalid MAC address: {text!r}") from exc

    @property
    def oui_hex(self) -> str:
        """Uppercase hex of the first 3 bytes, no separators (e.g. 'AABBCC')."""
        return self.octets[:3].hex().upper()

    @property
    def is_broadcast(self) -> bool:
        return self.octets == b"\xff" * MAC_LEN

    def __str__(self) -> str:
        return ":".join(f"{b:02x}" for b in self.octets)


MacAddress.BROADCAST = MacAddress(b"\xff" * MAC_LEN)
MacAddress.ZERO = MacAddress(b"\x00" * MAC_LEN)


@dataclass(frozen=True)
class Interface:
    """A local network adapter usable for raw link-layer frames."""

    name: str
    ip: Optional[ipaddress.IPv4Address]
    mac: Optional[MacAddress]
    is_up: bool = False
    is_loopback: bool = False
    ips: Tuple[IPAddress, ...] = ()

    @property
    def is_usable(self) -> bool:
        """Up, not loopback, has any assigned IP address and a hardware address."""
        return bool(self.is_up and not self.is_loopback and self.ips and self.mac is not None)


class ScanResult:
    """
    Discovered IPv4 address -> observed hardware address.

    A later reply from the same IP overwrites the earlier entry (last writer wins).
    Iteration follows first-insertion order.
    """

    def __init__(self):
        self._entries: "OrderedDict[ipaddress.IPv4Address, MacAddress]" = OrderedDict()

    def record(self, ip: ipaddress.IPv4Address, mac: MacAddress) -> None:
        previous = self._entries.get(ip)
        if previous is not None and previous != mac:
            logger.debug("Reply for %s changed MAC: %s -> %s", ip, previous, mac)
        self._entries[ip] = mac

    def get(self, ip: ipaddress.IPv4Address) -> Optional[MacAddress]:
        return self._entries.get(ip)

    def items(self):
        return self._entries.items()

    def __contains__(self, ip) -> bool:
        return ip in self._entries

    def __iter__(self) -> Iterator[ipaddress.IPv4Address]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


@dataclass(frozen=True)
class DiscoveredHost:
    """One reported host: (IP, MAC, manufacturer)."""

    ip: ipaddress.IPv4Address
    mac: MacAddress
    vendor: str

    def to_dict(self) -> Dict[str, str]:
        return {"ip": str(self.ip), "mac": str(self.mac), "vendor": self.vendor}


@dataclass
class ScanOutcome:
    """Final result of one scan invocation."""

    success: bool
    message: str = ""
    error_kind: Optional[str] = None
    hosts: List[DiscoveredHost] = field(default_factory=list)
    # Hosts whose request could not be transmitted (distinct from "no reply").
    unprobed: List[ipaddress.IPv4Address] = field(default_factory=list)
    probes_sent: int = 0
    receive_errors: int = 0
    decode_errors: int = 0
    state: str = "idle"
    elapsed: float = 0.0

    @classmethod
    def failure(cls, error_kind: str, message: str) -> "ScanOutcome":
        return cls(success=False, message=message, error_kind=error_kind)

    def to_dict(self) -> Dict:
        """Serialize for JSON output."""
        return {
            "success": self.success,
            "message": self.message,
            "error_kind": self.error_kind,
            "hosts": [h.to_dict() for h in self.hosts],
            "unprobed": [str(ip) for ip in self.unprobed],
            "probes_sent": self.probes_sent,
            "receive_errors": self.receive_errors,
            "decode_errors": self.decode_errors,
            "elapsed": round(self.elapsed, 3),
        }
