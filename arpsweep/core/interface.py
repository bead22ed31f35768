#!/usr/bin/env python3
"""
ArpSweep - Interface Selection Module
Copyright (C) 2025  Dorin Badea
GPLv3 License

Enumerates local network adapters (netifaces) and picks the one used to send
and receive raw ARP frames.
"""

import ipaddress
import logging
import subprocess
from typing import Dict, List, Optional, Set, Union

import netifaces

from arpsweep.core.errors import NoInterfaceError
from arpsweep.core.models import Interface, IPAddress, MacAddress

UNSPECIFIED_IPV4 = ipaddress.IPv4Address("0.0.0.0")

logger = logging.getLogger(__name__)


def read_link_flags() -> Optional[Dict[str, Set[str]]]:
    """
    Read interface flags from `ip -o link show`.

    Returns:
        {ifname: {"UP", "LOOPBACK", ...}}, or None if the command is unavailable
    """
    try:
        res = subprocess.run(
            ["ip", "-o", "link", "show"],
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("ip link unavailable: %s", exc)
        return None
    if res.returncode != 0:
        return None

    flags: Dict[str, Set[str]] = {}
    for line in res.stdout.strip().splitlines():
        # 2: eth0@if5: <BROADCAST,MULTICAST,UP,LOWER_UP> mtu 1500 ...
        parts = line.split()
        if len(parts) < 3 or not parts[2].startswith("<"):
            continue
        name = parts[1].rstrip(":").split("@", 1)[0]
        flags[name] = {f for f in parts[2].strip("<>").split(",") if f}
    return flags


def _parse_link_mac(addrs: Dict) -> Optional[MacAddress]:
    for info in addrs.get(netifaces.AF_LINK, []):
        raw = info.get("addr")
        if not raw:
            continue
        try:
            mac = MacAddress.parse(raw)
        except ValueError:
            continue
        if mac != MacAddress.ZERO:
            return mac
    return None


def _parse_ip_addrs(addrs: Dict) -> List[IPAddress]:
    """IPv4 addresses first, then IPv6 (zone suffix dropped)."""
    ips: List[IPAddress] = []
    for info in addrs.get(netifaces.AF_INET, []):
        try:
            ips.append(ipaddress.IPv4Address(info.get("addr")))
        except ValueError:
            continue
    for info in addrs.get(netifaces.AF_INET6, []):
        raw = (info.get("addr") or "").split("%", 1)[0]
        try:
            ips.append(ipaddress.IPv6Address(raw))
        except ValueError:
            continue
    return ips


def _source_ipv4(ips: List[IPAddress]) -> Optional[ipaddress.IPv4Address]:
    # IPv6-only adapters still send ARP, with an unspecified sender address
    if not ips:
        return None
    for ip in ips:
        if ip.version == 4:
            return ip
    return UNSPECIFIED_IPV4


def _build_interface(name: str, link_flags: Optional[Dict[str, Set[str]]]) -> Optional[Interface]:
    try:
        addrs = netifaces.ifaddresses(name)
    except ValueError:
        logger.debug("Interface vanished during enumeration: %s", name)
        return None

    ips = _parse_ip_addrs(addrs)
    mac = _parse_link_mac(addrs)

    if link_flags is not None and name in link_flags:
        flags = link_flags[name]
        is_up = "UP" in flags
        is_loopback = "LOOPBACK" in flags
    else:
        # No flag source (non-Linux): an assigned address implies the adapter is up
        is_up = bool(ips)
        is_loopback = name.startswith("lo") or any(ip.is_loopback for ip in ips)

    return Interface(
        name=name,
        ip=_source_ipv4(ips),
        mac=mac,
        is_up=is_up,
        is_loopback=is_loopback,
        ips=tuple(ips),
    )


def list_interfaces() -> List[Interface]:
    """
    Enumerate all local adapters in platform order.

    Returns:
        List of Interface (usable or not)
    """
    link_flags = read_link_flags()
    interfaces = []
    for name in netifaces.interfaces():
        iface = _build_interface(name, link_flags)
        if iface is not None:
            interfaces.append(iface)
    return interfaces


def select_default_interface() -> Optional[Interface]:
    """
    Pick the first adapter that is up, not loopback, has an assigned IP
    address (any family) and a hardware address. No scoring beyond
    enumeration order.
    """
    for iface in list_interfaces():
        if iface.is_usable:
            logger.debug("Selected interface %s (%s, %s)", iface.name, iface.ip, iface.mac)
            return iface
    logger.debug("No usable interface found")
    return None


def get_interface(name: str) -> Optional[Interface]:
    """Return the named adapter if it exists and is usable for scanning."""
    if name not in netifaces.interfaces():
        return None
    iface = _build_interface(name, read_link_flags())
    if iface is None or not iface.is_usable:
        return None
    return iface


def resolve_interface(requested: Optional[Union[str, Interface]] = None) -> Interface:
    """
    Resolve the scan interface from a name, an Interface, or nothing (default).

    Raises:
        NoInterfaceError: requested adapter unusable, or no usable adapter at all
    """
    if isinstance(requested, Interface):
        if requested.is_usable:
            return requested
        raise NoInterfaceError(f"Interface {requested.name} is not usable", requested.name)
    if requested:
        iface = get_interface(requested)
        if iface is None:
            raise NoInterfaceError(f"Interface {requested} not found or not usable", requested)
        return iface
    iface = select_default_interface()
    if iface is None:
        raise NoInterfaceError("No suitable network interface found")
    return iface
