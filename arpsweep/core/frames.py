#!/usr/bin/env python3
"""
ArpSweep - Frame Builder Module
Copyright (C) 2025  Dorin Badea
GPLv3 License

Builds Ethernet II / ARP request frames (RFC 826 layout, 42 bytes) and decodes
inbound ARP frames, using scapy's Ether and ARP layers.
"""

import ipaddress
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from scapy.layers.l2 import ARP, Ether

from arpsweep.core.errors import FrameBuildError
from arpsweep.core.models import MacAddress
from arpsweep.utils.constants import (
    ARP_FRAME_LEN,
    ARP_HWTYPE_ETHERNET,
    ARP_OP_REPLY,
    ARP_OP_REQUEST,
    ETHERTYPE_ARP,
    ETHERTYPE_IPV4,
    IPV4_LEN,
    MAC_LEN,
)

# Disable scapy runtime warnings
logging.getLogger("scapy.runtime").setLevel(logging.ERROR)


@dataclass(frozen=True)
class ArpPacket:
    """Decoded Ethernet + ARP fields."""

    eth_dst: MacAddress
    eth_src: MacAddress
    operation: int
    sender_mac: MacAddress
    sender_ip: ipaddress.IPv4Address
    target_mac: MacAddress
    target_ip: ipaddress.IPv4Address

    @property
    def is_request(self) -> bool:
        return self.operation == ARP_OP_REQUEST

    @property
    def is_reply(self) -> bool:
        return self.operation == ARP_OP_REPLY


def build_arp_request(
    source_mac: MacAddress,
    source_ip: ipaddress.IPv4Address,
    target_ip: ipaddress.IPv4Address,
    buffer: Optional[bytearray] = None,
) -> bytes:
    """
    Build a broadcast ARP request asking who has `target_ip`.

    Args:
        source_mac: Sender hardware address (also the Ethernet source)
        source_ip: Sender protocol address
        target_ip: Address being resolved
        buffer: Optional destination buffer; the frame is written at offset 0

    Returns:
        The 42-byte frame

    Raises:
        FrameBuildError: if `buffer` is smaller than a full frame
    """
    if buffer is not None and len(buffer) < ARP_FRAME_LEN:
        raise FrameBuildError(
            f"Destination buffer too small: {len(buffer)} < {ARP_FRAME_LEN} bytes"
        )

    packet = Ether(
        dst=str(MacAddress.BROADCAST), src=str(source_mac), type=ETHERTYPE_ARP
    ) / ARP(
        hwtype=ARP_HWTYPE_ETHERNET,
        ptype=ETHERTYPE_IPV4,
        hwlen=MAC_LEN,
        plen=IPV4_LEN,
        op=ARP_OP_REQUEST,
        hwsrc=str(source_mac),
        psrc=str(source_ip),
        hwdst=str(MacAddress.ZERO),
        pdst=str(target_ip),
    )
    frame = bytes(packet)
    if len(frame) != ARP_FRAME_LEN:
        raise FrameBuildError(f"Unexpected ARP frame length: {len(frame)}")

    if buffer is not None:
        buffer[:ARP_FRAME_LEN] = frame
    return frame


def parse_arp_frame(frame: bytes) -> Optional[ArpPacket]:
    """
    Decode an Ethernet frame carrying an IPv4-over-Ethernet ARP packet.

    Returns:
        ArpPacket, or None for frames that are not ARP (or too short to be)

    Raises:
        ValueError: on ARP frames with unparseable address fields
    """
    if not frame or len(frame) < ARP_FRAME_LEN:
        return None

    eth = Ether(bytes(frame))
    if eth.type != ETHERTYPE_ARP or not eth.haslayer(ARP):
        return None

    arp = eth[ARP]
    if arp.hwlen != MAC_LEN or arp.plen != IPV4_LEN or arp.ptype != ETHERTYPE_IPV4:
        return None

    return ArpPacket(
        eth_dst=MacAddress.parse(eth.dst),
        eth_src=MacAddress.parse(eth.src),
        operation=int(arp.op),
        sender_mac=MacAddress.parse(arp.hwsrc),
        sender_ip=ipaddress.IPv4Address(arp.psrc),
        target_mac=MacAddress.parse(arp.hwdst),
        target_ip=ipaddress.IPv4Address(arp.pdst),
    )


def decode_arp_reply(frame: bytes) -> Optional[Tuple[ipaddress.IPv4Address, MacAddress]]:
    """Return (sender IP, sender MAC) for ARP replies; None for anything else."""
    packet = parse_arp_frame(frame)
    if packet is None or not packet.is_reply:
        return None
    return packet.sender_ip, packet.sender_mac
