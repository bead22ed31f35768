"""
Centralized pytest fixtures for the ArpSweep test suite.

Fakes for the raw link-layer channel and the clock so scans run without
privileges or real time passing.
"""

import ipaddress
from typing import List, Optional

import pytest
from scapy.layers.l2 import ARP, Ether

from arpsweep.core.frames import parse_arp_frame
from arpsweep.core.models import Interface, MacAddress
from arpsweep.core.vendor_registry import VendorRegistry

SAMPLE_OUI = """\
OUI/MA-L                                                    Organization
company_id                                                  Organization
                                                            Address

AA-BB-CC   (hex)\t\tACME Corp
AABBCC     (base 16)\t\tACME Corp International
\t\t\t\t1 Road Runner Way
\t\t\t\tDesert  AZ  85001
\t\t\t\tUS

00-1B-63   (hex)\t\tApple, Inc.
001B63     (base 16)\t\tApple,   Inc.
\t\t\t\t1 Infinite Loop
\t\t\t\tCupertino  CA  95014
\t\t\t\tUS
"""


def make_arp_frame(
    sender_ip: str,
    sender_mac: str,
    op: int = 2,
    target_ip: str = "10.0.0.1",
    target_mac: str = "11:22:33:44:55:66",
) -> bytes:
    """Build an ARP frame as a responder would send it (op 2 = reply)."""
    return bytes(
        Ether(dst=target_mac, src=sender_mac)
        / ARP(op=op, hwsrc=sender_mac, psrc=sender_ip, hwdst=target_mac, pdst=target_ip)
    )


class FakeClock:
    """Monotonic clock advancing `step` seconds per call."""

    def __init__(self, step: float = 1.0):
        self.step = step
        self.now = 0.0
        self.calls = 0

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        self.calls += 1
        return value


class FakeChannel:
    """Scripted LinkChannel: records sends, replays inbound frames or errors."""

    def __init__(self, inbound: Optional[List] = None, fail_targets=()):
        self.inbound = list(inbound or [])
        self.fail_targets = {ipaddress.IPv4Address(ip) for ip in fail_targets}
        self.sent: List[bytes] = []
        self.recv_calls = 0
        self.closed = False

    def send(self, frame: bytes) -> None:
        packet = parse_arp_frame(frame)
        if packet is not None and packet.target_ip in self.fail_targets:
            raise OSError("No buffer space available")
        self.sent.append(frame)

    def recv(self, timeout: float):
        self.recv_calls += 1
        if not self.inbound:
            return None
        item = self.inbound.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def close(self) -> None:
        self.closed = True

    @property
    def sent_targets(self) -> List[ipaddress.IPv4Address]:
        return [parse_arp_frame(f).target_ip for f in self.sent]


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def local_interface():
    return Interface(
        name="eth0",
        ip=ipaddress.IPv4Address("10.0.0.1"),
        mac=MacAddress.parse("11:22:33:44:55:66"),
        is_up=True,
        is_loopback=False,
        ips=(ipaddress.IPv4Address("10.0.0.1"),),
    )


@pytest.fixture
def oui_file(tmp_path):
    path = tmp_path / "oui.txt"
    path.write_text(SAMPLE_OUI, encoding="utf-8")
    return path


@pytest.fixture
def registry():
    return VendorRegistry({"AABBCC": "ACME Corp International"}, source="memory")


@pytest.fixture
def arp_frame():
    """Factory fixture for inbound ARP frames (see make_arp_frame)."""
    return make_arp_frame
