#!/usr/bin/env python3
"""
ArpSweep - Link-Layer Channel Module
Copyright (C) 2025  Dorin Badea
GPLv3 License

Raw Ethernet send/receive over scapy's L2 socket for the selected interface.
Opening the socket requires root (CAP_NET_RAW) or Administrator privileges.
"""

import logging
from typing import Optional, Protocol

from scapy.config import conf as scapy_conf
from scapy.error import Scapy_Exception

from arpsweep.core.errors import ChannelOpenError
from arpsweep.core.models import Interface

logger = logging.getLogger(__name__)

scapy_conf.verb = 0


class LinkChannel(Protocol):
    """Send/receive side of a link-layer interface, owned by one scan."""

    def send(self, frame: bytes) -> None:
        ...

    def recv(self, timeout: float) -> Optional[bytes]:
        ...

    def close(self) -> None:
        ...


class ScapyChannel:
    """LinkChannel backed by `scapy.conf.L2socket`."""

    def __init__(self, iface_name: str):
        self.iface_name = iface_name
        try:
            self._socket = scapy_conf.L2socket(iface=iface_name)
        except (OSError, Scapy_Exception) as exc:
            raise ChannelOpenError(f"Failed to create channel on {iface_name}: {exc}") from exc

    def send(self, frame: bytes) -> None:
        self._socket.send(frame)

    def recv(self, timeout: float) -> Optional[bytes]:
        """Wait up to `timeout` seconds for one frame; None if nothing arrived."""
        ready = self._socket.select([self._socket], timeout)
        if isinstance(ready, tuple):
            ready = ready[0]
        if not ready:
            return None
        packet = self._socket.recv()
        if packet is None:
            return None
        return bytes(packet)

    def close(self) -> None:
        try:
            self._socket.close()
        except OSError:
            logger.debug("Failed to close channel on %s", self.iface_name, exc_info=True)


def open_channel(interface: Interface) -> LinkChannel:
    """Open a raw channel on `interface`. Raises ChannelOpenError."""
    return ScapyChannel(interface.name)
