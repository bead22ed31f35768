#!/usr/bin/env python3
"""
ArpSweep - Scan Engine Module
Copyright (C) 2025  Dorin Badea
GPLv3 License

Two-phase ARP sweep: one broadcast request per candidate host, then a bounded
listening window collecting replies. Best-effort per host: individual send,
receive and decode failures are logged and counted, never fatal.

The deadline is checked after each receive attempt, so the loop may overrun the
nominal window by up to one poll interval.
"""

import ipaddress
import logging
import os
import time
from enum import Enum
from typing import Callable, List, Optional, Union

from arpsweep.core.channel import LinkChannel, open_channel
from arpsweep.core.errors import (
    ChannelOpenError,
    CidrError,
    NoInterfaceError,
    RegistryMissingError,
)
from arpsweep.core.frames import build_arp_request, decode_arp_reply
from arpsweep.core.interface import resolve_interface
from arpsweep.core.models import DiscoveredHost, Interface, ScanOutcome, ScanResult
from arpsweep.core.subnet import Subnet, parse_cidr
from arpsweep.core.vendor_registry import VendorRegistry, require_vendor_registry
from arpsweep.utils.config import resolve_listen_window
from arpsweep.utils.constants import (
    DEFAULT_LISTEN_WINDOW,
    DEFAULT_POLL_INTERVAL,
    ERROR_CHANNEL_OPEN,
    ERROR_INPUT,
    ERROR_NO_INTERFACE,
    ERROR_REGISTRY_MISSING,
    OUI_FILENAME,
)
from arpsweep.utils.i18n import get_text
from arpsweep.utils.paths import resolve_oui_path

logger = logging.getLogger(__name__)


class ScanState(str, Enum):
    IDLE = "idle"
    TRANSMITTING = "transmitting"
    LISTENING = "listening"
    REPORTING = "reporting"
    DONE = "done"


class ScanEngine:
    """
    Runs one sweep over a subnet on an already-open channel.

    The channel is owned by the caller for the duration of `run()`; the engine
    never closes it.
    """

    def __init__(
        self,
        interface: Interface,
        registry: VendorRegistry,
        channel: LinkChannel,
        listen_window: float = DEFAULT_LISTEN_WINDOW,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.interface = interface
        self.registry = registry
        self.channel = channel
        self.listen_window = listen_window
        self.poll_interval = poll_interval
        self.clock = clock
        self.state = ScanState.IDLE

        self.unprobed: List[ipaddress.IPv4Address] = []
        self.probes_sent = 0
        self.receive_errors = 0
        self.decode_errors = 0

    def run(self, subnet: Subnet) -> ScanOutcome:
        """Transmit, listen, report. Always ends in DONE with a success outcome."""
        started = self.clock()

        self.state = ScanState.TRANSMITTING
        self.transmit(subnet)

        self.state = ScanState.LISTENING
        result = self.listen()

        self.state = ScanState.REPORTING
        hosts = self.report(result)

        self.state = ScanState.DONE
        elapsed = self.clock() - started
        logger.info(
            "Sweep of %s done: %d sent, %d unprobed, %d hosts, %.1fs",
            subnet,
            self.probes_sent,
            len(self.unprobed),
            len(hosts),
            elapsed,
        )
        return ScanOutcome(
            success=True,
            hosts=hosts,
            unprobed=list(self.unprobed),
            probes_sent=self.probes_sent,
            receive_errors=self.receive_errors,
            decode_errors=self.decode_errors,
            state=self.state.value,
            elapsed=elapsed,
        )

    def transmit(self, subnet: Subnet) -> None:
        """Send one ARP request per host, ascending. Send failures are recorded, not raised."""
        source_mac = self.interface.mac
        source_ip = self.interface.ip

        for target_ip in subnet:
            frame = build_arp_request(source_mac, source_ip, target_ip)
            try:
                self.channel.send(frame)
            except OSError as exc:
                logger.warning("Failed to send packet to %s: %s", target_ip, exc)
                self.unprobed.append(target_ip)
                continue
            self.probes_sent += 1

    def listen(self) -> ScanResult:
        """Collect ARP replies until the listening window elapses."""
        result = ScanResult()
        start = self.clock()
        while True:
            try:
                frame = self.channel.recv(self.poll_interval)
            except OSError as exc:
                logger.warning("Failed to receive packet: %s", exc)
                self.receive_errors += 1
                frame = None

            if frame is not None:
                self.handle_frame(frame, result)

            if self.clock() - start >= self.listen_window:
                break
        return result

    def handle_frame(self, frame: bytes, result: ScanResult) -> None:
        """Record the sender of an ARP reply; ignore everything else."""
        try:
            reply = decode_arp_reply(frame)
        except Exception as exc:
            logger.warning("Failed to decode frame (%d bytes): %s", len(frame), exc)
            self.decode_errors += 1
            return
        if reply is None:
            return
        sender_ip, sender_mac = reply
        result.record(sender_ip, sender_mac)

    def report(self, result: ScanResult) -> List[DiscoveredHost]:
        return [
            DiscoveredHost(ip=ip, mac=mac, vendor=self.registry.lookup(mac))
            for ip, mac in result.items()
        ]


def _os_message(key: str, lang: str, *args) -> str:
    suffix = "windows" if os.name == "nt" else "linux"
    return get_text(f"{key}_{suffix}", lang, *args)


def scan_network(
    target: Union[str, Subnet],
    *,
    oui_path: Optional[str] = None,
    registry: Optional[VendorRegistry] = None,
    interface: Optional[Union[str, Interface]] = None,
    listen_window: Optional[float] = None,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    channel_factory: Callable[[Interface], LinkChannel] = open_channel,
    clock: Callable[[], float] = time.monotonic,
    lang: str = "en",
) -> ScanOutcome:
    """
    Run a full ARP scan.

    Preconditions are checked in order before anything is transmitted: CIDR
    input, vendor registry file, usable interface, raw channel. Each failure
    returns a failure outcome with `error_kind` set; nothing is raised.

    Args:
        target: CIDR string or parsed Subnet
        oui_path: Vendor registry path (see resolve_oui_path)
        registry: Prebuilt registry; skips loading from oui_path
        interface: Interface name or object; default is the first usable one
        listen_window: Seconds to listen after sending (default from env/config)
        channel_factory: Opens the raw channel; raises ChannelOpenError
        lang: Message language

    Returns:
        ScanOutcome
    """
    if isinstance(target, Subnet):
        subnet = target
    else:
        try:
            subnet = parse_cidr(target)
        except CidrError as exc:
            return ScanOutcome.failure(ERROR_INPUT, str(exc))

    if registry is None:
        try:
            registry = require_vendor_registry(resolve_oui_path(oui_path))
        except RegistryMissingError as exc:
            logger.info("%s", exc)
            return ScanOutcome.failure(
                ERROR_REGISTRY_MISSING, get_text("registry_missing", lang, OUI_FILENAME)
            )

    try:
        iface = resolve_interface(interface)
    except NoInterfaceError as exc:
        logger.info("%s", exc)
        if exc.requested:
            message = get_text("interface_unusable", lang, exc.requested)
        else:
            message = _os_message("no_interface", lang)
        return ScanOutcome.failure(ERROR_NO_INTERFACE, message)

    try:
        channel = channel_factory(iface)
    except ChannelOpenError as exc:
        logger.info("%s", exc)
        return ScanOutcome.failure(ERROR_CHANNEL_OPEN, _os_message("channel", lang, exc))

    window = listen_window if listen_window is not None else resolve_listen_window()
    logger.info(
        "Scanning %s (%d hosts) on %s as %s/%s, window %.1fs",
        subnet,
        subnet.scan_size,
        iface.name,
        iface.ip,
        iface.mac,
        window,
    )
    engine = ScanEngine(
        iface,
        registry,
        channel,
        listen_window=window,
        poll_interval=poll_interval,
        clock=clock,
    )
    try:
        return engine.run(subnet)
    finally:
        channel.close()
