#!/usr/bin/env python3
"""
ArpSweep - Vendor Registry Module
Copyright (C) 2025  Dorin Badea
GPLv3 License

Parses the IEEE OUI text registry (oui.txt) into an in-memory prefix table and
resolves manufacturer names for hardware addresses.

A missing or unreadable registry yields an empty table: lookups degrade to
"Unknown" instead of failing the scan.
"""

import logging
import os
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Union

from arpsweep.core.errors import RegistryMissingError
from arpsweep.core.models import MacAddress
from arpsweep.utils.constants import (
    OUI_BASE16_MARKER,
    OUI_FILENAME,
    OUI_HEX_MARKER,
    UNKNOWN_VENDOR,
)

logger = logging.getLogger(__name__)


def _normalize_prefix(value: str) -> str:
    return value.replace("-", "").upper()


def parse_registry_lines(lines: Iterable[str]) -> Dict[str, str]:
    """
    Parse registry text lines into {PREFIXHEX: manufacturer}.

    Format (IEEE oui.txt):
        AA-BB-CC   (hex)        ACME Corp
        AABBCC     (base 16)    ACME Corp International

    A "(hex)" line sets the current prefix; the following "base 16" line gives
    the name (tokens from the fourth onward). Later entries override earlier ones.
    Lines that match neither marker, or have too few tokens, are skipped.
    """
    table: Dict[str, str] = {}
    current_prefix = ""
    for raw in lines:
        line = raw.strip()
        if OUI_HEX_MARKER in line:
            parts = line.split()
            if len(parts) >= 3:
                current_prefix = _normalize_prefix(parts[0])
        elif current_prefix and OUI_BASE16_MARKER in line:
            parts = line.split()
            if len(parts) >= 4:
                table[current_prefix] = " ".join(parts[3:])
    return table


class VendorRegistry:
    """Read-only OUI prefix -> manufacturer table."""

    def __init__(self, entries: Optional[Mapping[str, str]] = None, source: Optional[str] = None):
        self._entries = MappingProxyType(dict(entries or {}))
        self.source = source

    @property
    def entries(self) -> Mapping[str, str]:
        return self._entries

    def get(self, prefix_hex: str) -> Optional[str]:
        """Raw table access by 6-hex-digit prefix (separators allowed)."""
        if not prefix_hex:
            return None
        return self._entries.get(_normalize_prefix(prefix_hex.replace(":", "")))

    def lookup(self, mac: Union[MacAddress, str]) -> str:
        """
        Resolve the manufacturer for a hardware address.

        Returns:
            Manufacturer name, or "Unknown" when the prefix is not in the table
        """
        if not isinstance(mac, MacAddress):
            try:
                mac = MacAddress.parse(mac)
            except ValueError:
                return UNKNOWN_VENDOR
        return self._entries.get(mac.oui_hex, UNKNOWN_VENDOR)

    def __len__(self) -> int:
        return len(self._entries)


def load_vendor_registry(path: Optional[str]) -> VendorRegistry:
    """
    Build the vendor registry from an oui.txt file.

    Args:
        path: Registry file path

    Returns:
        VendorRegistry (empty if the file is absent or unreadable)
    """
    if not path or not os.path.isfile(path):
        logger.warning("Vendor registry not found (%s); manufacturers will be 'Unknown'", path)
        return VendorRegistry(source=path)

    try:
        with open(path, "r", encoding="utf-8", errors="ignore") as f:
            entries = parse_registry_lines(f)
    except OSError as exc:
        logger.warning("Failed to read vendor registry %s: %s", path, exc)
        return VendorRegistry(source=path)

    logger.debug("Loaded %d vendors from %s", len(entries), path)
    return VendorRegistry(entries, source=path)


def require_vendor_registry(path: Optional[str]) -> VendorRegistry:
    """Same as load_vendor_registry, but a missing file raises RegistryMissingError."""
    if not path or not os.path.isfile(path):
        raise RegistryMissingError(f"{OUI_FILENAME} file not found: {path}")
    return load_vendor_registry(path)
