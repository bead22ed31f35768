"""
ArpSweep - UI Manager

Status lines and result tables for the terminal. Rendering only; no scan logic.
"""

from __future__ import annotations

import sys
import threading
from datetime import datetime
from typing import Any, Iterable, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from arpsweep.core.models import DiscoveredHost, Interface
from arpsweep.utils.i18n import get_text


class UIManager:
    """
    Terminal output for ArpSweep.

    Handles:
    - Timestamped status messages with colors
    - Result and interface tables
    - Translation (i18n)
    """

    def __init__(
        self,
        lang: str = "en",
        logger: Optional[Any] = None,
        console: Optional[Console] = None,
    ):
        self.lang = lang
        self.logger = logger
        self.console = console or Console(file=sys.stdout, highlight=False)
        self._print_lock = threading.Lock()

    def t(self, key: str, *args) -> str:
        """Get translated text."""
        return get_text(key, self.lang, *args)

    def print_status(self, message: str, status: str = "INFO") -> None:
        """Print status message with timestamp and color."""
        ts = datetime.now().strftime("%H:%M:%S")
        status_display, style = self._resolve_status_style(status)

        msg = "" if message is None else str(message)
        lines = msg.splitlines() or [""]
        with self._print_lock:
            prefix = Text()
            prefix.append(f"[{ts}] [{status_display}] ", style=style)
            prefix.append(lines[0])
            self.console.print(prefix, soft_wrap=True)
            for line in lines[1:]:
                self.console.print(Text(f"  {line}"), soft_wrap=True)
        if self.logger:
            self.logger.debug("UI [%s]: %s", status_display, msg)

    @staticmethod
    def _resolve_status_style(status: str) -> tuple[str, str]:
        status_map = {
            "OKGREEN": "OK",
            "OKBLUE": "INFO",
            "WARNING": "WARN",
            "FAIL": "FAIL",
            "INFO": "INFO",
            "OK": "OK",
        }
        style_map = {
            "OK": "bright_green",
            "INFO": "bright_blue",
            "WARN": "bright_yellow",
            "FAIL": "bright_red",
        }
        status_display = status_map.get(status, status)
        return status_display, style_map.get(status_display, "bright_blue")

    def print_hosts(self, hosts: Iterable[DiscoveredHost]) -> None:
        """Render discovered hosts as a table, sorted by IP."""
        table = Table(title=self.t("scan_results"), title_justify="left")
        table.add_column(self.t("col_ip"), min_width=16)
        table.add_column(self.t("col_mac"), min_width=18)
        table.add_column(self.t("col_vendor"))
        for host in sorted(hosts, key=lambda h: h.ip):
            table.add_row(str(host.ip), str(host.mac), host.vendor)
        self.console.print(table)

    def print_interfaces(self, interfaces: Iterable[Interface]) -> None:
        table = Table(title=self.t("interfaces_header"), title_justify="left")
        table.add_column(self.t("col_iface"))
        table.add_column(self.t("col_ip"))
        table.add_column(self.t("col_mac"))
        table.add_column(self.t("col_state"))
        table.add_column(self.t("col_usable"))
        for iface in interfaces:
            table.add_row(
                iface.name,
                ", ".join(str(ip) for ip in iface.ips) or "-",
                str(iface.mac) if iface.mac else "-",
                self.t("state_up") if iface.is_up else self.t("state_down"),
                self.t("yes") if iface.is_usable else self.t("no"),
            )
        self.console.print(table)
