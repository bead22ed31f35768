#!/usr/bin/env python3
"""
ArpSweep - CLI Module
Copyright (C) 2025  Dorin Badea
GPLv3 License

Command-line interface and argument parsing.
"""

import argparse
import json
import os
import sys
from typing import List, Optional

from arpsweep.core.errors import CidrError
from arpsweep.core.interface import list_interfaces
from arpsweep.core.scan_engine import scan_network
from arpsweep.core.subnet import Subnet, parse_cidr
from arpsweep.core.ui_manager import UIManager
from arpsweep.utils.config import (
    get_config_paths,
    get_persistent_defaults,
    resolve_listen_window,
    update_persistent_defaults,
)
from arpsweep.utils.constants import (
    DEFAULT_LISTEN_WINDOW,
    MAX_CIDR_LENGTH,
    MAX_LISTEN_WINDOW,
    MAX_UNPROBED_DISPLAY,
    MIN_LISTEN_WINDOW,
    VERSION,
)
from arpsweep.utils.i18n import TRANSLATIONS, detect_preferred_language
from arpsweep.utils.logging_setup import setup_logging
from arpsweep.utils.paths import is_privileged, resolve_oui_path

EXIT_OK = 0
EXIT_SCAN_FAILED = 1
EXIT_BAD_INPUT = 2
EXIT_INTERRUPTED = 130


def _listen_window_arg(value: str) -> float:
    try:
        window = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from None
    if not MIN_LISTEN_WINDOW <= window <= MAX_LISTEN_WINDOW:
        raise argparse.ArgumentTypeError(
            f"must be between {MIN_LISTEN_WINDOW:g} and {MAX_LISTEN_WINDOW:g} seconds"
        )
    return window


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="arpsweep",
        description=f"ArpSweep v{VERSION} - ARP host discovery with vendor lookup",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode (prompts for the network)
  sudo arpsweep

  # Non-interactive mode
  sudo arpsweep --target 192.168.1.0/24 --oui /usr/share/ieee-data/oui.txt

  # Pick the interface and listen longer
  sudo arpsweep -t 10.0.0.0/24 -i eth1 -w 8
""",
    )
    parser.add_argument(
        "--target",
        "-t",
        type=str,
        metavar="CIDR",
        help="Network to scan in CIDR notation (prompted when omitted)",
    )
    parser.add_argument(
        "--interface",
        "-i",
        type=str,
        metavar="IFACE",
        help="Interface to scan from (default: first usable interface)",
    )
    parser.add_argument(
        "--timeout",
        "-w",
        type=_listen_window_arg,
        metavar="SECONDS",
        help=(
            f"Listening window after sending requests, {MIN_LISTEN_WINDOW:g}-"
            f"{MAX_LISTEN_WINDOW:g}s (default: {DEFAULT_LISTEN_WINDOW:g})"
        ),
    )
    parser.add_argument(
        "--oui",
        type=str,
        metavar="PATH",
        help="Path to the IEEE oui.txt vendor registry (default: ./oui.txt)",
    )
    parser.add_argument(
        "--lang",
        choices=sorted(TRANSLATIONS.keys()),
        help="Interface language (default: auto-detect)",
    )
    parser.add_argument(
        "--list-interfaces",
        action="store_true",
        help="List local interfaces and exit",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the scan outcome as JSON instead of a table",
    )
    parser.add_argument(
        "--save-defaults",
        action="store_true",
        help="Persist target, interface, timeout, oui path and language as defaults",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show debug logging on the console",
    )
    parser.add_argument("--version", action="version", version=f"ArpSweep v{VERSION}")
    return parser.parse_args(argv)


def _load_defaults() -> dict:
    # Best-effort: a broken config file must not block a scan.
    try:
        return get_persistent_defaults()
    except Exception:
        return {}


def _parse_target(text: str) -> Subnet:
    if len(text) > MAX_CIDR_LENGTH:
        raise CidrError(CidrError.BAD_FORMAT, "Invalid CIDR format. Use: x.x.x.x/n")
    return parse_cidr(text)


def prompt_target(ui: UIManager, default: Optional[str] = None) -> Subnet:
    """
    Ask for a CIDR until a valid one is entered.

    Raises:
        EOFError: stdin closed
    """
    while True:
        hint = f" [{default}]" if default else ""
        raw = input(f"{ui.t('prompt_target')}{hint} ").strip()
        if not raw and default:
            raw = default
        try:
            return _parse_target(raw)
        except CidrError as exc:
            ui.print_status(ui.t("invalid_cidr", exc), "WARNING")


def print_privilege_note(ui: UIManager) -> None:
    if is_privileged():
        return
    ui.print_status(ui.t("privileges_note"), "INFO")
    ui.print_status(
        ui.t("privileges_windows") if os.name == "nt" else ui.t("privileges_linux"), "INFO"
    )


def run_cli(argv: Optional[List[str]] = None) -> int:
    """Run the CLI and return the process exit code."""
    args = parse_arguments(argv)
    defaults = _load_defaults()

    lang = detect_preferred_language(args.lang or defaults.get("lang"))
    logger = setup_logging(verbose=args.verbose)
    ui = UIManager(lang=lang, logger=logger)

    if args.list_interfaces:
        ui.print_interfaces(list_interfaces())
        return EXIT_OK

    try:
        if args.target:
            try:
                subnet = _parse_target(args.target)
            except CidrError as exc:
                ui.print_status(ui.t("invalid_cidr", exc), "FAIL")
                return EXIT_BAD_INPUT
        else:
            subnet = prompt_target(ui, defaults.get("target_network"))
    except (EOFError, KeyboardInterrupt):
        print(ui.t("interrupted"))
        return EXIT_INTERRUPTED

    oui_path = resolve_oui_path(args.oui, defaults.get("oui_path"))
    interface = args.interface or defaults.get("interface")
    window = resolve_listen_window(args.timeout, defaults.get("listen_window"))

    if not args.json:
        print_privilege_note(ui)
        ui.print_status(ui.t("scan_start", subnet, subnet.scan_size, window), "INFO")

    try:
        outcome = scan_network(
            subnet,
            oui_path=oui_path,
            interface=interface,
            listen_window=window,
            lang=lang,
        )
    except KeyboardInterrupt:
        print(ui.t("interrupted"))
        return EXIT_INTERRUPTED

    if args.save_defaults:
        saved = update_persistent_defaults(
            target_network=str(subnet),
            interface=args.interface or defaults.get("interface"),
            listen_window=window,
            oui_path=args.oui or defaults.get("oui_path"),
            lang=lang,
        )
        if saved:
            ui.print_status(ui.t("defaults_saved", get_config_paths()[1]), "OK")
        else:
            ui.print_status(ui.t("defaults_save_failed"), "WARNING")

    if args.json:
        print(json.dumps(outcome.to_dict(), indent=2))
        return EXIT_OK if outcome.success else EXIT_SCAN_FAILED

    if not outcome.success:
        ui.print_status(ui.t("scan_error", outcome.message), "FAIL")
        return EXIT_SCAN_FAILED

    if outcome.hosts:
        ui.print_hosts(outcome.hosts)
    else:
        ui.print_status(ui.t("no_hosts"), "INFO")

    if outcome.unprobed:
        shown = ", ".join(str(ip) for ip in outcome.unprobed[:MAX_UNPROBED_DISPLAY])
        if len(outcome.unprobed) > MAX_UNPROBED_DISPLAY:
            shown += ", ..."
        ui.print_status(ui.t("unprobed_hosts", len(outcome.unprobed), shown), "WARNING")
    if outcome.receive_errors:
        ui.print_status(ui.t("receive_errors", outcome.receive_errors), "WARNING")

    ui.print_status(ui.t("hosts_found", len(outcome.hosts), outcome.elapsed), "INFO")
    ui.print_status(ui.t("scan_ok"), "OK")
    return EXIT_OK


def main() -> None:
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
